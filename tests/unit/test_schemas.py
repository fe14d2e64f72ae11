"""Unit tests for request schemas."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from app.schemas.auth import LoginRequest
from app.schemas.contact import ContactSubmissionCreate
from app.schemas.student import StudentCreate


def _student_payload(**overrides):
    payload = dict(
        name="Meera Iyer",
        email="meera@example.com",
        phone="9876543210",
        student_class="Class 9",
        tuition_fee="6000",
        amount_paid="1500",
        paid=False,
    )
    payload.update(overrides)
    return payload


def test_student_create_coerces_numeric_strings():
    student = StudentCreate(**_student_payload())
    assert student.tuition_fee == Decimal("6000")
    assert student.amount_paid == Decimal("1500")


@pytest.mark.parametrize("bad", ["", "abc", None, "-10"])
def test_student_create_defaults_invalid_amounts_to_zero(bad):
    student = StudentCreate(**_student_payload(tuition_fee=bad, amount_paid=bad))
    assert student.tuition_fee == Decimal("0")
    assert student.amount_paid == Decimal("0")


def test_student_create_accepts_plain_numbers():
    student = StudentCreate(**_student_payload(tuition_fee=4200.25, amount_paid=0))
    assert student.tuition_fee == Decimal("4200.25")


@pytest.mark.parametrize("field", ["name", "email", "phone", "student_class"])
def test_student_create_requires_identity_fields(field):
    payload = _student_payload()
    payload.pop(field)
    with pytest.raises(ValidationError):
        StudentCreate(**payload)


def test_student_create_rejects_blank_name():
    with pytest.raises(ValidationError):
        StudentCreate(**_student_payload(name="   "))


def _contact_payload(**overrides):
    payload = dict(
        name="Parent Name",
        email="parent@example.com",
        phone="9000000000",
        student_class="Class 6",
        subject="Admissions",
        message="Do you have evening batches?",
    )
    payload.update(overrides)
    return payload


def test_contact_create_valid():
    submission = ContactSubmissionCreate(**_contact_payload())
    assert submission.subject == "Admissions"


def test_contact_create_student_class_is_optional():
    payload = _contact_payload()
    payload.pop("student_class")
    assert ContactSubmissionCreate(**payload).student_class is None


@pytest.mark.parametrize("field", ["name", "email", "phone", "subject", "message"])
def test_contact_create_required_fields(field):
    payload = _contact_payload()
    payload.pop(field)
    with pytest.raises(ValidationError):
        ContactSubmissionCreate(**payload)


def test_contact_create_rejects_invalid_email():
    with pytest.raises(ValidationError):
        ContactSubmissionCreate(**_contact_payload(email="not-an-email"))


def test_login_request_ignores_client_admin_flag():
    login = LoginRequest(email="someone@example.com", password="secret", isAdmin=True, is_admin=True)
    assert not hasattr(login, "isAdmin")
    assert "is_admin" not in login.model_dump()


@pytest.mark.parametrize("huge", ["1e30", 1e300, "10000000000"])
def test_student_create_defaults_oversized_amounts_to_zero(huge):
    student = StudentCreate(**_student_payload(tuition_fee=huge, amount_paid="0"))
    assert student.tuition_fee == Decimal("0")


def test_student_create_rejects_amount_paid_above_fee():
    with pytest.raises(ValidationError, match="cannot exceed the tuition fee"):
        StudentCreate(**_student_payload(tuition_fee="5000", amount_paid="5000.01"))


def test_student_create_allows_full_payment():
    student = StudentCreate(**_student_payload(tuition_fee="5000", amount_paid="5000", paid=True))
    assert student.amount_paid == student.tuition_fee
