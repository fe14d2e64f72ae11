"""API V1 Router"""

from fastapi import APIRouter

from app.api.v1.endpoints import auth, admin, contacts, students, users

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(contacts.router, prefix="/contacts", tags=["Contact Submissions"])
api_router.include_router(admin.router, prefix="/admin", tags=["Admin Dashboard"])
api_router.include_router(students.router, prefix="/students", tags=["Student Registry"])
api_router.include_router(users.router, prefix="/users", tags=["Users"])
