#!/usr/bin/env python3
"""
Grant or revoke dashboard access for an existing sign-in.

Admin status is never set through the API; this script is the only way to
change it.

Usage:
  python scripts/grant_admin.py admin@example.com
  python scripts/grant_admin.py admin@example.com --revoke
  # Requires DATABASE_URL and SECRET_KEY in .env (or export)
"""
import argparse
import asyncio
import os
import sys

# Load .env from project root
try:
    from dotenv import load_dotenv
    _root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    load_dotenv(os.path.join(_root, ".env"))
except ImportError:
    pass

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.database import AsyncSessionLocal, close_db
from app.services.user_service import UserService


async def _run(email: str, is_admin: bool) -> int:
    try:
        async with AsyncSessionLocal() as db:
            account = await UserService.set_admin(db, email, is_admin)
    finally:
        await close_db()

    if account is None:
        print(f"ERROR: no sign-in registered for {email}. Ask them to sign up first.")
        return 1
    state = "granted" if account.is_admin else "revoked"
    print(f"SUCCESS: admin access {state} for {account.email} ({account.id})")
    return 0


def main():
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("email", help="Email the person signs in with")
    parser.add_argument("--revoke", action="store_true", help="Remove admin access instead of granting it")
    args = parser.parse_args()
    sys.exit(asyncio.run(_run(args.email, not args.revoke)))


if __name__ == "__main__":
    main()
