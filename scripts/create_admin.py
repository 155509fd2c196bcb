#!/usr/bin/env python3
"""
Create an admin account, or promote and reset an existing one.

Usage:
    python scripts/create_admin.py EMAIL [--name NAME]

The password is prompted for and never echoed.
"""
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import argparse
from getpass import getpass

from sqlmodel import Session, select

from app.core.database import create_db_and_tables, engine
from app.core.security import hash_password
from app.models import Role, User, UserStatus


def main(email: str, name: str | None = None):
    password = getpass("Password: ")
    if len(password) < 8:
        print("Error: password must be at least 8 characters.")
        sys.exit(1)
    if getpass("Confirm password: ") != password:
        print("Error: passwords do not match.")
        sys.exit(1)

    create_db_and_tables()
    email = email.strip().lower()

    with Session(engine) as session:
        user = session.exec(select(User).where(User.email == email)).first()
        if user is None:
            user = User(email=email)
            print(f"Creating admin user {email}...")
        else:
            print(f"Updating existing user {email}...")

        user.name = name or user.name or "Administrator"
        user.password_hash = hash_password(password)
        user.role = Role.ADMIN
        user.status = UserStatus.APPROVED
        session.add(user)
        session.commit()

    print("Admin user ready.")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("email")
    parser.add_argument("--name")
    args = parser.parse_args()
    main(args.email, args.name)
