#!/usr/bin/env python3
"""
Create Admin User Script.

Registration always creates members, so the first admin is created here,
directly in the database. An existing account can be promoted instead.

Usage:
    uv run python auto/create_admin.py --email admin@example.com --password Secret123
    uv run python auto/create_admin.py --promote johndoe@example.com

Interactive Mode (no password given):
    uv run python auto/create_admin.py
    # Script will prompt for each value

Environment Variables:
    ADMIN_EMAIL: Admin email (default: admin@example.com)
    ADMIN_PASSWORD: Admin password (default: prompted or auto-generated)
    ADMIN_USERNAME: Admin username (default: admin)
"""

from argparse import ArgumentParser, Namespace, RawDescriptionHelpFormatter
from asyncio import run as asyncio_run
from getpass import getpass
from os import environ
from secrets import token_urlsafe
from sys import exit as sys_exit

from app.db.database import init_db, transaction
from app.errors import ConflictError
from app.managers.password_manager import hash_password
from app.models import Role, UserDB
from app.repositories import UserRepository
from app.schemas.user import UserCreate

MIN_PASSWORD_LENGTH = 6


def generate_secure_password(length: int = 16) -> str:
    """Generate a random URL-safe password."""
    return token_urlsafe(length)


def input_with_default(prompt: str, default: str) -> str:
    user_input = input(f"{prompt} [{default}]: ").strip()
    return user_input or default


def input_password() -> str:
    """
    Prompt for a password, or generate one when left empty.

    Returns
    -------
    str
        Password entered or generated.
    """
    while True:
        password = getpass("Password (empty to auto-generate): ")
        if not password:
            password = generate_secure_password()
            print(f"\n✅ Auto-generated password: {password}")
            print("⚠️  Please save this password now! You won't see it again.")
            return password
        if len(password) < MIN_PASSWORD_LENGTH:
            print(f"❌ Password must be at least {MIN_PASSWORD_LENGTH} characters.")
            continue
        if password != getpass("Confirm password: "):
            print("❌ Passwords do not match.")
            continue
        return password


def build_admin(args: Namespace) -> UserCreate:
    """
    Build the admin payload from arguments, environment or prompts.

    Parameters
    ----------
    args : argparse.Namespace
        Parsed command line arguments.

    Returns
    -------
    UserCreate
        Validated admin data.
    """
    email = args.email or environ.get("ADMIN_EMAIL", "admin@example.com")
    username = args.username or environ.get("ADMIN_USERNAME", "admin")
    password = args.password or environ.get("ADMIN_PASSWORD")

    if password is None:
        print("=" * 60)
        print("Create Admin User - Interactive Mode")
        print("=" * 60)
        email = input_with_default("Email", email)
        username = input_with_default("Username", username)
        password = input_password()

    return UserCreate.model_validate(
        {
            "username": username,
            "email": email,
            "password": password,
            "first_name": args.first_name,
            "last_name": args.last_name,
        },
    )


async def create_admin_user(admin: UserCreate) -> UserDB:
    """
    Create an admin user in the database.

    Raises
    ------
    ConflictError
        If the username or email already exists.
    """
    async with transaction() as session:
        repo = UserRepository(session)
        password_hash = await hash_password(admin.password.get_secret_value())
        return await repo.create(admin, password_hash=password_hash, role=Role.ADMIN)


async def promote_user(email: str) -> UserDB | None:
    """Give an existing account the admin role. Returns None if unknown."""
    async with transaction() as session:
        repo = UserRepository(session)
        user = await repo.get_by_email(email)
        if user is None:
            return None
        user.role = Role.ADMIN
        session.add(user)
        return user


def parse_args() -> Namespace:
    parser = ArgumentParser(
        description="Create or promote an admin user",
        formatter_class=RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--email", help="Admin email address")
    parser.add_argument("--password", help="Admin password (prompted when omitted)")
    parser.add_argument("--username", help="Admin username")
    parser.add_argument("--first-name", dest="first_name", default="Admin")
    parser.add_argument("--last-name", dest="last_name", default="User")
    parser.add_argument("--promote", metavar="EMAIL", help="Promote an existing user instead")
    return parser.parse_args()


async def main(args: Namespace) -> int:
    await init_db()

    if args.promote:
        user = await promote_user(args.promote)
        if user is None:
            print(f"❌ No user with email '{args.promote}'")
            return 1
        print(f"✅ {user.username} is now an admin")
        return 0

    admin = build_admin(args)
    try:
        user = await create_admin_user(admin)
    except ConflictError as e:
        print(f"❌ {e.detail}")
        return 1

    print("\n✅ Admin user created successfully!")
    print(f"   UUID:  {user.uuid}")
    print(f"   Email: {user.email}")
    print(f"   Role:  {user.role}")
    print("\nYou can now login with:")
    print("  curl -X POST 'http://localhost:8000/api/auth/login' \\")
    print("    -H 'Content-Type: application/json' \\")
    print(f"    -d '{{\"email\": \"{user.email}\", \"password\": \"YOUR_PASSWORD\"}}'")
    return 0


if __name__ == "__main__":
    sys_exit(asyncio_run(main(parse_args())))
