"""
Provision an administrator account, or promote an existing user to admin.
Run: python -m scripts.create_admin <username> [--password PASSWORD] (from project root).
"""
import argparse
import asyncio
import getpass
import os
import sys

# Add parent so we can import from the project root
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from database import AsyncSessionLocal, init_db
from repositories import users
from services.auth import hash_password


async def create_admin(username: str, password: str | None) -> None:
    await init_db()
    async with AsyncSessionLocal() as session:
        user = await users.get_by_username(session, username)
        if user is not None:
            user.role = "admin"
            print(f"User {username} (id={user.id}) promoted to admin")
        else:
            if not password:
                password = getpass.getpass(f"Password for new admin {username}: ")
            user = await users.create_user(session, username, hash_password(password), role="admin")
            print(f"Admin {username} created (id={user.id})")
        await session.commit()


def main() -> None:
    parser = argparse.ArgumentParser(description="Create or promote an admin user")
    parser.add_argument("username")
    parser.add_argument("--password", help="only used when the user does not exist yet")
    args = parser.parse_args()
    asyncio.run(create_admin(args.username, args.password))


if __name__ == "__main__":
    main()
