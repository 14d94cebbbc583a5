"""Seed a local workspace with an admin user that can log in with a password.

Creates (idempotent):
  1. User with the given email and password
  2. Organization owned by that user (form login enabled, default groups)

Targets the configured database directly; with TOOLSMITH_LOCAL_MODE=1 that is
the local SQLite file used by ``toolsmith-server --local``.

Usage:
    TOOLSMITH_LOCAL_MODE=1 python scripts/seed_local_workspace.py \
        --email dev@example.com --password password123 [--org "Dev workspace"]
"""

import argparse
import asyncio
import sys

import toolsmith.db.models  # noqa: F401
from toolsmith.config import settings
from toolsmith.db.base import Base
from toolsmith.db.engine import create_db_engine, create_session_factory
from toolsmith.services.organizations import OrganizationsService
from toolsmith.services.users import UsersService


async def seed(email: str, password: str, org_name: str) -> None:
    engine = create_db_engine()
    if "sqlite" in settings.effective_database_url:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    session_factory = create_session_factory(engine)
    async with session_factory() as session:
        users = UsersService(session)
        user = await users.find_by_email(email)
        if user:
            print(f"User {email} already exists ({user.id}), skipping.")
        else:
            user = await users.create(email, first_name="Dev", last_name="Admin", password=password)
            organization = await OrganizationsService(session).create(org_name, user)
            user.default_organization_id = organization.id
            await session.commit()
            print(f"Created user {user.id} in organization {organization.id} ({org_name})")

    await engine.dispose()


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed a local Toolsmith workspace")
    parser.add_argument("--email", required=True)
    parser.add_argument("--password", required=True)
    parser.add_argument("--org", default="Dev workspace")
    args = parser.parse_args()

    if len(args.password) < 5:
        print("Password must be at least 5 characters", file=sys.stderr)
        sys.exit(1)

    asyncio.run(seed(args.email, args.password, args.org))


if __name__ == "__main__":
    main()
