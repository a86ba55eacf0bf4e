import argparse
import asyncio
import getpass

from sqlalchemy import select

from lawdesk.database import AsyncSessionLocal
from lawdesk.auth.models import User, UserRole
from lawdesk.auth.security import get_password_hash
# Import the rest so SQLAlchemy can resolve relationship strings
from lawdesk.clients.models import Client
from lawdesk.cases.models import Case
from lawdesk.consultations.models import Consultation
from lawdesk.invoices.models import Invoice


async def create_admin(email: str, password: str):
    async with AsyncSessionLocal() as session:
        result = await session.execute(select(User).where(User.email == email))
        user = result.scalars().first()
        if not user:
            user = User(
                email=email,
                hashed_password=get_password_hash(password),
                role=UserRole.ADMIN.value,
            )
            session.add(user)
            print(f"Created admin: {email}")
        else:
            user.hashed_password = get_password_hash(password)
            print(f"Updated admin password: {email}")
        await session.commit()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create or reset an admin account")
    parser.add_argument("email")
    parser.add_argument("--password", help="prompted for when omitted")
    args = parser.parse_args()
    password = args.password or getpass.getpass("Password: ")
    if len(password) < 8:
        raise SystemExit("Password must be at least 8 characters")
    asyncio.run(create_admin(args.email, password))
