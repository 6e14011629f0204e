"""
Seed script to create the first admin user.

Run once (e.g. after schema_check) with env set:
  ADMIN_EMAIL=admin@school.edu.vn
  ADMIN_PASSWORD=YourSecurePassword

Creates or updates one user whose claims carry role "admin"; that account can
then assign roles to everybody else.
"""
import asyncio

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from meritboard.auth.models import User
from meritboard.auth.security import hash_password
from meritboard.core.config import settings
from meritboard.core.enums import Role, UserStatus
from meritboard.db.session import AsyncSessionLocal


async def seed_admin(db: AsyncSession) -> None:
    email = (settings.admin_email or "").strip().lower()
    password = settings.admin_password
    if not email or not password:
        print("No ADMIN_EMAIL/ADMIN_PASSWORD set; skipping admin user.")
        return

    admin_claims = {"role": Role.ADMIN.value, "assigned_classes": []}
    result = await db.execute(select(User).where(func.lower(User.email) == email))
    user = result.scalar_one_or_none()
    if not user:
        user = User(
            display_name=settings.admin_display_name,
            email=email,
            password_hash=hash_password(password),
            role=Role.ADMIN.value,
            assigned_classes=[],
            claims=admin_claims,
            status=UserStatus.ACTIVE.value,
        )
        db.add(user)
        print("Created admin user:", email)
    else:
        user.password_hash = hash_password(password)
        user.display_name = settings.admin_display_name
        user.role = Role.ADMIN.value
        user.claims = admin_claims
        user.status = UserStatus.ACTIVE.value
        print("Updated existing user to admin:", email)

    await db.commit()
    print("Admin seed done.")


async def main() -> None:
    async with AsyncSessionLocal() as db:
        try:
            await seed_admin(db)
        except Exception as e:
            await db.rollback()
            print("Error:", e)
            raise


if __name__ == "__main__":
    asyncio.run(main())
