"""
Seed Demo Users

Creates one approved student, teacher and HOD per department so the
frontend can be exercised without going through registration and approval:

    <role>.<department>@demo.cms / demo123   e.g. hod.bca@demo.cms

The admin is not seeded; it logs in with ADMIN_USERNAME/ADMIN_PASSWORD.

Run with: python -m app.scripts.seed_demo_users [list]
"""
import asyncio
import sys
from typing import Any, Dict, List

from sqlalchemy import select

from app.core.database import get_session_local, init_db
from app.core.security import get_password_hash
from app.models.user import MEMBER_DEPARTMENTS, REGISTRABLE_ROLES, User, UserRole, UserStatus


DEMO_PASSWORD = "demo123"
DEMO_DOMAIN = "demo.cms"
ROLE_LABELS = {UserRole.STUDENT: "Student", UserRole.TEACHER: "Teacher", UserRole.HOD: "HOD"}


def demo_users() -> List[Dict[str, Any]]:
    """Every (role, department) pair a registered user can have"""
    users = []
    for department in MEMBER_DEPARTMENTS:
        for index, role in enumerate(REGISTRABLE_ROLES):
            users.append({
                "email": f"{role.value}.{department.value.lower()}@{DEMO_DOMAIN}",
                "full_name": f"Demo {ROLE_LABELS[role]} {department.value}",
                "phone": f"90000{MEMBER_DEPARTMENTS.index(department)}000{index}",
                "department": department,
                "role": role,
            })
    return users


async def seed_demo_users():
    """Create or reset demo users"""
    print("=" * 50)
    print("Seeding Demo Users...")
    print("=" * 50)

    await init_db()
    hashed = get_password_hash(DEMO_PASSWORD)

    async with get_session_local()() as db:
        created_count = 0
        updated_count = 0

        for user_data in demo_users():
            existing_user = await db.scalar(select(User).where(User.email == user_data["email"]))

            if existing_user:
                existing_user.hashed_password = hashed
                existing_user.full_name = user_data["full_name"]
                existing_user.status = UserStatus.APPROVED
                updated_count += 1
                print(f"  Updated: {user_data['email']}")
            else:
                db.add(User(hashed_password=hashed, status=UserStatus.APPROVED, **user_data))
                created_count += 1
                print(f"  Created: {user_data['email']}")

        await db.commit()

    print("=" * 50)
    print("Demo Users Seeded Successfully!")
    print(f"  Created: {created_count}")
    print(f"  Updated: {updated_count}")
    print(f"  Password for all: {DEMO_PASSWORD}")
    print("=" * 50)


async def list_demo_users():
    """List demo users in the database"""
    await init_db()

    async with get_session_local()() as db:
        result = await db.execute(
            select(User).where(User.email.like(f"%@{DEMO_DOMAIN}")).order_by(User.email)
        )
        users = result.scalars().all()

    print("\nDemo Users in Database:")
    print("-" * 70)
    print(f"{'Email':<30} {'Role':<10} {'Department':<12} {'Status':<10}")
    print("-" * 70)
    for user in users:
        print(f"{user.email:<30} {user.role.value:<10} {user.department.value:<12} {user.status.value:<10}")

    if not users:
        print("No demo users found. Run 'python -m app.scripts.seed_demo_users' to create them.")


def main():
    if len(sys.argv) > 1 and sys.argv[1] == "list":
        asyncio.run(list_demo_users())
    else:
        asyncio.run(seed_demo_users())


if __name__ == "__main__":
    main()
