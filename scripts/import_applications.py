"""
Bulk-import historical applications from a bank admin CSV report.
Run: python -m scripts.import_applications path/to/report.csv [--reset]   (from project root)

Expected columns: Customer_ID, Applicant_Name, Credit_Score, Loan_Type.
Imported applications are stored already ``completed``; their risk tier is taken
from the bureau-scale score in the report rather than from the scoring engine.
"""
import argparse
import asyncio
import csv
import os
import sys
from datetime import datetime, timezone
from pathlib import Path

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from database import AsyncSessionLocal, init_db
from models import ApplicationDocument, CreditApplication, CustomerProfile, User
from schemas.enums import ApplicationStatus, RiskAssessment, UserRole
from services.users import new_profile
from utils.ids import APPLICATION_PREFIX, USER_PREFIX, new_id


def bureau_risk(score: int) -> RiskAssessment:
    if score > 720:
        return RiskAssessment.LOW
    if score > 650:
        return RiskAssessment.MEDIUM
    return RiskAssessment.HIGH


def read_rows(path: Path) -> tuple[dict[str, dict], list[dict]]:
    """Group report rows into users keyed by customer id and a flat list of applications."""
    users: dict[str, dict] = {}
    applications: list[dict] = []
    with path.open(newline="", encoding="utf-8") as f:
        for row in csv.DictReader(f):
            customer_id = (row.get("Customer_ID") or "").strip()
            if not customer_id:
                continue
            if customer_id not in users:
                name_parts = (row.get("Applicant_Name") or "").split()
                users[customer_id] = {
                    "first_name": name_parts[0] if name_parts else "Unknown",
                    "last_name": name_parts[1] if len(name_parts) > 1 else "User",
                    "email": f"{customer_id.lower()}@example.com",
                }
            try:
                score = int((row.get("Credit_Score") or "").strip())
            except ValueError:
                print(f"Skipping row for {customer_id}: invalid Credit_Score {row.get('Credit_Score')!r}")
                continue
            applications.append({
                "customer_id": customer_id,
                "score": score,
                "loan_type": (row.get("Loan_Type") or "").strip() or None,
            })
    return users, applications


async def import_rows(
    session: AsyncSession,
    users: dict[str, dict],
    applications: list[dict],
    reset: bool = False,
) -> tuple[int, int]:
    """Insert grouped report rows; returns (users created, applications inserted). Does not commit."""
    if reset:
        await session.execute(delete(ApplicationDocument))
        await session.execute(delete(CreditApplication))
        await session.execute(delete(CustomerProfile))
        await session.execute(delete(User).where(User.role == UserRole.CUSTOMER.value))
        print("Existing customers and applications cleared.")

    now = datetime.now(timezone.utc)
    created: dict[str, str] = {}
    new_users = 0
    for customer_id, data in users.items():
        existing = await session.execute(select(User.id).where(User.email == data["email"]))
        user_id = existing.scalar_one_or_none()
        if user_id is None:
            user = User(
                id=new_id(USER_PREFIX),
                email=data["email"],
                role=UserRole.CUSTOMER.value,
                first_name=data["first_name"],
                last_name=data["last_name"],
                phone=None,
                is_email_verified=True,
                is_active=True,
                created_at=now,
                profile=new_profile(now),
            )
            session.add(user)
            user_id = user.id
            new_users += 1
            print(f"User created: {data['email']}")
        created[customer_id] = user_id
    await session.flush()

    for item in applications:
        session.add(CreditApplication(
            id=new_id(APPLICATION_PREFIX),
            customer_id=created[item["customer_id"]],
            application_data={"loanType": item["loan_type"]},
            calculated_score=item["score"],
            risk_assessment=bureau_risk(item["score"]).value,
            status=ApplicationStatus.COMPLETED.value,
            reviewed_by=None,
            admin_comments=None,
            created_at=now,
            updated_at=now,
        ))
    await session.flush()
    return new_users, len(applications)


async def import_report(
    path: Path,
    reset: bool = False,
    sessions: async_sessionmaker[AsyncSession] | None = None,
) -> tuple[int, int]:
    users, applications = read_rows(path)
    print(f"Read {len(users)} customers and {len(applications)} applications from {path.name}")
    if sessions is None:
        await init_db()
        sessions = AsyncSessionLocal
    async with sessions() as session:
        counts = await import_rows(session, users, applications, reset=reset)
        await session.commit()
    print("Import complete.")
    return counts


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("csv_path", type=Path)
    parser.add_argument("--reset", action="store_true", help="clear customers and applications first")
    args = parser.parse_args()
    asyncio.run(import_report(args.csv_path, reset=args.reset))


if __name__ == "__main__":
    main()
