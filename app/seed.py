"""Seed script — Creates the first manager account and demo assets.

Run this once against an empty database. User creation through the API
requires a manager, so the first one has to come from here.

Usage:
    python -m app.seed

Creates:
    - 1 manager account: manager / manager123
    - 1 technician account: technician / technician123
    - 3 assets: EQP-001, MCH-001, FUR-001
"""

import asyncio
from datetime import date
from decimal import Decimal

from sqlalchemy import select

from app.database import async_session, engine, Base
from app.models import Asset, User
from app.utils.password import hash_password

DEMO_ASSETS: list[dict] = [
    {
        "asset_code": "EQP-001",
        "name": "Air Compressor",
        "category": "equipment",
        "location": "Plant 1 - Utility Room",
        "purchase_date": date(2022, 1, 15),
        "purchase_cost": Decimal("15000.00"),
    },
    {
        "asset_code": "MCH-001",
        "name": "Injection Molding Machine",
        "category": "machine",
        "location": "Plant 1 - Line A",
        "purchase_date": date(2021, 6, 1),
        "purchase_cost": Decimal("120000.00"),
    },
    {
        "asset_code": "FUR-001",
        "name": "Workbench",
        "category": "furniture",
        "location": "Maintenance Shop",
        "purchase_date": date(2023, 3, 10),
        "purchase_cost": Decimal("800.00"),
    },
]


async def seed() -> None:
    """Create tables if missing and insert the bootstrap data.

    Idempotent: skips when any manager already exists.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as db:
        result = await db.execute(select(User).where(User.role == "manager").limit(1))
        if result.scalar_one_or_none():
            print("Already seeded. Skipping.")
            return

        db.add(User(
            username="manager",
            password_hash=hash_password("manager123"),
            full_name="Maintenance Manager",
            role="manager",
        ))
        db.add(User(
            username="technician",
            password_hash=hash_password("technician123"),
            full_name="Field Technician",
            role="technician",
        ))
        for data in DEMO_ASSETS:
            db.add(Asset(**data, current_value=data["purchase_cost"]))

        await db.commit()
        print("Seed complete!")
        print("  Manager: manager / manager123")
        print("  Technician: technician / technician123")


if __name__ == "__main__":
    asyncio.run(seed())
