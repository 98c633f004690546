"""Seed database from CSV files.

Usage:
    python -m fieldops.tools.seed_db
    python -m fieldops.tools.seed_db --data-dir data
    python -m fieldops.tools.seed_db --drop  # drop existing data first
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from fieldops.adapters.csv_loader.loader import load_technicians, load_users, load_work_orders
from fieldops.adapters.persistence.database import async_session_factory
from fieldops.adapters.persistence.models import TechnicianModel, UserModel, WorkOrderModel
from fieldops.adapters.persistence.repositories import (
    SqlTechnicianRepository,
    SqlUserRepository,
    SqlWorkOrderRepository,
)
from fieldops.adapters.security.password import BcryptPasswordHasher
from fieldops.application.use_cases.register_user import RegisterUserUseCase
from fieldops.config import settings
from fieldops.domain.entities.technician import Technician
from fieldops.domain.entities.work_order import WorkOrder
from fieldops.domain.errors import UsernameTaken
from fieldops.domain.policies.load_availability import derive_availability
from fieldops.domain.value_objects.enums import Availability, Priority, Role

logging.basicConfig(level=logging.INFO, format="%(levelname)s | %(message)s")
logger = logging.getLogger(__name__)


async def _drop_data(session: AsyncSession) -> None:
    """Delete all data in correct order (respecting FK constraints)."""
    for model in [WorkOrderModel, TechnicianModel, UserModel]:
        await session.execute(delete(model))
    await session.commit()
    logger.info("Dropped all existing data")


def _find_csv(data_dir: Path, keywords: list[str]) -> Path | None:
    """Find the first CSV in *data_dir* whose name contains one of *keywords*."""
    for csv_path in sorted(data_dir.glob("*.csv")):
        stem = csv_path.stem.lower()
        if any(k in stem for k in keywords):
            return csv_path
    return None


async def seed(data_dir: Path, drop: bool = False) -> dict[str, int]:
    """Main seed function. Returns counts of seeded records."""
    counts = {"technicians": 0, "work_orders": 0, "users": 0}

    technician_csv = _find_csv(data_dir, ["technicians", "tecnicos", "técnicos"])
    order_csv = _find_csv(data_dir, ["work_orders", "orders", "ordenes", "órdenes"])
    user_csv = _find_csv(data_dir, ["users", "usuarios"])

    if not technician_csv:
        raise FileNotFoundError(
            f"No technicians CSV found in {data_dir}. Expected something like technicians.csv"
        )

    async with async_session_factory() as session:
        if drop:
            await _drop_data(session)

        # 1. Technicians: availability derived from the imported load
        technicians = SqlTechnicianRepository(session)
        for td in load_technicians(technician_csv):
            if await technicians.get_by_id(td["id"]):
                logger.debug("Technician '%s' already exists, skipping", td["id"])
                continue
            try:
                declared = Availability(td["availability"])
            except ValueError:
                logger.warning(
                    "Technician '%s': unknown availability '%s', using available",
                    td["id"], td["availability"],
                )
                declared = Availability.AVAILABLE
            await technicians.save(
                Technician(
                    id=td["id"],
                    name=td["name"],
                    email=td["email"],
                    phone=td["phone"],
                    specialty=td["specialty"],
                    zone=td["zone"],
                    availability=derive_availability(
                        td["current_load"], declared, settings.saturation_threshold
                    ),
                    current_load=td["current_load"],
                    certifications=td["certifications"],
                )
            )
            counts["technicians"] += 1
        await session.commit()

        # 2. Work orders: always imported as pending
        if order_csv:
            orders = SqlWorkOrderRepository(session)
            now = datetime.now(timezone.utc)
            for od in load_work_orders(order_csv):
                if await orders.get_by_id(od["id"]):
                    logger.debug("Work order '%s' already exists, skipping", od["id"])
                    continue
                try:
                    priority = Priority(od["priority"])
                except ValueError:
                    priority = Priority.MEDIUM
                await orders.save(
                    WorkOrder(
                        id=od["id"],
                        client_name=od["client_name"],
                        address=od["address"],
                        zone=od["zone"],
                        specialty=od["specialty"],
                        description=od["description"],
                        priority=priority,
                        created_at=now,
                    )
                )
                counts["work_orders"] += 1
            await session.commit()
        else:
            logger.info("No work orders CSV found: skipping order import")

        # 3. Users
        if user_csv:
            register = RegisterUserUseCase(SqlUserRepository(session), BcryptPasswordHasher())
            for ud in load_users(user_csv):
                try:
                    role = Role(ud["role"])
                except ValueError:
                    logger.warning("User '%s': unknown role '%s', skipping", ud["username"], ud["role"])
                    continue
                try:
                    await register.execute(ud["username"], ud["name"], ud["password"], role)
                except UsernameTaken:
                    logger.debug("User '%s' already exists, skipping", ud["username"])
                    continue
                counts["users"] += 1
            await session.commit()
        else:
            logger.info("No users CSV found: skipping user import")

    logger.info("Seed complete: %s", counts)
    return counts


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed the dispatch database from CSV files")
    parser.add_argument("--data-dir", default=settings.csv_data_path, help="directory with CSV files")
    parser.add_argument("--drop", action="store_true", help="delete existing data first")
    args = parser.parse_args()

    data_dir = Path(args.data_dir)
    if not data_dir.exists():
        logger.error("Data directory not found: %s", data_dir)
        sys.exit(1)

    asyncio.run(seed(data_dir, drop=args.drop))


if __name__ == "__main__":
    main()
