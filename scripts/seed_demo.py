#!/usr/bin/env python3
"""Seed staff accounts, materials and vendors for a demo database."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from sqlalchemy import func, select

from funeral_desk.core.logger import get_logger, init_logging, log_context
from funeral_desk.db import create_sync_engine, session_scope
from funeral_desk.models import Base, Material, Staff, Vendor

logger = get_logger(__name__)

STAFF = [
    ("S001", "Admin", "admin@example.com", "Administrator", "Active"),
    ("S002", "Lin Mei", "mei@example.com", "Funeral director", "Active"),
    ("S003", "Chen Wei", "wei@example.com", "Funeral director", "Inactive"),
]

MATERIALS = [
    ("M01", "Incense", "box", "100", "50"),
    ("M02", "Paper offerings", "bundle", "250", "30"),
    ("M03", "White chrysanthemums", "bunch", "400", "20"),
    ("M04", "Memorial candles", "pair", "80", "100"),
]

VENDORS = [
    ("V25-001", "Evergreen Florist", "Mr. Wang", "02-2345-6789", "Flowers"),
    ("V25-002", "Harmony Supplies", "Ms. Lee", "02-8765-4321", "Ritual goods"),
]


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--url", type=str, default=None, help="Database URL (defaults to DATABASE_URL)")
    parser.add_argument("--password", type=str, default="demo1234", help="Password for every seeded staff account")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    Base.metadata.create_all(create_sync_engine(args.url))

    with session_scope(args.url) as session:
        if session.scalar(select(func.count()).select_from(Staff)):
            logger.info("Staff table already populated, skipping seed")
            return

        session.add_all(
            Staff(staff_id=staff_id, name=name, email=email, password=args.password, role=role, status=status)
            for staff_id, name, email, role, status in STAFF
        )
        session.add_all(
            Material(material_id=material_id, name=name, unit=unit, current_cost=cost, current_stock=stock)
            for material_id, name, unit, cost, stock in MATERIALS
        )
        session.add_all(
            Vendor(vendor_id=vendor_id, name=name, contact_person=contact, phone=phone, service_type=service)
            for vendor_id, name, contact, phone, service in VENDORS
        )

    logger.info(
        "Seeded %d staff, %d materials, %d vendors", len(STAFF), len(MATERIALS), len(VENDORS)
    )


if __name__ == "__main__":
    init_logging(app_name="seed-demo")
    log_context.bind(job="seed_demo")
    main()
