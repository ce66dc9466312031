# Overview: Store bootstrap; table creation and first-run sample data.

from __future__ import annotations

import random
from datetime import timedelta

import sqlalchemy as sa
from flask import current_app

from ..extensions import db
from ..models import InventoryItem, Production, Settings, Site, Worker, SHIFTS
from .record_service import commit
from .settings_service import DEFAULTS as SETTINGS_DEFAULTS
from mineor.time_utils import parse_iso_date, today, utcnow

DEFAULT_SITE = {"name": "Site Kolwezi", "location": "Kolwezi, Lualaba"}

SAMPLE_WORKERS = [
    {"first_name": "Jean", "last_name": "Kabongo", "role": "Chef d'équipe", "phone": "+243 812 345 678",
     "team": "Équipe A", "status": "active", "hire_date": "2023-01-15"},
    {"first_name": "Marie", "last_name": "Mutombo", "role": "Opératrice", "phone": "+243 823 456 789",
     "team": "Équipe A", "status": "active", "hire_date": "2023-03-20"},
    {"first_name": "Pierre", "last_name": "Tshisekedi", "role": "Mineur", "phone": "+243 834 567 890",
     "team": "Équipe B", "status": "active", "hire_date": "2022-11-10"},
]

SAMPLE_ITEMS = [
    {"name": "Foreuse hydraulique", "category": "equipment", "quantity": 3, "unit": "unité",
     "min_quantity": 2, "condition": "good", "location": "Entrepôt"},
    {"name": "Casques de sécurité", "category": "safety", "quantity": 25, "unit": "pièces",
     "min_quantity": 20, "condition": "good", "location": "Vestiaire"},
]

SAMPLE_PRODUCTION_DAYS = 14

# Head of backend/migrations/versions
SCHEMA_VERSION = "0002_attendance_and_profile"


def init_store() -> None:
    """Create any missing tables (fresh local databases)."""
    db.create_all()


def schema_revision() -> str | None:
    """Alembic revision stamped on the database, or None if unmanaged."""
    if not sa.inspect(db.engine).has_table("alembic_version"):
        return None
    return db.session.execute(sa.text("SELECT version_num FROM alembic_version")).scalar()


def seed_database(rng: random.Random | None = None) -> Site | None:
    """
    Populate an empty store with one active site and sample data.

    Does nothing (returns None) once any site exists.
    """
    if db.session.query(Site).count() > 0:
        return None

    rng = rng or random.Random()
    now = utcnow()

    site = Site(**DEFAULT_SITE, is_active=True, created_at=now)
    db.session.add(site)
    db.session.flush()

    if db.session.query(Settings).count() == 0:
        db.session.add(Settings(**SETTINGS_DEFAULTS, updated_at=now))

    for worker in SAMPLE_WORKERS:
        fields = dict(worker, hire_date=parse_iso_date(worker["hire_date"]))
        db.session.add(Worker(site_id=site.id, created_at=now, updated_at=now, **fields))

    shifts = sorted(SHIFTS)
    start = today()
    for offset in range(SAMPLE_PRODUCTION_DAYS):
        db.session.add(Production(
            site_id=site.id,
            date=start - timedelta(days=offset),
            quantity_grams=rng.randint(100, 399),
            team="Équipe A" if offset % 2 == 0 else "Équipe B",
            shift=rng.choice(shifts),
            notes="",
            created_at=now,
            updated_at=now,
        ))

    for item in SAMPLE_ITEMS:
        db.session.add(InventoryItem(site_id=site.id, notes="", created_at=now, updated_at=now, **item))

    commit("seed database")
    current_app.logger.info("Seeded empty store with site %s", site.name)
    return site
