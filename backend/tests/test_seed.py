# Overview: Pytest coverage for first-run seeding.

import random

from mineor.models import InventoryItem, Production, Settings, Site, Worker
from mineor.services import seed_service


def test_seed_populates_empty_store(db_session):
    site = seed_service.seed_database(random.Random(7))

    assert site.name == "Site Kolwezi"
    assert site.is_active
    assert db_session.query(Worker).count() == len(seed_service.SAMPLE_WORKERS)
    assert db_session.query(InventoryItem).count() == len(seed_service.SAMPLE_ITEMS)
    assert db_session.query(Production).count() == seed_service.SAMPLE_PRODUCTION_DAYS
    assert db_session.query(Settings).count() == 1
    assert all(100 <= p.quantity_grams < 400 for p in db_session.query(Production))


def test_seed_is_idempotent(db_session):
    seed_service.seed_database()
    assert seed_service.seed_database() is None
    assert db_session.query(Site).count() == 1


def test_seed_skips_when_site_exists(db_session, site_a):
    assert seed_service.seed_database() is None
    assert db_session.query(Worker).count() == 0


def test_unmanaged_store_has_no_revision(db_session):
    assert seed_service.schema_revision() is None
