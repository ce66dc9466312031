"""
Pytest fixtures for MineOr backend tests.

Provides an in-memory store, per-test table wipe, and site fixtures.
"""

import pytest
from mineor import create_app
from mineor.config import TestConfig
from mineor.extensions import db
from mineor.models import Site
from mineor.time_utils import utcnow


@pytest.fixture(scope='session')
def app():
    """Application bound to an in-memory SQLite store."""
    app = create_app(TestConfig)

    with app.app_context():
        db.create_all()
        yield app
        db.drop_all()


@pytest.fixture(scope='function')
def db_session(app):
    """Empty every table before the test; the schema is kept."""
    with app.app_context():
        metadata = db.metadata
        for table in reversed(metadata.sorted_tables):
            db.session.execute(table.delete())
        db.session.commit()

        yield db.session

        db.session.rollback()


@pytest.fixture(scope='function')
def site_a(db_session):
    """Active site."""
    site = Site(name="Site Kolwezi", location="Kolwezi, Lualaba", is_active=True, created_at=utcnow())
    db_session.add(site)
    db_session.commit()
    return site


@pytest.fixture(scope='function')
def site_b(db_session, site_a):
    """Second, inactive site."""
    site = Site(name="Site Likasi", location="Likasi, Haut-Katanga", is_active=False, created_at=utcnow())
    db_session.add(site)
    db_session.commit()
    return site


@pytest.fixture(scope='function')
def cli_runner(app):
    return app.test_cli_runner()
