from __future__ import annotations

from flask import current_app

from ..extensions import db
from ..errors import NotFoundError, ValidationError
from ..models import Site, UserProfile, SITE_OWNED_MODELS
from .record_service import commit, delete_by_site, require_record
from mineor.time_utils import utcnow


class SiteError(ValidationError):
    """Raised when site operations fail."""
    pass


def create_site(name: str, location: str = "") -> Site:
    name = (name or "").strip()
    if not name:
        raise SiteError("Site name is required")

    # The first site of an empty store becomes the active one
    is_first = db.session.query(Site).count() == 0
    site = Site(
        name=name,
        location=(location or "").strip(),
        is_active=is_first,
        created_at=utcnow(),
    )
    db.session.add(site)
    commit("create site")
    return site


def update_site(site_id: int, *, name: str | None = None, location: str | None = None) -> Site:
    site = require_record(Site, site_id)

    if name is not None:
        name = name.strip()
        if not name:
            raise SiteError("Site name cannot be blank")
        site.name = name
    if location is not None:
        site.location = location.strip()

    commit(f"update site {site_id}")
    return site


def get_site(site_id: int) -> Site | None:
    return db.session.get(Site, site_id)


def list_sites() -> list[Site]:
    return db.session.query(Site).order_by(Site.id.asc()).all()


def get_active_site() -> Site | None:
    return db.session.query(Site).filter(Site.is_active.is_(True)).order_by(Site.id.asc()).first()


def set_active_site(site_id: int) -> Site:
    """Clear the flag everywhere, then set it on one site, in a single commit."""
    site = require_record(Site, site_id)
    db.session.query(Site).filter(Site.id != site_id).update(
        {Site.is_active: False}, synchronize_session=False
    )
    site.is_active = True
    commit(f"activate site {site_id}")
    current_app.logger.info("Active site is now %s (%s)", site.id, site.name)
    return site


def delete_site(site_id: int) -> dict:
    """
    Delete a site and every row it owns.

    Dependent collections are cleared first, then the site itself. When the
    active site is removed, the remaining site with the lowest id is
    activated. A profile bound to the deleted site is rebound to the active
    site. The last remaining site cannot be deleted.
    """
    site = get_site(site_id)
    if site is None:
        raise NotFoundError("Site", site_id)

    if db.session.query(Site).count() <= 1:
        raise SiteError("At least one site must remain")

    was_active = bool(site.is_active)
    removed: dict[str, int] = {}
    for model in SITE_OWNED_MODELS:
        removed[model.__tablename__] = delete_by_site(model, site_id)

    db.session.delete(site)

    fallback = (
        db.session.query(Site)
        .filter(Site.id != site_id)
        .order_by(Site.id.asc())
        .first()
    )
    successor = None
    if was_active:
        successor = fallback
        successor.is_active = True

    # Profiles follow the new active site, else the lowest remaining one
    rebind_to = successor or get_active_site() or fallback
    db.session.query(UserProfile).filter(UserProfile.site_id == site_id).update(
        {UserProfile.site_id: rebind_to.id}, synchronize_session=False
    )

    commit(f"delete site {site_id}")
    current_app.logger.info("Deleted site %s with dependents %s", site_id, removed)

    return {
        "site_id": site_id,
        "removed": removed,
        "activated_site_id": successor.id if successor else None,
    }
