from __future__ import annotations

from ..extensions import db
from ..models import Site, UserProfile, ROLES
from ..validation import ModelValidationPolicy, validate_payload
from .record_service import commit
from mineor.time_utils import bump_timestamp, utcnow

PROFILE_POLICY = ModelValidationPolicy(
    writable_fields={"first_name", "last_name", "email", "phone", "role", "avatar", "site_id", "team"},
    choices={"role": ROLES},
)

DEFAULT_PROFILE = {
    "first_name": "Administrateur",
    "last_name": "Principal",
    "email": "admin@mineor.cd",
    "phone": "+243 812 345 678",
    "role": "admin",
    "team": "Direction",
}


def get_profile() -> UserProfile | None:
    return db.session.query(UserProfile).order_by(UserProfile.id.asc()).first()


def load_or_create_profile() -> UserProfile:
    """Return the stored profile or create the default administrator bound to the first site."""
    profile = get_profile()
    if profile is not None:
        return profile

    first_site = db.session.query(Site).order_by(Site.id.asc()).first()
    now = utcnow()
    profile = UserProfile(
        **DEFAULT_PROFILE,
        site_id=first_site.id if first_site else None,
        created_at=now,
        updated_at=now,
    )
    db.session.add(profile)
    commit("create default profile")
    return profile


def update_profile(**fields) -> UserProfile:
    patch = validate_payload(model=UserProfile, payload=fields, policy=PROFILE_POLICY, partial=True)
    profile = load_or_create_profile()
    for key, value in patch.items():
        setattr(profile, key, value)
    profile.updated_at = bump_timestamp(profile.updated_at)
    commit("update profile")
    return profile
