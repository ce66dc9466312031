from __future__ import annotations

from ..extensions import db
from ..errors import ValidationError
from ..models import Settings, DISPLAY_TOGGLES, THEMES, LANGUAGES
from ..validation import ModelValidationPolicy, validate_payload
from .record_service import commit
from mineor.time_utils import bump_timestamp, utcnow

SETTINGS_POLICY = ModelValidationPolicy(
    writable_fields=set(DISPLAY_TOGGLES) | {"theme", "language"},
    choices={"theme": THEMES, "language": LANGUAGES},
)

DEFAULTS = {
    **{key: True for key in DISPLAY_TOGGLES},
    "theme": "dark",
    "language": "fr",
}


class SettingsError(ValidationError):
    pass


def get_settings() -> Settings:
    """Return the singleton row, creating it with defaults on first access."""
    settings = db.session.query(Settings).order_by(Settings.id.asc()).first()
    if settings is None:
        settings = Settings(**DEFAULTS, updated_at=utcnow())
        db.session.add(settings)
        commit("create default settings")
    return settings


def update_settings(**fields) -> Settings:
    patch = validate_payload(model=Settings, payload=fields, policy=SETTINGS_POLICY, partial=True)
    settings = get_settings()
    for key, value in patch.items():
        setattr(settings, key, value)
    settings.updated_at = bump_timestamp(settings.updated_at)
    commit("update settings")
    return settings


def toggle(key: str) -> Settings:
    if key not in DISPLAY_TOGGLES:
        raise SettingsError(f"Unknown display toggle: {key}")
    settings = get_settings()
    return update_settings(**{key: not getattr(settings, key)})
