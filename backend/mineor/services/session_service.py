# Overview: Application context for the single local session; replaces global user/site state.

"""
Session Context

WHY: Components need to know who is using the application, which site they
are working on and which role they are currently viewing as. That state
lives in one explicit AppContext object handed to callers, never in module
globals.

INITIALIZATION ORDER (bootstrap_context):
1. seed the store (no-op once a site exists)
2. load the active site
3. load (or create) the user profile

VIEW MODE: the effective role used for access checks. An admin may preview
the application as supervisor or worker without touching the stored role;
other users may only view at or below their own level.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from flask import current_app

from ..errors import ValidationError
from ..models import Settings, Site, UserProfile
from ..permissions import FEATURE_ACCESS, ROLE_ADMIN, ROLE_LEVELS, ROLE_SUPERVISOR, has_level, role_level
from . import profile_service, seed_service, settings_service, site_service


class ViewModeError(ValidationError):
    """Raised when a view mode cannot be selected."""
    pass


class SessionError(ValidationError):
    """Raised when the session cannot be established."""
    pass


@dataclass
class AppContext:
    """
    Complete session state for one running application.

    `user` is the stored profile; `view_mode` is the role the session is
    currently acting as.
    """
    user: UserProfile
    active_site: Site
    settings: Settings
    view_mode: str = field(default="")

    def __post_init__(self):
        if not self.view_mode:
            self.view_mode = self.user.role

    @property
    def site_id(self) -> int:
        return self.active_site.id

    @property
    def is_admin(self) -> bool:
        return self.view_mode == ROLE_ADMIN

    @property
    def is_supervisor(self) -> bool:
        return has_level(self.view_mode, ROLE_SUPERVISOR)

    @property
    def is_worker(self) -> bool:
        # Every level includes worker access
        return True

    def can_access(self, required_role: str) -> bool:
        return has_level(self.view_mode, required_role)

    def can_open(self, feature: str) -> bool:
        try:
            required = FEATURE_ACCESS[feature]
        except KeyError:
            raise ValidationError(f"Unknown feature: {feature}") from None
        return self.can_access(required)

    def set_view_mode(self, mode: str) -> str:
        if mode not in ROLE_LEVELS:
            raise ViewModeError(f"Unknown view mode: {mode}")
        if role_level(mode) > role_level(self.user.role):
            raise ViewModeError(f"A {self.user.role} cannot view as {mode}")
        self.view_mode = mode
        return self.view_mode

    def switch_site(self, site_id: int) -> Site:
        self.active_site = site_service.set_active_site(site_id)
        return self.active_site

    def refresh(self) -> "AppContext":
        """Reload site, profile and settings after out-of-band changes (e.g. site deletion)."""
        site = site_service.get_active_site()
        if site is None:
            raise SessionError("No active site")
        self.active_site = site
        self.user = profile_service.load_or_create_profile()
        self.settings = settings_service.get_settings()
        if role_level(self.view_mode) > role_level(self.user.role):
            self.view_mode = self.user.role
        return self

    def to_dict(self) -> dict:
        return {
            "user": self.user.to_dict(),
            "view_mode": self.view_mode,
            "active_site": self.active_site.to_dict(),
            "settings": self.settings.to_dict(),
            "features": {name: self.can_open(name) for name in FEATURE_ACCESS},
        }


def bootstrap_context(*, seed: bool = True) -> AppContext:
    if seed:
        seed_service.seed_database()

    site = site_service.get_active_site()
    if site is None:
        # Sites exist but none is flagged (e.g. after a manual import)
        sites = site_service.list_sites()
        if not sites:
            raise SessionError("No site available; run the seed or create a site first")
        site = site_service.set_active_site(sites[0].id)

    user = profile_service.load_or_create_profile()
    settings = settings_service.get_settings()
    current_app.logger.debug("Session ready for %s on site %s", user.full_name, site.name)
    return AppContext(user=user, active_site=site, settings=settings)
