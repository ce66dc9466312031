# Overview: Pytest coverage for the session context, roles, settings and profile.

import pytest

from mineor.errors import ValidationError
from mineor.models import Site
from mineor.services import profile_service, settings_service, site_service
from mineor.services.session_service import AppContext, SessionError, ViewModeError, bootstrap_context
from mineor.services.settings_service import SettingsError


class TestBootstrap:
    def test_empty_store_is_seeded_then_loaded(self, db_session):
        context = bootstrap_context()

        assert context.active_site.name == "Site Kolwezi"
        assert context.user.full_name == "Administrateur Principal"
        assert context.user.site_id == context.active_site.id
        assert context.view_mode == "admin"
        assert context.settings.theme == "dark"

    def test_existing_store_is_not_reseeded(self, db_session, site_a, site_b):
        site_service.set_active_site(site_b.id)
        context = bootstrap_context()

        assert context.site_id == site_b.id
        assert db_session.query(Site).count() == 2

    def test_without_seed_requires_a_site(self, db_session):
        with pytest.raises(SessionError):
            bootstrap_context(seed=False)

    def test_unflagged_sites_fall_back_to_first(self, db_session, site_a, site_b):
        site_a.is_active = False
        db_session.commit()

        context = bootstrap_context(seed=False)
        assert context.site_id == site_a.id
        assert site_service.get_active_site().id == site_a.id


class TestRoles:
    def _context(self, role):
        profile = profile_service.update_profile(role=role)
        return AppContext(user=profile, active_site=site_service.get_active_site(),
                          settings=settings_service.get_settings())

    def test_admin_sees_everything(self, db_session, site_a):
        context = self._context("admin")
        assert context.is_admin and context.is_supervisor and context.is_worker
        assert context.can_access("supervisor")
        assert context.can_open("settings")

    def test_worker_access(self, db_session, site_a):
        context = self._context("worker")
        assert not context.is_supervisor
        assert context.can_access("worker")
        assert not context.can_access("admin")
        assert context.can_open("attendance")
        assert not context.can_open("purchases")

    def test_admin_can_preview_lower_roles(self, db_session, site_a):
        context = self._context("admin")
        context.set_view_mode("worker")

        assert not context.can_open("reports")
        assert context.user.role == "admin"

    def test_view_mode_cannot_exceed_role(self, db_session, site_a):
        context = self._context("supervisor")
        with pytest.raises(ViewModeError):
            context.set_view_mode("admin")
        with pytest.raises(ViewModeError):
            context.set_view_mode("owner")

    def test_unknown_feature(self, db_session, site_a):
        with pytest.raises(ValidationError):
            self._context("admin").can_open("payroll")

    def test_switch_site(self, db_session, site_a, site_b):
        context = self._context("admin")
        context.switch_site(site_b.id)

        assert context.site_id == site_b.id
        assert site_service.get_active_site().id == site_b.id

    def test_refresh_after_active_site_deleted(self, db_session, site_a, site_b):
        context = self._context("admin")
        context.switch_site(site_b.id)
        site_service.delete_site(site_b.id)

        context.refresh()
        assert context.site_id == site_a.id


class TestSettings:
    def test_defaults(self, db_session):
        settings = settings_service.get_settings()
        assert settings.show_vs_yesterday is True
        assert settings.language == "fr"

    def test_update_and_toggle(self, db_session):
        before = settings_service.get_settings().updated_at
        settings = settings_service.update_settings(theme="light")
        assert settings.theme == "light"
        assert settings.updated_at > before

        settings = settings_service.toggle("show_working_days")
        assert settings.show_working_days is False

    def test_invalid_values(self, db_session):
        with pytest.raises(ValidationError):
            settings_service.update_settings(theme="blue")
        with pytest.raises(SettingsError):
            settings_service.toggle("show_weather")


class TestProfile:
    def test_default_profile(self, db_session, site_a):
        profile = profile_service.load_or_create_profile()
        assert profile.email == "admin@mineor.cd"
        assert profile.initials == "AP"
        assert profile_service.load_or_create_profile().id == profile.id

    def test_update_profile(self, db_session, site_a):
        profile = profile_service.update_profile(first_name="Sarah", last_name="Ilunga", role="supervisor")
        assert profile.full_name == "Sarah Ilunga"
        assert profile.role == "supervisor"

    def test_invalid_role(self, db_session, site_a):
        with pytest.raises(ValidationError):
            profile_service.update_profile(role="owner")
