"""
Role hierarchy and feature access.

WHY: The application has one local user but three levels of view. Access is
decided by comparing levels, never by checking role names one by one.
"""

ROLE_ADMIN = "admin"
ROLE_SUPERVISOR = "supervisor"
ROLE_WORKER = "worker"

ROLE_LEVELS = {
    ROLE_ADMIN: 3,
    ROLE_SUPERVISOR: 2,
    ROLE_WORKER: 1,
}

# Minimum role needed to open each area of the application
FEATURE_ACCESS = {
    "dashboard": ROLE_WORKER,
    "attendance": ROLE_WORKER,
    "production": ROLE_WORKER,
    "profile": ROLE_WORKER,
    "workers": ROLE_SUPERVISOR,
    "inventory": ROLE_SUPERVISOR,
    "purchases": ROLE_SUPERVISOR,
    "daily_reports": ROLE_SUPERVISOR,
    "reports": ROLE_SUPERVISOR,
    "settings": ROLE_ADMIN,
}


def role_level(role: str) -> int:
    try:
        return ROLE_LEVELS[role]
    except KeyError:
        raise ValueError(f"Unknown role: {role}") from None


def has_level(current_role: str, required_role: str) -> bool:
    return role_level(current_role) >= role_level(required_role)
