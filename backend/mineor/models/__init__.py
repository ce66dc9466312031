from .sites import Site
from .production import Production, SHIFTS
from .workforce import Worker, AttendanceRecord, WORKER_STATUSES, ATTENDANCE_STATUSES
from .inventory import InventoryItem, INVENTORY_CATEGORIES, ITEM_CONDITIONS
from .purchases import Purchase, PURCHASE_CATEGORIES
from .daily_reports import DailyReport
from .settings import Settings, DISPLAY_TOGGLES, THEMES, LANGUAGES
from .identity import UserProfile, ROLES

# Collections owned by a site, in cascade-delete order
SITE_OWNED_MODELS = (Production, Worker, InventoryItem, Purchase, DailyReport, AttendanceRecord)

__all__ = [
    'Site',
    'Production', 'Worker', 'AttendanceRecord', 'InventoryItem', 'Purchase', 'DailyReport',
    'Settings', 'UserProfile',
    'SITE_OWNED_MODELS',
    'SHIFTS', 'WORKER_STATUSES', 'ATTENDANCE_STATUSES', 'INVENTORY_CATEGORIES', 'ITEM_CONDITIONS',
    'PURCHASE_CATEGORIES', 'DISPLAY_TOGGLES', 'THEMES', 'LANGUAGES', 'ROLES',
]
