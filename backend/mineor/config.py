# backend/mineor/config.py
from __future__ import annotations
import os


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")

    # SQLite DB stored next to the working directory unless overridden
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "MINEOR_DATABASE_URL",
        "sqlite:///mineor.sqlite3",
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    LOG_LEVEL = os.environ.get("MINEOR_LOG_LEVEL", "INFO")

    # Dashboard goal used for target progress (grams per day)
    DAILY_PRODUCTION_TARGET_GRAMS = int(os.environ.get("MINEOR_DAILY_TARGET_GRAMS", "300"))

    # Check-ins at or after this hour are marked late
    LATE_CHECK_IN_HOUR = int(os.environ.get("MINEOR_LATE_CHECK_IN_HOUR", "9"))

    MAX_REPORT_PHOTOS = 6


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    LOG_LEVEL = "DEBUG"
