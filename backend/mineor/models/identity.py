from __future__ import annotations

from ..extensions import db
from mineor.time_utils import to_utc_z, utcnow

ROLES = {"admin", "supervisor", "worker"}


class UserProfile(db.Model):
    """
    The single local user of this installation.

    There is no authentication; the profile only carries display data and
    the stored role that bounds view-mode switching.
    """
    __tablename__ = "user_profiles"
    __table_args__ = {"sqlite_autoincrement": True}

    id = db.Column(db.Integer, primary_key=True)
    first_name = db.Column(db.String(120), nullable=False)
    last_name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(255), nullable=False, default="")
    phone = db.Column(db.String(64), nullable=False, default="")
    role = db.Column(db.String(16), nullable=False, default="admin")
    avatar = db.Column(db.Text, nullable=True)
    site_id = db.Column(db.Integer, nullable=True)
    team = db.Column(db.String(120), nullable=False, default="")

    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def initials(self) -> str:
        return f"{self.first_name[:1]}{self.last_name[:1]}".upper() or "??"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "email": self.email,
            "phone": self.phone,
            "role": self.role,
            "avatar": self.avatar,
            "site_id": self.site_id,
            "team": self.team,
            "created_at": to_utc_z(self.created_at),
            "updated_at": to_utc_z(self.updated_at),
        }
