"""User model."""

from sqlalchemy import Boolean, Column, Integer, String

from src.database import Base
from src.models.enums import Role
from src.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """User model for authentication and plan ownership."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    username = Column(String(50), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    role = Column(String(20), nullable=False, default=Role.USER.value)
    is_enabled = Column(Boolean, nullable=False, default=True)

    @property
    def is_admin(self) -> bool:
        """Check if the user holds the admin role."""
        return self.role == Role.ADMIN.value
