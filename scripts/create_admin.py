#!/usr/bin/env python3
"""Create (or promote) an admin account.

Admins cannot be created through self-registration; use this script once per
deployment to bootstrap the first one.

Set INIT_DB=1 to create missing tables first (local SQLite databases).

Usage:
    ADMIN_EMAIL=admin@example.com ADMIN_USERNAME=admin ADMIN_PASSWORD=... \
        python scripts/create_admin.py
"""

import logging
import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from src.database import SessionLocal, init_db
from src.models.enums import Role
from src.models.user import User
from src.services.auth import create_user

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def create_admin(email: str, username: str, password: str) -> User:
    """Create the admin user, or give an existing account the admin role."""
    db = SessionLocal()
    try:
        user = db.query(User).filter(User.email == email).first()
        if user:
            user.role = Role.ADMIN.value
            user.is_enabled = True
            db.commit()
            logger.info(f"Promoted existing user {user.id} ({email}) to admin")
            return user

        user = create_user(db, email=email, username=username, password=password, role=Role.ADMIN)
        logger.info(f"Created admin user {user.id} ({email})")
        return user
    finally:
        db.close()


if __name__ == "__main__":
    email = os.getenv("ADMIN_EMAIL")
    username = os.getenv("ADMIN_USERNAME", "admin")
    password = os.getenv("ADMIN_PASSWORD")
    if not email or not password:
        sys.exit("ADMIN_EMAIL and ADMIN_PASSWORD must be set")
    if len(password) < 8:
        sys.exit("ADMIN_PASSWORD must be at least 8 characters")
    if os.getenv("INIT_DB") == "1":
        init_db()
    create_admin(email, username, password)
