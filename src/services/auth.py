"""Authentication service for JWT and password handling."""

from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy import or_
from sqlalchemy.orm import Session

from src.config import get_settings
from src.models.enums import Role
from src.models.user import User

settings = get_settings()

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def create_access_token(user_id: int, email: str, role: str = Role.USER.value) -> str:
    """Create a JWT access token."""
    expire = datetime.now(UTC) + timedelta(minutes=settings.jwt_expiration_minutes)
    to_encode = {
        "sub": str(user_id),
        "email": email,
        "role": role,
        "exp": expire,
    }
    encoded_jwt = jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)
    return encoded_jwt


def decode_access_token(token: str) -> dict | None:
    """Decode and validate a JWT token."""
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
        return payload
    except JWTError:
        return None


def authenticate_user(db: Session, email: str, password: str) -> User | None:
    """Authenticate a user by email and password."""
    user = db.query(User).filter(User.email == email).first()
    if not user:
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user


def find_conflicting_user(
    db: Session, email: str | None, username: str | None, exclude_id: int | None = None
) -> str | None:
    """Return a conflict message if the email or username is already taken."""
    filters = []
    if email:
        filters.append(User.email == email)
    if username:
        filters.append(User.username == username)
    if not filters:
        return None

    query = db.query(User).filter(or_(*filters))
    if exclude_id is not None:
        query = query.filter(User.id != exclude_id)
    existing = query.first()
    if not existing:
        return None
    if email and existing.email == email:
        return "Email is already in use"
    return "Username is already taken"


def create_user(
    db: Session,
    email: str,
    username: str,
    password: str,
    first_name: str | None = None,
    last_name: str | None = None,
    role: Role = Role.USER,
) -> User:
    """Create a new user."""
    hashed_password = get_password_hash(password)
    user = User(
        email=email,
        username=username,
        password_hash=hashed_password,
        first_name=first_name,
        last_name=last_name,
        role=role.value,
        is_enabled=True,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user
