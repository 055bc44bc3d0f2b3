"""Authentication service for JWT and password handling."""

from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy import func
from sqlalchemy.orm import Session

from preptrac.config import get_settings
from preptrac.models.category import Category
from preptrac.models.enums import ActivityLevel
from preptrac.models.location import Location
from preptrac.models.user import User

settings = get_settings()

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Seeded for every new account
DEFAULT_CATEGORIES = [
    {"name": "Food", "description": "Canned goods, MREs, dried food, etc.", "color": "#F59E0B", "icon": "utensils"},
    {"name": "Water", "description": "Water storage, purification, containers", "color": "#3B82F6", "icon": "droplet"},
    {"name": "Ammo", "description": "Ammunition and reloading supplies", "color": "#EF4444", "icon": "crosshair"},
    {"name": "Medical", "description": "First aid, medications, medical supplies", "color": "#10B981", "icon": "cross"},
    {"name": "Tools", "description": "Knives, multi-tools, equipment", "color": "#6B7280", "icon": "wrench"},
    {"name": "Clothing", "description": "Survival gear, boots, clothing", "color": "#8B5CF6", "icon": "shirt"},
    {"name": "Shelter", "description": "Tents, tarps, sleeping bags", "color": "#EC4899", "icon": "home"},
    {"name": "Fuel & Energy", "description": "Gasoline, batteries, solar panels", "color": "#F97316", "icon": "zap"},
    {"name": "Communication", "description": "Radios, phones, signaling", "color": "#06B6D4", "icon": "radio"},
    {"name": "Defense", "description": "Self-defense items, security", "color": "#DC2626", "icon": "shield"},
]

DEFAULT_LOCATIONS = [
    {"name": "Home", "description": "Primary residence"},
    {"name": "Vehicle 1", "description": "Primary vehicle"},
    {"name": "Vehicle 2", "description": "Secondary vehicle"},
    {"name": "Cabin", "description": "Vacation/retreat property"},
    {"name": "Bug-out Bag", "description": "Emergency go bag"},
]


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def create_access_token(user_id: int, email: str) -> str:
    """Create a JWT access token."""
    expire = datetime.now(UTC) + timedelta(minutes=settings.jwt_expiration_minutes)
    to_encode = {
        "sub": str(user_id),
        "email": email,
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict | None:
    """Decode and validate a JWT token; None when invalid or expired."""
    try:
        return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None


def get_user_by_email(db: Session, email: str) -> User | None:
    """Look up a user by email, ignoring case."""
    return db.query(User).filter(func.lower(User.email) == email.lower()).first()


def authenticate_user(db: Session, email: str, password: str) -> User | None:
    """Authenticate a user by email and password."""
    user = get_user_by_email(db, email)
    if not user or not verify_password(password, user.password_hash):
        return None
    return user


def create_user(
    db: Session,
    email: str,
    password: str,
    name: str | None = None,
    activity_level: ActivityLevel | None = None,
) -> User:
    """Create a user together with the default categories and locations."""
    user = User(
        email=email.lower(),
        password_hash=get_password_hash(password),
        name=name,
        activity_level=activity_level,
    )
    db.add(user)
    db.flush()

    for category in DEFAULT_CATEGORIES:
        db.add(Category(user_id=user.id, **category))
    for location in DEFAULT_LOCATIONS:
        db.add(Location(user_id=user.id, **location))

    db.commit()
    db.refresh(user)
    return user
