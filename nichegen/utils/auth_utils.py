"""
Authentication utilities for the NicheGen backend.

Provides functions for password hashing, token generation and the user
lookups behind the register/login endpoints. Token verification for
protected routes lives in middleware/auth.py.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import bcrypt
import jwt
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker

from ..models import User
from ..models.connection import get_db

# Set up logging
logger = logging.getLogger(__name__)

JWT_ALGORITHM = 'HS256'


def hash_password(password: str) -> str:
    """
    Hash a password using bcrypt.

    Args:
        password: Plain text password

    Returns:
        Hashed password as a UTF-8 string
    """
    salt = bcrypt.gensalt()
    return bcrypt.hashpw(password.encode('utf-8'), salt).decode('utf-8')


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a password against a hash.

    Args:
        plain_password: Plain text password
        hashed_password: Hashed password from database

    Returns:
        True if password matches, False otherwise
    """
    try:
        return bcrypt.checkpw(plain_password.encode('utf-8'), hashed_password.encode('utf-8'))
    except ValueError:
        logger.warning("Stored password hash is malformed")
        return False


def generate_token(user_id: int, secret: str, expiration_days: int = 30) -> str:
    """
    Generate a JWT token for a user. The payload carries the user id only.

    Args:
        user_id: User ID
        secret: Shared signing secret
        expiration_days: Token validity period

    Returns:
        JWT token as string
    """
    payload = {
        'id': user_id,
        'exp': datetime.now(timezone.utc) + timedelta(days=expiration_days),
    }
    return jwt.encode(payload, secret, algorithm=JWT_ALGORITHM)


def decode_token(token: str, secret: str) -> Dict[str, Any]:
    """Decode and verify a token. Raises ``jwt.InvalidTokenError`` subclasses."""
    return jwt.decode(token, secret, algorithms=[JWT_ALGORITHM])


def register_user(session_factory: sessionmaker, name: str, email: str, password: str) -> Optional[Dict[str, Any]]:
    """
    Register a new user.

    Returns:
        Dictionary with public user data if successful, None if the email is taken
    """
    try:
        with get_db(session_factory) as db:
            existing_user = db.query(User).filter(User.email == email).first()
            if existing_user:
                logger.warning(f"Registration failed: email {email} already exists")
                return None

            new_user = User(name=name, email=email, hashed_password=hash_password(password))
            db.add(new_user)
            db.flush()
            user_data = new_user.to_public_dict()
    except IntegrityError:
        # Lost a race against a concurrent registration for the same email
        logger.warning(f"Registration failed: email {email} already exists")
        return None

    logger.info(f"User {email} successfully registered")
    return user_data


def authenticate_user(session_factory: sessionmaker, email: str, password: str) -> Optional[Dict[str, Any]]:
    """
    Authenticate a user with email and password.

    Returns:
        Dictionary with public user data if authentication successful, None otherwise
    """
    with get_db(session_factory) as db:
        user = db.query(User).filter(User.email == email).first()

        if not user:
            logger.warning(f"Authentication failed: no user with email {email}")
            return None

        if not verify_password(password, user.hashed_password):
            logger.warning(f"Authentication failed: incorrect password for {email}")
            return None

        user_data = user.to_public_dict()

    logger.info(f"User {email} successfully authenticated")
    return user_data


def get_user(session_factory: sessionmaker, user_id: int) -> Optional[Dict[str, Any]]:
    """Public data for a user id, or None if the account no longer exists."""
    with get_db(session_factory) as db:
        user = db.query(User).filter(User.user_id == user_id).first()
        return user.to_public_dict() if user else None
