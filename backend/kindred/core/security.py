from datetime import datetime, timedelta
from typing import Optional, Dict, Any
from jose import JWTError, jwt
import bcrypt
import secrets
import string
from fastapi import HTTPException, status

from kindred.core.config import settings

# Same alphabet as the reset links issued by earlier releases
PASSWORD_TOKEN_ALPHABET = string.ascii_letters + string.digits


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password"""
    if not hashed_password:
        return False
    # Bcrypt has a 72 byte limit
    password_bytes = plain_password.encode('utf-8')[:72]
    return bcrypt.checkpw(password_bytes, hashed_password.encode('utf-8'))


def get_password_hash(password: str) -> str:
    """Hash password with configurable rounds (BCRYPT_ROUNDS in .env)"""
    password_bytes = password.encode('utf-8')[:72]
    hashed = bcrypt.hashpw(password_bytes, bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS))
    return hashed.decode('utf-8')


def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT access token"""
    to_encode = data.copy()

    if expires_delta:
        expire = datetime.utcnow() + expires_delta
    else:
        expire = datetime.utcnow() + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode.update({"exp": expire, "type": "access"})
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> Dict[str, Any]:
    """Decode JWT token"""
    try:
        return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )


def generate_password_token(length: Optional[int] = None) -> str:
    """Random letters and digits for a password reset link"""
    length = length or settings.PASSWORD_TOKEN_LENGTH
    return ''.join(secrets.choice(PASSWORD_TOKEN_ALPHABET) for _ in range(length))


def utc_timestamp(moment: Optional[datetime] = None) -> int:
    """Unix timestamp of a naive UTC datetime (now by default)"""
    moment = moment or datetime.utcnow()
    return int((moment - datetime(1970, 1, 1)).total_seconds())


def password_token_expiry(now: Optional[datetime] = None) -> str:
    """Unix timestamp, as a string, at which a new reset link stops working"""
    now = now or datetime.utcnow()
    return str(utc_timestamp(now + timedelta(minutes=settings.PASSWORD_TOKEN_LIFETIME_MINUTES)))
