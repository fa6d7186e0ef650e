"""
Auth and listing services.

These sit between the routers and the User Store and raise the errors from
``errors.py``; they know nothing about HTTP.
"""
import logging
import math
import re
from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from .auth import TokenIssuer, hash_password, verify_password
from .errors import (
    ConflictError,
    InvalidCredentialsError,
    NotFoundError,
    ServerError,
    ValidationError,
)
from .models import User
from .store import UserStore

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
# Keeps (page-1)*limit inside a signed 64-bit SQL integer
MAX_PAGE_VALUE = 2**31 - 1

_LEADING_INT = re.compile(r"^\s*([+-]?)0*(\d+)")


@dataclass
class LoginResult:
    token: str
    email: str
    name: str


@dataclass
class UserPage:
    items: List[User]
    total_items: int
    page: int
    total_pages: int


def parse_positive_int(raw: Optional[str], default: int) -> int:
    """
    Loosely parse a query-string integer.

    Leading digits are taken ("5abc" -> 5, "2.7" -> 2). Anything absent,
    non-numeric, zero or negative falls back to ``default``; values above
    ``MAX_PAGE_VALUE`` are clamped to it.
    """
    if raw is None:
        return default
    match = _LEADING_INT.match(str(raw))
    if not match:
        return default
    sign, digits = match.groups()
    if sign == "-":
        return default
    # Skip int() on arbitrarily long digit strings
    if len(digits) > len(str(MAX_PAGE_VALUE)):
        return MAX_PAGE_VALUE
    value = int(digits)
    if value <= 0:
        return default
    return min(value, MAX_PAGE_VALUE)


class AuthService:
    def __init__(self, store: UserStore, tokens: TokenIssuer):
        self.store = store
        self.tokens = tokens

    def register(self, name: Optional[str], email: Optional[str], password: Optional[str]) -> None:
        if not name or not email or not password:
            raise ValidationError("Name, email, and password are required")

        try:
            self.store.create(name=name, email=email, password_hash=hash_password(password))
        except IntegrityError as exc:
            # Unique index on email is the arbiter for concurrent registrations
            logger.info("Registration rejected, email already registered: %s", email)
            raise ConflictError("Email already registered") from exc
        except SQLAlchemyError as exc:
            logger.exception("Failed to register user %s", email)
            raise ServerError("Failed to register user") from exc

    def login(self, email: Optional[str], password: Optional[str]) -> LoginResult:
        if not email or not password:
            raise ValidationError("Email and password are required")

        try:
            user = self.store.find_by_email(email)
        except SQLAlchemyError as exc:
            logger.exception("Failed to look up user %s", email)
            raise ServerError("Failed to log in") from exc

        if not user:
            raise NotFoundError("User not found")

        if not verify_password(user.password, password):
            raise InvalidCredentialsError("Incorrect password")

        token = self.tokens.issue(user.email, user.name)
        return LoginResult(token=token, email=user.email, name=user.name)


class ListingService:
    def __init__(self, store: UserStore):
        self.store = store

    def list_users(self, page: Optional[str] = None, limit: Optional[str] = None) -> UserPage:
        page_number = parse_positive_int(page, DEFAULT_PAGE)
        page_size = parse_positive_int(limit, DEFAULT_LIMIT)

        try:
            total_items = self.store.count()
            users = self.store.list(offset=(page_number - 1) * page_size, limit=page_size)
        except SQLAlchemyError as exc:
            logger.exception("Failed to list users page=%s limit=%s", page_number, page_size)
            raise ServerError("Failed to list users") from exc

        return UserPage(
            items=users,
            total_items=total_items,
            page=page_number,
            total_pages=math.ceil(total_items / page_size),
        )
