"""Auth service — password hashing and account operations."""

import re
from typing import Optional

import structlog
from passlib.context import CryptContext

from courseload.core.exceptions import (
    EntityNotFoundException,
    DuplicateError,
    InvalidCredentialsException,
    ValidationError,
)
from courseload.domain.enums import Role
from courseload.domain.models.user import User
from courseload.domain.repositories.user_repository import UserRepository
from courseload.domain.schemas.auth import CreateQARequest, RegisterRequest

logger = structlog.get_logger(__name__)
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

QA_BANK_DEFAULTS = {
    "bank_name": "Default Bank",
    "bank_account_number": "00000000",
    "bank_bban": "0000000000",
    "school": "N/A",
}


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def is_institutional_email(email: str, domain: str) -> bool:
    return re.fullmatch(rf".+@{re.escape(domain.lower())}", email) is not None


def _require_institutional(email: str, domain: str) -> None:
    if not is_institutional_email(email, domain):
        raise ValidationError(f"Please use a valid institutional email address (@{domain}).")


def _ensure_email_free(users: UserRepository, email: str) -> None:
    if users.get_by_email(email) is not None:
        raise DuplicateError("Email is already registered.")


def register_lecturer(users: UserRepository, payload: RegisterRequest, email_domain: str) -> User:
    """Create a Lecturer account; the role cannot be chosen by the caller."""
    fields = payload.model_dump()
    if any(not (value or "").strip() for value in fields.values()):
        logger.warning("Registration failed: missing required fields")
        raise ValidationError("All fields are required.")

    email = normalize_email(payload.email)
    _require_institutional(email, email_domain)
    if users.get_by_email(email) is not None:
        logger.warning("Registration failed: email already in use", email=email)
        raise DuplicateError("Email is already registered.")

    user = users.create({
        "name": payload.name.strip(),
        "email": email,
        "password_hash": hash_password(payload.password),
        "role": Role.LECTURER,
        "bank_name": payload.bank_name.strip(),
        "bank_account_number": payload.bank_account_number.strip(),
        "bank_bban": payload.bank_bban.strip(),
        "school": payload.school.strip(),
    })
    logger.info("New user registered", email=email, user_id=user.id)
    return user


def authenticate_user(users: UserRepository, email: Optional[str], password: Optional[str]) -> User:
    if not email or not password:
        logger.warning("Login failed: missing email or password")
        raise ValidationError("Email and password are required.")

    email = normalize_email(email)
    user = users.get_by_email(email)
    if user is None:
        logger.warning("Login failed: user not found", email=email)
        raise InvalidCredentialsException()
    if not verify_password(password, user.password_hash):
        logger.warning("Login failed: incorrect password", email=email)
        raise InvalidCredentialsException()

    logger.info("User logged in", email=email, user_id=user.id)
    return user


def create_qa_user(users: UserRepository, payload: CreateQARequest, email_domain: str) -> User:
    if not (payload.name or "").strip() or not (payload.email or "").strip() or not payload.password:
        raise ValidationError("Name, email, and password are required.")

    email = normalize_email(payload.email)
    _require_institutional(email, email_domain)
    _ensure_email_free(users, email)

    user = users.create({
        "name": payload.name.strip(),
        "email": email,
        "password_hash": hash_password(payload.password),
        "role": Role.QA,
        **QA_BANK_DEFAULTS,
    })
    logger.info("QA user created", email=email, user_id=user.id)
    return user


def parse_role(value: Optional[str]) -> Role:
    try:
        return Role(value)
    except ValueError as exc:
        allowed = ", ".join(role.value for role in Role)
        raise ValidationError(f"Role must be one of: {allowed}.") from exc


def assign_role(users: UserRepository, user_id: Optional[int], role: Optional[str]) -> User:
    if user_id is None or not role:
        raise ValidationError("User ID and role are required.")

    new_role = parse_role(role)
    user = users.get_by_id(user_id)
    if user is None:
        raise EntityNotFoundException("User not found.")

    user = users.update(user, {"role": new_role})
    logger.info("User role updated", email=user.email, role=new_role.value)
    return user


def list_users(users: UserRepository) -> list[User]:
    return users.list()
