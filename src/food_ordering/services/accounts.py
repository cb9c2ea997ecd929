"""Customer and chef accounts with bearer-token verification."""

import secrets
from dataclasses import dataclass, field
from typing import Protocol
from uuid import UUID

from passlib.context import CryptContext

from food_ordering.domain.errors import InvalidInputError, UnauthenticatedError
from food_ordering.domain.models import ChefRecord, UserRecord

SUBJECT_USER = "user"
SUBJECT_CHEF = "chef"

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    """Return a salted hash for a plain password."""
    return pwd_context.hash(password)


def verify_password(password: str, credential_hash: str) -> bool:
    """Check a plain password against a stored hash."""
    try:
        return pwd_context.verify(password, credential_hash)
    except ValueError:
        return False


class UserRepository(Protocol):
    """Persistence interface for customer accounts."""

    def get_user(self, user_id: UUID) -> UserRecord | None:
        """Return a user by id."""

    def get_by_email(self, email: str) -> UserRecord | None:
        """Return a user by email."""

    def create_user(self, payload: dict[str, object]) -> UserRecord:
        """Create and return a user."""

    def set_loyalty_points(self, user_id: UUID, loyalty_points: int) -> None:
        """Persist a user's loyalty balance."""


class TokenRepository(Protocol):
    """Persistence interface for issued bearer tokens."""

    def create_token(self, token: str, subject_id: UUID, subject_kind: str) -> None:
        """Store a token for a subject."""

    def get_subject(self, token: str) -> tuple[UUID, str] | None:
        """Return (subject id, subject kind) for a token."""


class ChefLookup(Protocol):
    """Subset of the chef repository needed for chef login."""

    def get_by_email(self, email: str) -> ChefRecord | None:
        """Return a chef by login email."""

    def get_chef(self, chef_id: UUID) -> ChefRecord | None:
        """Return a chef by id."""


@dataclass
class TokenVerifier:
    """Resolves a bearer token to the id of the subject it was issued to."""

    token_repository: TokenRepository

    def verify(self, token: str | None, subject_kind: str = SUBJECT_USER) -> UUID:
        """Return the subject id or raise UnauthenticatedError."""
        if not token:
            raise UnauthenticatedError("No token, authorization denied")
        subject = self.token_repository.get_subject(token)
        if subject is None or subject[1] != subject_kind:
            raise UnauthenticatedError("Token is not valid")
        return subject[0]


@dataclass
class AccountService:
    """Signup, login and profile lookups."""

    user_repository: UserRepository
    chef_repository: ChefLookup
    token_repository: TokenRepository
    admin_emails: list[str] = field(default_factory=list)

    def signup(
        self,
        name: str,
        email: str,
        password: str,
        preferences: str | None = None,
    ) -> str:
        """Create a customer account and return a bearer token.

        Admin rights are granted only to emails on the configured allow-list.
        """
        if not name.strip() or not email.strip() or not password:
            raise InvalidInputError("Name, email, and password are required")
        normalized_email = email.strip().lower()
        if self.user_repository.get_by_email(normalized_email):
            raise InvalidInputError("User already exists")
        user = self.user_repository.create_user(
            {
                "name": name.strip(),
                "email": normalized_email,
                "credential_hash": hash_password(password),
                "preferences": _split_csv(preferences),
                "is_admin": normalized_email in self._admins(),
                "loyalty_points": 0,
            }
        )
        return self._issue(user.id, SUBJECT_USER)

    def _admins(self) -> set[str]:
        return {email.strip().lower() for email in self.admin_emails}

    def login(self, email: str, password: str) -> str:
        user = self.user_repository.get_by_email(email.strip().lower())
        if user is None or not verify_password(password, user.credential_hash):
            raise InvalidInputError("Invalid credentials")
        return self._issue(user.id, SUBJECT_USER)

    def chef_login(self, email: str, password: str) -> str:
        chef = self.chef_repository.get_by_email(email.strip().lower())
        if chef is None or not verify_password(password, chef.credential_hash):
            raise InvalidInputError("Invalid credentials")
        return self._issue(chef.id, SUBJECT_CHEF)

    def get_user(self, user_id: UUID) -> UserRecord:
        user = self.user_repository.get_user(user_id)
        if user is None:
            raise UnauthenticatedError("User not found")
        return user

    def get_chef(self, chef_id: UUID) -> ChefRecord:
        chef = self.chef_repository.get_chef(chef_id)
        if chef is None:
            raise UnauthenticatedError("Chef not found")
        return chef

    def _issue(self, subject_id: UUID, subject_kind: str) -> str:
        token = secrets.token_urlsafe(32)
        self.token_repository.create_token(token, subject_id, subject_kind)
        return token


def _split_csv(raw: str | None) -> list[str]:
    if not raw:
        return []
    return [chunk.strip() for chunk in raw.split(",") if chunk.strip()]
