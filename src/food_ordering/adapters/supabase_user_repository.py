"""Supabase-backed user repository."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from food_ordering.adapters.supabase_unit_of_work import SupabaseUnitOfWork
from food_ordering.domain.errors import PersistenceError
from food_ordering.domain.models import UserRecord
from food_ordering.services.accounts import UserRepository

_COLUMNS = "id, name, email, credential_hash, loyalty_points, is_admin, preferences"


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user persistence."""

    client: Client
    unit_of_work: SupabaseUnitOfWork | None = None

    def get_user(self, user_id: UUID) -> UserRecord | None:
        """Return a user by id."""
        response = (
            self.client.table("users")
            .select(_COLUMNS)
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if response.data:
            return _parse_user(response.data[0])
        return None

    def get_by_email(self, email: str) -> UserRecord | None:
        """Return a user by email."""
        response = (
            self.client.table("users")
            .select(_COLUMNS)
            .eq("email", email)
            .limit(1)
            .execute()
        )
        if response.data:
            return _parse_user(response.data[0])
        return None

    def create_user(self, payload: dict[str, object]) -> UserRecord:
        """Create a new user row and return it."""
        response = self.client.table("users").insert(payload).execute()
        if not response.data:
            raise PersistenceError("Failed to create user")
        return _parse_user(response.data[0])

    def set_loyalty_points(self, user_id: UUID, loyalty_points: int) -> None:
        """Update a user's loyalty balance."""
        if self.unit_of_work:
            self.unit_of_work.track_existing("users", "id", str(user_id))
        self.client.table("users").update({"loyalty_points": loyalty_points}).eq(
            "id", str(user_id)
        ).execute()


def _parse_user(row: dict[str, object]) -> UserRecord:
    return UserRecord(
        id=UUID(str(row["id"])),
        name=str(row.get("name", "")),
        email=str(row.get("email", "")),
        credential_hash=str(row.get("credential_hash", "")),
        loyalty_points=int(row.get("loyalty_points") or 0),
        is_admin=bool(row.get("is_admin", False)),
        preferences=list(row.get("preferences") or []),
    )
