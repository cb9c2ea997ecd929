"""Supabase-backed chef repository."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from food_ordering.adapters.supabase_unit_of_work import SupabaseUnitOfWork
from food_ordering.domain.errors import PersistenceError
from food_ordering.domain.models import ChefRecord
from food_ordering.services.chefs import ChefRepository

_COLUMNS = (
    "id, name, email, credential_hash, specialty, load_counter, rating, image_url"
)


@dataclass
class SupabaseChefRepository(ChefRepository):
    """Supabase implementation for chefs."""

    client: Client
    unit_of_work: SupabaseUnitOfWork | None = None

    def list_chefs(self) -> list[ChefRecord]:
        """Return all chefs in creation order."""
        response = (
            self.client.table("chefs")
            .select(_COLUMNS)
            .order("created_at", desc=False)
            .execute()
        )
        return [_parse_chef(row) for row in response.data or []]

    def get_chef(self, chef_id: UUID) -> ChefRecord | None:
        """Return a chef by id."""
        response = (
            self.client.table("chefs")
            .select(_COLUMNS)
            .eq("id", str(chef_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_chef(response.data[0])

    def get_by_email(self, email: str) -> ChefRecord | None:
        """Return a chef by login email."""
        response = (
            self.client.table("chefs")
            .select(_COLUMNS)
            .eq("email", email)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_chef(response.data[0])

    def create_chef(self, payload: dict[str, object]) -> ChefRecord:
        """Insert a chef row and return it."""
        response = self.client.table("chefs").insert(payload).execute()
        if not response.data:
            raise PersistenceError("Failed to create chef")
        return _parse_chef(response.data[0])

    def update_load(self, chef_id: UUID, load_counter: int) -> None:
        """Update a chef's load counter."""
        if self.unit_of_work:
            self.unit_of_work.track_existing("chefs", "id", str(chef_id))
        self.client.table("chefs").update({"load_counter": load_counter}).eq(
            "id", str(chef_id)
        ).execute()

    def delete_chef(self, chef_id: UUID) -> None:
        """Delete a chef row."""
        if self.unit_of_work:
            self.unit_of_work.track_existing("chefs", "id", str(chef_id))
        self.client.table("chefs").delete().eq("id", str(chef_id)).execute()


def _parse_chef(row: dict[str, object]) -> ChefRecord:
    return ChefRecord(
        id=UUID(str(row["id"])),
        name=str(row.get("name", "")),
        email=str(row.get("email", "")),
        credential_hash=str(row.get("credential_hash", "")),
        specialty=str(row.get("specialty", "")),
        load_counter=int(row.get("load_counter") or 0),
        rating=float(row.get("rating") or 0.0),
        image_url=row.get("image_url"),
    )
