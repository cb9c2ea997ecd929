"""Supabase-backed bearer token store."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from food_ordering.services.accounts import TokenRepository


@dataclass
class SupabaseTokenRepository(TokenRepository):
    """Stores opaque tokens with the subject they were issued to."""

    client: Client

    def create_token(self, token: str, subject_id: UUID, subject_kind: str) -> None:
        """Insert a token row."""
        self.client.table("auth_tokens").insert(
            {
                "token": token,
                "subject_id": str(subject_id),
                "subject_kind": subject_kind,
            }
        ).execute()

    def get_subject(self, token: str) -> tuple[UUID, str] | None:
        """Return the subject for a token, if issued."""
        response = (
            self.client.table("auth_tokens")
            .select("subject_id, subject_kind")
            .eq("token", token)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return UUID(str(row["subject_id"])), str(row["subject_kind"])
