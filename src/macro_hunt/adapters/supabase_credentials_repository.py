"""Supabase repository for app credentials and preferences."""

from dataclasses import dataclass

from supabase import Client

from macro_hunt.domain.credentials import Credentials
from macro_hunt.services.credentials import CredentialsRepository


@dataclass
class SupabaseCredentialsRepository(CredentialsRepository):
    """Stores a single credentials row keyed by profile name."""

    client: Client
    profile: str = "default"

    def load(self) -> dict[str, object] | None:
        """Return the stored row without the key column."""
        response = (
            self.client.table("app_credentials")
            .select(
                "craft_token, space_id, collection_id, gemini_key, "
                "daily_calorie_goal, protein_ratio, carbs_ratio, fat_ratio"
            )
            .eq("profile", self.profile)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return {key: value for key, value in row.items() if value is not None}

    def save(self, credentials: Credentials) -> None:
        """Upsert the credentials row."""
        self.client.table("app_credentials").upsert(
            {"profile": self.profile, **credentials.model_dump()},
            on_conflict="profile",
        ).execute()
