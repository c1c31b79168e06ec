"""Supabase reads over the friend and group tables."""

from dataclasses import dataclass

from supabase import Client

from fridge_share.services.relationships import RelationshipRepository


@dataclass
class SupabaseRelationshipRepository(RelationshipRepository):
    """Supabase-backed relationship lookups."""

    client: Client

    def list_friend_ids(self, user_id: int) -> set[int]:
        """Return the other side of every accepted friendship."""
        sent = (
            self.client.table("friendships")
            .select("addressee_id")
            .eq("requester_id", user_id)
            .eq("status", "accepted")
            .execute()
        )
        received = (
            self.client.table("friendships")
            .select("requester_id")
            .eq("addressee_id", user_id)
            .eq("status", "accepted")
            .execute()
        )
        friend_ids = {int(row["addressee_id"]) for row in sent.data or []}
        friend_ids.update(int(row["requester_id"]) for row in received.data or [])
        return friend_ids

    def list_group_ids(self, user_id: int) -> set[int]:
        """Return the groups a user belongs to."""
        response = (
            self.client.table("group_members")
            .select("group_id")
            .eq("user_id", user_id)
            .execute()
        )
        return {int(row["group_id"]) for row in response.data or []}
