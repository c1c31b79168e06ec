"""Read-only lookups over the friend and group subsystems."""

from dataclasses import dataclass
from typing import Protocol

from fridge_share.domain.relationships import RelationshipSnapshot


class RelationshipRepository(Protocol):
    """Persistence interface for friendships and group memberships."""

    def list_friend_ids(self, user_id: int) -> set[int]:
        """Return ids of users with an accepted friendship with the user."""

    def list_group_ids(self, user_id: int) -> set[int]:
        """Return ids of groups the user belongs to."""


@dataclass
class RelationshipDirectory:
    """Answers who a user's friends are and which groups they are in."""

    repository: RelationshipRepository

    def friend_ids_of(self, user_id: int) -> frozenset[int]:
        """Return the user's accepted friends, regardless of who asked whom."""
        return frozenset(self.repository.list_friend_ids(user_id) - {user_id})

    def group_ids_of(self, user_id: int) -> frozenset[int]:
        """Return the groups the user is a member of."""
        return frozenset(self.repository.list_group_ids(user_id))

    def snapshot(self, user_id: int) -> RelationshipSnapshot:
        """Return both relationship sets for a viewer."""
        return RelationshipSnapshot(
            friend_ids=self.friend_ids_of(user_id),
            group_ids=self.group_ids_of(user_id),
        )
