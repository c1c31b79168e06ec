"""Domain models for the social graph."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class RelationshipSnapshot:
    """A viewer's accepted friends and group memberships at one point in time."""

    friend_ids: frozenset[int] = field(default_factory=frozenset)
    group_ids: frozenset[int] = field(default_factory=frozenset)
