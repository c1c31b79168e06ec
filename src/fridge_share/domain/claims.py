"""Domain models for claims."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum

from fridge_share.domain.products import Product


class ClaimStatus(StrEnum):
    """Lifecycle states of a claim."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    COMPLETED = "completed"


class ClaimDecision(StrEnum):
    """Decisions an owner can apply to a pending claim."""

    ACCEPT = "accept"
    REJECT = "reject"


OPEN_CLAIM_STATUSES = frozenset(
    {ClaimStatus.PENDING, ClaimStatus.ACCEPTED, ClaimStatus.COMPLETED}
)


@dataclass(frozen=True)
class Claim:
    """A request by a non-owner to take over a product."""

    id: int
    product_id: int
    claimer_id: int
    status: ClaimStatus
    message: str | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class ClaimAcceptance:
    """Rows written by an ownership transfer."""

    claim: Claim
    product: Product
    rejected_claim_ids: list[int] = field(default_factory=list)


@dataclass(frozen=True)
class ClaimDecisionResult:
    """Outcome of a claim decision."""

    claim: Claim
    product: Product | None = None
    rejected_claim_ids: list[int] = field(default_factory=list)
