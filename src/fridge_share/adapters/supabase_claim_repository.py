"""Supabase repository for claims."""

from dataclasses import dataclass
from datetime import datetime

from postgrest.exceptions import APIError
from supabase import Client

from fridge_share.adapters.supabase_product_repository import parse_product
from fridge_share.domain.claims import Claim, ClaimAcceptance, ClaimStatus
from fridge_share.domain.errors import DuplicateClaimError, NotAvailableError
from fridge_share.services.claims import ClaimRepository

_UNIQUE_VIOLATION = "23505"
_CHECK_VIOLATION = "23514"


@dataclass
class SupabaseClaimRepository(ClaimRepository):
    """Supabase implementation for claims.

    Acceptance runs in the `accept_claim` Postgres function so the claim,
    product and sibling claims change in one transaction.
    """

    client: Client

    def get_claim(self, claim_id: int) -> Claim | None:
        """Return a claim by id, if present."""
        response = (
            self.client.table("claims")
            .select("*")
            .eq("id", claim_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return parse_claim(response.data[0])

    def find_open_claim(self, product_id: int, claimer_id: int) -> Claim | None:
        """Return the claimer's non-rejected claim on a product, if any."""
        response = (
            self.client.table("claims")
            .select("*")
            .eq("product_id", product_id)
            .eq("claimer_id", claimer_id)
            .neq("status", ClaimStatus.REJECTED.value)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return parse_claim(response.data[0])

    def create_claim(
        self, product_id: int, claimer_id: int, message: str | None
    ) -> Claim:
        """Create a pending claim row."""
        try:
            response = (
                self.client.table("claims")
                .insert(
                    {
                        "product_id": product_id,
                        "claimer_id": claimer_id,
                        "status": ClaimStatus.PENDING.value,
                        "message": message,
                    }
                )
                .execute()
            )
        except APIError as exc:
            if exc.code == _UNIQUE_VIOLATION:
                raise DuplicateClaimError(
                    f"User {claimer_id} already claimed product {product_id}"
                ) from exc
            if exc.code == _CHECK_VIOLATION:
                raise NotAvailableError(
                    f"Product {product_id} is not available"
                ) from exc
            raise
        if not response.data:
            raise RuntimeError("Failed to create claim")
        return parse_claim(response.data[0])

    def list_claims(
        self,
        claimer_id: int | None = None,
        product_ids: list[int] | None = None,
    ) -> list[Claim]:
        """Return claims matching the filters, oldest first."""
        query = self.client.table("claims").select("*")
        if claimer_id is not None:
            query = query.eq("claimer_id", claimer_id)
        if product_ids is not None:
            query = query.in_("product_id", product_ids)
        response = query.order("created_at", desc=False).order("id").execute()
        return [parse_claim(row) for row in response.data or []]

    def transition_claim(
        self, claim_id: int, from_status: ClaimStatus, to_status: ClaimStatus
    ) -> Claim | None:
        """Conditionally update a claim's status."""
        response = (
            self.client.table("claims")
            .update({"status": to_status.value})
            .eq("id", claim_id)
            .eq("status", from_status.value)
            .execute()
        )
        if not response.data:
            return None
        return parse_claim(response.data[0])

    def accept_claim(self, claim_id: int) -> ClaimAcceptance | None:
        """Run the transactional accept-and-transfer function."""
        response = self.client.rpc(
            "accept_claim", {"target_claim_id": claim_id}
        ).execute()
        result = response.data
        if isinstance(result, list):
            result = result[0] if result else None
        if not result:
            return None
        rejected_ids = result.get("rejected_claim_ids") or []
        return ClaimAcceptance(
            claim=parse_claim(result["claim"]),
            product=parse_product(result["product"]),
            rejected_claim_ids=[int(value) for value in rejected_ids],
        )


def parse_claim(row: dict[str, object]) -> Claim:
    """Parse a claim row into a domain model."""
    created_raw = row.get("created_at")
    created_at = (
        datetime.fromisoformat(created_raw)
        if isinstance(created_raw, str) and created_raw
        else None
    )
    return Claim(
        id=int(row["id"]),
        product_id=int(row["product_id"]),
        claimer_id=int(row["claimer_id"]),
        status=ClaimStatus(str(row.get("status", "pending")).lower()),
        message=row.get("message"),
        created_at=created_at,
    )
