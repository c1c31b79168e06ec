"""Claim lifecycle and ownership transfer."""

import logging
from dataclasses import dataclass
from typing import Protocol

from fridge_share.domain.claims import (
    Claim,
    ClaimAcceptance,
    ClaimDecision,
    ClaimDecisionResult,
    ClaimStatus,
)
from fridge_share.domain.errors import (
    DuplicateClaimError,
    InvalidPayloadError,
    InvalidTransitionError,
    NotAvailableError,
    NotFoundError,
    NotOwnerError,
    SelfClaimError,
)
from fridge_share.domain.products import Product, ProductStatus
from fridge_share.services.products import ProductRepository

_logger = logging.getLogger(__name__)


class ClaimRepository(Protocol):
    """Persistence interface for claims."""

    def get_claim(self, claim_id: int) -> Claim | None:
        """Return a claim by id, if present."""

    def find_open_claim(self, product_id: int, claimer_id: int) -> Claim | None:
        """Return the claimer's non-rejected claim on a product, if any."""

    def create_claim(
        self, product_id: int, claimer_id: int, message: str | None
    ) -> Claim:
        """Create a pending claim on an AVAILABLE product.

        Raises DuplicateClaimError on conflict and NotAvailableError when the
        product stopped being AVAILABLE before the insert.
        """

    def list_claims(
        self,
        claimer_id: int | None = None,
        product_ids: list[int] | None = None,
    ) -> list[Claim]:
        """Return claims matching the filters, oldest first."""

    def transition_claim(
        self, claim_id: int, from_status: ClaimStatus, to_status: ClaimStatus
    ) -> Claim | None:
        """Move a claim between states if it is still in `from_status`."""

    def accept_claim(self, claim_id: int) -> ClaimAcceptance | None:
        """Accept a pending claim and transfer its product in one transaction.

        Returns None without writing anything when the claim is no longer
        pending or the product is no longer AVAILABLE.
        """


@dataclass
class ClaimService:
    """State machine for claims on shared products."""

    repository: ClaimRepository
    product_repository: ProductRepository

    def submit_claim(
        self, product_id: int, claimer_id: int, message: str | None = None
    ) -> Claim:
        """Create a pending claim on an available product."""
        product = self._get_product(product_id)
        if product.status != ProductStatus.AVAILABLE:
            raise NotAvailableError(f"Product {product_id} is not available")
        if product.owner_id == claimer_id:
            raise SelfClaimError("Owners cannot claim their own products")
        if self.repository.find_open_claim(product_id, claimer_id) is not None:
            raise DuplicateClaimError(
                f"User {claimer_id} already claimed product {product_id}"
            )
        claim = self.repository.create_claim(product_id, claimer_id, message or None)
        _logger.info(
            "Claim submitted: claim_id=%s product_id=%s claimer_id=%s",
            claim.id,
            product_id,
            claimer_id,
        )
        return claim

    def decide_claim(
        self, claim_id: int, decision: str, acting_user_id: int
    ) -> ClaimDecisionResult:
        """Accept or reject a pending claim on behalf of the product owner."""
        if decision not in set(ClaimDecision):
            raise InvalidPayloadError(f"Unknown decision: {decision}")
        claim = self._get_claim(claim_id)
        if claim.status != ClaimStatus.PENDING:
            raise _invalid_transition(claim, decision)
        product = self._get_product(claim.product_id)
        if product.owner_id != acting_user_id:
            raise NotOwnerError(
                f"User {acting_user_id} does not own product {product.id}"
            )

        if decision == ClaimDecision.REJECT:
            rejected = self.repository.transition_claim(
                claim_id, ClaimStatus.PENDING, ClaimStatus.REJECTED
            )
            if rejected is None:
                raise _invalid_transition(self._get_claim(claim_id), decision)
            _logger.info("Claim rejected: claim_id=%s", claim_id)
            return ClaimDecisionResult(claim=rejected)

        acceptance = self.repository.accept_claim(claim_id)
        if acceptance is None:
            raise _invalid_transition(self._get_claim(claim_id), decision)
        _logger.info(
            "Claim accepted: claim_id=%s product_id=%s new_owner_id=%s cascaded=%s",
            claim_id,
            acceptance.product.id,
            acceptance.product.owner_id,
            len(acceptance.rejected_claim_ids),
        )
        return ClaimDecisionResult(
            claim=acceptance.claim,
            product=acceptance.product,
            rejected_claim_ids=acceptance.rejected_claim_ids,
        )

    def complete_claim(self, claim_id: int, acting_user_id: int) -> Claim:
        """Confirm the handoff of an accepted claim."""
        claim = self._get_claim(claim_id)
        if claim.claimer_id != acting_user_id:
            raise NotOwnerError(
                f"User {acting_user_id} did not make claim {claim_id}"
            )
        completed = self.repository.transition_claim(
            claim_id, ClaimStatus.ACCEPTED, ClaimStatus.COMPLETED
        )
        if completed is None:
            raise _invalid_transition(self._get_claim(claim_id), "complete")
        _logger.info("Claim completed: claim_id=%s", claim_id)
        return completed

    def list_claims(
        self, claimer_id: int | None = None, product_id: int | None = None
    ) -> list[Claim]:
        """Return claims filtered by claimer and/or product."""
        product_ids = [product_id] if product_id is not None else None
        return self.repository.list_claims(
            claimer_id=claimer_id, product_ids=product_ids
        )

    def list_incoming_claims(self, owner_id: int) -> list[Claim]:
        """Return claims on products the user currently owns."""
        owned = self.product_repository.list_products(owner_id=owner_id)
        if not owned:
            return []
        return self.repository.list_claims(
            product_ids=[product.id for product in owned]
        )

    def _get_claim(self, claim_id: int) -> Claim:
        claim = self.repository.get_claim(claim_id)
        if claim is None:
            raise NotFoundError(f"Claim {claim_id} not found")
        return claim

    def _get_product(self, product_id: int) -> Product:
        product = self.product_repository.get_product(product_id)
        if product is None:
            raise NotFoundError(f"Product {product_id} not found")
        return product


def _invalid_transition(claim: Claim, action: str) -> InvalidTransitionError:
    return InvalidTransitionError(
        f"Cannot {action} claim {claim.id} in status {claim.status}"
    )
