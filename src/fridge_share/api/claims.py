"""Claim endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request

from fridge_share.api.identity import acting_user_id
from fridge_share.api.models import ClaimCreate, ClaimDecisionRequest
from fridge_share.api.serializers import serialize_claim, serialize_decision

if TYPE_CHECKING:
    from fridge_share.containers import AppContainer

router = APIRouter(prefix="/claims", tags=["claims"])


@router.post("", status_code=201)
async def submit_claim(
    body: ClaimCreate,
    request: Request,
    user_id: int = Depends(acting_user_id),
) -> dict[str, object]:
    """Claim an available product for the caller."""
    container: AppContainer = request.app.state.container
    claim = container.claim_service.submit_claim(
        body.product_id, claimer_id=user_id, message=body.message
    )
    return serialize_claim(claim)


@router.get("")
async def list_claims(
    request: Request,
    product_id: int | None = None,
    user_id: int = Depends(acting_user_id),
) -> dict[str, object]:
    """Return the caller's own claims, optionally for one product."""
    container: AppContainer = request.app.state.container
    claims = container.claim_service.list_claims(
        claimer_id=user_id, product_id=product_id
    )
    return {"claims": [serialize_claim(claim) for claim in claims]}


@router.get("/incoming")
async def incoming_claims(
    request: Request,
    user_id: int = Depends(acting_user_id),
) -> dict[str, object]:
    """Return claims on the caller's products."""
    container: AppContainer = request.app.state.container
    claims = container.claim_service.list_incoming_claims(user_id)
    return {"claims": [serialize_claim(claim) for claim in claims]}


@router.put("/{claim_id}")
async def decide_claim(
    claim_id: int,
    body: ClaimDecisionRequest,
    request: Request,
    user_id: int = Depends(acting_user_id),
) -> dict[str, object]:
    """Accept or reject a claim on one of the caller's products."""
    container: AppContainer = request.app.state.container
    result = container.claim_service.decide_claim(
        claim_id, body.decision.lower(), acting_user_id=user_id
    )
    return serialize_decision(result)


@router.post("/{claim_id}/complete")
async def complete_claim(
    claim_id: int,
    request: Request,
    user_id: int = Depends(acting_user_id),
) -> dict[str, object]:
    """Confirm the handoff of an accepted claim."""
    container: AppContainer = request.app.state.container
    claim = container.claim_service.complete_claim(claim_id, acting_user_id=user_id)
    return serialize_claim(claim)
