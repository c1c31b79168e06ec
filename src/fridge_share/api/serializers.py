"""Response serialization for domain models."""

from fridge_share.domain.claims import Claim, ClaimDecisionResult
from fridge_share.domain.products import Product, encode_shared_with
from fridge_share.services.products import ExpiryNotice


def serialize_product(product: Product) -> dict[str, object]:
    return {
        "id": product.id,
        "owner_id": product.owner_id,
        "name": product.name,
        "category": product.category,
        "expiration_date": product.expiration_date.isoformat(),
        "status": product.status,
        "visibility": product.visibility,
        "shared_with": encode_shared_with(product.shared_with),
    }


def serialize_claim(claim: Claim) -> dict[str, object]:
    return {
        "id": claim.id,
        "product_id": claim.product_id,
        "claimer_id": claim.claimer_id,
        "status": claim.status.value,
        "message": claim.message,
        "created_at": claim.created_at.isoformat() if claim.created_at else None,
    }


def serialize_decision(result: ClaimDecisionResult) -> dict[str, object]:
    return {
        "claim": serialize_claim(result.claim),
        "product": serialize_product(result.product) if result.product else None,
        "rejected_claim_ids": result.rejected_claim_ids,
    }


def serialize_notice(notice: ExpiryNotice) -> dict[str, object]:
    return {
        "product_id": notice.product_id,
        "name": notice.name,
        "expiration_date": notice.expiration_date.isoformat(),
        "days_left": notice.days_left,
        "message": notice.message,
    }
