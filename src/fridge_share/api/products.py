"""Product endpoints."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request

from fridge_share.api.identity import acting_user_id, optional_viewer_id
from fridge_share.api.models import ProductCreate, ProductUpdate
from fridge_share.api.serializers import serialize_notice, serialize_product
from fridge_share.domain.products import SharedWith

if TYPE_CHECKING:
    from fridge_share.containers import AppContainer

router = APIRouter(tags=["products"])


@router.get("/products")
async def list_products(
    request: Request,
    owner_id: int | None = None,
    status: str | None = None,
    viewer_id: int | None = Depends(optional_viewer_id),
) -> dict[str, object]:
    """Return products the caller may see, soonest expiration first."""
    container: AppContainer = request.app.state.container
    products = container.product_service.list_visible_products(
        viewer_id, owner_id=owner_id, status=status
    )
    return {"products": [serialize_product(product) for product in products]}


@router.post("/products", status_code=201)
async def create_product(
    body: ProductCreate,
    request: Request,
    user_id: int = Depends(acting_user_id),
) -> dict[str, object]:
    """Register an item in the caller's fridge."""
    container: AppContainer = request.app.state.container
    product = container.product_service.create_product(
        owner_id=user_id,
        name=body.name,
        category=body.category,
        expiration_date=body.expiration_date,
    )
    return serialize_product(product)


@router.get("/products/{product_id}")
async def get_product(
    product_id: int,
    request: Request,
    viewer_id: int | None = Depends(optional_viewer_id),
) -> dict[str, object]:
    """Return one product if the caller may see it."""
    container: AppContainer = request.app.state.container
    product = container.product_service.get_visible_product(product_id, viewer_id)
    return serialize_product(product)


@router.put("/products/{product_id}")
async def update_product(
    product_id: int,
    body: ProductUpdate,
    request: Request,
    user_id: int = Depends(acting_user_id),
) -> dict[str, object]:
    """Change status or sharing settings of the caller's product."""
    container: AppContainer = request.app.state.container
    shared_with = None
    if body.shared_with is not None:
        shared_with = SharedWith(
            group_ids=frozenset(body.shared_with.group_ids),
            user_ids=frozenset(body.shared_with.user_ids),
        )
    product = container.product_service.update_product(
        product_id,
        acting_user_id=user_id,
        status=body.status,
        visibility=body.visibility,
        shared_with=shared_with,
    )
    return serialize_product(product)


@router.delete("/products/{product_id}")
async def delete_product(
    product_id: int,
    request: Request,
    user_id: int = Depends(acting_user_id),
) -> dict[str, str]:
    """Delete the caller's product."""
    container: AppContainer = request.app.state.container
    container.product_service.delete_product(product_id, acting_user_id=user_id)
    return {"status": "deleted"}


@router.get("/notifications")
async def notifications(
    request: Request,
    user_id: int = Depends(acting_user_id),
) -> dict[str, object]:
    """Return the caller's fridge items that expire soon."""
    container: AppContainer = request.app.state.container
    notices = container.product_service.expiring_soon(
        user_id,
        today=date.today(),
        days=container.settings.expiry_warning_days,
    )
    return {"notifications": [serialize_notice(notice) for notice in notices]}
