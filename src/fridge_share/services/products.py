"""Product management and listing."""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Protocol

from fridge_share.domain.errors import (
    InvalidPayloadError,
    NotFoundError,
    NotOwnerError,
)
from fridge_share.domain.products import (
    Product,
    ProductStatus,
    SharedWith,
    Visibility,
)
from fridge_share.services.visibility import VisibilityService

_logger = logging.getLogger(__name__)


class ProductRepository(Protocol):
    """Persistence interface for products."""

    def create_product(
        self, owner_id: int, name: str, category: str, expiration_date: date
    ) -> Product:
        """Create a product in the owner's fridge and return it."""

    def get_product(self, product_id: int) -> Product | None:
        """Return a product by id, if present."""

    def list_products(
        self, owner_id: int | None = None, status: str | None = None
    ) -> list[Product]:
        """Return products ordered by soonest expiration first."""

    def update_product(
        self,
        product_id: int,
        status: str | None = None,
        visibility: str | None = None,
        shared_with: SharedWith | None = None,
    ) -> Product:
        """Update the given fields and return the product."""

    def delete_product(self, product_id: int) -> None:
        """Delete a product."""


@dataclass(frozen=True)
class ExpiryNotice:
    """A product in the fridge that is about to expire."""

    product_id: int
    name: str
    expiration_date: date
    days_left: int
    message: str


@dataclass
class ProductService:
    """Application service for products owned and shared by users."""

    repository: ProductRepository
    visibility_service: VisibilityService

    def create_product(
        self, owner_id: int, name: str, category: str, expiration_date: date
    ) -> Product:
        """Register a new item in the owner's fridge."""
        return self.repository.create_product(owner_id, name, category, expiration_date)

    def get_product(self, product_id: int) -> Product:
        """Return a product or raise NotFoundError."""
        product = self.repository.get_product(product_id)
        if product is None:
            raise NotFoundError(f"Product {product_id} not found")
        return product

    def get_visible_product(self, product_id: int, viewer_id: int | None) -> Product:
        """Return a product the viewer may see; hidden products look missing."""
        product = self.get_product(product_id)
        if not self.visibility_service.filter_visible([product], viewer_id):
            raise NotFoundError(f"Product {product_id} not found")
        return product

    def update_product(
        self,
        product_id: int,
        acting_user_id: int,
        status: str | None = None,
        visibility: str | None = None,
        shared_with: SharedWith | None = None,
    ) -> Product:
        """Change status or sharing settings on behalf of the owner."""
        if status is not None and status not in set(ProductStatus):
            raise InvalidPayloadError(f"Unknown product status: {status}")
        if visibility is not None and visibility not in set(Visibility):
            raise InvalidPayloadError(f"Unknown visibility: {visibility}")
        product = self._get_owned(product_id, acting_user_id)
        updated = self.repository.update_product(
            product.id,
            status=status,
            visibility=visibility,
            shared_with=shared_with,
        )
        _logger.info(
            "Product updated: product_id=%s status=%s visibility=%s",
            updated.id,
            updated.status,
            updated.visibility,
        )
        return updated

    def delete_product(self, product_id: int, acting_user_id: int) -> None:
        """Delete a product on behalf of the owner."""
        product = self._get_owned(product_id, acting_user_id)
        self.repository.delete_product(product.id)

    def list_visible_products(
        self,
        viewer_id: int | None,
        owner_id: int | None = None,
        status: str | None = None,
    ) -> list[Product]:
        """List products the viewer may see, soonest expiration first."""
        candidates = self.repository.list_products(owner_id=owner_id, status=status)
        if viewer_id is not None and owner_id == viewer_id:
            return candidates
        return self.visibility_service.filter_visible(candidates, viewer_id)

    def expiring_soon(
        self, owner_id: int, today: date, days: int = 3
    ) -> list[ExpiryNotice]:
        """Return the owner's fridge items expiring within `days` days."""
        notices = []
        for product in self.repository.list_products(
            owner_id=owner_id, status=ProductStatus.IN_FRIDGE
        ):
            days_left = (product.expiration_date - today).days
            if 0 <= days_left <= days:
                notices.append(
                    ExpiryNotice(
                        product_id=product.id,
                        name=product.name,
                        expiration_date=product.expiration_date,
                        days_left=days_left,
                        message=_expiry_message(product.name, days_left),
                    )
                )
        return notices

    def _get_owned(self, product_id: int, acting_user_id: int) -> Product:
        product = self.get_product(product_id)
        if product.owner_id != acting_user_id:
            raise NotOwnerError(
                f"User {acting_user_id} does not own product {product_id}"
            )
        return product


def _expiry_message(name: str, days_left: int) -> str:
    if days_left == 0:
        return f"{name} expires today"
    if days_left == 1:
        return f"{name} expires tomorrow"
    return f"{name} expires in {days_left} days"
