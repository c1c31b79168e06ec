"""Supabase repository for products."""

from dataclasses import dataclass
from datetime import date

from supabase import Client

from fridge_share.domain.products import (
    Product,
    ProductStatus,
    SharedWith,
    Visibility,
    decode_shared_with,
    encode_shared_with,
)
from fridge_share.services.products import ProductRepository


@dataclass
class SupabaseProductRepository(ProductRepository):
    """Supabase implementation for products."""

    client: Client

    def create_product(
        self, owner_id: int, name: str, category: str, expiration_date: date
    ) -> Product:
        """Create a product row and return it."""
        response = (
            self.client.table("products")
            .insert(
                {
                    "owner_id": owner_id,
                    "name": name,
                    "category": category,
                    "expiration_date": expiration_date.isoformat(),
                    "status": ProductStatus.IN_FRIDGE.value,
                    "visibility": Visibility.PUBLIC.value,
                    "shared_with": None,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create product")
        return parse_product(response.data[0])

    def get_product(self, product_id: int) -> Product | None:
        """Return a product by id, if present."""
        response = (
            self.client.table("products")
            .select("*")
            .eq("id", product_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return parse_product(response.data[0])

    def list_products(
        self, owner_id: int | None = None, status: str | None = None
    ) -> list[Product]:
        """Return products ordered by soonest expiration first."""
        query = self.client.table("products").select("*")
        if owner_id is not None:
            query = query.eq("owner_id", owner_id)
        if status is not None:
            query = query.eq("status", status)
        response = query.order("expiration_date", desc=False).execute()
        return [parse_product(row) for row in response.data or []]

    def update_product(
        self,
        product_id: int,
        status: str | None = None,
        visibility: str | None = None,
        shared_with: SharedWith | None = None,
    ) -> Product:
        """Update the given fields and return the product."""
        payload: dict[str, object] = {}
        if status is not None:
            payload["status"] = status
        if visibility is not None:
            payload["visibility"] = visibility
        if shared_with is not None:
            payload["shared_with"] = encode_shared_with(shared_with)
        if not payload:
            current = self.get_product(product_id)
            if current is None:
                raise RuntimeError("Failed to update product")
            return current
        response = (
            self.client.table("products")
            .update(payload)
            .eq("id", product_id)
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update product")
        return parse_product(response.data[0])

    def delete_product(self, product_id: int) -> None:
        """Delete a product row."""
        self.client.table("products").delete().eq("id", product_id).execute()


def parse_product(row: dict[str, object]) -> Product:
    """Parse a product row into a domain model."""
    raw_date = row["expiration_date"]
    expiration_date = (
        date.fromisoformat(raw_date[:10]) if isinstance(raw_date, str) else raw_date
    )
    return Product(
        id=int(row["id"]),
        owner_id=int(row["owner_id"]),
        name=str(row.get("name", "")),
        category=str(row.get("category", "")),
        expiration_date=expiration_date,
        status=str(row.get("status", ProductStatus.IN_FRIDGE.value)),
        visibility=row.get("visibility"),
        shared_with=decode_shared_with(row.get("shared_with")),
    )
