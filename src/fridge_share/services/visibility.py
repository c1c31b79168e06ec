"""Visibility policy for shared products."""

from collections.abc import Iterable
from dataclasses import dataclass

from fridge_share.domain.products import Product, Visibility
from fridge_share.domain.relationships import RelationshipSnapshot
from fridge_share.services.relationships import RelationshipDirectory


def is_visible(
    product: Product,
    viewer_id: int | None,
    relationships: RelationshipSnapshot | None,
) -> bool:
    """Return whether the viewer may see the product.

    `relationships` holds the viewer's friends and groups. Unknown visibility
    values and missing share targets are not visible.
    """
    if viewer_id is not None and product.owner_id == viewer_id:
        return True
    visibility = product.visibility
    if not visibility or visibility == Visibility.PUBLIC:
        return True
    if viewer_id is None:
        return False
    if visibility == Visibility.SPECIFIC:
        return viewer_id in product.shared_with.user_ids
    if relationships is None:
        return False
    if visibility == Visibility.FRIENDS:
        return product.owner_id in relationships.friend_ids
    if visibility == Visibility.GROUPS:
        return not product.shared_with.group_ids.isdisjoint(relationships.group_ids)
    return False


@dataclass
class VisibilityService:
    """Filters product listings for a viewer."""

    directory: RelationshipDirectory

    def filter_visible(
        self, candidates: Iterable[Product], viewer_id: int | None
    ) -> list[Product]:
        """Return the visible candidates in their original order."""
        products = list(candidates)
        if not products:
            return []
        relationships = (
            self.directory.snapshot(viewer_id) if viewer_id is not None else None
        )
        return [
            product
            for product in products
            if is_visible(product, viewer_id, relationships)
        ]
