"""Shared test fixtures."""

import itertools
import threading
from dataclasses import dataclass, field, replace
from datetime import UTC, date, datetime

import pytest

from fridge_share.config import Settings
from fridge_share.containers import AppContainer, wire_container
from fridge_share.domain.claims import Claim, ClaimAcceptance, ClaimStatus
from fridge_share.domain.errors import DuplicateClaimError, NotAvailableError
from fridge_share.domain.products import (
    Product,
    ProductStatus,
    SharedWith,
    Visibility,
)
from fridge_share.services.claims import ClaimRepository
from fridge_share.services.products import ProductRepository
from fridge_share.services.relationships import RelationshipRepository

SERVICE_KEY = (
    "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9."
    "eyJyb2xlIjoic2VydmljZV9yb2xlIn0."
    "c2lnbmF0dXJl"
)


def make_product(  # noqa: PLR0913
    product_id: int = 1,
    owner_id: int = 1,
    status: str = ProductStatus.AVAILABLE,
    visibility: str | None = Visibility.PUBLIC,
    shared_with: SharedWith | None = None,
    expiration_date: date = date(2026, 10, 20),
    name: str = "Milk",
) -> Product:
    return Product(
        id=product_id,
        owner_id=owner_id,
        name=name,
        category="dairy",
        expiration_date=expiration_date,
        status=status,
        visibility=visibility,
        shared_with=shared_with or SharedWith(),
    )


@dataclass
class InMemoryProductRepository(ProductRepository):
    """In-memory product repository for tests."""

    products: dict[int, Product] = field(default_factory=dict)
    lock: threading.RLock = field(default_factory=threading.RLock)
    _ids: itertools.count = field(default_factory=lambda: itertools.count(1))

    def add(self, product: Product) -> Product:
        self.products[product.id] = product
        return product

    def create_product(
        self, owner_id: int, name: str, category: str, expiration_date: date
    ) -> Product:
        with self.lock:
            product_id = next(self._ids)
            while product_id in self.products:
                product_id = next(self._ids)
            product = Product(
                id=product_id,
                owner_id=owner_id,
                name=name,
                category=category,
                expiration_date=expiration_date,
                status=ProductStatus.IN_FRIDGE,
                visibility=Visibility.PUBLIC,
            )
            self.products[product_id] = product
            return product

    def get_product(self, product_id: int) -> Product | None:
        return self.products.get(product_id)

    def list_products(
        self, owner_id: int | None = None, status: str | None = None
    ) -> list[Product]:
        products = [
            product
            for product in self.products.values()
            if (owner_id is None or product.owner_id == owner_id)
            and (status is None or product.status == status)
        ]
        return sorted(products, key=lambda product: product.expiration_date)

    def update_product(
        self,
        product_id: int,
        status: str | None = None,
        visibility: str | None = None,
        shared_with: SharedWith | None = None,
    ) -> Product:
        with self.lock:
            current = self.products[product_id]
            updated = replace(
                current,
                status=status if status is not None else current.status,
                visibility=(
                    visibility if visibility is not None else current.visibility
                ),
                shared_with=(
                    shared_with if shared_with is not None else current.shared_with
                ),
            )
            self.products[product_id] = updated
            return updated

    def delete_product(self, product_id: int) -> None:
        with self.lock:
            self.products.pop(product_id, None)


@dataclass
class InMemoryClaimRepository(ClaimRepository):
    """In-memory claim repository sharing the product repository's lock."""

    product_repository: InMemoryProductRepository
    claims: dict[int, Claim] = field(default_factory=dict)
    fail_during_transfer: bool = False
    _ids: itertools.count = field(default_factory=lambda: itertools.count(1))

    @property
    def lock(self) -> threading.RLock:
        return self.product_repository.lock

    def get_claim(self, claim_id: int) -> Claim | None:
        return self.claims.get(claim_id)

    def find_open_claim(self, product_id: int, claimer_id: int) -> Claim | None:
        for claim in self.claims.values():
            if (
                claim.product_id == product_id
                and claim.claimer_id == claimer_id
                and claim.status != ClaimStatus.REJECTED
            ):
                return claim
        return None

    def create_claim(
        self, product_id: int, claimer_id: int, message: str | None
    ) -> Claim:
        with self.lock:
            product = self.product_repository.products.get(product_id)
            if product is None or product.status != ProductStatus.AVAILABLE:
                raise NotAvailableError("not available")
            if self.find_open_claim(product_id, claimer_id) is not None:
                raise DuplicateClaimError("duplicate")
            claim = Claim(
                id=next(self._ids),
                product_id=product_id,
                claimer_id=claimer_id,
                status=ClaimStatus.PENDING,
                message=message,
                created_at=datetime.now(tz=UTC),
            )
            self.claims[claim.id] = claim
            return claim

    def list_claims(
        self,
        claimer_id: int | None = None,
        product_ids: list[int] | None = None,
    ) -> list[Claim]:
        return [
            claim
            for claim in sorted(self.claims.values(), key=lambda claim: claim.id)
            if (claimer_id is None or claim.claimer_id == claimer_id)
            and (product_ids is None or claim.product_id in product_ids)
        ]

    def transition_claim(
        self, claim_id: int, from_status: ClaimStatus, to_status: ClaimStatus
    ) -> Claim | None:
        with self.lock:
            claim = self.claims.get(claim_id)
            if claim is None or claim.status != from_status:
                return None
            updated = replace(claim, status=to_status)
            self.claims[claim_id] = updated
            return updated

    def accept_claim(self, claim_id: int) -> ClaimAcceptance | None:
        with self.lock:
            saved_claims = dict(self.claims)
            saved_products = dict(self.product_repository.products)
            try:
                return self._accept(claim_id)
            except Exception:
                self.claims = saved_claims
                self.product_repository.products = saved_products
                raise

    def _accept(self, claim_id: int) -> ClaimAcceptance | None:
        claim = self.claims.get(claim_id)
        if claim is None or claim.status != ClaimStatus.PENDING:
            return None
        product = self.product_repository.products[claim.product_id]
        if product.status != ProductStatus.AVAILABLE:
            return None
        accepted = replace(claim, status=ClaimStatus.ACCEPTED)
        self.claims[claim_id] = accepted
        moved = replace(
            product,
            owner_id=claim.claimer_id,
            status=ProductStatus.IN_FRIDGE,
            visibility=Visibility.PUBLIC,
            shared_with=SharedWith(),
        )
        self.product_repository.products[product.id] = moved
        if self.fail_during_transfer:
            raise RuntimeError("connection lost")
        rejected_ids = []
        for other in list(self.claims.values()):
            if (
                other.product_id == claim.product_id
                and other.id != claim_id
                and other.status == ClaimStatus.PENDING
            ):
                self.claims[other.id] = replace(other, status=ClaimStatus.REJECTED)
                rejected_ids.append(other.id)
        return ClaimAcceptance(
            claim=accepted, product=moved, rejected_claim_ids=rejected_ids
        )


@dataclass
class InMemoryRelationshipRepository(RelationshipRepository):
    """In-memory social graph that counts lookups."""

    friendships: list[tuple[int, int, str]] = field(default_factory=list)
    memberships: set[tuple[int, int]] = field(default_factory=set)
    friend_lookups: int = 0
    group_lookups: int = 0

    def befriend(self, requester_id: int, addressee_id: int) -> None:
        self.friendships.append((requester_id, addressee_id, "accepted"))

    def join(self, user_id: int, group_id: int) -> None:
        self.memberships.add((user_id, group_id))

    def list_friend_ids(self, user_id: int) -> set[int]:
        self.friend_lookups += 1
        friend_ids = set()
        for requester_id, addressee_id, status in self.friendships:
            if status != "accepted":
                continue
            if requester_id == user_id:
                friend_ids.add(addressee_id)
            elif addressee_id == user_id:
                friend_ids.add(requester_id)
        return friend_ids

    def list_group_ids(self, user_id: int) -> set[int]:
        self.group_lookups += 1
        return {
            group_id
            for member_id, group_id in self.memberships
            if member_id == user_id
        }


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key=SERVICE_KEY,
    )


@pytest.fixture
def product_repository() -> InMemoryProductRepository:
    return InMemoryProductRepository()


@pytest.fixture
def claim_repository(
    product_repository: InMemoryProductRepository,
) -> InMemoryClaimRepository:
    return InMemoryClaimRepository(product_repository)


@pytest.fixture
def relationship_repository() -> InMemoryRelationshipRepository:
    return InMemoryRelationshipRepository()


@pytest.fixture
def container(
    settings: Settings,
    product_repository: InMemoryProductRepository,
    claim_repository: InMemoryClaimRepository,
    relationship_repository: InMemoryRelationshipRepository,
) -> AppContainer:
    return wire_container(
        settings,
        product_repository=product_repository,
        claim_repository=claim_repository,
        relationship_repository=relationship_repository,
    )
