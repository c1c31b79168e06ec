"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from fridge_share.adapters.supabase_claim_repository import SupabaseClaimRepository
from fridge_share.adapters.supabase_product_repository import (
    SupabaseProductRepository,
)
from fridge_share.adapters.supabase_relationship_repository import (
    SupabaseRelationshipRepository,
)
from fridge_share.config import Settings
from fridge_share.services.claims import ClaimRepository, ClaimService
from fridge_share.services.products import ProductRepository, ProductService
from fridge_share.services.relationships import (
    RelationshipDirectory,
    RelationshipRepository,
)
from fridge_share.services.visibility import VisibilityService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    relationship_directory: RelationshipDirectory
    visibility_service: VisibilityService
    product_service: ProductService
    claim_service: ClaimService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    product_repository = SupabaseProductRepository(supabase_client)
    claim_repository = SupabaseClaimRepository(supabase_client)
    relationship_repository = SupabaseRelationshipRepository(supabase_client)
    return wire_container(
        resolved_settings,
        product_repository=product_repository,
        claim_repository=claim_repository,
        relationship_repository=relationship_repository,
    )


def wire_container(
    settings: Settings,
    product_repository: ProductRepository,
    claim_repository: ClaimRepository,
    relationship_repository: RelationshipRepository,
) -> AppContainer:
    """Build services on top of the given repositories."""
    directory = RelationshipDirectory(relationship_repository)
    visibility_service = VisibilityService(directory)
    product_service = ProductService(
        repository=product_repository,
        visibility_service=visibility_service,
    )
    claim_service = ClaimService(
        repository=claim_repository,
        product_repository=product_repository,
    )
    return AppContainer(
        settings=settings,
        relationship_directory=directory,
        visibility_service=visibility_service,
        product_service=product_service,
        claim_service=claim_service,
    )
