"""Pydantic models for API request bodies."""

from datetime import date

from pydantic import BaseModel, Field


class SharedWithPayload(BaseModel):
    """Share targets for `groups` and `specific` visibility."""

    group_ids: list[int] = Field(default_factory=list)
    user_ids: list[int] = Field(default_factory=list)


class ProductCreate(BaseModel):
    """Body for registering a product."""

    name: str = Field(min_length=1)
    category: str = Field(min_length=1)
    expiration_date: date


class ProductUpdate(BaseModel):
    """Body for changing a product's status or sharing."""

    status: str | None = None
    visibility: str | None = None
    shared_with: SharedWithPayload | None = None


class ClaimCreate(BaseModel):
    """Body for claiming a product."""

    product_id: int
    message: str | None = Field(default=None, max_length=1000)


class ClaimDecisionRequest(BaseModel):
    """Body for accepting or rejecting a claim."""

    decision: str
