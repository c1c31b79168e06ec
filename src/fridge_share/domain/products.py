"""Domain models for products and their sharing settings."""

import json
import logging
from dataclasses import dataclass, field
from datetime import date
from enum import StrEnum

_logger = logging.getLogger(__name__)


class ProductStatus(StrEnum):
    """Where a product is in its life."""

    IN_FRIDGE = "IN_FRIDGE"
    AVAILABLE = "AVAILABLE"
    CONSUMED = "CONSUMED"


class Visibility(StrEnum):
    """Who may see an available product."""

    PUBLIC = "public"
    FRIENDS = "friends"
    GROUPS = "groups"
    SPECIFIC = "specific"


@dataclass(frozen=True)
class SharedWith:
    """Share targets for `groups` and `specific` visibility."""

    group_ids: frozenset[int] = field(default_factory=frozenset)
    user_ids: frozenset[int] = field(default_factory=frozenset)

    def is_empty(self) -> bool:
        """Return True when there are no share targets."""
        return not self.group_ids and not self.user_ids


@dataclass(frozen=True)
class Product:
    """A perishable item owned by a user."""

    id: int
    owner_id: int
    name: str
    category: str
    expiration_date: date
    status: str
    visibility: str | None = Visibility.PUBLIC
    shared_with: SharedWith = field(default_factory=SharedWith)


class _MalformedSharePayloadError(ValueError):
    pass


def decode_shared_with(raw: object) -> SharedWith:
    """Decode a stored share payload, treating anything malformed as no targets.

    Accepts a mapping or its JSON text with `groupIds`/`userIds` lists
    (snake_case keys are accepted too). Never raises.
    """
    if raw is None or raw == "":
        return SharedWith()
    try:
        payload = json.loads(raw) if isinstance(raw, str | bytes) else raw
        if payload is None:
            return SharedWith()
        if not isinstance(payload, dict):
            raise _MalformedSharePayloadError("payload is not an object")
        return SharedWith(
            group_ids=_decode_ids(payload, "groupIds", "group_ids"),
            user_ids=_decode_ids(payload, "userIds", "user_ids"),
        )
    except (ValueError, RecursionError) as exc:
        _logger.warning("Malformed sharedWith payload ignored: %s", exc)
        return SharedWith()


def encode_shared_with(shared_with: SharedWith) -> dict[str, list[int]]:
    """Encode share targets into their stored JSON shape."""
    return {
        "groupIds": sorted(shared_with.group_ids),
        "userIds": sorted(shared_with.user_ids),
    }


def _decode_ids(payload: dict, *keys: str) -> frozenset[int]:
    values = None
    for key in keys:
        if key in payload:
            values = payload[key]
            break
    if values is None:
        return frozenset()
    if not isinstance(values, list):
        raise _MalformedSharePayloadError(f"{keys[0]} is not a list")
    ids: set[int] = set()
    for value in values:
        if isinstance(value, bool):
            raise _MalformedSharePayloadError(f"{keys[0]} holds a boolean")
        if isinstance(value, int):
            ids.add(value)
        elif isinstance(value, str) and value.strip().isdigit():
            ids.add(int(value))
        else:
            raise _MalformedSharePayloadError(f"{keys[0]} holds {value!r}")
    return frozenset(ids)
