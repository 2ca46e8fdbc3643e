"""Order-significance policy for containers.

Field-bearing records are always re-sorted by field name. Mappings keep
their order only when their type is explicitly insertion-ordered. Set-like
collections are sorted; every other collection keeps its order. Each
container is judged on its own, so a set of lists sorts the set but leaves
every list as it was.
"""

from __future__ import annotations

import dataclasses
from collections import OrderedDict
from collections.abc import Mapping, Set
from typing import Final

from pydantic import BaseModel

from object_digest.canonical.classifier import is_named_tuple

__all__ = [
    "ORDERED_MAPPING_TYPES",
    "is_trackable",
    "mapping_preserves_order",
    "sequence_preserves_order",
]

ORDERED_MAPPING_TYPES: Final[tuple[type, ...]] = (OrderedDict,)

_IMMUTABLE_CONTAINERS: Final[tuple[type, ...]] = (tuple, frozenset, range)


def mapping_preserves_order(mapping: Mapping[object, object]) -> bool:
    """Return ``True`` when the mapping's iteration order is meaningful."""

    return isinstance(mapping, ORDERED_MAPPING_TYPES)


def sequence_preserves_order(collection: object) -> bool:
    """Return ``True`` unless ``collection`` is set-like."""

    return not isinstance(collection, Set)


def is_trackable(value: object) -> bool:
    """Return ``True`` when ``value`` can take part in a reference cycle.

    Tuples, frozensets, ranges, named tuples and frozen records cannot hold a
    reference back to an ancestor by construction; every cycle through them
    also passes through a mutable container that is tracked instead.

    Args:
        value: A container or record about to be visited.

    Returns:
        Whether the cycle tracker should register ``value``.
    """

    if isinstance(value, _IMMUTABLE_CONTAINERS) or is_named_tuple(value):
        return False
    if isinstance(value, BaseModel):
        return not type(value).model_config.get("frozen", False)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        params = getattr(type(value), "__dataclass_params__", None)
        return not getattr(params, "frozen", False)
    return True
