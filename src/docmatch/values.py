"""ValueKind StrEnum and classify() for structural dispatch.

Every value handed to the equality predicates falls into exactly one of
three kinds.  Dispatch on the kind is always structural: a custom scalar
comparator never decides whether something is an array or a document.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum, auto
from typing import Any

__all__ = ["ID_FIELD", "ValueKind", "classify"]

# Implicit primary-key field of every stored document.  Its value is never
# compared by document_eq (see EqualityConfig.id_field to override).
ID_FIELD: str = "_id"


class ValueKind(StrEnum):
    """The three structural kinds a value can take.

    - ARRAY    -> "array"    : list or tuple
    - DOCUMENT -> "document" : any Mapping (dict, bson.SON, OrderedDict, ...)
    - SCALAR   -> "scalar"   : everything else, including str and bytes
    """

    ARRAY = auto()
    DOCUMENT = auto()
    SCALAR = auto()


def classify(value: Any) -> ValueKind:
    """Return the structural kind of ``value``.

    Arrays are checked first so that no sequence type can ever be treated as
    a document; ``[]`` and ``{}`` therefore always have different kinds.
    """
    if isinstance(value, (list, tuple)):
        return ValueKind.ARRAY
    if isinstance(value, Mapping):
        return ValueKind.DOCUMENT
    return ValueKind.SCALAR
