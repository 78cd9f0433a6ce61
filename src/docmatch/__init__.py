"""docmatch - structural equality assertions for document-database test suites."""

from __future__ import annotations

from docmatch.algorithm.config import EqualityConfig, MatchStrategy
from docmatch.algorithm.equality import StructuralEquality
from docmatch.api import (
    any_eq,
    array_eq,
    custom_document_eq,
    document_eq,
    ordered_array_eq,
    results_eq,
)
from docmatch.errors import DocMatchError, MatchingInvariantError
from docmatch.evaluator import (
    assert_errmsg_contains,
    assert_error_code,
    assert_expression,
    assert_expression_with_collation,
)
from docmatch.values import ID_FIELD, ValueKind, classify

__version__: str = "0.1.0"
__all__: list[str] = [
    "ID_FIELD",
    "DocMatchError",
    "EqualityConfig",
    "MatchStrategy",
    "MatchingInvariantError",
    "StructuralEquality",
    "ValueKind",
    "any_eq",
    "array_eq",
    "assert_errmsg_contains",
    "assert_error_code",
    "assert_expression",
    "assert_expression_with_collation",
    "classify",
    "custom_document_eq",
    "document_eq",
    "ordered_array_eq",
    "results_eq",
]
