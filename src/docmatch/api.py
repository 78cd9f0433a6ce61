"""Public API functions for docmatch.

This module provides the user-facing equality predicates: any_eq,
document_eq, custom_document_eq, array_eq, ordered_array_eq and results_eq.
Each call creates a fresh StructuralEquality to guarantee zero global state
between calls.

Every predicate takes ``verbose`` positionally (after the two values) and
``config``/``sink`` as keyword-only options.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from docmatch.algorithm.config import EqualityConfig
from docmatch.algorithm.equality import StructuralEquality

if TYPE_CHECKING:
    from docmatch.protocols import DiagnosticSink, ValueComparator

__all__ = [
    "any_eq",
    "array_eq",
    "custom_document_eq",
    "document_eq",
    "ordered_array_eq",
    "results_eq",
]


def _algorithm(
    verbose: bool,
    config: EqualityConfig | None,
    sink: DiagnosticSink | None,
) -> StructuralEquality:
    return StructuralEquality(config=config, verbose=verbose, sink=sink)


def any_eq(
    left: Any,
    right: Any,
    verbose: bool = False,
    value_comparator: ValueComparator | None = None,
    *,
    config: EqualityConfig | None = None,
    sink: DiagnosticSink | None = None,
) -> bool:
    """Return True if ``left`` is the same as ``right``.

    Arrays may hold their elements in any order.  Documents (at the top
    level or embedded) must have the same fields, with the exception of the
    identifier field whose value is not compared.  Anything else must
    compare equal using ``value_comparator``, or ``==`` if not provided.

    Args:
        left:             First value.
        right:            Second value.
        verbose:          Report every decision to ``sink``.
        value_comparator: Optional scalar predicate replacing ``==``.
        config:           Comparison options.  Defaults to ``EqualityConfig()``.
        sink:             Diagnostic receiver.  Defaults to the
                          ``docmatch.algorithm.equality`` logger.

    Returns:
        True if the values are structurally equal.
    """
    return _algorithm(verbose, config, sink).any_eq(left, right, value_comparator)


def document_eq(
    left: Any,
    right: Any,
    verbose: bool = False,
    value_comparator: ValueComparator | None = None,
    *,
    config: EqualityConfig | None = None,
    sink: DiagnosticSink | None = None,
) -> bool:
    """Return True if two documents have exactly the same fields and values.

    Returns False (never raises) when either argument is not a document.
    """
    return _algorithm(verbose, config, sink).document_eq(left, right, value_comparator)


def custom_document_eq(
    *,
    left: Any,
    right: Any,
    verbose: bool = False,
    value_comparator: ValueComparator | None = None,
    config: EqualityConfig | None = None,
    sink: DiagnosticSink | None = None,
) -> bool:
    """Keyword-only form of ``document_eq`` for comparator-driven checks.

    Example::

        custom_document_eq(
            left={"x": 1.0000001},
            right={"x": 1.0},
            value_comparator=lambda a, b: abs(a - b) < 1e-6,
        )  # True
    """
    return document_eq(
        left, right, verbose, value_comparator, config=config, sink=sink
    )


def array_eq(
    left: Any,
    right: Any,
    verbose: bool = False,
    value_comparator: ValueComparator | None = None,
    *,
    config: EqualityConfig | None = None,
    sink: DiagnosticSink | None = None,
) -> bool:
    """Return True if two arrays hold the same elements, in any order.

    Each element of ``right`` is used at most once.  Returns False when
    either argument is not an array.
    """
    return _algorithm(verbose, config, sink).array_eq(left, right, value_comparator)


def ordered_array_eq(
    left: Any,
    right: Any,
    verbose: bool = False,
    *,
    config: EqualityConfig | None = None,
    sink: DiagnosticSink | None = None,
) -> bool:
    """Return True if two arrays are equal position by position."""
    return _algorithm(verbose, config, sink).ordered_array_eq(left, right)


def results_eq(
    left: Any,
    right: Any,
    verbose: bool = False,
    *,
    config: EqualityConfig | None = None,
    sink: DiagnosticSink | None = None,
) -> bool:
    """Return True if two result sets hold the same documents.

    The order need not match and identifier values need not match.  Scalars
    always compare with ``==``; there is deliberately no comparator here.
    Neither argument is modified.

    Raises:
        MatchingInvariantError: On an internal matching inconsistency.
    """
    return _algorithm(verbose, config, sink).results_eq(left, right)
