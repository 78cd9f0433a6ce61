"""StructuralEquality: recursive equality over documents, arrays and scalars.

Implements the five predicates used to validate aggregation results:

- ``any_eq``:           dispatch on ValueKind (ARRAY, DOCUMENT, SCALAR).
- ``document_eq``:      same field set, equal values, identifier value ignored.
- ``array_eq``:         multiset equality via the configured matcher.
- ``results_eq``:       multiset equality over a result set, default ``==``
                        for scalars, consuming from a pool of right indices.
- ``ordered_array_eq``: positional equality.

Only ``any_eq``, ``document_eq`` and ``array_eq`` accept a scalar comparator;
``results_eq`` and ``ordered_array_eq`` always compare scalars with ``==``.
Whenever a comparator is supplied it is threaded through every nested call
so that it reaches scalars at any depth.

Diagnostics go to an injected ``DiagnosticSink`` only when ``verbose`` is
set.  They are a side channel and never change a result.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from docmatch.algorithm.config import EqualityConfig, MatchStrategy
from docmatch.algorithm.matcher import (
    Predicate,
    first_unmatched,
    greedy_match,
    optimal_match,
)
from docmatch.errors import MatchingInvariantError
from docmatch.values import ValueKind, classify

if TYPE_CHECKING:
    from docmatch.protocols import DiagnosticSink, ValueComparator

logger = logging.getLogger(__name__)


class StructuralEquality:
    """Recursive structural equality for semi-structured values.

    Instances are stateless apart from their configuration, so one instance
    may be shared by any number of comparisons.

    Example::

        from docmatch.algorithm import StructuralEquality

        eq = StructuralEquality()
        eq.any_eq({"a": [1, 2], "_id": 1}, {"_id": 2, "a": [2, 1]})  # True
        eq.any_eq([], {})                                           # False
    """

    def __init__(
        self,
        config: EqualityConfig | None = None,
        verbose: bool = False,
        sink: DiagnosticSink | None = None,
    ) -> None:
        """Initialise the algorithm.

        Args:
            config:  Comparison options.  Defaults to ``EqualityConfig()``
                (``id_field="_id"``, greedy matching).
            verbose: When True, every decision is reported to ``sink``.
            sink:    Receiver for verbose diagnostics.  Defaults to this
                module's logger, which emits at DEBUG level.
        """
        self._config = config if config is not None else EqualityConfig()
        self._verbose = verbose
        self._sink: DiagnosticSink = sink if sink is not None else logger

    @property
    def config(self) -> EqualityConfig:
        return self._config

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def any_eq(
        self,
        left: Any,
        right: Any,
        value_comparator: ValueComparator | None = None,
    ) -> bool:
        """Return True if ``left`` and ``right`` are structurally equal.

        Arrays compare as multisets, documents compare field by field with
        the identifier value exempt, and scalars compare with
        ``value_comparator`` if given, else ``==``.  Without a comparator a
        ``bool`` only equals another ``bool``, so ``True`` and ``1`` differ
        while ``1`` and ``1.0`` match.  An array is never equal to a
        document, even when both are empty.

        NaN is not equal to itself under ``==``, so a value containing NaN
        is not equal to itself either.  Pass a ``value_comparator`` that
        treats NaNs as equal where that matters.
        """
        kind = classify(left)

        if kind is ValueKind.ARRAY:
            if classify(right) is not ValueKind.ARRAY:
                self._debug("any_eq: right is not an array %r", right)
                return False
            if not self.array_eq(left, right, value_comparator):
                self._debug(
                    "any_eq: array_eq(left, right): false; left=%r, right=%r",
                    left,
                    right,
                )
                return False

        elif kind is ValueKind.DOCUMENT:
            if classify(right) is not ValueKind.DOCUMENT:
                self._debug("any_eq: right is not a document %r", right)
                return False
            if not self.document_eq(left, right, value_comparator):
                self._debug(
                    "any_eq: document_eq(left, right): false; left=%r, right=%r",
                    left,
                    right,
                )
                return False

        elif not self._scalar_eq(left, right, value_comparator):
            self._debug(
                "any_eq: (left != right): false; left=%r, right=%r", left, right
            )
            return False

        self._debug("any_eq: these are equal: %r == %r", left, right)
        return True

    def document_eq(
        self,
        left: Any,
        right: Any,
        value_comparator: ValueComparator | None = None,
    ) -> bool:
        """Return True if two documents have the same fields with equal values.

        Both sides must carry exactly the same field names.  The identifier
        field must be present on both sides or neither, but its values are
        never compared.  Field order is irrelevant.
        """
        if classify(left) is not ValueKind.DOCUMENT:
            self._debug("document_eq: left is not a document %r", left)
            return False
        if classify(right) is not ValueKind.DOCUMENT:
            self._debug("document_eq: right is not a document %r", right)
            return False

        id_field = self._config.id_field

        for name, value in left.items():
            if name not in right:
                self._debug("document_eq: right doesn't have field %r", name)
                return False
            if name == id_field:
                continue
            if not self.any_eq(value, right[name], value_comparator):
                return False

        # Anything right has that left lacks was not visited above.
        for name in right:
            if name not in left:
                self._debug("document_eq: left is missing field %r", name)
                return False

        self._debug("document_eq: these are equal: %r == %r", left, right)
        return True

    def array_eq(
        self,
        left: Any,
        right: Any,
        value_comparator: ValueComparator | None = None,
    ) -> bool:
        """Return True if two arrays hold the same elements in any order.

        Each right element may partner at most one left element, so
        ``[1, 1]`` is not equal to ``[1, 2]``.  With the default GREEDY
        strategy this is first-fit matching; see ``greedy_match`` for its
        known limitation.
        """
        if classify(left) is not ValueKind.ARRAY:
            self._debug("array_eq: left is not an array: %r", left)
            return False
        if classify(right) is not ValueKind.ARRAY:
            self._debug("array_eq: right is not an array: %r", right)
            return False

        if len(left) != len(right):
            self._debug("array_eq: array lengths do not match %r, %r", left, right)
            return False

        pairs = self._match(
            left,
            right,
            lambda a, b: self.any_eq(a, b, value_comparator),
        )
        missing = first_unmatched(pairs, len(left))
        if missing is not None:
            self._debug(
                "array_eq: no match for left index %d (%r)", missing, left[missing]
            )
            return False

        return True

    def results_eq(self, left: Any, right: Any) -> bool:
        """Return True if two result sets hold the same documents in any order.

        Identifier values and ordering are ignored; scalars always compare
        with ``==``.  The callers' sequences are never modified: matching
        consumes indices from a private pool of right-hand positions.

        Raises:
            MatchingInvariantError: If right-hand documents remain unmatched
                after every left-hand document found a partner.  Lengths are
                equal by then, so this indicates a matcher bug.
        """
        if classify(left) is not ValueKind.ARRAY:
            self._debug("results_eq: left is not an array: %r", left)
            return False
        if classify(right) is not ValueKind.ARRAY:
            self._debug("results_eq: right is not an array: %r", right)
            return False

        left = list(left)
        right = list(right)

        if len(left) != len(right):
            self._debug("results_eq: array lengths do not match %r, %r", left, right)
            return False

        if self._config.match_strategy is MatchStrategy.OPTIMAL:
            pairs = optimal_match(left, right, self.any_eq)
            missing = first_unmatched(pairs, len(left))
            if missing is not None:
                self._debug(
                    "results_eq: search target missing index %d (%r)",
                    missing,
                    left[missing],
                )
                return False
            used = set(pairs.values())
            pool = [j for j in range(len(right)) if j not in used]
        else:
            pool = list(range(len(right)))
            for i, doc in enumerate(left):
                for pos, j in enumerate(pool):
                    if self.any_eq(doc, right[j]):
                        break
                else:
                    self._debug(
                        "results_eq: search target missing index %d (%r)", i, doc
                    )
                    return False
                del pool[pos]

        if pool:
            raise MatchingInvariantError([right[j] for j in pool])
        return True

    def ordered_array_eq(self, left: Any, right: Any) -> bool:
        """Return True if two arrays are equal position by position.

        Elements compare with ``any_eq`` and default scalar equality, so
        nested arrays inside the elements are still order-insensitive.
        """
        if classify(left) is not ValueKind.ARRAY:
            self._debug("ordered_array_eq: left is not an array: %r", left)
            return False
        if classify(right) is not ValueKind.ARRAY:
            self._debug("ordered_array_eq: right is not an array: %r", right)
            return False

        if len(left) != len(right):
            self._debug(
                "ordered_array_eq: array lengths do not match %r, %r", left, right
            )
            return False

        for i, (left_item, right_item) in enumerate(zip(left, right, strict=True)):
            if not self.any_eq(left_item, right_item):
                self._debug("ordered_array_eq: mismatch at index %d", i)
                return False

        return True

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _match(
        self,
        left: Sequence[Any],
        right: Sequence[Any],
        predicate: Predicate,
    ) -> dict[int, int]:
        if self._config.match_strategy is MatchStrategy.OPTIMAL:
            return optimal_match(left, right, predicate)
        return greedy_match(left, right, predicate)

    @staticmethod
    def _scalar_eq(
        left: Any,
        right: Any,
        value_comparator: ValueComparator | None,
    ) -> bool:
        if value_comparator is not None:
            return bool(value_comparator(left, right))
        if isinstance(left, bool) is not isinstance(right, bool):
            return False
        return bool(left == right)

    def _debug(self, msg: str, *args: Any) -> None:
        if self._verbose:
            self._sink.debug(msg, *args)
