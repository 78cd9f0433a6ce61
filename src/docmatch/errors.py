"""Exception hierarchy for docmatch.

The equality predicates never raise for mismatched inputs; they return
``False``.  The only exception they raise is ``MatchingInvariantError``,
which signals a bug in the matching routine itself.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

__all__ = ["DocMatchError", "MatchingInvariantError"]


class DocMatchError(Exception):
    """Base class for all docmatch errors."""


class MatchingInvariantError(DocMatchError, AssertionError):
    """Right-hand documents were left over after every left document matched.

    Lengths are checked equal before matching starts, so a non-empty leftover
    pool can only come from a broken matcher.  Subclasses ``AssertionError``
    so a test that trips it fails rather than errors.

    Attributes:
        leftover: The right-hand documents that were never consumed.
    """

    def __init__(self, leftover: Sequence[Any]) -> None:
        self.leftover = list(leftover)
        super().__init__(
            f"results_eq: {len(self.leftover)} right-hand document(s) left "
            f"unmatched after every left-hand document matched: {self.leftover!r}"
        )
