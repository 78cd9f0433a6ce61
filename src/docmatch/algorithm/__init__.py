"""algorithm subpackage — public API for structural equality.

Provides the recursive equality algorithm, its configuration, and the
pairing strategies for unordered collections.  Import from this module (not
from sub-modules directly) to stay on the stable public interface.

Example::

    from docmatch.algorithm import EqualityConfig, MatchStrategy, StructuralEquality

    eq = StructuralEquality(EqualityConfig(match_strategy=MatchStrategy.OPTIMAL))
    eq.array_eq([{"a": 1}, {"a": 2}], [{"a": 2}, {"a": 1}])  # True
"""

from __future__ import annotations

from docmatch.algorithm.config import EqualityConfig, MatchStrategy
from docmatch.algorithm.equality import StructuralEquality

__all__ = ["EqualityConfig", "MatchStrategy", "StructuralEquality"]
