"""EqualityConfig and MatchStrategy for structural equality configuration.

EqualityConfig is a frozen (immutable) dataclass holding the options that
shape every comparison.  MatchStrategy selects how unordered collections
are paired up: greedy first-fit (the historical behaviour) or a maximum
bipartite matching.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum, auto

from docmatch.values import ID_FIELD


class MatchStrategy(StrEnum):
    """How elements of two unordered collections are paired.

    - GREEDY:  Each left element takes the first unconsumed equal right
               element.  Never backtracks, so it can miss a valid pairing
               when element equality is not an equivalence relation.
    - OPTIMAL: Maximum bipartite matching via the Hungarian algorithm.
               Finds a pairing whenever one exists.
    """

    GREEDY = auto()
    OPTIMAL = auto()


@dataclass(frozen=True, slots=True)
class EqualityConfig:
    """Immutable configuration for structural equality.

    Attributes:
        id_field: Field name whose value is never compared between two
            documents (its presence still is).  ``None`` disables the
            exemption entirely.  Defaults to ``"_id"``.
        match_strategy: Pairing strategy for ``array_eq`` and ``results_eq``.
            Accepts a ``MatchStrategy`` or its string value.
    """

    id_field: str | None = ID_FIELD
    match_strategy: MatchStrategy = MatchStrategy.GREEDY

    def __post_init__(self) -> None:
        if self.id_field is not None and (
            not isinstance(self.id_field, str) or not self.id_field
        ):
            msg = f"id_field must be a non-empty string or None, got {self.id_field!r}"
            raise ValueError(msg)
        if not isinstance(self.match_strategy, MatchStrategy):
            try:
                strategy = MatchStrategy(self.match_strategy)
            except ValueError:
                msg = (
                    f"match_strategy must be one of "
                    f"{[m.value for m in MatchStrategy]}, got {self.match_strategy!r}"
                )
                raise ValueError(msg) from None
            object.__setattr__(self, "match_strategy", strategy)
