"""Protocols for the docmatch extension points.

Both are structural: callers never inherit from anything.

- ``ValueComparator``: any ``(left, right) -> bool`` callable, substituted for
  ``==`` when two scalars are compared.
- ``DiagnosticSink``: anything with a logging-style ``debug`` method.  A
  ``logging.Logger`` or ``logging.LoggerAdapter`` satisfies it as-is.

Example::

    import logging
    from docmatch.protocols import DiagnosticSink, ValueComparator

    assert isinstance(logging.getLogger("mysuite"), DiagnosticSink)
    assert isinstance(lambda a, b: abs(a - b) < 1e-9, ValueComparator)
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ValueComparator(Protocol):
    """Binary predicate over a pair of scalar values."""

    def __call__(self, left: Any, right: Any) -> bool: ...


@runtime_checkable
class DiagnosticSink(Protocol):
    """Receiver for verbose comparison diagnostics.

    ``debug`` is called with a %-style format string and its arguments, so
    formatting stays lazy exactly as with ``logging``.
    """

    def debug(self, msg: str, *args: Any) -> None: ...
