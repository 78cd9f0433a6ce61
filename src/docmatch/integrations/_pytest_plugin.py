"""pytest plugin for docmatch.

Auto-discovered by pytest via the pytest11 entry point declared in pyproject.toml.
When the package is installed (even in editable mode), pytest discovers this plugin
automatically -- no conftest.py changes are needed.

Source: https://docs.pytest.org/en/stable/how-to/writing_plugins.html
"""

from __future__ import annotations

import logging
from typing import Any

import pytest

from docmatch import EqualityConfig, document_eq, results_eq

_log = logging.getLogger("docmatch.pytest")


@pytest.fixture(scope="session")
def assert_results_equal() -> Any:
    """Fixture that returns a callable result-set asserter.

    The fixture is session-scoped because the returned callable is stateless
    (delegates to results_eq() which creates a fresh StructuralEquality per call).

    Usage in tests::

        def test_group(assert_results_equal, coll):
            actual = list(coll.aggregate([{"$group": {"_id": "$k"}}]))
            assert_results_equal(actual, [{"_id": 1}, {"_id": 2}])

    Returns:
        A callable ``_assert(actual, expected, config=None) -> None`` that
        raises ``AssertionError`` when the result sets differ.  Diagnostics
        for the failing comparison are logged to ``docmatch.pytest`` at DEBUG
        level, where ``caplog`` or ``--log-level=DEBUG`` can show them.
    """

    def _assert(
        actual: Any,
        expected: Any,
        config: EqualityConfig | None = None,
    ) -> None:
        if not results_eq(actual, expected, config=config):
            results_eq(actual, expected, True, config=config, sink=_log)
            raise AssertionError(
                f"result sets are not equal\n"
                f"  actual:   {actual!r}\n"
                f"  expected: {expected!r}"
            )

    return _assert


@pytest.fixture(scope="session")
def assert_documents_equal() -> Any:
    """Fixture that returns a callable document asserter.

    Usage in tests::

        def test_doc(assert_documents_equal):
            assert_documents_equal({"a": 1.0000001}, {"a": 1.0},
                                   value_comparator=lambda x, y: abs(x - y) < 1e-6)

    Returns:
        A callable ``_assert(actual, expected, value_comparator=None, config=None)``
        that raises ``AssertionError`` when the documents differ.
    """

    def _assert(
        actual: Any,
        expected: Any,
        value_comparator: Any = None,
        config: EqualityConfig | None = None,
    ) -> None:
        if not document_eq(actual, expected, False, value_comparator, config=config):
            document_eq(
                actual, expected, True, value_comparator, config=config, sink=_log
            )
            raise AssertionError(
                f"documents are not equal\n"
                f"  actual:   {actual!r}\n"
                f"  expected: {expected!r}"
            )

    return _assert
