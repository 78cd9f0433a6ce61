"""Tests for the aggregation-backed assertions in docmatch.evaluator.

Expression evaluation runs against an in-memory mongomock collection.  The
error-code assertions use MagicMock collections that raise pymongo's own
OperationFailure, matching what a live server connection produces.
"""

from __future__ import annotations

import logging
from typing import Any
from unittest.mock import MagicMock

import mongomock
import pytest
from pymongo.errors import OperationFailure

from docmatch import evaluator
from docmatch.evaluator import (
    assert_errmsg_contains,
    assert_error_code,
    assert_expression,
    assert_expression_with_collation,
)


@pytest.fixture
def coll() -> Any:
    return mongomock.MongoClient().db.expressions


def _failure(code: int, errmsg: str) -> OperationFailure:
    return OperationFailure(errmsg, code=code, details={"ok": 0, "errmsg": errmsg, "code": code})


def _mock_collection(results: list[dict[str, Any]] | None = None) -> MagicMock:
    collection = MagicMock()
    collection.name = "c"
    collection.aggregate.return_value = iter(results or [])
    return collection


# ---------------------------------------------------------------------------
# assert_expression
# ---------------------------------------------------------------------------


class TestAssertExpression:
    def test_passes_on_expected_value(self, coll: Any) -> None:
        assert_expression(coll, {"$add": [1, 2]}, 3)

    def test_fails_on_wrong_value(self, coll: Any) -> None:
        with pytest.raises(AssertionError, match="not equal"):
            assert_expression(coll, {"$add": [1, 2]}, 4)

    def test_replaces_collection_contents(self, coll: Any) -> None:
        coll.insert_many([{"a": 1}, {"a": 2}])
        assert_expression(coll, {"$add": [2, 2]}, 4)
        docs = list(coll.find({}, {"_id": 0}))
        assert docs == [{}]

    def test_wrong_cardinality_fails(self) -> None:
        collection = _mock_collection([{"output": 1}, {"output": 1}])
        with pytest.raises(AssertionError, match="expected exactly 1 result, got 2"):
            assert_expression(collection, 1, 1)


class TestAssertExpressionWithCollation:
    def test_collation_is_forwarded(self) -> None:
        collection = _mock_collection([{"_id": 1, "output": True}])
        collation = {"locale": "en_US", "strength": 2}
        assert_expression_with_collation(
            collection, {"$eq": ["a", "A"]}, True, collation
        )
        collection.delete_many.assert_called_once_with({})
        collection.insert_one.assert_called_once_with({})
        collection.aggregate.assert_called_once_with(
            [{"$project": {"output": {"$eq": ["a", "A"]}}}], collation=collation
        )

    def test_no_collation_passes_no_options(self) -> None:
        collection = _mock_collection([{"_id": 1, "output": "x"}])
        assert_expression_with_collation(collection, "x", "x")
        collection.aggregate.assert_called_once_with(
            [{"$project": {"output": "x"}}]
        )


# ---------------------------------------------------------------------------
# assert_error_code
# ---------------------------------------------------------------------------


class TestAssertErrorCode:
    def test_failure_on_command(self) -> None:
        collection = _mock_collection()
        collection.aggregate.side_effect = _failure(16554, "$add only supports numeric types")
        assert_error_code(collection, [{"$project": {"x": {"$add": ["a"]}}}], 16554)

    def test_failure_while_iterating(self) -> None:
        def failing_cursor() -> Any:
            raise _failure(28765, "bad value")
            yield  # pragma: no cover

        collection = _mock_collection()
        collection.aggregate.return_value = failing_cursor()
        assert_error_code(collection, [{"$match": {}}], 28765)

    def test_single_stage_is_wrapped(self) -> None:
        collection = _mock_collection()
        collection.aggregate.side_effect = _failure(40323, "bad stage")
        stage = {"$bogus": {}}
        assert_error_code(collection, stage, 40323)
        collection.aggregate.assert_called_once_with([stage], batchSize=0)

    def test_success_fails_assertion(self) -> None:
        collection = _mock_collection([{"a": 1}])
        with pytest.raises(AssertionError, match="expected error: 2"):
            assert_error_code(collection, [], 2)

    def test_wrong_code_fails_assertion(self) -> None:
        collection = _mock_collection()
        collection.aggregate.side_effect = _failure(1, "x")
        with pytest.raises(AssertionError, match=r"\[1\] != \[2\]"):
            assert_error_code(collection, [], 2)

    def test_errmsg_is_checked_when_given(self) -> None:
        collection = _mock_collection()
        collection.aggregate.side_effect = _failure(2, "bad value")
        assert_error_code(collection, [], 2, "bad")
        collection.aggregate.side_effect = _failure(2, "bad value")
        with pytest.raises(AssertionError, match="did not contain 'other'"):
            assert_error_code(collection, [], 2, "other")


# ---------------------------------------------------------------------------
# assert_errmsg_contains
# ---------------------------------------------------------------------------


class TestAssertErrmsgContains:
    def test_passes_on_code_and_substring(self) -> None:
        collection = _mock_collection()
        collection.database.command.side_effect = _failure(
            16020, "Expression $size takes exactly 1 arguments. 2 were passed in."
        )
        pipeline = [{"$project": {"s": {"$size": [1, 2]}}}]
        assert_errmsg_contains(collection, pipeline, 16020, "takes exactly 1 arguments")
        collection.database.command.assert_called_once_with(
            "aggregate", "c", pipeline=pipeline, cursor={}
        )

    def test_missing_substring_fails(self) -> None:
        collection = _mock_collection()
        collection.database.command.side_effect = _failure(16020, "something else")
        with pytest.raises(AssertionError, match="did not contain"):
            assert_errmsg_contains(collection, [], 16020, "takes exactly")

    def test_wrong_code_fails(self) -> None:
        collection = _mock_collection()
        collection.database.command.side_effect = _failure(1, "takes exactly")
        with pytest.raises(AssertionError, match="expected 16020"):
            assert_errmsg_contains(collection, [], 16020, "takes exactly")

    def test_success_fails_assertion(self) -> None:
        collection = _mock_collection()
        collection.database.command.return_value = {"ok": 1, "cursor": {}}
        with pytest.raises(AssertionError, match="should have failed"):
            assert_errmsg_contains(collection, [], 16020, "x")


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


class TestPassingPathsSkipSerialisation:
    """Messages are only rendered with bson.json_util when an assertion fails."""

    @pytest.fixture(autouse=True)
    def _no_dump(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def _fail(value: Any) -> str:
            raise AssertionError("json_util serialisation on a passing path")

        monkeypatch.setattr(evaluator, "_dump", _fail)

    def test_expression(self, coll: Any) -> None:
        assert_expression(coll, {"$add": [1, 2]}, 3)

    def test_error_code(self) -> None:
        collection = _mock_collection()
        collection.aggregate.side_effect = _failure(2, "bad value")
        assert_error_code(collection, [{"$match": {}}], 2, "bad")

    def test_debug_log_names_expression(
        self, coll: Any, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.DEBUG, logger="docmatch.evaluator"):
            assert_expression(coll, {"$add": [1, 2]}, 3)
        assert "'$add'" in caplog.text
