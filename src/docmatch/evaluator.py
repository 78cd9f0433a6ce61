"""Aggregation-backed assertions against a live (or mocked) collection.

These helpers are thin glue over a pymongo-compatible ``Collection``.  They
raise ``AssertionError`` on any mismatch so that they fail the calling test
directly, and return None on success.

- ``assert_expression`` / ``assert_expression_with_collation``: replace the
  collection's contents with one empty document, project ``expression``
  into an ``output`` field and compare it to the expected value with ``==``.
- ``assert_error_code``: run a pipeline that must fail with ``code``.
- ``assert_errmsg_contains``: run the raw ``aggregate`` command, which must
  fail with ``code`` and an error message containing a given string.

Example::

    import mongomock
    from docmatch.evaluator import assert_expression

    coll = mongomock.MongoClient().db.coll
    assert_expression(coll, {"$add": [1, 2]}, 3)
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from bson import json_util
from pymongo.errors import OperationFailure

if TYPE_CHECKING:
    from pymongo.collection import Collection

__all__ = [
    "assert_errmsg_contains",
    "assert_error_code",
    "assert_expression",
    "assert_expression_with_collation",
]

logger = logging.getLogger(__name__)


def _dump(value: Any) -> str:
    return json_util.dumps(value, default=repr)


def _error_text(error: OperationFailure) -> str:
    details = error.details or {}
    return str(details.get("errmsg", error))


def _as_pipeline(pipeline: Any) -> list[Any]:
    if isinstance(pipeline, Mapping):
        return [pipeline]
    return list(pipeline)


def assert_expression(collection: Collection, expression: Any, result: Any) -> None:
    """Assert that evaluating ``expression`` yields ``result``.

    Replaces the contents of ``collection`` with a single empty document.
    """
    assert_expression_with_collation(collection, expression, result)


def assert_expression_with_collation(
    collection: Collection,
    expression: Any,
    result: Any,
    collation: Mapping[str, Any] | None = None,
) -> None:
    """Assert that evaluating ``expression`` under ``collation`` yields ``result``.

    Replaces the contents of ``collection`` with a single empty document,
    runs ``[{"$project": {"output": expression}}]`` and requires exactly one
    result whose ``output`` equals ``result``.

    Args:
        collection: pymongo-compatible collection; its contents are replaced.
        expression: Aggregation expression to evaluate.
        result:     Expected value of the expression.
        collation:  Optional collation spec, forwarded as ``collation=``.

    Raises:
        AssertionError: Wrong result count or wrong output value.
    """
    collection.delete_many({})
    collection.insert_one({})

    options: dict[str, Any] = {}
    if collation is not None:
        options["collation"] = collation

    logger.debug(
        "Evaluating %r on %s (collation=%s)", expression, collection.name, collation
    )
    pipeline = [{"$project": {"output": expression}}]
    res = list(collection.aggregate(pipeline, **options))

    if len(res) != 1:
        raise AssertionError(
            f"expected exactly 1 result, got {len(res)}: {_dump(res)}"
        )
    output = res[0].get("output")
    if output != result:
        raise AssertionError(
            f"[{output!r}] != [{result!r}] are not equal: {_dump(res)}"
        )


def assert_error_code(
    collection: Collection,
    pipeline: Any,
    code: int,
    errmsg: str | None = None,
) -> None:
    """Assert that the given aggregation fails with a specific code.

    The failure may surface either when the command is issued or while the
    cursor is drained.  A single stage may be passed instead of a list.

    Args:
        collection: pymongo-compatible collection.
        pipeline:   Pipeline list, or a single stage document.
        code:       Expected server error code.
        errmsg:     Optional substring the error message must contain.

    Raises:
        AssertionError: The aggregation succeeded, failed with another code,
            or its message lacks ``errmsg``.
    """
    pipeline = _as_pipeline(pipeline)
    logger.debug("Expecting error %d from %r", code, pipeline)

    try:
        cursor = collection.aggregate(pipeline, batchSize=0)
        for _ in cursor:
            pass
    except OperationFailure as exc:
        error = exc
    else:
        raise AssertionError(f"expected error: {code}")

    if error.code != code:
        raise AssertionError(
            f"[{error.code!r}] != [{code!r}] are not equal: {_dump(error.details)}"
        )
    if errmsg is not None and errmsg not in _error_text(error):
        raise AssertionError(
            f"Error message did not contain '{errmsg}', found:\n{_dump(error.details)}"
        )


def assert_errmsg_contains(
    collection: Collection,
    pipeline: Any,
    code: int,
    expected_message: str,
) -> None:
    """Assert that an aggregation fails with ``code`` and a matching message.

    Issues the raw ``aggregate`` command through the collection's database.

    Raises:
        AssertionError: The command succeeded, failed with another code, or
            its message does not contain ``expected_message``.
    """
    pipeline = _as_pipeline(pipeline)

    try:
        response = collection.database.command(
            "aggregate", collection.name, pipeline=pipeline, cursor={}
        )
    except OperationFailure as exc:
        error = exc
    else:
        raise AssertionError(
            f"command worked when it should have failed with code {code}: "
            f"{_dump(response)}"
        )

    if error.code != code:
        raise AssertionError(
            f"command failed with code {error.code!r}, expected {code!r}: "
            f"{_dump(error.details)}"
        )
    if expected_message not in _error_text(error):
        raise AssertionError(
            f"Error message did not contain '{expected_message}', found:\n"
            f"{_dump(error.details)}"
        )
