import pytest
from bson import ObjectId
from fastapi import HTTPException

from tasky.core.identifiers import parse_object_id


def test_parses_hex():
    value = "64b7f0c2a1b2c3d4e5f60718"
    assert parse_object_id(value) == ObjectId(value)


@pytest.mark.parametrize("value", ["", "abc", "zzzzzzzzzzzzzzzzzzzzzzzz", "64b7f0c2a1b2c3d4e5f6071"])
def test_rejects_malformed(value):
    with pytest.raises(HTTPException) as excinfo:
        parse_object_id(value, "task")
    assert excinfo.value.status_code == 400
    assert excinfo.value.detail == f"Invalid task ID: {value}"
