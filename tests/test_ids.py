import time

import pytest

from posts_service import ids as posts_ids
from users_service import ids as users_ids


@pytest.fixture(params=[users_ids, posts_ids], ids=["users", "posts"])
def ids(request):
    return request.param


def test_new_ids_are_unique_hex(ids):
    values = {ids.new_object_id() for _ in range(1000)}
    assert len(values) == 1000
    for value in values:
        assert len(value) == 24
        assert ids.parse_object_id(value) == value


def test_new_id_starts_with_timestamp(ids):
    before = int(time.time())
    value = ids.new_object_id()
    assert before <= int(value[:8], 16) <= int(time.time())


def test_parse_normalises_case(ids):
    assert ids.parse_object_id("65A1F0C2E4B0A1B2C3D4E5F6") == "65a1f0c2e4b0a1b2c3d4e5f6"


@pytest.mark.parametrize("value", ["", "abc", "65a1f0c2e4b0a1b2c3d4e5fg", "65a1f0c2e4b0a1b2c3d4e5f6 "])
def test_parse_rejects_invalid(ids, value):
    with pytest.raises(ids.InvalidObjectId):
        ids.parse_object_id(value)
