import json
from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from storefront.session import TOKEN_KEY, USER_KEY, FileStorage, MemoryStorage, token_expired


def make_token(**claims):
    return jwt.encode(claims, "secret", algorithm="HS256")


def test_memory_storage_round_trip():
    storage = MemoryStorage({TOKEN_KEY: "abc"})
    assert storage.get_item(TOKEN_KEY) == "abc"
    storage.set_item(USER_KEY, "{}")
    storage.remove_item(TOKEN_KEY)
    storage.remove_item("missing")
    assert storage.get_item(TOKEN_KEY) is None
    assert storage.get_item(USER_KEY) == "{}"


def test_file_storage_survives_new_instance(tmp_path):
    path = tmp_path / "nested" / "session.json"
    FileStorage(path).set_item(TOKEN_KEY, "abc")

    reopened = FileStorage(path)
    assert reopened.get_item(TOKEN_KEY) == "abc"
    reopened.remove_item(TOKEN_KEY)
    assert json.loads(path.read_text()) == {}
    assert not (path.parent / "session.json.tmp").exists()


def test_file_storage_missing_file_is_empty(tmp_path):
    assert FileStorage(tmp_path / "none.json").get_item(TOKEN_KEY) is None


def test_file_storage_rejects_non_object(tmp_path):
    path = tmp_path / "session.json"
    path.write_text("[1, 2]")
    with pytest.raises(ValueError):
        FileStorage(path).get_item(TOKEN_KEY)


def test_token_expiry():
    now = datetime.now(timezone.utc)
    assert token_expired(make_token(sub="1", exp=now - timedelta(minutes=1)))
    assert not token_expired(make_token(sub="1", exp=now + timedelta(hours=1)))


def test_token_without_exp_or_not_a_jwt_is_kept():
    assert not token_expired(make_token(sub="1"))
    assert not token_expired("opaque-session-token")


def test_token_expiry_uses_given_clock():
    token = make_token(exp=datetime(2030, 1, 1, tzinfo=timezone.utc))
    assert token_expired(token, now=datetime(2031, 1, 1, tzinfo=timezone.utc))
    assert not token_expired(token, now=datetime(2029, 1, 1, tzinfo=timezone.utc))
