"""
Durable session storage

Keeps the auth token and a minimal user record across restarts, the way the
web client keeps them in browser local storage: two string keys, ``token`` and
``user`` (JSON), both removed on logout.
"""
import json
import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Optional

from jose import JWTError, jwt

logger = logging.getLogger(__name__)

TOKEN_KEY = "token"
USER_KEY = "user"


class Storage:
    """Key/value string storage with the local storage interface."""

    def get_item(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set_item(self, key: str, value: str) -> None:
        raise NotImplementedError

    def remove_item(self, key: str) -> None:
        raise NotImplementedError


class MemoryStorage(Storage):
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key):
        return self._items.get(key)

    def set_item(self, key, value):
        self._items[key] = value

    def remove_item(self, key):
        self._items.pop(key, None)


class FileStorage(Storage):
    """JSON file backed storage. The whole file is rewritten on every change."""

    def __init__(self, path):
        self.path = Path(path).expanduser()

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        with self.path.open("r", encoding="utf-8") as fh:
            data = json.load(fh)
        if not isinstance(data, dict):
            raise ValueError(f"Session file {self.path} does not hold a JSON object")
        return data

    def _write(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        with tmp.open("w", encoding="utf-8") as fh:
            json.dump(data, fh)
        os.replace(tmp, self.path)

    def get_item(self, key):
        return self._read().get(key)

    def set_item(self, key, value):
        data = self._read()
        data[key] = value
        self._write(data)

    def remove_item(self, key):
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)


def token_expired(token: str, now: Optional[datetime] = None) -> bool:
    """True when ``token`` is a JWT whose ``exp`` claim has passed.

    Signatures are not checked; only the backend can do that. Tokens that are
    not JWTs, or carry no ``exp``, are never considered expired here.
    """
    try:
        claims = jwt.get_unverified_claims(token)
    except JWTError:
        logger.debug("Session token is not a JWT, skipping expiry check")
        return False
    exp = claims.get("exp")
    if exp is None:
        return False
    now = now or datetime.now(timezone.utc)
    return datetime.fromtimestamp(int(exp), tz=timezone.utc) <= now
