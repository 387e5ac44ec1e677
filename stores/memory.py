"""
In-memory secret store for mock mode (SECRETS_SYNC_MOCK=1) and tests.
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union

from .base_store import RemoteSecret, SecretStore, StoreError

logger = logging.getLogger(__name__)

MOCK_FIXTURE = ".secrets-mock.json"


class InMemorySecretStore(SecretStore):
    """
    Secrets held in a dict for the lifetime of the process.

    Writes are never persisted, even when the store was seeded from a
    fixture file.
    """

    def __init__(self, secrets: Optional[dict[str, str]] = None):
        now = datetime.now(timezone.utc)
        self._secrets: dict[str, tuple[str, datetime]] = {
            name: (value, now) for name, value in (secrets or {}).items()
        }

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "InMemorySecretStore":
        """
        Seed the store from a JSON object of name -> value.

        A missing fixture yields an empty store.
        """
        path = Path(path)
        if not path.is_file():
            return cls()

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise StoreError(f"Cannot read mock fixture {path}: {e}") from e

        if not isinstance(data, dict):
            raise StoreError(f"Mock fixture {path} must contain a JSON object")

        logger.debug(f"Loaded {len(data)} mock secrets from {path}")
        return cls({str(name): str(value) for name, value in data.items()})

    @property
    def name(self) -> str:
        return "memory"

    def list_secrets(self) -> list[RemoteSecret]:
        return [
            RemoteSecret(name=name, updated_at=updated_at)
            for name, (_, updated_at) in sorted(self._secrets.items())
        ]

    def get_secret(self, name: str) -> Optional[str]:
        entry = self._secrets.get(name)
        return entry[0] if entry else None

    def set_secret(self, name: str, value: str) -> None:
        self._secrets[name] = (value, datetime.now(timezone.utc))

    def delete_secret(self, name: str) -> bool:
        return self._secrets.pop(name, None) is not None
