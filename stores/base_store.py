"""
Base Secret Store - Abstract interface to a remote secret store.

The CLI only ever lists, sets and deletes secrets. Adapters translate their
backend's errors into StoreError so callers handle one exception family.

Available adapters:
    - memory.py: in-process dict, used for mock mode and tests
    - ssm.py: AWS Systems Manager Parameter Store (SecureString)
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


class StoreError(Exception):
    """A remote secret store request failed."""


class StoreCredentialsError(StoreError):
    """No credentials are available for the remote secret store."""


@dataclass(frozen=True)
class RemoteSecret:
    """A secret's name and metadata. Values are never listed."""
    name: str
    updated_at: Optional[datetime] = None


class SecretStore(ABC):
    """
    Abstract base class for remote secret stores.

    Example:
        store = InMemorySecretStore()
        store.set_secret("API_KEY", "sk_live_abc123")
        [s.name for s in store.list_secrets()]   # ["API_KEY"]
        store.delete_secret("API_KEY")
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Short identifier for messages (e.g., 'memory', 'ssm')."""
        pass

    @abstractmethod
    def list_secrets(self) -> list[RemoteSecret]:
        """Return all secrets, sorted by name."""
        pass

    @abstractmethod
    def set_secret(self, name: str, value: str) -> None:
        """Create or overwrite a secret."""
        pass

    @abstractmethod
    def delete_secret(self, name: str) -> bool:
        """
        Delete a secret.

        Returns:
            True if the secret existed, False otherwise.
        """
        pass

    def __repr__(self) -> str:
        return f"<SecretStore: {self.name}>"
