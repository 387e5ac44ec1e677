"""
Secret Stores Package

Remote secret store collaborators used by the CLI. Every adapter implements
SecretStore (list/set/delete) and raises StoreError on failure.
"""

from .base_store import RemoteSecret, SecretStore, StoreCredentialsError, StoreError
from .memory import InMemorySecretStore
from .ssm import SsmSecretStore

__all__ = [
    "InMemorySecretStore",
    "RemoteSecret",
    "SecretStore",
    "SsmSecretStore",
    "StoreCredentialsError",
    "StoreError",
]
