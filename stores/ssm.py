"""
SsmSecretStore - AWS Systems Manager Parameter Store adapter.

Secrets live as SecureString parameters under a path prefix, e.g.
`/myapp/production/API_KEY`. Only names and modification times are listed;
values are never fetched back.
"""

import logging
import os

import boto3
from botocore.exceptions import ClientError, NoCredentialsError

from .base_store import RemoteSecret, SecretStore, StoreCredentialsError, StoreError

logger = logging.getLogger(__name__)

CREDENTIALS_MESSAGE = (
    "AWS credentials not found. Please set AWS_ACCESS_KEY_ID, "
    "AWS_SECRET_ACCESS_KEY, and AWS_REGION environment variables."
)


def get_ssm_client():
    """Create and return an SSM client using environment credentials."""
    return boto3.client(
        "ssm",
        aws_access_key_id=os.getenv("AWS_ACCESS_KEY_ID"),
        aws_secret_access_key=os.getenv("AWS_SECRET_ACCESS_KEY"),
        region_name=os.getenv("AWS_REGION", "us-east-1")
    )


def normalize_prefix(prefix: str) -> str:
    """'myapp/prod/' -> '/myapp/prod'. The root prefix is '/'."""
    stripped = prefix.strip().strip("/")
    return f"/{stripped}" if stripped else "/"


def _client_error(e: ClientError, operation: str) -> StoreError:
    error_code = e.response.get("Error", {}).get("Code", "Unknown")
    error_message = e.response.get("Error", {}).get("Message", str(e))
    return StoreError(f"AWS Error ({error_code}) during {operation}: {error_message}")


class SsmSecretStore(SecretStore):
    """
    Example:
        store = SsmSecretStore("/myapp/production")
        store.set_secret("API_KEY", "sk_live_abc123")
        # PutParameter /myapp/production/API_KEY (SecureString)
    """

    def __init__(self, prefix: str = "/", client=None):
        self.prefix = normalize_prefix(prefix)
        self._client = client

    @property
    def client(self):
        if self._client is None:
            self._client = get_ssm_client()
        return self._client

    @property
    def name(self) -> str:
        return "ssm"

    def parameter_name(self, name: str) -> str:
        if self.prefix == "/":
            return f"/{name}"
        return f"{self.prefix}/{name}"

    def list_secrets(self) -> list[RemoteSecret]:
        try:
            if self.prefix == "/":
                pages = self.client.get_paginator("describe_parameters").paginate()
            else:
                pages = self.client.get_paginator("get_parameters_by_path").paginate(
                    Path=self.prefix, Recursive=True, WithDecryption=False
                )
            parameters = [parameter for page in pages for parameter in page.get("Parameters", [])]
        except NoCredentialsError as e:
            raise StoreCredentialsError(CREDENTIALS_MESSAGE) from e
        except ClientError as e:
            raise _client_error(e, "list") from e

        secrets = [
            RemoteSecret(
                name=self._relative_name(parameter["Name"]),
                updated_at=parameter.get("LastModifiedDate"),
            )
            for parameter in parameters
        ]
        return sorted(secrets, key=lambda secret: secret.name)

    def set_secret(self, name: str, value: str) -> None:
        try:
            self.client.put_parameter(
                Name=self.parameter_name(name),
                Value=value,
                Type="SecureString",
                Overwrite=True,
            )
        except NoCredentialsError as e:
            raise StoreCredentialsError(CREDENTIALS_MESSAGE) from e
        except ClientError as e:
            raise _client_error(e, "set") from e
        logger.debug(f"Stored parameter {self.parameter_name(name)}")

    def delete_secret(self, name: str) -> bool:
        try:
            self.client.delete_parameter(Name=self.parameter_name(name))
        except NoCredentialsError as e:
            raise StoreCredentialsError(CREDENTIALS_MESSAGE) from e
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") == "ParameterNotFound":
                return False
            raise _client_error(e, "delete") from e
        return True

    def _relative_name(self, parameter_name: str) -> str:
        if self.prefix != "/" and parameter_name.startswith(self.prefix + "/"):
            return parameter_name[len(self.prefix) + 1:]
        return parameter_name.lstrip("/")
