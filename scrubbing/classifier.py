"""
KeyClassifier - Decides from a field name alone whether its value is secret.

Resolution order (first hit wins):
    1. built-in whitelist set or a user whitelist glob  -> WHITELISTED
    2. built-in sensitive set or a user sensitive glob  -> SENSITIVE
    3. name contains password/secret/token/key          -> SENSITIVE
    4. anything else                                    -> NEUTRAL

Whitelisting is final, so an allow-listed name such as `skipSecrets` is never
redacted even though it contains "secret".
"""

import fnmatch
import re
from enum import Enum
from typing import Iterable, Pattern


class KeyClassification(Enum):
    SENSITIVE = "sensitive"
    WHITELISTED = "whitelisted"
    NEUTRAL = "neutral"


# Case-insensitive exact-match sets (stored lowercase)
SENSITIVE_KEYS = frozenset({
    "password", "passwd", "pwd",
    "secret", "api_key", "apikey", "api_secret",
    "token", "auth", "authorization", "auth_token",
    "private_key", "access_key", "secret_key",
    "database_url", "db_url", "db_password",
    "client_secret", "client_id",
    "aws_secret_access_key", "aws_access_key_id", "aws_session_token",
    "github_token", "gh_token",
    "stripe_secret_key", "stripe_api_key",
})

WHITELIST_KEYS = frozenset({
    "debug", "node_env", "python_env", "port",
    "host", "hostname", "path",
    "log_level", "verbose",
    "secrets_sync_timeout", "secrets_sync_mock",
    "skipsecrets", "skip_secrets", "skip-secrets",
})

SENSITIVE_SUBSTRINGS = ("password", "secret", "token", "key")


def compile_glob(pattern: str) -> Pattern[str]:
    """Compile a glob such as `CUSTOM_*` into a case-insensitive full-name matcher."""
    return re.compile(fnmatch.translate(pattern), re.IGNORECASE)


class KeyClassifier:
    """
    Classifies variable and field names.

    User globs are append-only: add_patterns() extends the sets loaded so far
    and nothing removes them for the rest of the process.

    Example:
        classifier = KeyClassifier(sensitive_patterns=["CUSTOM_*"])
        classifier.classify("CUSTOM_VALUE")   # KeyClassification.SENSITIVE
        classifier.classify("skipSecrets")    # KeyClassification.WHITELISTED
        classifier.classify("region")         # KeyClassification.NEUTRAL
    """

    def __init__(
        self,
        sensitive_patterns: Iterable[str] = (),
        whitelist_patterns: Iterable[str] = (),
    ):
        self._sensitive: dict[str, Pattern[str]] = {}
        self._whitelist: dict[str, Pattern[str]] = {}
        self.add_patterns(sensitive_patterns, whitelist_patterns)

    def add_patterns(
        self,
        sensitive_patterns: Iterable[str] = (),
        whitelist_patterns: Iterable[str] = (),
    ) -> None:
        """Append user globs. Blank and non-string entries are skipped."""
        for target, patterns in ((self._sensitive, sensitive_patterns),
                                 (self._whitelist, whitelist_patterns)):
            for pattern in patterns:
                if isinstance(pattern, str) and pattern.strip() and pattern not in target:
                    target[pattern] = compile_glob(pattern.strip())

    @property
    def sensitive_patterns(self) -> tuple[str, ...]:
        return tuple(self._sensitive)

    @property
    def whitelist_patterns(self) -> tuple[str, ...]:
        return tuple(self._whitelist)

    def classify(self, name) -> KeyClassification:
        if not isinstance(name, str) or not name:
            return KeyClassification.NEUTRAL

        lower = name.lower()

        if lower in WHITELIST_KEYS or self._matches(self._whitelist, name):
            return KeyClassification.WHITELISTED

        if lower in SENSITIVE_KEYS or self._matches(self._sensitive, name):
            return KeyClassification.SENSITIVE

        if any(fragment in lower for fragment in SENSITIVE_SUBSTRINGS):
            return KeyClassification.SENSITIVE

        return KeyClassification.NEUTRAL

    def is_sensitive(self, name) -> bool:
        return self.classify(name) is KeyClassification.SENSITIVE

    @staticmethod
    def _matches(globs: dict[str, Pattern[str]], name: str) -> bool:
        return any(glob.match(name) for glob in globs.values())
