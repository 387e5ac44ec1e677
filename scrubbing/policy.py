"""
Policy Loader - Optional user globs for the key classifier.

Reads `env-config.yml` (or `.yaml`) from the working directory, or the file
named by SECRETS_SYNC_CONFIG:

    scrubbing:
      scrubPatterns: ["CUSTOM_*"]
      whitelistPatterns: ["PUBLIC_*"]
      detectPii: false

Runs before the output interceptor is installed, so it must not print or log.
A missing or malformed file yields the empty policy; start-up never fails here.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Optional, Union

import yaml

CONFIG_FILENAMES = ("env-config.yml", "env-config.yaml")
CONFIG_ENV_VAR = "SECRETS_SYNC_CONFIG"


@dataclass(frozen=True)
class Policy:
    """User additions to the built-in sensitive and whitelist name sets."""
    sensitive_patterns: tuple[str, ...] = ()
    whitelist_patterns: tuple[str, ...] = ()
    detect_pii: bool = False


def _string_list(value: Any) -> tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(item.strip() for item in value if isinstance(item, str) and item.strip())


def parse_policy(document: Any) -> Policy:
    """Build a Policy from a parsed YAML document, ignoring malformed fields."""
    if not isinstance(document, dict):
        return Policy()

    section = document.get("scrubbing")
    if not isinstance(section, dict):
        return Policy()

    detect_pii = section.get("detectPii", False)
    return Policy(
        sensitive_patterns=_string_list(section.get("scrubPatterns")),
        whitelist_patterns=_string_list(section.get("whitelistPatterns")),
        detect_pii=detect_pii if isinstance(detect_pii, bool) else False,
    )


def find_policy_file(search_dirs: Optional[Iterable[Union[str, Path]]] = None) -> Optional[Path]:
    explicit = os.environ.get(CONFIG_ENV_VAR)
    if explicit:
        path = Path(explicit)
        return path if path.is_file() else None

    for directory in search_dirs or (Path.cwd(),):
        for filename in CONFIG_FILENAMES:
            path = Path(directory) / filename
            if path.is_file():
                return path
    return None


def load_policy(search_dirs: Optional[Iterable[Union[str, Path]]] = None) -> Policy:
    """
    Locate and parse the policy file.

    Returns:
        The parsed Policy, or an empty Policy when no file exists or it
        cannot be read or parsed.
    """
    try:
        path = find_policy_file(search_dirs)
        if path is None:
            return Policy()
        with open(path, encoding="utf-8") as handle:
            return parse_policy(yaml.safe_load(handle))
    except (OSError, UnicodeDecodeError, RecursionError, yaml.YAMLError):
        return Policy()
