"""
Scrubbing - Secret redaction pipeline for Secrets Sync

This package guarantees that secret values never reach a terminal, log file
or crash dump unredacted.

Architecture:
    - PatternEngine: applies pattern profiles (KEY=value, URL credentials,
      JWTs, PEM blocks, optional scrubadub PII) to text
    - KeyClassifier: sensitive / whitelisted / neutral verdicts for names
    - TextScrubber: length ceiling, hash-keyed LRU cache, failure sentinels
    - StructuralRedactor: cycle-safe redaction of nested data
    - OutputInterceptor: wraps stdout, stderr, logging and sys.excepthook
    - bootstrap: loads the policy and installs the interceptor on import

Example:
    from scrubbing import scrub_text, scrub_structure

    scrub_text("API_KEY=sk_live_abc123")
    # "API_KEY=[REDACTED]"

    scrub_structure({"password": "x", "port": 3000})
    # {"password": "[REDACTED]", "port": 3000}

Importing this package has no side effects; entry points import
`scrubbing.bootstrap` first to activate interception.
"""

from .base_pattern import PatternProfile, SecretPattern
from .cache import ResultCache, hash_input
from .classifier import KeyClassification, KeyClassifier
from .engine import PatternEngine, TextScrubber
from .pipeline import RedactionPipeline, get_default_pipeline, scrub_structure, scrub_text
from .policy import Policy, load_policy
from .sentinels import (
    CIRCULAR,
    INPUT_TOO_LARGE,
    MAX_INPUT_LENGTH,
    REDACTED,
    REDACTED_JWT,
    REDACTED_PRIVATE_KEY,
    SCRUBBING_FAILED,
    TRUNCATED,
)
from .structural import StructuralRedactor

__all__ = [
    "CIRCULAR",
    "INPUT_TOO_LARGE",
    "KeyClassification",
    "KeyClassifier",
    "MAX_INPUT_LENGTH",
    "PatternEngine",
    "PatternProfile",
    "Policy",
    "REDACTED",
    "REDACTED_JWT",
    "REDACTED_PRIVATE_KEY",
    "RedactionPipeline",
    "ResultCache",
    "SCRUBBING_FAILED",
    "SecretPattern",
    "StructuralRedactor",
    "TRUNCATED",
    "TextScrubber",
    "get_default_pipeline",
    "hash_input",
    "load_policy",
    "scrub_structure",
    "scrub_text",
]
