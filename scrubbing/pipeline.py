"""
RedactionPipeline - Wires classifier, engine, cache, scrubber and redactor.

The module-level scrub_text() / scrub_structure() functions use a single
process-wide pipeline, which is also the one the output interceptor installs.
"""

from typing import Any, Optional

from .cache import ResultCache
from .classifier import KeyClassifier
from .engine import PatternEngine, TextScrubber
from .patterns import PiiProfile
from .policy import Policy
from .sentinels import SCRUBBING_FAILED
from .structural import StructuralRedactor


class RedactionPipeline:
    """
    Example:
        pipeline = RedactionPipeline()
        pipeline.scrub_text("API_KEY=sk_live_abc123")     # "API_KEY=[REDACTED]"
        pipeline.scrub_structure({"skipSecrets": 5})      # {"skipSecrets": 5}
    """

    def __init__(self, policy: Optional[Policy] = None):
        self.classifier = KeyClassifier()
        self.engine = PatternEngine(self.classifier)
        self.cache = ResultCache()
        self.scrubber = TextScrubber(self.engine, self.cache)
        self.redactor = StructuralRedactor(self.classifier, self.scrubber)

        if policy is not None:
            self.apply_policy(policy)

    def apply_policy(self, policy: Policy) -> None:
        """
        Append the policy's name globs to the classifier.

        Cached results were computed under the previous globs, so the cache
        is cleared. PII detection is enabled separately (enable_pii) because
        it imports scrubadub.
        """
        self.classifier.add_patterns(policy.sensitive_patterns, policy.whitelist_patterns)
        self.cache.clear()

    def enable_pii(self) -> None:
        if "pii" not in self.engine.list_profiles():
            self.engine.load_profile(PiiProfile())
            self.cache.clear()

    def scrub_text(self, text):
        return self.scrubber.scrub(text)

    def scrub_structure(self, value: Any) -> Any:
        try:
            return self.redactor.redact(value)
        except Exception:
            return SCRUBBING_FAILED


_default_pipeline: Optional[RedactionPipeline] = None


def get_default_pipeline() -> RedactionPipeline:
    """Get the process-wide RedactionPipeline instance."""
    global _default_pipeline
    if _default_pipeline is None:
        _default_pipeline = RedactionPipeline()
    return _default_pipeline


def scrub_text(text: str) -> str:
    """Scrub secrets from a string using the process-wide pipeline."""
    return get_default_pipeline().scrub_text(text)


def scrub_structure(value: Any) -> Any:
    """Redact secrets from nested data using the process-wide pipeline."""
    return get_default_pipeline().scrub_structure(value)
