"""
PII Profile - Opt-in personal data detection backed by scrubadub.

Enabled with `detectPii: true` in the policy file. Only e-mail addresses are
detected; scrubadub's default detector set (names, URLs, phone numbers) is too
aggressive for configuration output and would rewrite credentialed URLs that
the built-in profile already handles.
"""

from ..base_pattern import PatternProfile, SecretPattern


class PiiProfile(PatternProfile):
    """E-mail addresses, replaced by scrubadub with {{EMAIL}}."""

    @property
    def name(self) -> str:
        return "pii"

    @property
    def description(self) -> str:
        return "Personal data detected by scrubadub (e-mail addresses)"

    def get_patterns(self) -> list[SecretPattern]:
        return []

    def get_scrubadub_detectors(self) -> list:
        # Imported here so scrubadub's import-time side effects only happen
        # once the output interceptor is installed.
        import scrubadub.detectors

        return [scrubadub.detectors.EmailDetector]
