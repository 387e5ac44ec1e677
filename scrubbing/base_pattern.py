"""
Base Pattern Profile - Abstract base class for secret detection rules.

Extend this class to group detectors that belong together. For example:
    - builtin.py for credentials that show up in env files and logs
    - pii.py for personal data detected through scrubadub

Each profile defines:
    - name: Unique identifier for the profile
    - description: Human-readable description
    - get_patterns(): Returns SecretPatterns, applied in list order
    - get_scrubadub_detectors(): Optional scrubadub detectors
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Pattern


@dataclass(frozen=True)
class SecretPattern:
    """A single secret detector definition."""
    name: str  # e.g., "key_value", "jwt"
    pattern: Pattern[str]  # Compiled regex pattern
    replacement: str  # Template for re.sub, e.g. r"\g<key>=[REDACTED]"
    description: str = ""  # Human-readable description
    # Named group holding an identifier; the match is only replaced when the
    # key classifier says that identifier is sensitive.
    key_group: Optional[str] = None


class PatternProfile(ABC):
    """
    Abstract base class for pattern profiles.

    Subclass this to add detectors without modifying the PatternEngine.

    Example:
        class StripeProfile(PatternProfile):
            @property
            def name(self) -> str:
                return "stripe"

            @property
            def description(self) -> str:
                return "Stripe live keys"

            def get_patterns(self) -> list[SecretPattern]:
                return [
                    SecretPattern(
                        name="stripe_live_key",
                        pattern=re.compile(r'sk_live_[A-Za-z0-9]{24}'),
                        replacement="[REDACTED:STRIPE]",
                    ),
                ]
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique identifier for this profile (e.g., 'builtin', 'pii')."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable description of what this profile covers."""
        pass

    @abstractmethod
    def get_patterns(self) -> list[SecretPattern]:
        """
        Return the SecretPatterns to apply, in application order.

        Patterns must be compiled once (at module load), not on every call.
        """
        pass

    def get_scrubadub_detectors(self) -> list:
        """
        Optional: Return scrubadub Detector classes.

        These run after every profile's patterns. By default, returns an empty
        list so scrubadub is never imported.
        """
        return []

    def __repr__(self) -> str:
        return f"<PatternProfile: {self.name}>"
