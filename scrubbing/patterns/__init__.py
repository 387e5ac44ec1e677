"""
Pattern Profiles Package

This package contains the detector profiles loaded into the PatternEngine.

Available profiles:
    - builtin: KEY=value assignments, URL credentials, JWTs, PEM blocks
      (always loaded, always first)
    - pii: e-mail addresses via scrubadub (opt-in through the policy file)

To add a new profile:
    1. Create a new file (e.g., stripe.py)
    2. Subclass PatternProfile
    3. Implement get_patterns() with your SecretPatterns
    4. Register it with engine.load_profile()
"""

from .builtin import BUILTIN_PATTERNS, DEFAULT_PROFILE, BuiltinSecretsProfile
from .pii import PiiProfile

__all__ = ["BUILTIN_PATTERNS", "BuiltinSecretsProfile", "DEFAULT_PROFILE", "PiiProfile"]
