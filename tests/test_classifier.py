"""
Tests for the KeyClassifier.

Tests cover:
- Built-in sensitive and whitelisted names
- Substring heuristics
- Whitelist precedence (skipSecrets)
- User globs from the policy file
"""

import pytest

from scrubbing import KeyClassification, KeyClassifier


class TestBuiltinNames:
    """Test suite for the built-in name sets."""

    @pytest.mark.parametrize("name", ["password", "API_KEY", "Authorization", "client_id", "aws_session_token"])
    def test_sensitive_names(self, name):
        """Should flag well-known credential names in any case."""
        assert KeyClassifier().classify(name) is KeyClassification.SENSITIVE

    @pytest.mark.parametrize("name", ["PORT", "debug", "NODE_ENV", "hostname", "LOG_LEVEL"])
    def test_whitelisted_names(self, name):
        """Should allow-list configuration names that are never secret."""
        assert KeyClassifier().classify(name) is KeyClassification.WHITELISTED

    @pytest.mark.parametrize("name", ["region", "timeout", "retries", "user"])
    def test_neutral_names(self, name):
        """Should leave everything else neutral."""
        assert KeyClassifier().classify(name) is KeyClassification.NEUTRAL

    @pytest.mark.parametrize("name", ["STRIPE_WEBHOOK_SECRET", "refreshToken", "SSH_KEY_PATH", "mysql_password"])
    def test_substring_heuristics(self, name):
        """Should flag names containing password/secret/token/key."""
        assert KeyClassifier().is_sensitive(name) is True

    def test_non_string_names_are_neutral(self):
        """Should treat non-string and empty names as neutral."""
        classifier = KeyClassifier()

        assert classifier.classify(42) is KeyClassification.NEUTRAL
        assert classifier.classify(None) is KeyClassification.NEUTRAL
        assert classifier.classify("") is KeyClassification.NEUTRAL


class TestWhitelistPrecedence:
    """Test suite for whitelist-over-sensitive resolution."""

    @pytest.mark.parametrize("name", ["skipSecrets", "SKIP_SECRETS", "skip-secrets"])
    def test_skip_secrets_is_whitelisted(self, name):
        """Should never flag skipSecrets even though it contains 'secret'."""
        assert KeyClassifier().classify(name) is KeyClassification.WHITELISTED

    def test_whitelist_glob_beats_builtin_sensitive(self):
        """Should let a user whitelist glob override a built-in sensitive name."""
        classifier = KeyClassifier(whitelist_patterns=["PUBLIC_*"])

        assert classifier.classify("PUBLIC_API_KEY") is KeyClassification.WHITELISTED
        assert classifier.classify("PRIVATE_API_KEY") is KeyClassification.SENSITIVE

    def test_whitelist_glob_beats_sensitive_glob(self):
        """Should prefer the whitelist when both globs match."""
        classifier = KeyClassifier(sensitive_patterns=["APP_*"], whitelist_patterns=["APP_NAME"])

        assert classifier.classify("APP_NAME") is KeyClassification.WHITELISTED
        assert classifier.classify("APP_PIN") is KeyClassification.SENSITIVE


class TestUserGlobs:
    """Test suite for policy-supplied globs."""

    def test_globs_are_case_insensitive(self):
        """Should match globs regardless of case."""
        classifier = KeyClassifier(sensitive_patterns=["CUSTOM_*"])

        assert classifier.classify("custom_value") is KeyClassification.SENSITIVE

    def test_glob_matches_whole_name(self):
        """Should not match a glob against part of a name."""
        classifier = KeyClassifier(sensitive_patterns=["PIN"])

        assert classifier.classify("PIN") is KeyClassification.SENSITIVE
        assert classifier.classify("SHIPPING") is KeyClassification.NEUTRAL

    def test_add_patterns_is_append_only(self):
        """Should extend, dedupe and never drop earlier globs."""
        classifier = KeyClassifier(sensitive_patterns=["A_*"])
        classifier.add_patterns(sensitive_patterns=["B_*", "A_*"])

        assert classifier.sensitive_patterns == ("A_*", "B_*")
        assert classifier.is_sensitive("A_X") and classifier.is_sensitive("B_X")

    def test_blank_and_non_string_globs_skipped(self):
        """Should ignore malformed entries."""
        classifier = KeyClassifier(sensitive_patterns=["", "   ", 5, None, "OK_*"])

        assert classifier.sensitive_patterns == ("OK_*",)
