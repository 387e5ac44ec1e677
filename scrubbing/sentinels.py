"""
Sentinels - Fixed placeholder strings emitted by the redaction pipeline.

Every placeholder is chosen so that it is never itself matched by a built-in
pattern, which keeps scrubbing idempotent.
"""

REDACTED = "[REDACTED]"
REDACTED_JWT = "[REDACTED:JWT]"
REDACTED_PRIVATE_KEY = "[REDACTED:PRIVATE_KEY]"

CIRCULAR = "[CIRCULAR]"
TRUNCATED = "[TRUNCATED]"

SCRUBBING_FAILED = "[SCRUBBING_FAILED]"
INPUT_TOO_LARGE = "[SCRUBBING_FAILED:INPUT_TOO_LARGE]"

# Hard ceiling on text handed to the pattern engine
MAX_INPUT_LENGTH = 50_000
