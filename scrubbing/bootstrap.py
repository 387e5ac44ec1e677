"""
Bootstrap - Import this module before anything else in an entry point.

Importing it:
    1. loads the user policy (env-config.yml) into the default pipeline
    2. installs the output interceptor on stdout, stderr, logging and
       sys.excepthook
    3. enables scrubadub PII detection if the policy asks for it

Steps 1 and 2 complete before any other application module is imported, so
nothing another module prints or logs at import time can bypass redaction.
Importing it again (or from a second entry point) is a no-op.
"""

from .interceptor import get_interceptor
from .pipeline import get_default_pipeline
from .policy import load_policy

policy = load_policy()
pipeline = get_default_pipeline()
pipeline.apply_policy(policy)

get_interceptor().install()

if policy.detect_pii:
    pipeline.enable_pii()
