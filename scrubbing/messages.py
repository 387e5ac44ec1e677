"""
Error Message Builder - Actionable, scrubbed error messages.

Every message follows the "what, why, how to fix" format and every field is
passed through scrub_text, since details often embed exception text from
collaborators (paths, AWS error messages, connection strings).
"""

from .pipeline import scrub_text

# ANSI color codes
COLORS = {
    "red": "\x1b[31m",
    "yellow": "\x1b[33m",
    "cyan": "\x1b[36m",
    "reset": "\x1b[0m",
}

# Every message answers: what happened, why, and how to fix it
ERROR_CATALOG = {
    "ERR_FILE_NOT_FOUND": {
        "what": "Cannot find {path}",
        "why": "The file does not exist or the path is misspelled.",
        "how_to_fix": "Check the path, e.g.: ls -la \"{path}\"",
    },
    "ERR_PERMISSION_READ": {
        "what": "Permission denied: cannot read {path}",
        "why": "The current user lacks read permission on the file.",
        "how_to_fix": "Run: chmod 644 \"{path}\"",
    },
    "ERR_STORE_CREDENTIALS": {
        "what": "Cannot reach the {store} secret store",
        "why": "{detail}",
        "how_to_fix": "Export AWS credentials, or set SECRETS_SYNC_MOCK=1 to use the in-memory store.",
    },
    "ERR_STORE_REQUEST": {
        "what": "The {store} secret store rejected the request",
        "why": "{detail}",
        "how_to_fix": "Check the prefix and your IAM permissions, then retry with --verbose.",
    },
    "ERR_EMPTY_VALUE": {
        "what": "No value given for {name}",
        "why": "The value is read from stdin and stdin was empty.",
        "how_to_fix": "Pipe the value in, e.g.: printf %s \"$VALUE\" | secrets-sync remote set {name}",
    },
}


def build_error_message(code: str, **context) -> str:
    """
    Render a catalog entry. Every field is scrubbed before display.

    Raises:
        KeyError: for an unknown code.
    """
    template = ERROR_CATALOG[code]
    what, why, how_to_fix = (
        scrub_text(template[field].format(**context))
        for field in ("what", "why", "how_to_fix")
    )
    return "\n".join([
        f"{COLORS['red']}x {what}{COLORS['reset']}",
        f"   {why}",
        f"   {COLORS['cyan']}{how_to_fix}{COLORS['reset']}",
    ])
