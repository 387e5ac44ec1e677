"""
Block splitting for scrubbing text longer than the input ceiling.

scrub_text() refuses input above MAX_INPUT_LENGTH outright. Callers that need
to redact large files (the `scrub` command) split them here into line-aligned
blocks that each fit under the ceiling.
"""

from typing import Iterator, Optional

from .sentinels import MAX_INPUT_LENGTH, REDACTED_PRIVATE_KEY


def iter_scrub_blocks(text: str, limit: int = MAX_INPUT_LENGTH) -> Iterator[str]:
    """
    Split text into line-aligned blocks no longer than limit.

    A PEM block is never split across blocks; one that alone exceeds the
    limit is replaced by the private key placeholder.
    """
    if len(text) <= limit:
        yield text
        return

    block: list[str] = []
    size = 0
    pem_start: Optional[int] = None
    skipping_pem = False

    for line in text.splitlines(keepends=True):
        if skipping_pem:
            if "-----END " in line:
                skipping_pem = False
                yield REDACTED_PRIVATE_KEY + ("\n" if line.endswith("\n") else "")
            continue

        if block and size + len(line) > limit:
            if pem_start is None:
                yield "".join(block)
                block, size = [], 0
            else:
                if pem_start > 0:
                    yield "".join(block[:pem_start])
                    block = block[pem_start:]
                    size = sum(len(item) for item in block)
                    pem_start = 0
                if size + len(line) > limit:
                    block, size, pem_start = [], 0, None
                    if "-----END " in line:
                        yield REDACTED_PRIVATE_KEY + ("\n" if line.endswith("\n") else "")
                    else:
                        skipping_pem = True
                    continue

        if pem_start is None and "-----BEGIN " in line:
            pem_start = len(block)
        block.append(line)
        size += len(line)
        if pem_start is not None and "-----END " in line:
            pem_start = None

    if skipping_pem:
        yield REDACTED_PRIVATE_KEY
    if block:
        yield "".join(block)
