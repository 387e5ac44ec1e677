"""
OutputInterceptor - Routes every process output channel through the pipeline.

Intercepted entry points (an explicit list; anything new must be added here):
    - sys.stdout / sys.stderr: write, writelines, flush
    - sys.stdout.buffer / sys.stderr.buffer: write, writelines
    - logging: every LogRecord, through the record factory, before formatting
    - sys.excepthook: uncaught exception tracebacks

Installation is one-way (UNINSTALLED -> INSTALLING -> INSTALLED) and
idempotent: a second install, or a second interceptor finding channels that
are already wrapped, is a no-op rather than another wrapping layer.
"""

import logging
import sys
import traceback
from collections.abc import Mapping
from enum import Enum
from typing import Any, Callable, Optional

from .pipeline import RedactionPipeline, get_default_pipeline
from .sentinels import MAX_INPUT_LENGTH, SCRUBBING_FAILED

CHANNELS = ("stdout", "stderr", "logging", "excepthook")

# Partial lines longer than this are forwarded up to their last whitespace
PENDING_LIMIT = 8192

PEM_BEGIN = "-----BEGIN "
PEM_END = "-----END "


class InterceptionStatus(Enum):
    UNINSTALLED = "uninstalled"
    INSTALLING = "installing"
    INSTALLED = "installed"


class InterceptionState:
    """Install status plus which channels have been patched."""

    def __init__(self):
        self.status = InterceptionStatus.UNINSTALLED
        self.channels: dict[str, bool] = {name: False for name in CHANNELS}

    @property
    def installed(self) -> bool:
        return self.status is InterceptionStatus.INSTALLED

    def __repr__(self) -> str:
        patched = ", ".join(name for name, done in self.channels.items() if done)
        return f"<InterceptionState: {self.status.value} [{patched}]>"


# Process-wide; created once, never reset
INTERCEPTION_STATE = InterceptionState()


def _safe_scrub(scrub: Callable[[str], str], text: str) -> str:
    try:
        result = scrub(text)
    except Exception:
        return SCRUBBING_FAILED
    return result if isinstance(result, str) else SCRUBBING_FAILED


def _open_pem_start(text: str) -> Optional[int]:
    """Start of the line holding a PEM BEGIN marker with no END after it."""
    begin = text.rfind(PEM_BEGIN)
    if begin == -1 or text.find(PEM_END, begin) != -1:
        return None
    return text.rfind("\n", 0, begin) + 1


class ScrubbingByteStream:
    """Scrubs byte writes that are valid text in the stream encoding."""

    def __init__(self, raw, scrub: Callable[[str], str], encoding: str,
                 before_write: Optional[Callable[[], None]] = None):
        self._raw = raw
        self._scrub = scrub
        self._encoding = encoding
        self._before_write = before_write

    def write(self, data) -> int:
        if self._before_write is not None:
            self._before_write()

        payload = bytes(data)
        try:
            text = payload.decode(self._encoding)
            round_trips = text.encode(self._encoding) == payload
        except (UnicodeError, LookupError):
            round_trips = False

        if not round_trips:
            # Binary data is forwarded untouched
            return self._raw.write(data)

        self._raw.write(_safe_scrub(self._scrub, text).encode(self._encoding, "replace"))
        return len(payload)

    def writelines(self, chunks) -> None:
        for chunk in chunks:
            self.write(chunk)

    def __getattr__(self, name: str) -> Any:
        return getattr(self._raw, name)


class ScrubbingTextStream:
    """
    Line-buffering text stream wrapper.

    Complete lines are scrubbed together, so a line assembled from several
    write() calls (print("API_KEY=" + key[:4], end=""), then print(key[4:]))
    is still scrubbed as one line. Lines from an unterminated PEM block are
    held until its END line arrives, so the block is scrubbed whole.

    Partial lines are forwarded on flush(), or up to their last whitespace
    once they exceed PENDING_LIMIT. Nothing is held past MAX_INPUT_LENGTH;
    beyond that the scrubber's size sentinel is forwarded instead.
    """

    def __init__(self, stream, scrub: Callable[[str], str]):
        self._stream = stream
        self._scrub = scrub
        self._pending = ""

        raw_buffer = getattr(stream, "buffer", None)
        if raw_buffer is not None:
            encoding = getattr(stream, "encoding", None) or "utf-8"
            self.buffer = ScrubbingByteStream(raw_buffer, scrub, encoding, before_write=self._drain)

    @property
    def wrapped(self):
        return self._stream

    def write(self, text: str) -> int:
        if not isinstance(text, str):
            raise TypeError(f"write() argument must be str, not {type(text).__name__}")

        self._pending += text
        self._release()
        return len(text)

    def writelines(self, lines) -> None:
        for line in lines:
            self.write(line)

    def flush(self) -> None:
        self._drain()
        self._stream.flush()

    def close(self) -> None:
        self._drain()
        self._stream.close()

    def _release(self) -> None:
        """Forward the pending text that can be scrubbed without splitting a secret."""
        pending = self._pending
        if len(pending) > MAX_INPUT_LENGTH:
            self._drain()
            return

        cut = pending.rfind("\n") + 1
        pem_start = _open_pem_start(pending)
        if pem_start is not None:
            cut = min(cut, pem_start)
        elif len(pending) - cut > PENDING_LIMIT:
            # KEY=value and token patterns never span whitespace
            cut = max(pending.rfind(" "), pending.rfind("\t"), cut - 1) + 1

        if cut:
            self._pending = pending[cut:]
            self._stream.write(_safe_scrub(self._scrub, pending[:cut]))

    def _drain(self) -> None:
        if self._pending:
            pending, self._pending = self._pending, ""
            self._stream.write(_safe_scrub(self._scrub, pending))

    def __getattr__(self, name: str) -> Any:
        return getattr(self._stream, name)


def redact_log_record(record: logging.LogRecord, pipeline: RedactionPipeline) -> logging.LogRecord:
    """
    Redact a record's message and arguments in place, before formatting.

    Arguments are redacted before getMessage(): once a dict is interpolated
    into the message its sensitive fields are plain text and key names are
    lost. The template itself is scrubbed only after interpolation, since
    scrubbing "API_KEY=%s" would consume its placeholder.

    The traceback is rendered into exc_text here, scrubbed as one block, so
    handlers that never touch the wrapped streams (FileHandler, SysLogHandler)
    reuse the scrubbed text instead of formatting exc_info themselves.
    """
    def redact(value):
        if isinstance(value, str):
            return pipeline.scrub_text(value)
        return pipeline.scrub_structure(value)

    if isinstance(record.exc_info, tuple) and not record.exc_text:
        # Same text logging.Formatter.formatException() produces
        text = "".join(traceback.format_exception(*record.exc_info)).rstrip("\n")
        record.exc_text = _safe_scrub(pipeline.scrub_text, text)
    elif record.exc_text:
        record.exc_text = _safe_scrub(pipeline.scrub_text, record.exc_text)

    if record.stack_info:
        record.stack_info = _safe_scrub(pipeline.scrub_text, record.stack_info)

    if isinstance(record.args, Mapping):
        record.args = pipeline.scrub_structure(dict(record.args))
    elif isinstance(record.args, tuple):
        record.args = tuple(redact(arg) for arg in record.args)

    if record.args:
        try:
            message = record.getMessage()
        except (TypeError, ValueError, KeyError):
            # Left for logging to report as a formatting error
            message = None
        if message is not None:
            record.msg, record.args = pipeline.scrub_text(message), ()
            return record

    record.msg = redact(record.msg)
    return record


class OutputInterceptor:
    """
    Installs the pipeline in front of the process output channels.

    Example:
        interceptor = OutputInterceptor()
        interceptor.install()   # True
        interceptor.install()   # False, already installed
        print("API_KEY=sk_live_abc123")
        # API_KEY=[REDACTED]
    """

    def __init__(self, pipeline: Optional[RedactionPipeline] = None,
                 state: Optional[InterceptionState] = None):
        self.pipeline = pipeline or get_default_pipeline()
        self.state = state if state is not None else INTERCEPTION_STATE
        self._originals: dict[str, Any] = {}

    @property
    def installed(self) -> bool:
        return self.state.installed

    def original(self, channel: str) -> Any:
        """The pre-interception handle this interceptor replaced, if any."""
        return self._originals.get(channel)

    def install(self) -> bool:
        """
        Patch every channel. Returns False when already installed; if a
        channel cannot be patched the state stays uninstalled and the error
        propagates.
        """
        if self.state.status is not InterceptionStatus.UNINSTALLED:
            return False

        self.state.status = InterceptionStatus.INSTALLING
        try:
            self._patch_stream("stdout")
            self._patch_stream("stderr")
            self._patch_logging()
            self._patch_excepthook()
        except BaseException:
            # Channels already patched stay wrapped; a retry skips them
            self.state.status = InterceptionStatus.UNINSTALLED
            raise
        self.state.status = InterceptionStatus.INSTALLED
        return True

    def _patch_stream(self, channel: str) -> None:
        current = getattr(sys, channel)
        if current is None:
            return
        if isinstance(current, ScrubbingTextStream):
            self.state.channels[channel] = True
            return

        self._originals[channel] = current
        wrapper = ScrubbingTextStream(current, self.pipeline.scrub_text)
        setattr(sys, channel, wrapper)
        self.state.channels[channel] = True

    def _patch_logging(self) -> None:
        previous = logging.getLogRecordFactory()
        if getattr(previous, "_scrubbing_interceptor", False):
            self.state.channels["logging"] = True
            return

        pipeline = self.pipeline

        def record_factory(*args, **kwargs):
            record = previous(*args, **kwargs)
            return redact_log_record(record, pipeline)

        record_factory._scrubbing_interceptor = True
        self._originals["logging"] = previous
        logging.setLogRecordFactory(record_factory)
        self.state.channels["logging"] = True

    def _patch_excepthook(self) -> None:
        previous = sys.excepthook
        if getattr(previous, "_scrubbing_interceptor", False):
            self.state.channels["excepthook"] = True
            return

        scrub = self.pipeline.scrub_text

        def excepthook(exc_type, exc, tb):
            # Format the whole traceback first so multi-line secrets are
            # scrubbed as one block
            text = "".join(traceback.format_exception(exc_type, exc, tb))
            stream = sys.stderr
            if stream is None:
                return
            stream.write(_safe_scrub(scrub, text))
            stream.flush()

        excepthook._scrubbing_interceptor = True
        self._originals["excepthook"] = previous
        sys.excepthook = excepthook
        self.state.channels["excepthook"] = True


_default_interceptor: Optional[OutputInterceptor] = None


def get_interceptor() -> OutputInterceptor:
    """Get the process-wide OutputInterceptor (bound to the default pipeline)."""
    global _default_interceptor
    if _default_interceptor is None:
        _default_interceptor = OutputInterceptor()
    return _default_interceptor


def install() -> bool:
    """Install the process-wide interceptor. Safe to call from any entry point."""
    return get_interceptor().install()
