"""
StructuralRedactor - Cycle-safe redaction of nested data.

Walks dicts, lists, tuples and dataclass instances and returns a new value:
    - field names classified SENSITIVE have their whole value replaced
    - string leaves go through the TextScrubber
    - opaque built-ins (timestamps, byte buffers, regexes, exceptions, sets)
      are returned as-is
    - an object already on the current recursion path becomes [CIRCULAR]

The input is never mutated.
"""

import dataclasses
import datetime
import re
from collections.abc import Mapping
from typing import Any, Optional

from .classifier import KeyClassification, KeyClassifier
from .engine import TextScrubber
from .sentinels import CIRCULAR, REDACTED, TRUNCATED

# Closed set of types returned without traversal
OPAQUE_TYPES = (
    datetime.date,  # includes datetime.datetime
    datetime.time,
    datetime.timedelta,
    bytes,
    bytearray,
    memoryview,
    re.Pattern,
    BaseException,
    set,
    frozenset,
)

MAX_DEPTH = 100


class StructuralRedactor:
    """
    Example:
        redactor = StructuralRedactor(classifier, scrubber)
        redactor.redact({"password": "x", "port": 3000})
        # {"password": "[REDACTED]", "port": 3000}

        a = {}
        a["a"] = a
        redactor.redact(a)
        # {"a": "[CIRCULAR]"}
    """

    def __init__(self, classifier: KeyClassifier, scrubber: TextScrubber, max_depth: int = MAX_DEPTH):
        self.classifier = classifier
        self.scrubber = scrubber
        self.max_depth = max_depth

    def redact(self, value: Any, path: Optional[set[int]] = None) -> Any:
        if isinstance(value, str):
            return self.scrubber.scrub(value)

        if isinstance(value, OPAQUE_TYPES) or not self._is_container(value):
            return value

        if path is None:
            path = set()

        marker = id(value)
        if marker in path:
            return CIRCULAR
        if len(path) >= self.max_depth:
            return TRUNCATED

        path.add(marker)
        try:
            return self._redact_container(value, path)
        finally:
            path.discard(marker)

    @staticmethod
    def _is_container(value: Any) -> bool:
        if isinstance(value, (Mapping, list, tuple)):
            return True
        return dataclasses.is_dataclass(value) and not isinstance(value, type)

    def _redact_container(self, value: Any, path: set[int]) -> Any:
        if isinstance(value, Mapping):
            return {key: self._redact_field(key, item, path) for key, item in value.items()}

        if isinstance(value, list):
            return [self._redact_item(item, path) for item in value]

        if isinstance(value, tuple):
            items = [self._redact_item(item, path) for item in value]
            if hasattr(value, "_fields"):  # namedtuple
                return type(value)(*items)
            return tuple(items)

        return self._redact_dataclass(value, path)

    def _redact_item(self, item: Any, path: set[int]) -> Any:
        if isinstance(item, str):
            return self.scrubber.scrub(item)
        return self.redact(item, path)

    def _redact_field(self, key: Any, item: Any, path: set[int]) -> Any:
        if self.classifier.classify(key) is KeyClassification.SENSITIVE:
            return REDACTED
        return self.redact(item, path)

    def _redact_dataclass(self, value: Any, path: set[int]) -> Any:
        fields = dataclasses.fields(value)
        redacted = {
            field.name: self._redact_field(field.name, getattr(value, field.name), path)
            for field in fields
        }
        if all(field.init for field in fields):
            try:
                return dataclasses.replace(value, **redacted)
            except (TypeError, ValueError):
                pass
        # Not reconstructible (init=False fields or validating __post_init__)
        return redacted
