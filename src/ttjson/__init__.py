"""
Small recursive-descent JSON reader producing a tagged value tree.

Decodes a complete in-memory JSON document into ``Value`` instances in a
single left-to-right pass over the text. Decoding only: there is no encoder.
"""

import logging
import os
import time
from dataclasses import dataclass
from typing import IO
from typing import Any

from ._value import Value
from ._value import ValueType

__version__ = "0.1.0"

logger = logging.getLogger(__name__)

type Position = int

WHITESPACE = " \t\r\n"
NUMBER_CHARS = frozenset("0123456789.eE+-xXabcdefABCDEF")

_SIMPLE_ESCAPES = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")

# Profiling infrastructure - zero-cost when disabled
PROFILE_HOT_PATHS = __debug__ and "TTJSON_PROFILE" in os.environ


@dataclass
class HotPathStats:
    """Statistics for profiling hot paths during parsing."""

    function_name: str
    call_count: int = 0
    total_time_ns: int = 0
    chars_processed: int = 0

    def record_call(self, duration_ns: int, chars: int = 0) -> None:
        """Records a call with its timing and characters processed."""
        self.call_count += 1
        self.total_time_ns += duration_ns
        self.chars_processed += chars


if PROFILE_HOT_PATHS:
    _hot_path_stats: dict[str, HotPathStats] = {}

    class ProfileContext:
        """
        Context manager for profiling hot paths.

        Characters processed are the distance the parser cursor moved
        between entering and leaving the block.
        """

        def __init__(self, func_name: str, parser: "Parser") -> None:
            self.func_name = func_name
            self.parser = parser
            self.start_pos = 0
            self.start_time = 0

        def __enter__(self) -> "ProfileContext":
            self.start_pos = self.parser.pos
            self.start_time = time.perf_counter_ns()
            return self

        def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
            duration = time.perf_counter_ns() - self.start_time
            chars = self.parser.pos - self.start_pos
            if self.func_name not in _hot_path_stats:
                _hot_path_stats[self.func_name] = HotPathStats(self.func_name)
            _hot_path_stats[self.func_name].record_call(duration, chars)

    def get_hot_path_stats() -> dict[str, HotPathStats]:
        """Returns current profiling statistics."""
        return _hot_path_stats.copy()

    def clear_hot_path_stats() -> None:
        """Clears profiling statistics."""
        _hot_path_stats.clear()

else:

    class ProfileContext:  # type: ignore[no-redef]
        def __init__(self, func_name: str, parser: "Parser") -> None:
            pass

        def __enter__(self) -> "ProfileContext":
            return self

        def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
            pass

    def get_hot_path_stats() -> dict[str, HotPathStats]:
        return {}

    def clear_hot_path_stats() -> None:
        pass


class ParseError(ValueError):
    """
    Raised when the input is not well-formed JSON.

    Carries the cursor offset, the character that was expected (if a
    specific one was) and the character actually found (``None`` at the end
    of the input), plus line and column numbers computed from the offset.
    """

    def __init__(
        self,
        msg: str,
        doc: str = "",
        pos: Position = 0,
        expected: str | None = None,
        actual: str | None = None,
    ) -> None:
        if not isinstance(msg, str):
            raise TypeError("msg must be a string")
        if not isinstance(pos, int) or pos < 0:
            raise ValueError("pos must be a non-negative integer")

        self.msg = msg
        self.doc = doc
        self.pos = pos
        self.expected = expected
        self.actual = actual

        self.lineno = doc.count("\n", 0, pos) + 1 if doc else 1
        self.colno = pos - doc.rfind("\n", 0, pos) if doc else pos + 1

        super().__init__(
            f"{msg} at line {self.lineno}, column {self.colno} (char {pos})"
        )


class Parser:
    """
    Single-pass recursive-descent parser over one text buffer.

    The cursor only moves forward; every loop in the consume routines either
    advances it or raises, so parsing always terminates. Calling ``parse``
    again restarts from offset 0.
    """

    def __init__(self, text: str) -> None:
        if not isinstance(text, str):
            raise TypeError(
                f"the JSON text must be str, not {type(text).__name__}"
            )
        self.text = text
        self.pos: Position = 0
        self.length = len(text)

    def parse(self) -> Value:
        """Parses one value from the start of the text."""
        self.pos = 0
        self.skip_whitespace()
        return self.consume_value()

    def peek(self, expected: str | None = None) -> str:
        """Returns the current character, failing at the end of the input."""
        if self.pos >= self.length:
            raise ParseError(
                "Unexpected end of input",
                self.text,
                self.pos,
                expected=expected,
            )
        return self.text[self.pos]

    def expect(self, require: str) -> None:
        """Consumes ``require`` or raises with the character found instead."""
        char = self.peek(require)
        if char != require:
            raise ParseError(
                f"Expected '{require}', got '{char}'",
                self.text,
                self.pos,
                expected=require,
                actual=char,
            )
        self.pos += 1

    def skip_whitespace(self) -> None:
        while self.pos < self.length and self.text[self.pos] in WHITESPACE:
            self.pos += 1

    def consume_value(self) -> Value:
        char = self.peek()
        if char == '"':
            return Value.of_string(self.consume_string())
        if char == "[":
            return self.consume_array()
        if char == "{":
            return self.consume_object()
        literal = self.consume_literal()
        if literal is not None:
            return literal
        return self.consume_number()

    def consume_literal(self) -> Value | None:
        """Matches ``true``, ``false`` or ``null`` in any letter case."""
        with ProfileContext("consume_literal", self):
            word = self.text[self.pos : self.pos + 4].lower()
            if word == "true":
                self.pos += 4
                return Value.of_bool(True)
            if word == "null":
                self.pos += 4
                return Value.of_null()
            if self.text[self.pos : self.pos + 5].lower() == "false":
                self.pos += 5
                return Value.of_bool(False)
            return None

    def consume_number(self) -> Value:
        """
        Consumes a numeric token.

        The scanner accepts a loose character set (hex letters and ``x``
        included); malformed tokens are only rejected by the final
        conversion.
        """
        with ProfileContext("consume_number", self):
            start = self.pos
            while (
                self.pos < self.length and self.text[self.pos] in NUMBER_CHARS
            ):
                self.pos += 1

            token = self.text[start : self.pos]
            try:
                if "." in token or "e" in token or "E" in token:
                    return Value.of_double(float(token))
                return Value.of_int(int(token, 10))
            except ValueError as e:
                actual = self.text[start] if start < self.length else None
                raise ParseError(
                    f"Invalid number literal '{token}'",
                    self.text,
                    start,
                    actual=actual,
                ) from e

    def consume_string(self) -> str:
        with ProfileContext("consume_string", self):
            self.expect('"')
            start = self.pos
            escaped = False
            while True:
                char = self.peek('"')
                self.pos += 1
                if escaped:
                    escaped = False
                elif char == '"':
                    break
                elif char == "\\":
                    escaped = True
            return _decode_escapes(self.text[start : self.pos - 1])

    def consume_array(self) -> Value:
        with ProfileContext("consume_array", self):
            self.expect("[")
            items: list[Value] = []
            while True:
                self.skip_whitespace()
                if self.peek("]") == "]":
                    self.pos += 1
                    break
                if items:
                    self.expect(",")
                    self.skip_whitespace()
                items.append(self.consume_value())
            return Value.of_list(items)

    def consume_object(self) -> Value:
        with ProfileContext("consume_object", self):
            self.expect("{")
            members: dict[str, Value] = {}
            while True:
                self.skip_whitespace()
                if self.peek("}") == "}":
                    self.pos += 1
                    break
                if members:
                    self.expect(",")
                    self.skip_whitespace()
                key = self.consume_string()
                self.skip_whitespace()
                self.expect(":")
                self.skip_whitespace()
                # Duplicate keys: last write wins
                members[key] = self.consume_value()
            return Value.of_object(members)


def _read_code_unit(raw: str, i: int) -> int | None:
    """Returns the code unit of a ``\\uXXXX`` escape at ``i``, if any."""
    digits = raw[i + 2 : i + 6]
    if raw[i + 1 : i + 2] != "u" or len(digits) != 4:
        return None
    if not all(c in _HEX_DIGITS for c in digits):
        return None
    return int(digits, 16)


def _decode_escapes(raw: str) -> str:
    """
    Decodes backslash escapes in the body of a string literal.

    Handles the simple two-character escapes and ``\\uXXXX`` code units,
    joining a high surrogate with an immediately following low surrogate
    escape. Unknown escapes are kept verbatim.
    """
    if "\\" not in raw:
        return raw

    result = []
    i = 0
    while i < len(raw):
        char = raw[i]
        if char != "\\" or i + 1 >= len(raw):
            result.append(char)
            i += 1
            continue

        next_char = raw[i + 1]
        if next_char in _SIMPLE_ESCAPES:
            result.append(_SIMPLE_ESCAPES[next_char])
            i += 2
            continue

        unit = _read_code_unit(raw, i)
        if unit is None:
            result.append(char)
            i += 1
            continue
        i += 6

        if 0xD800 <= unit <= 0xDBFF:
            low = _read_code_unit(raw, i) if raw[i : i + 1] == "\\" else None
            if low is not None and 0xDC00 <= low <= 0xDFFF:
                unit = 0x10000 + ((unit - 0xD800) << 10) + (low - 0xDC00)
                i += 6
        result.append(chr(unit))

    return "".join(result)


def parse(text: str) -> Value:
    """
    Parses a JSON document into a ``Value`` tree.

    Text after the first complete value is ignored. Raises ``ParseError``
    when the document is malformed and ``TypeError`` for non-``str`` input.
    """
    parser = Parser(text)
    logger.debug("Parsing %d characters", parser.length)
    try:
        return parser.parse()
    except ParseError as e:
        logger.debug("Parse failed: %s", e)
        raise


def load(fp: IO[str]) -> Value:
    """
    Parses a JSON document read in full from a file-like object.
    """
    if not hasattr(fp, "read"):
        raise TypeError("fp must have a read() method")

    return parse(fp.read())


__all__ = [
    "HotPathStats",
    "ParseError",
    "Parser",
    "Value",
    "ValueType",
    "clear_hot_path_stats",
    "get_hot_path_stats",
    "load",
    "parse",
]
