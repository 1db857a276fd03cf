"""Source text with byte-offset lookups. Pure value object; reading files is infrastructure."""

from bisect import bisect_right
from dataclasses import dataclass, field

from impl_trait_linter.domain.exceptions import SpanError
from impl_trait_linter.domain.spans import Span


@dataclass(frozen=True)
class SourceFile:
    """One Rust source file. Spans index into ``data`` (UTF-8 bytes)."""

    path: str
    text: str
    data: bytes = field(init=False, repr=False, compare=False)
    _line_starts: tuple[int, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        data = self.text.encode("utf-8")
        starts = [0]
        for index, byte in enumerate(data):
            if byte == 0x0A:
                starts.append(index + 1)
        object.__setattr__(self, "data", data)
        object.__setattr__(self, "_line_starts", tuple(starts))

    @property
    def line_count(self) -> int:
        return len(self._line_starts)

    def _check(self, pos: int) -> None:
        if pos < 0 or pos > len(self.data):
            raise SpanError(f"{self.path}: byte offset {pos} outside 0..{len(self.data)}")

    def lookup(self, pos: int) -> tuple[int, int]:
        """Return the 1-based (line, column) of a byte offset; columns count characters."""
        self._check(pos)
        line_index = bisect_right(self._line_starts, pos) - 1
        line_start = self._line_starts[line_index]
        column = len(self.data[line_start:pos].decode("utf-8", errors="replace")) + 1
        return line_index + 1, column

    def line_text(self, line: int) -> str:
        """Text of a 1-based line, without its newline."""
        start = self._line_starts[line - 1]
        end = self._line_starts[line] - 1 if line < self.line_count else len(self.data)
        return self.data[start:end].decode("utf-8", errors="replace").rstrip("\r")

    def snippet(self, span: Span) -> str:
        self._check(span.hi)
        return self.data[span.lo:span.hi].decode("utf-8", errors="replace")

    def apply(self, span: Span, replacement: str) -> str:
        """Return the full text with ``span`` replaced by ``replacement``."""
        self._check(span.hi)
        patched = self.data[:span.lo] + replacement.encode("utf-8") + self.data[span.hi:]
        return patched.decode("utf-8", errors="replace")

    def location(self, span: Span) -> str:
        line, column = self.lookup(span.lo)
        return f"{self.path}:{line}:{column}"
