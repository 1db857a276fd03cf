"""Byte-offset spans carrying a provenance (syntax context) token."""

from dataclasses import dataclass, replace
from typing import Optional

from impl_trait_linter.domain.exceptions import SpanError


@dataclass(frozen=True)
class SyntaxContext:
    """
    Provenance of a span.

    Spans read straight from a parsed file share the root context. A span
    synthesized from the boundaries of other spans must keep the context of
    the span it was derived from so renderers place the text correctly.
    """

    name: str = "root"

    @classmethod
    def root(cls) -> "SyntaxContext":
        return cls()


@dataclass(frozen=True)
class Span:
    """Half-open byte range [lo, hi) in one source file."""

    lo: int
    hi: int
    ctxt: SyntaxContext = SyntaxContext()
    parent: Optional[str] = None

    def __post_init__(self) -> None:
        if self.lo < 0 or self.hi < 0:
            raise SpanError(f"span offsets must be non-negative, got {self.lo}..{self.hi}")
        if self.lo > self.hi:
            raise SpanError(f"span lo {self.lo} is past hi {self.hi}; use Span.new")

    @classmethod
    def new(
        cls,
        lo: int,
        hi: int,
        ctxt: SyntaxContext | None = None,
        parent: Optional[str] = None,
    ) -> "Span":
        """Build a span from two boundaries in either order."""
        if lo > hi:
            lo, hi = hi, lo
        return cls(lo, hi, ctxt if ctxt is not None else SyntaxContext.root(), parent)

    def with_lo(self, lo: int) -> "Span":
        return Span.new(lo, self.hi, self.ctxt, self.parent)

    def with_hi(self, hi: int) -> "Span":
        return Span.new(self.lo, hi, self.ctxt, self.parent)

    def shrink_to_lo(self) -> "Span":
        return replace(self, hi=self.lo)

    def shrink_to_hi(self) -> "Span":
        return replace(self, lo=self.hi)

    def contains(self, other: "Span") -> bool:
        return self.lo <= other.lo and other.hi <= self.hi

    def is_empty(self) -> bool:
        return self.lo == self.hi
