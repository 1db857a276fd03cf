"""
Typed declaration tree consumed by the impl-trait-in-params rule.

Three closed shapes: free functions, methods of inherent/trait impls, and
trait methods. Each carries the structural context its eligibility check
needs, so the rule never reaches back into the parser.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Union

from impl_trait_linter.domain.constants import OPAQUE_PREFIX
from impl_trait_linter.domain.spans import Span


class DeclarationKind(Enum):
    FREE_FUNCTION = "free_function"
    INHERENT_METHOD = "inherent_method"
    TRAIT_METHOD = "trait_method"


class GenericParamKind(Enum):
    LIFETIME = "lifetime"
    TYPE = "type"
    CONST = "const"
    OPAQUE = "opaque"  # desugared from `impl Trait` in a value parameter


@dataclass(frozen=True)
class Ident:
    name: str
    span: Span


@dataclass(frozen=True)
class GenericParam:
    """One entry of a generic-parameter list, written or synthetic."""

    name: str
    kind: GenericParamKind
    span: Span

    @classmethod
    def opaque(cls, bound_text: str, span: Span) -> "GenericParam":
        """Synthetic parameter for an `impl <bound_text>` value-parameter type."""
        return cls(name=f"{OPAQUE_PREFIX}{bound_text}", kind=GenericParamKind.OPAQUE, span=span)

    def is_impl_trait(self) -> bool:
        return self.kind is GenericParamKind.OPAQUE

    @property
    def bound_text(self) -> str:
        """Trait bound as written. Only meaningful for opaque parameters."""
        return self.name[len(OPAQUE_PREFIX):]


@dataclass(frozen=True)
class Generics:
    """
    Generic parameters of a declaration.

    ``span`` covers the written ``<...>`` list including delimiters; when no
    list is written it is the empty span right after the identifier.
    Synthetic opaque parameters follow the written ones and their spans lie
    in the value-parameter list, outside ``span``.
    """

    params: tuple[GenericParam, ...]
    span: Span
    has_written_list: bool = False

    @classmethod
    def empty(cls, after: Span) -> "Generics":
        return cls(params=(), span=after.shrink_to_hi(), has_written_list=False)

    def span_for_param_suggestion(self) -> Span | None:
        """Empty span just before the closing ``>``, if the list holds a written entry."""
        if not any(self.span.contains(p.span) for p in self.params):
            return None
        return self.span.with_lo(self.span.hi - 1).shrink_to_lo()


@dataclass(frozen=True)
class Visibility:
    """Written visibility of an item. ``span`` is empty when no modifier is written."""

    span: Span
    is_public: bool

    @classmethod
    def inherited(cls, at: Span) -> "Visibility":
        return cls(span=at.shrink_to_lo(), is_public=False)


@dataclass(frozen=True)
class _FnDeclaration:
    ident: Ident
    generics: Generics
    param_spans: tuple[Span, ...]
    # Opaque host handle passed back to the test-context classifier.
    handle: object = field(compare=False)

    kind: ClassVar[DeclarationKind]

    def first_param_span(self) -> Span:
        return self.param_spans[0]


@dataclass(frozen=True, kw_only=True)
class FreeFunction(_FnDeclaration):
    visibility: Visibility

    kind: ClassVar[DeclarationKind] = DeclarationKind.FREE_FUNCTION


@dataclass(frozen=True, kw_only=True)
class InherentMethod(_FnDeclaration):
    """A method inside an ``impl`` block; ``impl_of_trait`` marks ``impl Trait for T``."""

    visibility: Visibility
    impl_of_trait: bool = False

    kind: ClassVar[DeclarationKind] = DeclarationKind.INHERENT_METHOD


@dataclass(frozen=True, kw_only=True)
class TraitMethod(_FnDeclaration):
    """A required or provided method declared inside a ``trait`` item."""

    trait_visibility: Visibility

    kind: ClassVar[DeclarationKind] = DeclarationKind.TRAIT_METHOD

    def first_param_span(self) -> Span:
        # Anchored on the identifier so the new list lands right after the name.
        sp = self.ident.span.with_hi(self.ident.span.hi + 1)
        return sp.shrink_to_hi()


Declaration = Union[FreeFunction, InherentMethod, TraitMethod]
