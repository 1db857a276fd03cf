"""impl-trait-in-params rule (W9401): `impl Trait` in a public signature's parameters."""

import logging
from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING

from impl_trait_linter.domain.constants import (
    GENERIC_NAME_PLACEHOLDER,
    LINT_CODE,
    LINT_EXPLANATION,
    LINT_MESSAGE,
    LINT_SYMBOL,
    SUGGESTION_MESSAGE,
)
from impl_trait_linter.domain.declarations import (
    Declaration,
    DeclarationKind,
    FreeFunction,
    GenericParam,
    Generics,
    Ident,
    InherentMethod,
    TraitMethod,
)
from impl_trait_linter.domain.rules import (
    Applicability,
    Checkable,
    DiagnosticBuilder,
    LintDeclaration,
    SuggestedEdit,
    SuggestionStyle,
    Violation,
    span_lint_and_then,
)
from impl_trait_linter.domain.spans import Span

if TYPE_CHECKING:
    from impl_trait_linter.domain.protocols import InTestContextProtocol

logger = logging.getLogger(__name__)

IMPL_TRAIT_IN_PARAMS = LintDeclaration(
    code=LINT_CODE,
    symbol=LINT_SYMBOL,
    description="Use a named generic parameter instead of `impl Trait` in public signatures.",
    explanation=LINT_EXPLANATION,
)


class EligibilityFilter:
    """Decides whether a declaration is analyzed at all. Pure predicate."""

    def __init__(
        self,
        test_context: "InTestContextProtocol",
        avoid_breaking_exported_api: bool = True,
    ) -> None:
        self._test_context = test_context
        self._avoid_breaking_exported_api = avoid_breaking_exported_api
        self._by_kind: dict[DeclarationKind, Callable[[Declaration], bool]] = {
            DeclarationKind.FREE_FUNCTION: self._free_function,  # type: ignore[dict-item]
            DeclarationKind.INHERENT_METHOD: self._inherent_method,  # type: ignore[dict-item]
            DeclarationKind.TRAIT_METHOD: self._trait_method,  # type: ignore[dict-item]
        }

    def is_eligible(self, declaration: Declaration) -> bool:
        return self._by_kind[declaration.kind](declaration)

    def _free_function(self, declaration: FreeFunction) -> bool:
        return declaration.visibility.is_public and not self._in_test(declaration)

    def _inherent_method(self, declaration: InherentMethod) -> bool:
        # Signatures in a trait impl are dictated by the trait declaration.
        if declaration.impl_of_trait:
            return False
        return declaration.visibility.is_public and not self._in_test(declaration)

    def _trait_method(self, declaration: TraitMethod) -> bool:
        if self._avoid_breaking_exported_api:
            return False
        if declaration.trait_visibility.span.is_empty():
            return False
        return not self._in_test(declaration)

    def _in_test(self, declaration: Declaration) -> bool:
        return self._test_context.is_in_test_context(declaration.handle)


class OpaqueParameterScanner:
    """Yields the `impl Trait` parameters of a generic-parameter list, in order."""

    @staticmethod
    def scan(generics: Generics) -> Iterator[GenericParam]:
        for param in generics.params:
            if param.is_impl_trait():
                yield param


class SuggestionSpanResolver:
    """Computes the rewrite of one flagged parameter into a named generic parameter."""

    @staticmethod
    def resolve(
        param: GenericParam,
        ident: Ident,
        generics: Generics,
        first_param_span: Span,
    ) -> SuggestedEdit:
        # Nested `impl Trait` inside the bound and `Fn(..)` sugar are copied verbatim.
        bound = param.bound_text
        gen_span = generics.span_for_param_suggestion()
        if gen_span is not None:
            return SuggestedEdit(
                span=gen_span,
                message=SUGGESTION_MESSAGE,
                replacement=f", {GENERIC_NAME_PLACEHOLDER}: {bound}",
                applicability=Applicability.HAS_PLACEHOLDERS,
                style=SuggestionStyle.SHOW_ALWAYS,
            )
        span = Span.new(
            first_param_span.lo - 1,
            ident.span.hi,
            ident.span.ctxt,
            ident.span.parent,
        )
        return SuggestedEdit(
            span=span,
            message=SUGGESTION_MESSAGE,
            replacement=f"<{GENERIC_NAME_PLACEHOLDER}: {bound}>",
            applicability=Applicability.HAS_PLACEHOLDERS,
            style=SuggestionStyle.SHOW_ALWAYS,
        )


class ImplTraitInParamsRule(Checkable):
    """Rule for W9401: public signature takes `impl Trait`; suggest a named type parameter."""

    lint: LintDeclaration = IMPL_TRAIT_IN_PARAMS

    def __init__(
        self,
        test_context: "InTestContextProtocol",
        avoid_breaking_exported_api: bool = True,
    ) -> None:
        self._eligibility = EligibilityFilter(test_context, avoid_breaking_exported_api)
        self._scanner = OpaqueParameterScanner()
        self._resolver = SuggestionSpanResolver()

    def check(self, declaration: Declaration) -> list[Violation]:
        """Check one declaration. One violation per `impl Trait` parameter."""
        if not self._eligibility.is_eligible(declaration):
            return []
        violations: list[Violation] = []
        for param in self._scanner.scan(declaration.generics):
            violations.append(
                self._report(
                    param,
                    declaration.ident,
                    declaration.generics,
                    declaration.first_param_span(),
                )
            )
        if violations:
            logger.debug(
                "%s '%s': %d impl Trait parameter(s)",
                declaration.kind.value,
                declaration.ident.name,
                len(violations),
            )
        return violations

    def _report(
        self,
        param: GenericParam,
        ident: Ident,
        generics: Generics,
        first_param_span: Span,
    ) -> Violation:
        edit = self._resolver.resolve(param, ident, generics, first_param_span)

        def decorate(diag: DiagnosticBuilder) -> None:
            diag.span_suggestion_with_style(
                edit.span, edit.message, edit.replacement, edit.applicability, edit.style
            )

        return span_lint_and_then(self.lint, param.span, LINT_MESSAGE, decorate)
