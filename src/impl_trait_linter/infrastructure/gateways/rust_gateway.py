"""Rust source gateway: tree-sitter parse tree -> typed declaration tree."""

import logging
import re
from collections.abc import Iterator

import tree_sitter_rust
from tree_sitter import Language, Node, Parser

from impl_trait_linter.domain.declarations import (
    Declaration,
    FreeFunction,
    GenericParam,
    GenericParamKind,
    Generics,
    Ident,
    InherentMethod,
    TraitMethod,
    Visibility,
)
from impl_trait_linter.domain.entities import ParsedSource
from impl_trait_linter.domain.protocols import RustSourceProtocol
from impl_trait_linter.domain.source_map import SourceFile
from impl_trait_linter.domain.spans import Span

logger = logging.getLogger(__name__)

_FN_TYPES: frozenset[str] = frozenset({"function_item", "function_signature_item"})
_TRIVIA_TYPES: frozenset[str] = frozenset({"attribute_item", "line_comment", "block_comment"})
_LIFETIME_PARAM_TYPES: frozenset[str] = frozenset({"lifetime_parameter", "lifetime"})
_WHITESPACE = re.compile(r"\s+")


class RustGateway(RustSourceProtocol):
    """Parses Rust with tree-sitter and normalizes each fn into a Declaration."""

    def __init__(self) -> None:
        self._language = Language(tree_sitter_rust.language())
        self._parser = Parser(self._language)

    def parse_source(self, source: SourceFile) -> ParsedSource:
        """Parse a file and return its declarations. Syntax errors are tolerated."""
        tree = self._parser.parse(source.data)
        root = tree.root_node
        if root.has_error:
            logger.warning("%s: syntax errors found; analyzing recoverable items only", source.path)
        declarations = tuple(self._collect(root, source))
        logger.debug("%s: %d declaration(s)", source.path, len(declarations))
        return ParsedSource(source=source, declarations=declarations, has_syntax_errors=root.has_error)

    def _collect(self, root: Node, source: SourceFile) -> Iterator[Declaration]:
        for node in self._walk(root):
            if node.type not in _FN_TYPES:
                continue
            declaration = self._to_declaration(node, source)
            if declaration is not None:
                yield declaration

    @staticmethod
    def _walk(root: Node) -> Iterator[Node]:
        """Pre-order walk in document order."""
        stack = [root]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def _to_declaration(self, node: Node, source: SourceFile) -> Declaration | None:
        name_node = node.child_by_field_name("name")
        params_node = node.child_by_field_name("parameters")
        if name_node is None or params_node is None:
            return None
        ident = Ident(name=self._text(name_node, source), span=self._span(name_node))
        generics = self._generics(node, params_node, ident, source)
        param_spans = tuple(
            self._span(child)
            for child in params_node.named_children
            if child.type not in _TRIVIA_TYPES
        )

        owner = self._owner(node)
        if owner is None:
            if node.type != "function_item":
                return None
            return FreeFunction(
                ident=ident,
                generics=generics,
                param_spans=param_spans,
                handle=node,
                visibility=self._visibility(node, source),
            )
        if owner.type == "impl_item":
            return InherentMethod(
                ident=ident,
                generics=generics,
                param_spans=param_spans,
                handle=node,
                visibility=self._visibility(node, source),
                impl_of_trait=owner.child_by_field_name("trait") is not None,
            )
        if owner.type == "trait_item":
            return TraitMethod(
                ident=ident,
                generics=generics,
                param_spans=param_spans,
                handle=node,
                trait_visibility=self._visibility(owner, source),
            )
        # extern blocks: foreign functions are not declarations of this crate's API
        return None

    @staticmethod
    def _owner(node: Node) -> Node | None:
        """The impl/trait/extern item whose body directly holds ``node``, if any."""
        parent = node.parent
        if parent is None or parent.type != "declaration_list":
            return None
        owner = parent.parent
        if owner is None or owner.type == "mod_item":
            return None
        return owner

    def _generics(
        self, node: Node, params_node: Node, ident: Ident, source: SourceFile
    ) -> Generics:
        params: list[GenericParam] = []
        type_params = node.child_by_field_name("type_parameters")
        for child in type_params.named_children if type_params is not None else ():
            if child.type in _TRIVIA_TYPES:
                continue
            params.append(
                GenericParam(
                    name=self._generic_name(child, source),
                    kind=self._generic_kind(child),
                    span=self._span(child),
                )
            )
        for child in params_node.named_children:
            if child.type in _TRIVIA_TYPES:
                continue
            for opaque in self._walk(child):
                if opaque.type == "abstract_type":
                    written = self._with_extra_bounds(opaque)
                    params.append(
                        GenericParam.opaque(self._bound_text(opaque, written, source), self._span(written))
                    )
        if type_params is None:
            empty = Generics.empty(ident.span)
            return Generics(params=tuple(params), span=empty.span, has_written_list=False)
        return Generics(params=tuple(params), span=self._span(type_params), has_written_list=True)

    @staticmethod
    def _generic_kind(node: Node) -> GenericParamKind:
        if node.type in _LIFETIME_PARAM_TYPES:
            return GenericParamKind.LIFETIME
        if node.type == "const_parameter":
            return GenericParamKind.CONST
        return GenericParamKind.TYPE

    def _generic_name(self, node: Node, source: SourceFile) -> str:
        name = node.child_by_field_name("name") or node.child_by_field_name("left")
        if name is None and node.named_children:
            name = node.named_children[0]
        return self._text(name if name is not None else node, source)

    @staticmethod
    def _with_extra_bounds(node: Node) -> Node:
        """`impl A + B` parses as `bounded_type(abstract_type(impl A), B)`; return the outermost such node."""
        while (
            node.parent is not None
            and node.parent.type == "bounded_type"
            and node.parent.start_byte == node.start_byte
        ):
            node = node.parent
        return node

    def _bound_text(self, opaque: Node, written: Node, source: SourceFile) -> str:
        """Everything after the `impl` keyword up to the end of ``written``, whitespace-normalized."""
        impl_keyword = opaque.children[0]
        raw = source.data[impl_keyword.end_byte:written.end_byte].decode("utf-8", errors="replace")
        return _WHITESPACE.sub(" ", raw).strip()

    def _visibility(self, item: Node, source: SourceFile) -> Visibility:
        for child in item.children:
            if child.type == "visibility_modifier":
                text = _WHITESPACE.sub("", self._text(child, source))
                return Visibility(span=self._span(child), is_public=text == "pub")
        return Visibility.inherited(self._span(item))

    @staticmethod
    def _span(node: Node) -> Span:
        return Span(node.start_byte, node.end_byte)

    @staticmethod
    def _text(node: Node, source: SourceFile) -> str:
        return source.data[node.start_byte:node.end_byte].decode("utf-8", errors="replace")
