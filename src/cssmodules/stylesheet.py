# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Mutable stylesheet tree built on tinycss2 component values.

Nodes keep the whitespace and comments around them so that serializing an
unmodified tree reproduces the input text.
"""

import logging
from collections.abc import Iterator

import tinycss2

from cssmodules.errors import CssSyntaxError
from cssmodules.source import SourceText

logger = logging.getLogger(__name__)

_BLANK_TYPES: set[str] = {"whitespace", "comment"}


class Node:
    """Base class of every stylesheet node.

    Args:
        before: Whitespace and comments preceding the node.
    """

    def __init__(self, before: str = "") -> None:
        self.parent: Container | None = None
        self.before = before

    def serialize(self) -> str:
        raise NotImplementedError

    def remove(self) -> None:
        """Detach this node, dropping its leading whitespace but not comments."""
        if self.parent is not None:
            self.parent.remove_child(self)


class Container(Node):
    """Hold child nodes.

    Args:
        before: Whitespace and comments preceding the node.
        after: Whitespace and comments after the last child.
    """

    def __init__(self, before: str = "", after: str = "") -> None:
        super().__init__(before)
        self.nodes: list[Node] = []
        self.after = after

    def append(self, node: Node) -> None:
        node.parent = self
        self.nodes.append(node)

    def remove_child(self, node: Node) -> None:
        index = next(i for i, child in enumerate(self.nodes) if child is node)
        del self.nodes[index]
        node.parent = None
        # Comments before the node move on to whatever now follows it.
        kept = node.before.rstrip() if node.before.strip() else ""
        if not kept:
            return
        if index < len(self.nodes):
            self.nodes[index].before = kept + self.nodes[index].before
        else:
            self.after = kept + self.after

    def walk(self) -> Iterator[Node]:
        """Yield every descendant in document order."""
        for node in list(self.nodes):
            yield node
            if isinstance(node, Container):
                yield from node.walk()

    def walk_rules(self) -> Iterator["Rule | AtRule"]:
        for node in self.walk():
            if isinstance(node, (Rule, AtRule)):
                yield node

    def walk_declarations(self) -> Iterator["Declaration"]:
        for node in self.walk():
            if isinstance(node, Declaration):
                yield node

    def _serialize_children(self) -> str:
        return "".join(node.serialize() for node in self.nodes) + self.after


class Stylesheet(Container):
    """Represent the root of one parsed stylesheet.

    Args:
        source_path: Absolute path the stylesheet was read from, if known.
    """

    def __init__(self, source_path: str | None = None) -> None:
        super().__init__()
        self.source_path = source_path

    def serialize(self) -> str:
        return self._serialize_children()


class Rule(Container):
    """Represent ``<selector> { ... }``."""

    def __init__(self, selector: str, between: str = "", before: str = "") -> None:
        super().__init__(before)
        self.selector = selector
        self.between = between

    def serialize(self) -> str:
        children = self._serialize_children()
        return f"{self.before}{self.selector}{self.between}{{{children}}}"


class AtRule(Container):
    """Represent ``@name params;`` or ``@name params { ... }``.

    Args:
        name: At-keyword without the ``@``.
        params: Prelude text without surrounding whitespace.
        has_block: Whether the at-rule owns a ``{}`` block.
    """

    def __init__(
        self,
        name: str,
        params: str = "",
        has_block: bool = False,
        after_name: str = "",
        between: str = "",
        semicolon: bool = False,
        before: str = "",
    ) -> None:
        super().__init__(before)
        self.name = name
        self.params = params
        self.has_block = has_block
        self.after_name = after_name
        self.between = between
        self.semicolon = semicolon

    def serialize(self) -> str:
        head = f"{self.before}@{self.name}{self.after_name}{self.params}{self.between}"
        if self.has_block:
            return f"{head}{{{self._serialize_children()}}}"
        return f"{head};" if self.semicolon else head


class Declaration(Node):
    """Represent ``property: value``.

    Args:
        prop: Property name as written.
        value: Value text without surrounding whitespace.
        between: Text from the end of the name up to the value, colon included.
        after: Whitespace between the value and the terminating semicolon.
        semicolon: Whether a semicolon terminates the declaration.
    """

    def __init__(
        self,
        prop: str,
        value: str,
        between: str = ": ",
        after: str = "",
        semicolon: bool = False,
        before: str = "",
    ) -> None:
        super().__init__(before)
        self.prop = prop
        self.value = value
        self.between = between
        self.after = after
        self.semicolon = semicolon

    def serialize(self) -> str:
        end = ";" if self.semicolon else ""
        return f"{self.before}{self.prop}{self.between}{self.value}{self.after}{end}"


def parse_stylesheet(css: str, source_path: str | None = None) -> Stylesheet:
    """Parse CSS text into a mutable tree.

    Args:
        css: Stylesheet text.
        source_path: Absolute path of the stylesheet.

    Returns:
        Root stylesheet node.

    Raises:
        CssSyntaxError: If the text cannot be split into rules and declarations.
    """
    tokens = tinycss2.parse_component_value_list(css, skip_comments=False)
    stylesheet = Stylesheet(source_path=source_path)
    _build_children(stylesheet, tokens, SourceText(css))
    return stylesheet


def _build_children(container: Container, tokens: list, source: SourceText) -> None:
    before: list[str] = []
    segment: list = []
    for token in tokens:
        if token.type == "error":
            logger.warning("CSS tokenization failed", extra={"error": token.message})
            raise CssSyntaxError(
                f"{token.message} at {token.source_line}:{token.source_column}"
            )
        if not segment and token.type in _BLANK_TYPES:
            before.append(token.serialize())
            continue
        if token.type == "literal" and token.value == ";":
            if segment:
                container.append(
                    _build_statement(segment, before="".join(before), semicolon=True)
                )
                before = []
                segment = []
            else:
                before.append(";")
            continue
        if token.type == "{} block":
            block = _build_block(segment, token, "".join(before), source)
            container.append(block)
            before = []
            segment = []
            continue
        segment.append(token)

    if not segment:
        container.after = "".join(before)
        return
    body, trailing = _split_trailing_blank(segment)
    container.append(_build_statement(body, before="".join(before), semicolon=False))
    container.after = trailing


def _build_statement(segment: list, before: str, semicolon: bool) -> Node:
    body, trailing = _split_trailing_blank(segment)
    head = body[0]
    if head.type == "at-keyword":
        after_name, params, between = _split_prelude(body[1:])
        return AtRule(
            name=head.value,
            params=params,
            after_name=after_name,
            between=between + trailing,
            semicolon=semicolon,
            before=before,
        )
    return _build_declaration(body, trailing, before=before, semicolon=semicolon)


def _build_declaration(
    body: list, trailing: str, before: str, semicolon: bool
) -> Declaration:
    head = body[0]
    if head.type != "ident":
        raise CssSyntaxError(
            f"Expected a property name at {head.source_line}:{head.source_column}, "
            f"got {tinycss2.serialize(body)!r}"
        )
    colon_index = None
    for index, token in enumerate(body[1:], start=1):
        if token.type == "literal" and token.value == ":":
            colon_index = index
            break
        if token.type not in _BLANK_TYPES:
            break
    if colon_index is None:
        raise CssSyntaxError(
            f"Expected ':' after property {head.value!r} "
            f"at {head.source_line}:{head.source_column}"
        )
    value_start = colon_index + 1
    while value_start < len(body) and body[value_start].type == "whitespace":
        value_start += 1
    return Declaration(
        prop=head.serialize(),
        value=tinycss2.serialize(body[value_start:]),
        between=tinycss2.serialize(body[1:value_start]),
        after=trailing,
        semicolon=semicolon,
        before=before,
    )


def _build_block(
    segment: list, block: object, before: str, source: SourceText
) -> Container:
    body, between = _split_trailing_blank(segment)
    node: Container
    if body and body[0].type == "at-keyword":
        after_name, params, inner_between = _split_prelude(body[1:])
        node = AtRule(
            name=body[0].value,
            params=params,
            has_block=True,
            after_name=after_name,
            between=inner_between + between,
            before=before,
        )
    else:
        node = Rule(
            selector=_selector_text(body, segment, block, source),
            between=between,
            before=before,
        )
    _build_children(node, block.content, source)
    return node


def _selector_text(body: list, segment: list, block: object, source: SourceText) -> str:
    """Slice the selector from the source so escapes keep their spelling."""
    if not body:
        return ""
    stop = segment[len(body)] if len(body) < len(segment) else block
    return source.between(body[0], stop)


def _split_prelude(tokens: list) -> tuple[str, str, str]:
    """Split at-rule prelude into leading whitespace, params and trailing whitespace."""
    start = 0
    while start < len(tokens) and tokens[start].type == "whitespace":
        start += 1
    if start == len(tokens):
        return "", "", tinycss2.serialize(tokens)
    body, trailing = _split_trailing_blank(tokens[start:], blank_types={"whitespace"})
    return tinycss2.serialize(tokens[:start]), tinycss2.serialize(body), trailing


def _split_trailing_blank(
    tokens: list, blank_types: set[str] = _BLANK_TYPES
) -> tuple[list, str]:
    end = len(tokens)
    while end > 0 and tokens[end - 1].type in blank_types:
        end -= 1
    return tokens[:end], tinycss2.serialize(tokens[end:])
