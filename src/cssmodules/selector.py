# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Parse selector-like text into a mutable token tree.

The tree mirrors what selector rewriting needs: class names, pseudo classes
(with optional argument branches), plain identifiers, quoted strings and
combinators. Everything else survives as raw text so that serialization
reproduces the input.
"""

from collections.abc import Iterator, Sequence

import tinycss2
from tinycss2.serializer import serialize_identifier

from cssmodules.source import SourceText

_COMBINATOR_LITERALS: set[str] = {">", "+", "~"}


class SelectorNode:
    """Base class of every selector tree node."""

    def __init__(self) -> None:
        self.parent: Container | None = None

    def serialize(self) -> str:
        raise NotImplementedError

    def replace_with(self, *nodes: "SelectorNode") -> None:
        """Splice ``nodes`` into the parent in place of this node."""
        if self.parent is None:
            raise ValueError("Detached selector node cannot be replaced")
        self.parent.replace(self, nodes)

    def remove(self) -> None:
        """Detach this node from its parent."""
        if self.parent is None:
            raise ValueError("Detached selector node cannot be removed")
        self.parent.replace(self, ())

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.serialize()!r})"


class Identifier(SelectorNode):
    """Hold an identifier and the text it was written as.

    Args:
        value: Unescaped identifier.
        raw: Source spelling, emitted verbatim while ``value`` is unchanged.
    """

    def __init__(self, value: str, raw: str | None = None) -> None:
        super().__init__()
        self.value = value
        self.raw = raw
        self._parsed_value = value

    def serialize_name(self) -> str:
        if self.raw is not None and self.value == self._parsed_value:
            return self.raw
        return serialize_identifier(self.value)


class ClassName(Identifier):
    """Represent a ``.name`` class selector."""

    def serialize(self) -> str:
        return f".{self.serialize_name()}"


class Tag(Identifier):
    """Represent a bare identifier such as a type selector or keyword."""

    def serialize(self) -> str:
        return self.serialize_name()


class String(SelectorNode):
    """Represent a quoted string; ``value`` holds the unquoted text."""

    def __init__(self, value: str, raw: str) -> None:
        super().__init__()
        self.value = value
        self.raw = raw

    def serialize(self) -> str:
        return self.raw


class Combinator(SelectorNode):
    """Represent whitespace or an explicit ``>``, ``+``, ``~`` combinator."""

    def __init__(self, value: str) -> None:
        super().__init__()
        self.value = value

    @property
    def is_whitespace(self) -> bool:
        return not self.value.strip()

    def serialize(self) -> str:
        return self.value


class Raw(SelectorNode):
    """Represent any other token kept verbatim (ids, attributes, ``*``)."""

    def __init__(self, value: str) -> None:
        super().__init__()
        self.value = value

    def serialize(self) -> str:
        return self.value


class Container(SelectorNode):
    """Hold child nodes and keep their parent links current."""

    def __init__(self, nodes: Sequence[SelectorNode] = ()) -> None:
        super().__init__()
        self.nodes: list[SelectorNode] = []
        for node in nodes:
            self.append(node)

    def append(self, node: SelectorNode) -> None:
        node.parent = self
        self.nodes.append(node)

    def replace(self, child: SelectorNode, nodes: Sequence[SelectorNode]) -> None:
        """Replace ``child`` with ``nodes`` at the same position."""
        index = next(i for i, node in enumerate(self.nodes) if node is child)
        for node in nodes:
            node.parent = self
        self.nodes[index : index + 1] = list(nodes)
        child.parent = None

    def walk(self) -> Iterator[SelectorNode]:
        """Yield every descendant in document order."""
        for node in list(self.nodes):
            yield node
            if isinstance(node, Container):
                yield from node.walk()

    def walk_classes(self) -> Iterator[ClassName]:
        for node in self.walk():
            if isinstance(node, ClassName):
                yield node

    def walk_pseudos(self) -> Iterator["Pseudo"]:
        for node in self.walk():
            if isinstance(node, Pseudo):
                yield node


class Selector(Container):
    """Represent one comma-separated selector branch.

    Args:
        nodes: Branch tokens without surrounding whitespace.
        before: Whitespace preceding the branch.
        after: Whitespace following the branch.
    """

    def __init__(
        self, nodes: Sequence[SelectorNode] = (), before: str = "", after: str = ""
    ) -> None:
        super().__init__(nodes)
        self.before = before
        self.after = after

    def serialize(self) -> str:
        inner = "".join(node.serialize() for node in self.nodes)
        return f"{self.before}{inner}{self.after}"


class Pseudo(Container):
    """Represent ``:name`` or ``:name(<selector list>)``.

    Args:
        value: Pseudo name including leading colons, e.g. ``:global``.
        branches: Argument branches, or ``None`` for the bare form.
    """

    def __init__(self, value: str, branches: Sequence[Selector] | None = None) -> None:
        super().__init__(branches or ())
        self.value = value
        self.has_arguments = branches is not None

    def unwrap(self) -> list[SelectorNode]:
        """Detach and flatten argument branches, keeping separating commas."""
        flattened: list[SelectorNode] = []
        for index, branch in enumerate(list(self.nodes)):
            if index > 0:
                flattened.append(Raw(","))
            if branch.before:
                flattened.append(Combinator(branch.before))
            flattened.extend(branch.nodes)
            if branch.after:
                flattened.append(Combinator(branch.after))
        self.nodes = []
        return flattened

    def serialize(self) -> str:
        if not self.has_arguments:
            return self.value
        inner = ",".join(node.serialize() for node in self.nodes)
        return f"{self.value}({inner})"


class SelectorGroup(Container):
    """Represent a full comma-separated selector list."""

    @property
    def branches(self) -> list[Selector]:
        return [node for node in self.nodes if isinstance(node, Selector)]

    def serialize(self) -> str:
        return ",".join(node.serialize() for node in self.nodes)


def parse(text: str) -> SelectorGroup:
    """Parse selector-like text into a token tree.

    Args:
        text: Selector list, keyframe name or ``composes`` value.

    Returns:
        Root group node whose children are the comma-separated branches.
    """
    tokens = tinycss2.parse_component_value_list(text, skip_comments=False)
    return SelectorGroup(_parse_branches(tokens, SourceText(text)))


def _parse_branches(tokens: list, source: SourceText) -> list[Selector]:
    branches: list[Selector] = []
    current: list = []
    for token in tokens:
        if token.type == "literal" and token.value == ",":
            branches.append(_parse_branch(current, source))
            current = []
            continue
        current.append(token)
    branches.append(_parse_branch(current, source))
    return branches


def _parse_branch(tokens: list, source: SourceText) -> Selector:
    start = 0
    end = len(tokens)
    while start < end and tokens[start].type == "whitespace":
        start += 1
    while end > start and tokens[end - 1].type == "whitespace":
        end -= 1

    nodes: list[SelectorNode] = []
    index = start
    while index < end:
        token = tokens[index]
        if _is_combinator_token(token):
            run_end = index
            while run_end < end and _is_combinator_token(tokens[run_end]):
                run_end += 1
            nodes.append(Combinator(tinycss2.serialize(tokens[index:run_end])))
            index = run_end
        elif _is_class_start(tokens, index, end):
            name = tokens[index + 1]
            nodes.append(ClassName(name.value, source.identifier_at(name)))
            index += 2
        elif _is_literal(token, ":"):
            pseudo, index = _parse_pseudo(tokens, index, end, source)
            nodes.append(pseudo)
        elif token.type == "ident":
            nodes.append(Tag(token.value, source.identifier_at(token)))
            index += 1
        elif token.type == "string":
            nodes.append(String(token.value, token.serialize()))
            index += 1
        else:
            nodes.append(Raw(token.serialize()))
            index += 1

    return Selector(
        nodes,
        before=tinycss2.serialize(tokens[:start]),
        after=tinycss2.serialize(tokens[end:]),
    )


def _parse_pseudo(
    tokens: list, index: int, end: int, source: SourceText
) -> tuple[SelectorNode, int]:
    colons = ":"
    cursor = index + 1
    if cursor < end and _is_literal(tokens[cursor], ":"):
        colons = "::"
        cursor += 1
    if cursor >= end:
        return Raw(colons), cursor
    name_token = tokens[cursor]
    if name_token.type == "ident":
        return Pseudo(colons + serialize_identifier(name_token.value)), cursor + 1
    if name_token.type == "function":
        value = colons + serialize_identifier(name_token.name)
        return Pseudo(value, _parse_branches(name_token.arguments, source)), cursor + 1
    return Raw(colons), cursor


def _is_literal(token: object, value: str) -> bool:
    return getattr(token, "type", None) == "literal" and token.value == value


def _is_combinator_token(token: object) -> bool:
    token_type = getattr(token, "type", None)
    if token_type == "whitespace":
        return True
    return token_type == "literal" and token.value in _COMBINATOR_LITERALS


def _is_class_start(tokens: list, index: int, end: int) -> bool:
    return (
        _is_literal(tokens[index], ".")
        and index + 1 < end
        and tokens[index + 1].type == "ident"
    )
