# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Resolve ``composes`` declarations into export-table aliases.

Supported forms::

    composes: a b;                      /* local classes of this stylesheet */
    composes: a b from global;          /* names kept verbatim */
    composes: a b from "./other.css";   /* names derived for another file */
"""

import logging
import os
from dataclasses import dataclass

from cssmodules.errors import MalformedComposesError
from cssmodules.naming import NameGenerator
from cssmodules.selector import (
    ClassName,
    Combinator,
    Raw,
    SelectorNode,
    String,
    Tag,
    parse,
)
from cssmodules.stylesheet import Declaration, Rule

logger = logging.getLogger(__name__)

COMPOSES_PROPERTY = "composes"


@dataclass(frozen=True)
class ComposesClause:
    """Store the parsed right-hand side of one ``composes`` declaration.

    Args:
        names: Composed identifiers in declaration order.
        source: Unquoted file path for ``from "<path>"``, else ``None``.
        is_global: Whether the names come ``from global``.
    """

    names: tuple[str, ...]
    source: str | None = None
    is_global: bool = False


def parse_composes(value: str) -> ComposesClause:
    """Parse a ``composes`` value.

    Args:
        value: Declaration value text.

    Returns:
        Parsed clause.

    Raises:
        MalformedComposesError: If the value does not follow the grammar.
    """
    group = parse(value)
    if len(group.branches) > 1:
        raise MalformedComposesError(
            f"Malformed composes: declaration should not contain commas: {value}"
        )
    tokens = [node for node in group.branches[0].nodes if not _is_blank(node)]

    source: str | None = None
    is_global = False
    if len(tokens) >= 2 and _is_ident(tokens[-2], "from"):
        last = tokens[-1]
        if isinstance(last, String):
            source = last.value
        elif _is_ident(last, "global"):
            is_global = True
        else:
            raise MalformedComposesError(
                f"Malformed composes: expected 'global' or a quoted path after "
                f"'from', got: {last.serialize()}"
            )
        tokens = tokens[:-2]

    if not tokens:
        raise MalformedComposesError(f"Malformed composes: nothing to compose: {value}")
    for token in tokens:
        if not isinstance(token, Tag):
            raise MalformedComposesError(
                f"Malformed composes: expected a class name, got: {token.serialize()}"
            )
    return ComposesClause(
        names=tuple(token.value for token in tokens),
        source=source,
        is_global=is_global,
    )


def resolve_composes(declaration: Declaration, generator: NameGenerator) -> list[str]:
    """Append composed names to the owner's export entry and drop the declaration.

    Args:
        declaration: ``composes`` declaration.
        generator: Name generator of the current pass.

    Returns:
        Resolved alias names in declaration order.

    Raises:
        MalformedComposesError: If the owner or the value is invalid.
    """
    owner = _owner_class(declaration, generator)
    clause = parse_composes(declaration.value)

    if clause.is_global:
        resolved = list(clause.names)
    elif clause.source is not None:
        target = _resolve_source(generator.file_path, clause.source)
        resolved = [generator.naming_strategy(target, name) for name in clause.names]
    else:
        resolved = [_local_alias(owner, name, generator) for name in clause.names]

    table = generator.export_table
    table[owner] = f"{table[owner]} {' '.join(resolved)}"
    declaration.remove()
    logger.debug(
        "Resolved composes",
        extra={"owner": owner, "aliases": resolved, "source": clause.source},
    )
    return resolved


def _owner_class(declaration: Declaration, generator: NameGenerator) -> str:
    rule = declaration.parent
    if not isinstance(rule, Rule):
        raise MalformedComposesError("Malformed composes: has no parent rule!")
    group = parse(rule.selector)
    branches = group.branches
    nodes: list[SelectorNode] = branches[0].nodes if len(branches) == 1 else []
    if len(nodes) != 1 or not isinstance(nodes[0], ClassName):
        raise MalformedComposesError(
            "Malformed composes: rule selector should be a single class, "
            f"but got: {rule.selector}"
        )
    original = generator.original_symbol(nodes[0].value)
    if original is None:
        raise MalformedComposesError(
            f"Malformed composes: has no such local class: {rule.selector}"
        )
    return original


def _local_alias(owner: str, name: str, generator: NameGenerator) -> str:
    if name == owner:
        raise MalformedComposesError(
            f"Malformed composes: class composes itself: {name}"
        )
    if not generator.is_local_symbol(name):
        raise MalformedComposesError(
            f"Malformed composes: has no such local class to compose from: {name}"
        )
    return generator.export_table[name]


def _resolve_source(file_path: str, source: str) -> str:
    """Resolve a composed stylesheet path against the current stylesheet."""
    return os.path.normpath(os.path.join(os.path.dirname(file_path), source))


def _is_blank(node: SelectorNode) -> bool:
    if isinstance(node, Combinator):
        return node.is_whitespace
    return isinstance(node, Raw) and node.value.startswith("/*")


def _is_ident(node: SelectorNode, value: str) -> bool:
    return isinstance(node, Tag) and node.value == value
