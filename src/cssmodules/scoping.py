# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Rewrite selector trees: localize class names and erase ``:global`` markers."""

from collections.abc import Callable

from cssmodules.selector import Container, Pseudo, SelectorGroup, SelectorNode

GLOBAL_PSEUDO = ":global"


def has_global_parent(node: SelectorNode) -> bool:
    """Check whether any ancestor of ``node`` is a ``:global`` pseudo.

    Args:
        node: Selector node.

    Returns:
        True when the node is wrapped in ``:global(...)``.
    """
    current = node.parent
    while current is not None:
        if isinstance(current, Pseudo) and current.value == GLOBAL_PSEUDO:
            return True
        current = current.parent
    return False


def localize_selector(group: SelectorGroup, generate: Callable[[str], str]) -> int:
    """Rename local class names in place and strip ``:global`` markers.

    Args:
        group: Parsed selector list.
        generate: Maps an original class name to its scoped name.

    Returns:
        Count of class names renamed.
    """
    renamed = 0
    for class_node in list(group.walk_classes()):
        if has_global_parent(class_node):
            continue
        class_node.value = generate(class_node.value)
        renamed += 1
    strip_global(group)
    return renamed


def strip_global(group: Container) -> None:
    """Replace every ``:global(...)`` with its arguments and drop bare ``:global``."""
    for pseudo in list(group.walk_pseudos()):
        if pseudo.value != GLOBAL_PSEUDO:
            continue
        pseudo.replace_with(*pseudo.unwrap())
