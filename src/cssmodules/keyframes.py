# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Localize ``@keyframes`` names and their ``animation`` references."""

import re

from cssmodules.errors import CssSyntaxError
from cssmodules.naming import NameGenerator
from cssmodules.scoping import GLOBAL_PSEUDO, strip_global
from cssmodules.selector import parse
from cssmodules.stylesheet import AtRule, Declaration

_WHITESPACE_RE = re.compile(r"\s+")


def is_keyframes(at_rule: AtRule) -> bool:
    """Check for ``@keyframes`` including vendor-prefixed spellings."""
    name = at_rule.name.lower()
    if name == "keyframes":
        return True
    return name.startswith("-") and name.endswith("-keyframes")


def localize_keyframes(at_rule: AtRule, generator: NameGenerator) -> bool:
    """Rename a ``@keyframes`` block unless it is wrapped in ``:global``.

    Args:
        at_rule: Keyframes at-rule.
        generator: Name generator of the current pass.

    Returns:
        True when the keyframe was registered under a scoped name.

    Raises:
        CssSyntaxError: If the at-rule has no name.
    """
    if not at_rule.params:
        raise CssSyntaxError(f"@{at_rule.name} rule has no name")
    if at_rule.params.startswith(GLOBAL_PSEUDO):
        group = parse(at_rule.params)
        strip_global(group)
        at_rule.params = group.serialize().strip()
        return False
    at_rule.params = generator.generate(at_rule.params, is_keyframe=True)
    return True


def strip_quotes(value: str) -> str:
    """Remove one pair of matching surrounding quotes."""
    if len(value) >= 2 and value[0] == value[-1] and value[0] in {'"', "'"}:
        return value[1:-1]
    return value


def rewrite_animation_name(declaration: Declaration, generator: NameGenerator) -> bool:
    """Point ``animation-name`` at the scoped keyframe name.

    Returns:
        True when the value changed.
    """
    generated = generator.keyframe_name(strip_quotes(declaration.value))
    if generated is None:
        return False
    declaration.value = generated
    return True


def rewrite_animation(declaration: Declaration, generator: NameGenerator) -> bool:
    """Replace keyframe names inside an ``animation`` shorthand.

    Durations, timing functions and other tokens are kept; a changed value is
    rejoined with single spaces.

    Returns:
        True when the value changed.
    """
    changed = False
    parts: list[str] = []
    for part in _WHITESPACE_RE.split(declaration.value):
        replacement = _rename_animation_token(part, generator)
        if replacement is None:
            parts.append(part)
            continue
        parts.append(replacement)
        changed = True
    if changed:
        declaration.value = " ".join(parts)
    return changed


def _rename_animation_token(token: str, generator: NameGenerator) -> str | None:
    # A trailing comma separates animations in a list.
    suffix = ""
    if token.endswith(",") and len(token) > 1:
        token, suffix = token[:-1], ","
    generated = generator.keyframe_name(strip_quotes(token))
    if generated is None:
        return None
    return generated + suffix
