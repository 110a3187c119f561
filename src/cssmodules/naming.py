# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Generate deterministic scoped names and maintain the export table."""

import logging
import re
from collections.abc import MutableMapping
from typing import Protocol

from cssmodules.errors import NamingError

logger = logging.getLogger(__name__)

IDENTIFIER_RE = re.compile(r"^-?[_a-zA-Z]+[_a-zA-Z0-9-]*$")

_UNSAFE_PATH_CHARS_RE = re.compile(r"[^_a-zA-Z0-9-]")
_CAMEL_BOUNDARY_RE = re.compile(r"[^a-zA-Z0-9]+(.)")


class NamingStrategy(Protocol):
    """Derive a global identifier for a symbol declared in a stylesheet."""

    def __call__(self, file_path: str, symbol: str) -> str:
        """Return the candidate name for ``symbol`` declared in ``file_path``."""


def sanitize_path(file_path: str) -> str:
    """Replace every character not allowed in identifiers with ``_``.

    Args:
        file_path: Absolute stylesheet path.

    Returns:
        Identifier-safe path text.
    """
    return _UNSAFE_PATH_CHARS_RE.sub("_", file_path)


def default_naming_strategy(file_path: str, symbol: str) -> str:
    """Build ``<sanitized path>-<symbol>``.

    Args:
        file_path: Absolute stylesheet path.
        symbol: Original class or keyframe name.

    Returns:
        Candidate scoped name.
    """
    return f"{sanitize_path(file_path)}-{symbol}"


def camelize(name: str) -> str:
    """Convert dashed or underscored names to camelCase.

    Each run of non-alphanumeric characters is dropped and the character
    following it is upper-cased. A trailing run is kept as-is.

    Args:
        name: Export key.

    Returns:
        camelCase form of ``name``.
    """
    return _CAMEL_BOUNDARY_RE.sub(lambda match: match.group(1).upper(), name)


def is_valid_identifier(name: str) -> bool:
    """Check a generated name against the CSS identifier grammar."""
    return IDENTIFIER_RE.match(name) is not None


def finalize_aliases(table: MutableMapping[str, str]) -> int:
    """Add camelCase aliases for every key present in the export table.

    Existing keys always win; aliases added here are not re-camelized.

    Args:
        table: Export table to extend in place.

    Returns:
        Number of aliases added.
    """
    added = 0
    for key, value in list(table.items()):
        camel = camelize(key)
        if camel in table:
            continue
        table[camel] = value
        added += 1
    return added


class NameGenerator:
    """Own the export, reverse and keyframe tables for one stylesheet pass."""

    def __init__(
        self,
        file_path: str,
        export_table: MutableMapping[str, str],
        naming_strategy: NamingStrategy = default_naming_strategy,
    ) -> None:
        """Initialize generator state.

        Args:
            file_path: Absolute path of the stylesheet being localized.
            export_table: Caller-owned table, possibly pre-seeded.
            naming_strategy: Candidate name policy.
        """
        self.file_path = file_path
        self.export_table = export_table
        self.naming_strategy = naming_strategy
        self.reverse_table: dict[str, str] = {}
        self.keyframes: dict[str, str] = {}

    def generate(self, symbol: str, is_keyframe: bool = False) -> str:
        """Return the scoped name of ``symbol``, creating it on first use.

        Args:
            symbol: Original class or keyframe name.
            is_keyframe: Whether the symbol names a ``@keyframes`` block.

        Returns:
            Generated global name.

        Raises:
            NamingError: If the strategy returns an invalid or colliding name.
        """
        if symbol in self.export_table:
            generated = self.export_table[symbol]
            # Pre-seeded entries may already carry composed aliases.
            self.reverse_table.setdefault(_own_name(generated), symbol)
        else:
            generated = self._new_name(symbol=symbol, is_keyframe=is_keyframe)
            self.export_table[symbol] = generated
            self.reverse_table[generated] = symbol
        if is_keyframe:
            self.keyframes[symbol] = generated
        return generated

    def original_symbol(self, generated: str) -> str | None:
        """Map a name generated in this pass back to its original symbol."""
        return self.reverse_table.get(generated)

    def is_local_symbol(self, symbol: str) -> bool:
        """Check whether ``symbol`` was declared in this pass."""
        if symbol not in self.export_table:
            return False
        return self.reverse_table.get(_own_name(self.export_table[symbol])) == symbol

    def keyframe_name(self, symbol: str) -> str | None:
        """Resolve the generated name of a local keyframe."""
        return self.keyframes.get(symbol)

    def _new_name(self, symbol: str, is_keyframe: bool) -> str:
        kind = "keyframe" if is_keyframe else "class"
        candidate = self.naming_strategy(self.file_path, symbol)
        if not is_valid_identifier(candidate):
            logger.warning(
                "Generated name rejected",
                extra={"symbol": symbol, "kind": kind, "candidate": candidate},
            )
            raise NamingError(
                symbol=symbol,
                kind=kind,
                file_path=self.file_path,
                candidate=candidate,
            )
        owner = self.reverse_table.get(candidate)
        if owner is not None and owner != symbol:
            logger.warning(
                "Generated name collision",
                extra={"symbol": symbol, "owner": owner, "candidate": candidate},
            )
            raise NamingError(
                symbol=symbol,
                kind=kind,
                file_path=self.file_path,
                candidate=candidate,
                reason=f'Name is already generated for "{owner}"',
            )
        return candidate


def _own_name(value: str) -> str:
    """Return the own generated name of an export entry extended by composes."""
    return value.split(" ", 1)[0]
