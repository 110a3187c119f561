# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Localize class and keyframe names of one stylesheet."""

import logging
import os
import re
from collections.abc import MutableMapping
from dataclasses import dataclass

from cssmodules.composes import COMPOSES_PROPERTY, resolve_composes
from cssmodules.errors import LocalizeError, PathError
from cssmodules.keyframes import (
    is_keyframes,
    localize_keyframes,
    rewrite_animation,
    rewrite_animation_name,
)
from cssmodules.naming import (
    NameGenerator,
    NamingStrategy,
    default_naming_strategy,
    finalize_aliases,
)
from cssmodules.scoping import localize_selector
from cssmodules.selector import parse
from cssmodules.stylesheet import AtRule, Rule, Stylesheet, parse_stylesheet

logger = logging.getLogger(__name__)

_VENDOR_PREFIX_RE = re.compile(r"^-[a-z]+-(?=animation)")


@dataclass(frozen=True)
class LocalizeOptions:
    """Configure one localization pass.

    Args:
        export_table: Caller-owned table to fill; a fresh dict when ``None``.
        naming_strategy: Policy turning ``(file path, symbol)`` into a name.
    """

    export_table: MutableMapping[str, str] | None = None
    naming_strategy: NamingStrategy = default_naming_strategy


@dataclass(frozen=True)
class LocalizeResult:
    """Store localized CSS, exports and rewrite counters.

    Args:
        css: Serialized stylesheet after localization.
        exports: Export table including camelCase aliases.
        classes_renamed: Count of class tokens replaced in selectors.
        keyframes_renamed: Count of ``@keyframes`` names replaced.
        animation_rewrites: Count of ``animation``/``animation-name`` values changed.
        composes_resolved: Count of ``composes`` declarations removed.
    """

    css: str
    exports: MutableMapping[str, str]
    classes_renamed: int
    keyframes_renamed: int
    animation_rewrites: int
    composes_resolved: int


def localize_css(
    css: str, source_path: str, options: LocalizeOptions | None = None
) -> LocalizeResult:
    """Parse, localize and serialize one stylesheet.

    Args:
        css: Stylesheet text.
        source_path: Absolute path of the stylesheet.
        options: Export table and naming strategy.

    Returns:
        Localized CSS and exports.

    Raises:
        LocalizeError: If parsing or any localization step fails.
    """
    stylesheet = parse_stylesheet(css, source_path=source_path)
    return localize_stylesheet(stylesheet, options=options)


def localize_stylesheet(
    stylesheet: Stylesheet,
    source_path: str | None = None,
    options: LocalizeOptions | None = None,
) -> LocalizeResult:
    """Localize a parsed stylesheet in place.

    Runs all selector and ``@keyframes`` rewrites before any declaration is
    touched, so ``animation`` may reference keyframes declared further down.

    Args:
        stylesheet: Parsed stylesheet.
        source_path: Absolute stylesheet path; defaults to the path recorded
            on ``stylesheet``.
        options: Export table and naming strategy.

    Returns:
        Localized CSS and exports.

    Raises:
        PathError: If the stylesheet path is missing or relative.
        NamingError: If a generated name is invalid.
        MalformedComposesError: If a ``composes`` declaration is invalid.
    """
    options = options or LocalizeOptions()
    source_path = source_path or stylesheet.source_path
    if not source_path or not os.path.isabs(source_path):
        logger.warning("Localization rejected", extra={"source_path": source_path})
        raise PathError(f"File name should be absolute! Got: {source_path}")

    export_table = options.export_table if options.export_table is not None else {}
    generator = NameGenerator(
        file_path=source_path,
        export_table=export_table,
        naming_strategy=options.naming_strategy,
    )

    try:
        classes_renamed, keyframes_renamed = _localize_rules(stylesheet, generator)
        animation_rewrites, composes_resolved = _localize_declarations(
            stylesheet, generator
        )
    except LocalizeError as exc:
        logger.warning(
            "Localization failed",
            extra={"source_path": source_path, "error": str(exc)},
        )
        raise

    aliases = finalize_aliases(export_table)
    logger.info(
        "Localized stylesheet",
        extra={
            "source_path": source_path,
            "classes_renamed": classes_renamed,
            "keyframes_renamed": keyframes_renamed,
            "animation_rewrites": animation_rewrites,
            "composes_resolved": composes_resolved,
            "aliases": aliases,
        },
    )
    return LocalizeResult(
        css=stylesheet.serialize(),
        exports=export_table,
        classes_renamed=classes_renamed,
        keyframes_renamed=keyframes_renamed,
        animation_rewrites=animation_rewrites,
        composes_resolved=composes_resolved,
    )


def _localize_rules(
    stylesheet: Stylesheet, generator: NameGenerator
) -> tuple[int, int]:
    classes_renamed = 0
    keyframes_renamed = 0
    for node in stylesheet.walk_rules():
        if isinstance(node, Rule):
            group = parse(node.selector)
            classes_renamed += localize_selector(group, generator.generate)
            node.selector = group.serialize()
        elif isinstance(node, AtRule) and is_keyframes(node):
            if localize_keyframes(node, generator):
                keyframes_renamed += 1
    logger.debug(
        "Rules pass finished",
        extra={
            "classes_renamed": classes_renamed,
            "keyframes": len(generator.keyframes),
        },
    )
    return classes_renamed, keyframes_renamed


def _localize_declarations(
    stylesheet: Stylesheet, generator: NameGenerator
) -> tuple[int, int]:
    animation_rewrites = 0
    composes_resolved = 0
    for declaration in list(stylesheet.walk_declarations()):
        prop = _VENDOR_PREFIX_RE.sub("", declaration.prop.lower())
        if prop == "animation-name":
            animation_rewrites += rewrite_animation_name(declaration, generator)
        elif prop == "animation":
            animation_rewrites += rewrite_animation(declaration, generator)
        elif prop == COMPOSES_PROPERTY:
            resolve_composes(declaration, generator)
            composes_resolved += 1
    return animation_rewrites, composes_resolved
