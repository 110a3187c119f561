# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Public import surface for CSS Modules localization."""

from cssmodules.errors import (
    CssSyntaxError,
    LocalizeError,
    MalformedComposesError,
    NamingError,
    PathError,
)
from cssmodules.localizer import (
    LocalizeOptions,
    LocalizeResult,
    localize_css,
    localize_stylesheet,
)
from cssmodules.naming import (
    NameGenerator,
    NamingStrategy,
    camelize,
    default_naming_strategy,
    finalize_aliases,
)
from cssmodules.stylesheet import Stylesheet, parse_stylesheet

__all__ = [
    "CssSyntaxError",
    "LocalizeError",
    "LocalizeOptions",
    "LocalizeResult",
    "MalformedComposesError",
    "NameGenerator",
    "NamingError",
    "NamingStrategy",
    "PathError",
    "Stylesheet",
    "camelize",
    "default_naming_strategy",
    "finalize_aliases",
    "localize_css",
    "localize_stylesheet",
    "parse_stylesheet",
]
