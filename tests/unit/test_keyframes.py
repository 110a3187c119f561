# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Unit tests for keyframe and animation rewriting."""

import pytest

from cssmodules import CssSyntaxError, NameGenerator, localize_css
from cssmodules.keyframes import (
    is_keyframes,
    rewrite_animation,
    rewrite_animation_name,
    strip_quotes,
)
from cssmodules.stylesheet import AtRule, Declaration


def _generator_with_keyframe(name: str) -> NameGenerator:
    generator = NameGenerator(file_path="/style.css", export_table={})
    generator.generate(name, is_keyframe=True)
    return generator


def test_ph3_key_001_replaces_local_keyframes_name(style_path: str) -> None:
    result = localize_css("@keyframes a { }", style_path)

    assert result.css == "@keyframes _style_css-a { }"
    assert result.exports == {"a": "_style_css-a"}
    assert result.keyframes_renamed == 1


def test_ph3_key_002_global_keyframes_are_unwrapped_and_not_exported(
    style_path: str,
) -> None:
    result = localize_css("@keyframes :global(a) { }", style_path)

    assert result.css == "@keyframes a { }"
    assert result.exports == {}


def test_ph3_key_003_rewrites_animation_name(style_path: str) -> None:
    assert localize_css(
        "@keyframes a { } html {animation-name: a}", style_path
    ).css == "@keyframes _style_css-a { } html {animation-name: _style_css-a}"
    assert localize_css(
        '@keyframes a { } html {animation-name: "a"}', style_path
    ).css == "@keyframes _style_css-a { } html {animation-name: _style_css-a}"


def test_ph3_key_004_rewrites_animation_shorthand(style_path: str) -> None:
    assert localize_css(
        "@keyframes a { } html {animation: 0.5s a}", style_path
    ).css == "@keyframes _style_css-a { } html {animation: 0.5s _style_css-a}"
    assert localize_css(
        '@keyframes a { } html {animation: 0.5s "a"}', style_path
    ).css == "@keyframes _style_css-a { } html {animation: 0.5s _style_css-a}"


def test_ph3_key_005_keyframe_and_class_share_name_in_any_order(
    style_path: str,
) -> None:
    expected_name = "_style_css-pulse"
    keyframes_first = localize_css(
        "@keyframes pulse { } "
        ".pulse {animation: pulse 2s infinite; animation-name: pulse;}",
        style_path,
    )
    keyframes_last = localize_css(
        ".pulse {animation: pulse 2s infinite; animation-name: pulse;} "
        "@keyframes pulse { }",
        style_path,
    )

    assert keyframes_first.css == (
        f"@keyframes {expected_name} {{ }} "
        f".{expected_name} {{animation: {expected_name} 2s infinite; "
        f"animation-name: {expected_name};}}"
    )
    assert keyframes_last.css == (
        f".{expected_name} {{animation: {expected_name} 2s infinite; "
        f"animation-name: {expected_name};}} "
        f"@keyframes {expected_name} {{ }}"
    )
    assert keyframes_last.animation_rewrites == 2


def test_ph3_key_006_unknown_or_global_animation_names_are_kept(
    style_path: str,
) -> None:
    for css in [
        "@keyframes :global(a) { } html {animation-name: a}",
        "html {animation-name: a}",
        'html {animation-name: "a"}',
        "html {animation: 0.5s a}",
        'html {animation: 0.5s "a"}',
    ]:
        expected = css.replace(":global(a)", "a")
        assert localize_css(css, style_path).css == expected


def test_ph3_key_007_animation_list_keeps_commas() -> None:
    generator = _generator_with_keyframe("spin")
    declaration = Declaration(prop="animation", value="spin 1s, fade 2s")

    assert rewrite_animation(declaration, generator)
    assert declaration.value == "_style_css-spin 1s, fade 2s"


def test_ph3_key_008_animation_without_match_is_untouched() -> None:
    generator = _generator_with_keyframe("spin")
    declaration = Declaration(prop="animation", value="fade   1s  linear")

    assert not rewrite_animation(declaration, generator)
    assert declaration.value == "fade   1s  linear"


def test_ph3_key_009_animation_name_accepts_single_quotes() -> None:
    generator = _generator_with_keyframe("spin")
    declaration = Declaration(prop="animation-name", value="'spin'")

    assert rewrite_animation_name(declaration, generator)
    assert declaration.value == "_style_css-spin"


def test_ph3_key_010_vendor_prefixed_keyframes(style_path: str) -> None:
    assert is_keyframes(AtRule(name="-webkit-keyframes"))
    assert is_keyframes(AtRule(name="KEYFRAMES"))
    assert not is_keyframes(AtRule(name="media"))

    result = localize_css(
        "@-webkit-keyframes a { } .b { -webkit-animation: a 1s; }", style_path
    )

    assert result.css == (
        "@-webkit-keyframes _style_css-a { } "
        "._style_css-b { -webkit-animation: _style_css-a 1s; }"
    )


def test_ph3_key_011_strip_quotes_needs_matching_pair() -> None:
    assert strip_quotes('"a"') == "a"
    assert strip_quotes("'a'") == "a"
    assert strip_quotes("\"a'") == "\"a'"
    assert strip_quotes('"') == '"'


def test_ph3_key_012_keyframes_without_name_are_rejected(style_path: str) -> None:
    with pytest.raises(CssSyntaxError, match="@keyframes rule has no name"):
        localize_css("@keyframes { } .a { }", style_path)
