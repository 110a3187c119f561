# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Unit tests for composes parsing and resolution."""

import pytest

from cssmodules import LocalizeOptions, MalformedComposesError, localize_css
from cssmodules.composes import ComposesClause, parse_composes


def _run(css: str, exports: dict[str, str], source_path: str = "/style.css") -> str:
    options = LocalizeOptions(export_table=exports)
    return localize_css(css, source_path, options=options).css


def test_ph4_cmp_001_parse_local_clause() -> None:
    assert parse_composes("a b") == ComposesClause(names=("a", "b"))


def test_ph4_cmp_002_parse_global_and_file_clauses() -> None:
    assert parse_composes("a from global") == ComposesClause(
        names=("a",), is_global=True
    )
    assert parse_composes('a b from "./x.css"') == ComposesClause(
        names=("a", "b"), source="./x.css"
    )


@pytest.mark.parametrize(
    ("value", "message"),
    [
        ("a, b", "should not contain commas"),
        ("a from nowhere", "after 'from'"),
        ("from global", "nothing to compose"),
        (".a", "expected a class name"),
        ('a "x.css"', "expected a class name"),
        ("a > b", "expected a class name"),
    ],
)
def test_ph4_cmp_003_parse_rejects_malformed_values(value: str, message: str) -> None:
    with pytest.raises(MalformedComposesError, match=message):
        parse_composes(value)


def test_ph4_cmp_004_composes_local_class(exports: dict[str, str]) -> None:
    css = _run(".class1 { } .class2 {composes: class1;}", exports)

    assert css == "._style_css-class1 { } ._style_css-class2 {}"
    assert exports == {
        "class1": "_style_css-class1",
        "class2": "_style_css-class2 _style_css-class1",
    }


def test_ph4_cmp_005_composes_from_global(exports: dict[str, str]) -> None:
    css = _run(".class1 {composes: class1 from global;}", exports)

    assert css == "._style_css-class1 {}"
    assert exports == {"class1": "_style_css-class1 class1"}


def test_ph4_cmp_006_composes_from_absolute_file(exports: dict[str, str]) -> None:
    css = _run('.class2 {composes: class1 from "/css/the file.css";}', exports)

    assert css == "._style_css-class2 {}"
    assert exports == {"class2": "_style_css-class2 _css_the_file_css-class1"}


def test_ph4_cmp_007_composes_from_relative_file(exports: dict[str, str]) -> None:
    css = _run(
        '.class2 {composes: class1 from "the file.css";}',
        exports,
        source_path="/css/style.css",
    )

    assert css == "._css_style_css-class2 {}"
    assert exports == {"class2": "_css_style_css-class2 _css_the_file_css-class1"}


def test_ph4_cmp_008_relative_file_with_parent_segments(
    exports: dict[str, str],
) -> None:
    _run(
        '.b {composes: a from "../shared/base.css";}',
        exports,
        source_path="/app/css/style.css",
    )

    assert exports["b"] == "_app_css_style_css-b _app_shared_base_css-a"


def test_ph4_cmp_009_composes_multiple_local_classes(exports: dict[str, str]) -> None:
    css = _run(
        ".class1 { } .class2 {} .class3 {} .class4 {composes: class1 class2 class3;}",
        exports,
    )

    assert css == (
        "._style_css-class1 { } ._style_css-class2 {} "
        "._style_css-class3 {} ._style_css-class4 {}"
    )
    assert exports["class4"] == (
        "_style_css-class4 _style_css-class1 _style_css-class2 _style_css-class3"
    )


def test_ph4_cmp_010_composes_multiple_file_and_global_classes(
    exports: dict[str, str],
) -> None:
    _run('.class4 {composes: class1 class2 from "/css/file.css";}', exports)
    assert exports == {
        "class4": "_style_css-class4 _css_file_css-class1 _css_file_css-class2",
    }

    exports.clear()
    _run(".class4 {composes: class1 class2 class3 from global;}", exports)
    assert exports == {"class4": "_style_css-class4 class1 class2 class3"}


def test_ph4_cmp_011_multiple_statements_accumulate_in_order(
    exports: dict[str, str],
) -> None:
    css = _run(
        ".class1 { } .class2 {} "
        ".class4 {composes: class1; composes: class2; composes: class3 from global;}",
        exports,
    )

    assert css == "._style_css-class1 { } ._style_css-class2 {} ._style_css-class4 {}"
    assert exports == {
        "class1": "_style_css-class1",
        "class2": "_style_css-class2",
        "class4": "_style_css-class4 _style_css-class1 _style_css-class2 class3",
    }


def test_ph4_cmp_012_local_reference_may_follow_owner(exports: dict[str, str]) -> None:
    _run(".b {composes: a;} .a { }", exports)

    assert exports["b"] == "_style_css-b _style_css-a"


def test_ph4_cmp_013_file_reference_does_not_touch_export_table(
    exports: dict[str, str],
) -> None:
    _run('.b {composes: a from "/other.css";}', exports)

    assert set(exports) == {"b"}


@pytest.mark.parametrize(
    ("css", "message"),
    [
        (".class1 { } .class2 .class3 {composes: class1;}", "single class"),
        (".class1 { } .class2, .class3 {composes: class1;}", "single class"),
        (".class1 { } :global(.class2) {composes: class1;}", "no such local class"),
        (".class2 {composes: class1;}", "no such local class to compose from: class1"),
        (".class1 {composes: class1;}", "class composes itself: class1"),
        ("@media print { composes: a; }", "no parent rule"),
        (".a:hover {composes: b;} .b { }", "single class"),
    ],
)
def test_ph4_cmp_014_invalid_composes_fail(
    css: str, message: str, exports: dict[str, str]
) -> None:
    with pytest.raises(MalformedComposesError, match=message):
        _run(css, exports)


def test_ph4_cmp_015_custom_strategy_is_used_for_file_references(
    exports: dict[str, str],
) -> None:
    options = LocalizeOptions(
        export_table=exports,
        naming_strategy=lambda file_path, symbol: f"{symbol}_{len(file_path)}",
    )

    localize_css('.b {composes: a from "/x.css";}', "/style.css", options=options)

    assert exports["b"] == "b_10 a_6"


def test_ph4_cmp_016_comments_inside_value_are_ignored(
    style_path: str, exports: dict[str, str]
) -> None:
    assert parse_composes("a /* x */ b from /* y */ global") == ComposesClause(
        names=("a", "b"), is_global=True
    )

    css = _run(".a { composes: b /* c */ c; } .b{} .c{}", exports, style_path)

    assert css == "._style_css-a { } ._style_css-b{} ._style_css-c{}"
    assert exports["a"] == "_style_css-a _style_css-b _style_css-c"


def test_ph4_cmp_017_comment_before_removed_composes_is_kept(
    style_path: str, exports: dict[str, str]
) -> None:
    css = _run(".a { } .b { /* keep */ composes: a; color: red; }", exports, style_path)

    assert css == "._style_css-a { } ._style_css-b { /* keep */ color: red; }"
