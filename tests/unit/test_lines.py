# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
import pytest

from codemetrics.lines import classify_lines, split_lines

SCENARIO_SOURCE = "int x = 1;\n// comment\n\nif (x > 0) { DoA(); } else { DoB(); }\n"


def test_lines_001_scenario_counts_code_blank_and_comment() -> None:
    counts = classify_lines(SCENARIO_SOURCE)

    assert counts.total_lines == 4
    assert counts.lines_of_code == 2
    assert counts.blank_lines == 1
    assert counts.comment_lines == 1


def test_lines_002_empty_text_has_no_lines() -> None:
    counts = classify_lines("")

    assert counts.total_lines == 0
    assert counts.lines_of_code == 0
    assert counts.blank_lines == 0
    assert counts.comment_lines == 0


def test_lines_003_split_tolerates_crlf_and_unterminated_last_line() -> None:
    assert split_lines("a;\r\n\r\n// c\r\n") == ["a;", "", "// c"]
    assert split_lines("a;\nb;") == ["a;", "b;"]
    assert split_lines("\n") == [""]


def test_lines_004_crlf_source_counts_like_lf_source() -> None:
    counts = classify_lines("a;\r\n\r\n// c\r\n")

    assert (counts.lines_of_code, counts.blank_lines, counts.comment_lines) == (1, 1, 1)


def test_lines_005_block_comment_spans_lines_and_still_counts_as_code() -> None:
    source = "\n".join(
        [
            "/* start",
            " * middle",
            " */",
            "int a; /* not tracked */",
        ]
    )

    counts = classify_lines(source)

    assert counts.comment_lines == 3
    assert counts.lines_of_code == 4


def test_lines_006_single_line_block_comment_does_not_open_block() -> None:
    counts = classify_lines("/* one */\nint b;\n")

    assert counts.comment_lines == 1
    assert counts.lines_of_code == 2


def test_lines_007_doc_comments_and_trailing_comments_are_counted() -> None:
    source = "\n".join(
        [
            "/// <summary>Docs</summary>",
            "int x = 1; // trailing",
            "int y = 2;",
        ]
    )

    counts = classify_lines(source)

    assert counts.comment_lines == 2
    assert counts.lines_of_code == 2


def test_lines_008_legacy_heuristic_misfires_on_urls_and_quoted_prefix() -> None:
    counts_url = classify_lines('var url = "http://example.com";\n')
    counts_quoted = classify_lines('var s = "a" // note\n')

    assert counts_url.comment_lines == 1
    assert counts_quoted.comment_lines == 0


def test_lines_009_tokenized_mode_skips_comment_markers_inside_literals() -> None:
    source = "\n".join(
        [
            'var url = "http://example.com";',
            'var s = "a" // note',
            "var c = '/';",
            'var v = @"C:\\""//not a comment""";',
        ]
    )

    counts = classify_lines(source, comment_mode="tokenized")

    assert counts.comment_lines == 1
    assert counts.lines_of_code == 4


def test_lines_010_tokenized_mode_excludes_comment_only_lines_from_code() -> None:
    source = "\n".join(
        [
            "/* start",
            " * middle",
            " */",
            "int a; /* inline */",
            "",
            "// only comment",
        ]
    )

    counts = classify_lines(source, comment_mode="tokenized")

    assert counts.comment_lines == 5
    assert counts.lines_of_code == 1
    assert counts.blank_lines == 1


def test_lines_011_tokenized_mode_tracks_multiline_verbatim_strings() -> None:
    source = "\n".join(
        [
            'var text = @"first',
            "// inside the literal",
            '";',
        ]
    )

    counts = classify_lines(source, comment_mode="tokenized")

    assert counts.comment_lines == 0
    assert counts.lines_of_code == 3


def test_lines_014_tokenized_mode_skips_interpolation_holes() -> None:
    source = "\n".join(
        [
            'var s = $"{map["k"]} // not a comment";',
            'var t = $"{{literal}} {(a ? "x" : "y")} /* nor this */";',
            "var u = 1; // trailing",
        ]
    )

    counts = classify_lines(source, comment_mode="tokenized")

    assert counts.comment_lines == 1
    assert counts.lines_of_code == 3


def test_lines_015_tokenized_mode_tracks_raw_string_literals() -> None:
    source = "\n".join(
        [
            'var json = """',
            "    // inside the literal",
            '    { "a": "/* still text */" }',
            '    """;',
            'var one = """quoted "text" // here""";',
            'var hole = $$"""{{x}} // text""";',
            "// real comment",
        ]
    )

    counts = classify_lines(source, comment_mode="tokenized")

    assert counts.comment_lines == 1
    assert counts.lines_of_code == 6


@pytest.mark.parametrize(
    "source",
    [
        "",
        SCENARIO_SOURCE,
        "// a\n// b\n",
        "\n\n\n",
        "/* x\n\n*/\ncode();\n",
    ],
)
@pytest.mark.parametrize("mode", ["legacy", "tokenized"])
def test_lines_012_code_plus_blank_never_exceeds_total(source: str, mode: str) -> None:
    counts = classify_lines(source, comment_mode=mode)  # type: ignore[arg-type]

    assert counts.lines_of_code + counts.blank_lines <= counts.total_lines


def test_lines_013_unknown_mode_is_rejected() -> None:
    with pytest.raises(ValueError):
        classify_lines("x", comment_mode="fancy")  # type: ignore[arg-type]
