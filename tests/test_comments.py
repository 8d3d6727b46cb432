"""Tests for comment scanning."""

import pytest

from issue_linker.core.comments import scan_comments
from issue_linker.core.profiles import (
    CommentStyle,
    LANGUAGE_STYLES,
    PROFILES,
    detect_language,
    get_profile,
)


def spans(text, language):
    return [(s.text, s.start_offset, s.end_offset) for s in scan_comments(text, language)]


class TestProfiles:
    def test_known_language(self):
        assert get_profile("javascript").style == CommentStyle.SCRIPT
        assert get_profile("rust").style == CommentStyle.C_FAMILY
        assert get_profile("python").style == CommentStyle.HASH

    def test_unknown_language_falls_back(self):
        assert get_profile("brainfuck").style == CommentStyle.DEFAULT
        assert get_profile("").style == CommentStyle.DEFAULT

    def test_every_language_has_profile(self):
        for style in LANGUAGE_STYLES.values():
            assert style in PROFILES

    def test_detect_language(self):
        assert detect_language("app.ts") == "typescript"
        assert detect_language("App.TSX") == "typescriptreact"
        assert detect_language("Dockerfile") == "dockerfile"
        assert detect_language("notes") == "plaintext"
        assert detect_language(".bashrc") == "plaintext"
        assert detect_language("data.unknown") == "plaintext"


class TestBlockScanning:
    def test_js_scenario(self, js_sample):
        result = spans(js_sample, "javascript")
        assert [text for text, _, _ in result] == [
            "// comment with issue (#789)",
            "// another (#101112)",
            "/* multi-line\n   (#131415) */",
        ]

    def test_offsets_match_text(self, js_sample):
        for span in scan_comments(js_sample, "javascript"):
            assert js_sample[span.start_offset:span.end_offset] == span.text

    def test_empty_document(self):
        assert spans("", "javascript") == []
        assert spans("", "python") == []
        assert spans("", "nope") == []

    def test_no_trailing_newline(self):
        text = "let a = 1; // (#1)"
        assert spans(text, "javascript") == [("// (#1)", 11, len(text))]

    def test_unterminated_block_extends_to_end(self):
        text = "int a;\n/* open (#5)\nstill open"
        result = spans(text, "c")
        assert result == [("/* open (#5)\nstill open", 7, len(text))]

    def test_block_comments_on_one_line(self):
        result = spans("a /* x */ b /* y */", "java")
        assert [t for t, _, _ in result] == ["/* x */", "/* y */"]

    def test_markers_inside_strings_ignored(self):
        text = 'const u = "http://example.com"; // real (#2)'
        assert [t for t, _, _ in spans(text, "javascript")] == ["// real (#2)"]

    def test_block_marker_inside_string_ignored(self):
        text = "s = '/* not */'; /* yes */"
        assert [t for t, _, _ in spans(text, "typescript")] == ["/* yes */"]

    def test_line_comment_inside_block(self):
        text = "/* a // b */ c"
        assert [t for t, _, _ in spans(text, "go")] == ["/* a // b */"]

    def test_crlf_excluded_from_line_comment(self):
        text = "// one\r\nx();\r\n"
        assert spans(text, "javascript") == [("// one", 0, 6)]

    def test_rust_lifetime_does_not_hide_comment(self):
        text = "fn f(x: &'a str) {} // don't break (#1)\n"
        assert spans(text, "rust") == [("// don't break (#1)", 20, 39)]

    def test_char_literals_skipped(self):
        text = "char c = '\\''; char d = '/'; // quote (#2)"
        assert [t for t, _, _ in spans(text, "java")] == ["// quote (#2)"]

    def test_single_quote_string_in_script(self):
        text = "const s = 'it // is'; // real (#3)"
        assert [t for t, _, _ in spans(text, "javascript")] == ["// real (#3)"]

    def test_go_raw_string_skipped(self):
        text = "p := `// not`\n// yes"
        assert [t for t, _, _ in spans(text, "go")] == ["// yes"]

    def test_hash_is_not_comment_in_c_family(self):
        assert spans("#include <stdio.h>", "c") == []

    def test_css_has_no_line_comments(self):
        assert spans("a { b: url(//cdn) } /* c */", "css") == [("/* c */", 20, 27)]

    def test_lua_block_before_line(self):
        text = "--[[ block\n(#2) ]]\n-- line"
        assert [t for t, _, _ in spans(text, "lua")] == ["--[[ block\n(#2) ]]", "-- line"]

    def test_markup(self):
        text = "<p>x</p>\n<!-- see (#3) -->"
        assert [t for t, _, _ in spans(text, "html")] == ["<!-- see (#3) -->"]

    def test_sql(self):
        text = "SELECT 1; -- why (#4)\n/* note */"
        assert [t for t, _, _ in spans(text, "sql")] == ["-- why (#4)", "/* note */"]

    def test_is_lazy(self):
        result = scan_comments("// a", "javascript")
        assert iter(result) is result


class TestLineScanning:
    def test_python_full_line(self):
        text = "x = 1\n    # fix (#7)\ny = 2"
        assert spans(text, "python") == [("    # fix (#7)", 6, 20)]

    def test_python_trailing_comment_not_detected(self):
        assert spans("x = 1  # (#3)", "python") == []

    def test_crlf(self):
        text = "# a\r\nx\r\n# b"
        assert spans(text, "python") == [("# a", 0, 3), ("# b", 8, 11)]

    def test_blank_lines(self):
        assert spans("\n\n# a\n\n", "ruby") == [("# a", 2, 5)]

    def test_default_markers(self):
        text = "  -- dash (#1)\ncode\n% tex\n* bullet\n# hash\n// slash"
        result = spans(text, "unknownlang")
        assert [t for t, _, _ in result] == [
            "  -- dash (#1)",
            "% tex",
            "* bullet",
            "# hash",
            "// slash",
        ]

    def test_default_does_not_parse_blocks(self):
        text = "/* start\nmiddle (#1)\n*/"
        result = spans(text, "unknownlang")
        assert [t for t, _, _ in result] == ["/* start", "*/"]


SOUNDNESS_DOCUMENTS = [
    "",
    "no comments here",
    "// a\n/* b */ c // d\n/* unterminated",
    "'str // x' \"y /* z\" `tpl\n// q` // real",
    "# one\n#two\n  # three\r\n",
    "-- a\n--[[ b ]] -- c\n{- d -} %e ;f",
    "<!-- a --><!-- b",
    "/*/ tricky */ //*/ more",
    "fn f<'a>(x: &'a str) -> char { '\\n' } // don't (#1)",
]


@pytest.mark.parametrize("text", SOUNDNESS_DOCUMENTS)
@pytest.mark.parametrize(
    "language",
    ["javascript", "rust", "c", "python", "sql", "lua", "haskell", "css", "html", "latex", "ini", "nope"],
)
def test_spans_are_sound(text, language):
    result = list(scan_comments(text, language))
    previous_end = 0
    for span in result:
        assert 0 <= span.start_offset < span.end_offset <= len(text)
        assert span.start_offset >= previous_end
        assert text[span.start_offset:span.end_offset] == span.text
        previous_end = span.end_offset
