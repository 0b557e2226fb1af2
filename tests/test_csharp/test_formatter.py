"""
CSharpFormatter のユニットテスト

行の分割・trim、括弧によるインデント推論、制御構文ヘッダー直後の
追加インデント、空行の扱いを検証する。
"""

from __future__ import annotations

from hypothesis import given, strategies as st

from recgen.csharp.formatter import CSharpFormatter


def _format(text: str, offset: int = 0) -> str:
    formatter = CSharpFormatter(offset)
    formatter.add(text)
    return formatter.format()


class TestBuffer:
    """add / prepend / new_line のテスト。"""

    def test_add_trims_lines(self) -> None:
        assert _format("   a   \n   b") == "a\nb"

    def test_add_strips_surrounding_blank_lines(self) -> None:
        assert _format("\n\na\n\n") == "a"

    def test_inner_blank_line_kept(self) -> None:
        assert _format("a\n\nb") == "a\n\nb"

    def test_prepend(self) -> None:
        formatter = CSharpFormatter()
        formatter.add("b")
        formatter.prepend("a")
        assert formatter.format() == "a\nb"

    def test_new_line_not_offset(self) -> None:
        """空行にはオフセットが付与されないこと。"""
        formatter = CSharpFormatter(8)
        formatter.new_line()
        formatter.add("x;")
        assert formatter.format() == "\n        x;"


class TestIndentation:
    """インデント推論のテスト。"""

    def test_braces(self) -> None:
        assert _format("class A\n{\nint x;\n}") == "class A\n{\n    int x;\n}"

    def test_nested_braces(self) -> None:
        result = _format("a\n{\nb\n{\nc;\n}\n}")
        assert result == "a\n{\n    b\n    {\n        c;\n    }\n}"

    def test_open_paren_and_lone_close(self) -> None:
        assert _format("Foo(\nbar\n);") == "Foo(\n    bar\n);"

    def test_open_bracket(self) -> None:
        assert _format("x = [\n1,\n]") == "x = [\n    1,\n]"

    def test_closing_call(self) -> None:
        assert _format("Run(async () =>\n{\nGo();\n});\nNext();") == (
            "Run(async () =>\n{\n    Go();\n});\nNext();"
        )

    def test_double_close_paren_dedents_after(self) -> None:
        """行末が '));' の場合は次の行から浅くなること。"""
        assert _format("Foo(\nBar(1));\nBaz();") == "Foo(\n    Bar(1));\nBaz();"

    def test_balanced_inline_array_does_not_dedent(self) -> None:
        """同じ行で閉じる配列リテラルはインデントに影響しないこと。"""
        result = _format("a\n{\nSet(new[] { 1 });\n}")
        assert result == "a\n{\n    Set(new[] { 1 });\n}"

    def test_never_negative(self) -> None:
        assert _format("}\n}\nx;") == "}\n}\nx;"

    def test_offset_applied(self) -> None:
        assert _format("a\n{\nb;\n}", offset=4) == "    a\n    {\n        b;\n    }"


class TestControlHeader:
    """波括弧なし制御構文の追加インデントのテスト。"""

    def test_if_body_indented(self) -> None:
        assert _format("if (x)\nfoo();\nbar();") == "if (x)\n    foo();\nbar();"

    def test_while_body_indented(self) -> None:
        assert _format("while (true)\nstep();") == "while (true)\n    step();"

    def test_identifier_starting_with_if_not_treated_as_header(self) -> None:
        assert _format("ifDone(x)\nfoo();") == "ifDone(x)\nfoo();"

    def test_only_next_line_gets_extra_indent(self) -> None:
        assert _format("for (;;)\na();\nb();\nc();") == "for (;;)\n    a();\nb();\nc();"


@given(st.lists(st.sampled_from(["{", "}", "a;", "(", ");", "", "});"]), max_size=30))
def test_indentation_never_negative(lines: list[str]) -> None:
    """どのような行の並びでもインデント幅が 4 の倍数で非負であること。"""
    formatter = CSharpFormatter()
    formatter.add("\n".join(lines) or "a;")
    for line in formatter.format().split("\n"):
        indent = len(line) - len(line.lstrip(" "))
        assert indent % 4 == 0


class TestComments:
    """コメント行がインデント推論に影響しないことのテスト。"""

    def test_comment_ending_with_open_paren(self) -> None:
        assert _format("// Go to https://e.com/q=(\nGo();") == "// Go to https://e.com/q=(\nGo();"

    def test_comment_starting_with_close_brace(self) -> None:
        assert _format("a\n{\n// } closed\nb;\n}") == "a\n{\n    // } closed\n    b;\n}"

    def test_comment_ending_with_double_close_paren(self) -> None:
        assert _format("Foo(\n// x));\nBar();") == "Foo(\n    // x));\n    Bar();"
