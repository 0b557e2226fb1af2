"""
CSharpFormatter — 行バッファと括弧ベースのインデント推論

生成したコード片を行単位で蓄積し、format() 時に各行の先頭・末尾の
括弧からインデント量を推論して 1 つの文字列に組み立てる。
"""

from __future__ import annotations

import re

_INDENT = " " * 4

# 本体を波括弧で囲まない制御構文のヘッダー行（例: if (x)）
_BARE_CONTROL_HEADER = re.compile(r"^(for|while|if)\s*\(.*\)$")


class CSharpFormatter:
    """行バッファ兼インデント整形器。

    add / prepend で追加されたテキストは行ごとに分割・trim されて保持される。
    インデントは format() の時点で各行の形から推論する:

      - 行末が ``{`` ``[`` ``(`` なら次の行から 1 段深くする
      - 行頭が ``}`` ``]`` の行、``);`` だけの行、閉じ波括弧が開き波括弧より
        多く ``});`` を含む行はその行から 1 段浅くする
      - 行末が ``));`` なら次の行から 1 段浅くする
      - 波括弧なしの ``if (...)`` 等の直後の行だけ 1 段深くする
      - ``//`` で始まるコメント行は深さを変えない

    使用例::

        formatter = CSharpFormatter(8)
        formatter.add("if (x)\\nreturn;")
        text = formatter.format()
    """

    def __init__(self, offset: int = 0) -> None:
        """整形器を初期化する。

        Args:
            offset: 全ての非空行の先頭に付与する空白数
        """
        self._base_offset = " " * offset
        self._lines: list[str] = []

    @staticmethod
    def _split(text: str) -> list[str]:
        return [line.strip() for line in text.strip().split("\n")]

    def prepend(self, text: str) -> None:
        """テキストを行分割してバッファの先頭に追加する。"""
        self._lines = self._split(text) + self._lines

    def add(self, text: str) -> None:
        """テキストを行分割してバッファの末尾に追加する。"""
        self._lines.extend(self._split(text))

    def new_line(self) -> None:
        """空行を 1 行追加する。"""
        self._lines.append("")

    def format(self) -> str:
        """バッファの内容をインデント付きの 1 つの文字列に組み立てる。

        Returns:
            改行区切りの整形済みテキスト
        """
        depth = 0
        previous_line = ""
        rendered: list[str] = []
        for line in self._lines:
            if line == "":
                rendered.append(line)
                continue

            comment = line.startswith("//")
            if not comment and self._closes_block(line):
                depth = max(depth - 1, 0)

            extra = _INDENT if _BARE_CONTROL_HEADER.match(previous_line) else ""
            previous_line = line

            rendered.append(self._base_offset + _INDENT * depth + extra + line)

            if comment:
                continue
            if line.endswith(("{", "[", "(")):
                depth += 1
            if line.endswith("));"):
                depth = max(depth - 1, 0)
        return "\n".join(rendered)

    @staticmethod
    def _closes_block(line: str) -> bool:
        if line.startswith(("}", "]")) or line == ");":
            return True
        return "});" in line and line.count("}") > line.count("{")
