"""
CodeGenerator — ヘッダー・アクション・フッターを連結して 1 本のプログラムを生成

言語ジェネレータが返すブロックを記録順に連結する。
生成は全て完了してから文字列として返すため、途中で例外が発生した場合に
不完全なコードが出力されることはない。
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from .actions import ActionInContext
from .languages import LanguageGenerator, get_language
from .options import GeneratorOptions

logger = logging.getLogger(__name__)


class CodeGenerator:
    """1 回分のコード生成セッション。

    使用例::

        generator = CodeGenerator(GeneratorOptions(browserName="firefox"))
        source = generator.generate(recording.actions)
    """

    def __init__(
        self,
        options: GeneratorOptions,
        language: Optional[LanguageGenerator] = None,
    ) -> None:
        """セッションを初期化する。

        Args:
            options: 生成オプション
            language: 言語ジェネレータ。省略時は C#
        """
        self._options = options
        self._language = language if language is not None else get_language("csharp")

    @property
    def language(self) -> LanguageGenerator:
        return self._language

    def generate(self, actions: Iterable[ActionInContext]) -> str:
        """アクション列からプログラム全体のソースコードを生成する。

        Args:
            actions: 記録順のアクション列

        Returns:
            末尾改行付きのソースコード

        Raises:
            UnreachableActionError: 呼び出し規約違反のアクションが含まれる場合
            UnknownDeviceError: 未知のデバイス名が指定されている場合
        """
        parts = [self._language.generate_header(self._options)]
        count = 0
        for action_in_context in actions:
            parts.append(self._language.generate_action(action_in_context))
            count += 1
        parts.append(self._language.generate_footer(self._options.saveStorage))

        logger.info(
            "コードを生成しました: %s, %d アクション", self._language.file_name, count,
        )
        return "\n".join(parts)
