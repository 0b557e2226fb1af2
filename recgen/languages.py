"""
言語ジェネレータ — 出力言語ごとのコード生成器のインターフェース

各言語ジェネレータはヘッダー、アクション単位のブロック、フッターを
それぞれ独立したテキストとして生成する。連結は CodeGenerator が行う。
"""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

from .actions import ActionInContext
from .options import GeneratorOptions


class UnreachableActionError(RuntimeError):
    """呼び出し規約違反によって到達しないはずの分岐に到達した場合のエラー。

    openPage アクションが呼び出し式の生成に渡された場合など、
    呼び出し側のバグを示すため、生成全体を中断する。
    """


class UnknownLanguageError(KeyError):
    """未登録の言語 ID が指定された場合のエラー。"""


@runtime_checkable
class LanguageGenerator(Protocol):
    """言語ジェネレータの Protocol 定義。

    Attributes:
        id: 言語 ID（CLI の --target で指定する値）
        file_name: 表示用の言語名
        highlighter: シンタックスハイライタ名
    """

    id: str
    file_name: str
    highlighter: str

    def generate_action(self, action_in_context: ActionInContext) -> str:
        ...

    def generate_header(self, options: GeneratorOptions) -> str:
        ...

    def generate_footer(self, save_storage: Optional[str]) -> str:
        ...


def available_languages() -> list[str]:
    """登録済みの言語 ID を返す。"""
    return list(_registry())


def get_language(language_id: str) -> LanguageGenerator:
    """言語 ID に対応するジェネレータを生成する。

    Args:
        language_id: 言語 ID（例: "csharp"）

    Returns:
        言語ジェネレータ

    Raises:
        UnknownLanguageError: 未登録の言語 ID の場合
    """
    registry = _registry()
    if language_id not in registry:
        raise UnknownLanguageError(language_id)
    return registry[language_id]()


def _registry() -> dict:
    from .csharp import CSharpLanguageGenerator

    return {CSharpLanguageGenerator.id: CSharpLanguageGenerator}
