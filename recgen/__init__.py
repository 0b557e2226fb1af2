"""
recgen — 記録したブラウザ操作をソースコードに変換するジェネレータ

- CodeGenerator: ヘッダー・アクション・フッターを連結してプログラムを生成
- CSharpLanguageGenerator: Playwright for .NET 向けの言語ジェネレータ
- ActionInContext / GeneratorOptions: 入力となる中間表現と生成オプション
- RecordingLoader: 記録ファイル（YAML / JSON）の読み込みと検証
"""

from .actions import ActionInContext, action_title, to_modifiers, to_signal_map  # noqa: F401
from .codegen import CodeGenerator  # noqa: F401
from .csharp import CSharpLanguageGenerator  # noqa: F401
from .languages import LanguageGenerator, UnreachableActionError, get_language  # noqa: F401
from .options import GeneratorOptions  # noqa: F401
from .recording import Recording, RecordingLoader  # noqa: F401

__all__ = [
    "ActionInContext",
    "CSharpLanguageGenerator",
    "CodeGenerator",
    "GeneratorOptions",
    "LanguageGenerator",
    "Recording",
    "RecordingLoader",
    "UnreachableActionError",
    "action_title",
    "get_language",
    "to_modifiers",
    "to_signal_map",
]
