# C# 出力モジュール
# Playwright for .NET 向けのコード生成器、リテラル整形、インデント整形を提供

from .formatter import CSharpFormatter
from .generator import CSharpLanguageGenerator, format_context_options
from .values import format_object, get_class_name, get_property_name, quote

__all__ = [
    "CSharpFormatter",
    "CSharpLanguageGenerator",
    "format_context_options",
    "format_object",
    "get_class_name",
    "get_property_name",
    "quote",
]
