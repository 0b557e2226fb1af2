"""
C# リテラル整形 — Python の値を C# のリテラル表現に変換

文字列・数値・真偽値・リスト・辞書を再帰的に C# のリテラル構文へ変換する。
変換結果は値の「名前ヒント」（直前のプロパティ名）に依存する:

  - permissions / colorScheme / modifiers / button の文字列 → enum メンバー
  - latitude / longitude の数値 → decimal リテラル（m 接尾辞）
  - 辞書 → 名前ヒントから決まるクラスのオブジェクト初期化子
"""

from __future__ import annotations

import json
import math
import re
from typing import Any

# double で誤差なく表せる整数の上限
_MAX_EXACT_INTEGER = 2 ** 53
_MAX_LONG = 2 ** 63 - 1

# enum として出力するプロパティ名
_ENUM_PROPERTIES = frozenset(["permissions", "colorScheme", "modifiers", "button"])

# decimal リテラルとして出力するプロパティ名
_DECIMAL_PROPERTIES = frozenset(["latitude", "longitude"])

_CLASS_NAMES: dict[str, str] = {
    "viewport": "ViewportSize",
    "proxy": "ProxySettings",
    "permissions": "ContextPermission",
    "modifiers": "KeyboardModifier",
    "button": "MouseButton",
}

_PROPERTY_NAMES: dict[str, str] = {
    "storageState": "StorageStatePath",
    "viewport": "ViewportSize",
}


def quote(text: str) -> str:
    """文字列を C# のダブルクォート文字列リテラルに変換する。

    Args:
        text: 変換対象の文字列

    Returns:
        エスケープ済みのダブルクォート文字列
    """
    # U+2028 / U+2029 は C# では改行扱いになるためエスケープする
    return (
        json.dumps(text, ensure_ascii=False)
        .replace("\u2028", "\\u2028")
        .replace("\u2029", "\\u2029")
    )


def to_pascal(value: str) -> str:
    """先頭文字を大文字にする（userAgent → UserAgent）。"""
    if not value:
        return value
    return value[0].upper() + value[1:]


def _enum_member(value: str) -> str:
    # clipboard-read → ClipboardRead
    return "".join(to_pascal(part) for part in re.split(r"[-_\s]+", value) if part)


def get_class_name(name: str) -> str:
    """名前ヒントから C# のクラス名を求める。"""
    return _CLASS_NAMES.get(name, to_pascal(name))


def get_property_name(key: str) -> str:
    """オプションのキー名から C# のプロパティ名を求める。"""
    return _PROPERTY_NAMES.get(key, to_pascal(key))


def _format_number(value: Any) -> str:
    if isinstance(value, float):
        if math.isnan(value):
            return "double.NaN"
        if math.isinf(value):
            return "double.PositiveInfinity" if value > 0 else "double.NegativeInfinity"
        if value.is_integer() and abs(value) <= _MAX_EXACT_INTEGER:
            return str(int(value))
        return repr(value)
    if abs(value) > _MAX_LONG:
        # long に収まらない整数は double リテラルにする
        return repr(float(value))
    return str(value)


def format_object(value: Any, indent: str = "    ", name: str = "") -> str:
    """値を C# のリテラル表現に変換する。

    辞書のキーは与えられた順序のまま出力されるため、
    同じ値と名前ヒントからは常に同じテキストが生成される。

    Args:
        value: 変換対象の値（str, bool, int, float, None, list, dict）
        indent: オブジェクト初期化子内のインデント
        name: 名前ヒント（プロパティ名、またはクラス名）

    Returns:
        C# のリテラル表現
    """
    if isinstance(value, str):
        if name in _ENUM_PROPERTIES:
            return f"{get_class_name(name)}.{_enum_member(value)}"
        return quote(value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, (list, tuple)):
        if not value:
            return "new string[] { }"
        items = ", ".join(format_object(item, indent, name) for item in value)
        return f"new[] {{ {items} }}"
    if isinstance(value, dict):
        if not value:
            if not name:
                return ""
            class_name = get_class_name(name)
            # コンストラクタ引数付きのクラス名にはそのまま括弧が含まれる
            return f"new {class_name}" if class_name.endswith(")") else f"new {class_name}()"
        tokens = [
            f"{get_property_name(key)} = {format_object(item, indent, key)},"
            for key, item in value.items()
        ]
        body = f"\n{indent}".join(tokens)
        if name:
            return f"new {get_class_name(name)}\n{{\n{indent}{body}\n{indent}}}"
        return f"{{\n{indent}{body}\n{indent}}}"
    if name in _DECIMAL_PROPERTIES:
        if isinstance(value, float) and not math.isfinite(value):
            raise ValueError(f"{name} に有限でない値は指定できません: {value}")
        return _format_number(value) + "m"
    return _format_number(value)
