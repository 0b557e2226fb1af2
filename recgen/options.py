"""
生成オプション — ヘッダー/フッター生成に使用する設定値

ブラウザ種別、起動オプション、コンテキストオプション、
デバイス名、ストレージ状態の保存先をまとめた GeneratorOptions と、
デバイスプリセットとの差分を取る sanitize_device_options を提供する。
"""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

BrowserName = Literal["chromium", "firefox", "webkit"]


class GeneratorOptions(BaseModel):
    """コード生成セッション全体で共有される読み取り専用の設定。

    launchOptions / contextOptions のキー順序は出力順序としてそのまま使用される。
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    browserName: BrowserName = Field(default="chromium", description="起動するブラウザ")
    launchOptions: dict[str, Any] = Field(default_factory=dict, description="ブラウザ起動オプション")
    contextOptions: dict[str, Any] = Field(default_factory=dict, description="ブラウザコンテキストオプション")
    deviceName: Optional[str] = Field(default=None, description="エミュレートするデバイス名")
    saveStorage: Optional[str] = Field(default=None, description="ストレージ状態の保存先パス")


def sanitize_device_options(device: dict[str, Any], options: dict[str, Any]) -> dict[str, Any]:
    """デバイスプリセットと同じ値を持つオプションを取り除く。

    明示的に指定されたオプションのうち、プリセットと異なる値だけが残る。
    残った値はプリセットより優先して出力される。どちらの引数も変更しない。

    Args:
        device: デバイスプリセットのコンテキストオプション
        options: 明示的に指定されたコンテキストオプション

    Returns:
        プリセットとの差分のみを含む新しい辞書
    """
    return {
        key: value
        for key, value in options.items()
        if key not in device or device[key] != value
    }
