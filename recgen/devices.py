"""
デバイスプリセット — デバイス名からコンテキストオプションを引く

パッケージ同梱の devices.yaml を ruamel.yaml で読み込み、
デバイス名 → コンテキストオプション辞書の対応表として提供する。
"""

from __future__ import annotations

import copy
import logging
from pathlib import Path
from typing import Any, Optional

from ruamel.yaml import YAML

logger = logging.getLogger(__name__)

_DEVICES_PATH = Path(__file__).parent / "devices.yaml"

_devices: Optional[dict[str, dict[str, Any]]] = None


class UnknownDeviceError(KeyError):
    """デバイス名がプリセットに存在しない場合のエラー。"""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"未知のデバイスです: {self.name}"


def _load_devices() -> dict[str, dict[str, Any]]:
    """devices.yaml を読み込み、結果をモジュール内にキャッシュする。"""
    global _devices
    if _devices is None:
        yaml = YAML(typ="safe")
        with open(_DEVICES_PATH, "r", encoding="utf-8") as f:
            _devices = yaml.load(f) or {}
        logger.debug("デバイスプリセットを読み込みました: %d 件", len(_devices))
    return _devices


def list_devices() -> list[str]:
    """同梱されているデバイス名を定義順に返す。"""
    return list(_load_devices())


def get_device(name: str) -> dict[str, Any]:
    """デバイス名に対応するコンテキストオプションを返す。

    返り値はコピーのため、呼び出し側で変更してもプリセットには影響しない。

    Args:
        name: デバイス名（例: "iPhone 11"）

    Returns:
        コンテキストオプションの辞書

    Raises:
        UnknownDeviceError: デバイス名が見つからない場合
    """
    devices = _load_devices()
    if name not in devices:
        raise UnknownDeviceError(name)
    return copy.deepcopy(devices[name])
