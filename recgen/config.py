"""
設定 — 環境変数からのコード生成設定の読み込み

CLI 引数 > 記録ファイルの options > 環境変数 > デフォルト値 の優先順位で適用される。

環境変数一覧:
  RECGEN_BROWSER      : 起動するブラウザ（chromium/firefox/webkit, デフォルト: chromium）
  RECGEN_DEVICE       : エミュレートするデバイス名（デフォルト: なし）
  RECGEN_SAVE_STORAGE : ストレージ状態の保存先パス（デフォルト: なし）
  RECGEN_TARGET       : 出力言語 ID（デフォルト: csharp）
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from .options import GeneratorOptions

logger = logging.getLogger(__name__)

_ENV_BROWSER = "RECGEN_BROWSER"
_ENV_DEVICE = "RECGEN_DEVICE"
_ENV_SAVE_STORAGE = "RECGEN_SAVE_STORAGE"
_ENV_TARGET = "RECGEN_TARGET"

_BROWSERS = ("chromium", "firefox", "webkit")


@dataclass
class CodegenConfig:
    """コード生成の実行時設定。

    Attributes:
        browser_name: 起動するブラウザ
        device_name: エミュレートするデバイス名
        save_storage: ストレージ状態の保存先パス
        target: 出力言語 ID
    """

    browser_name: str = "chromium"
    device_name: Optional[str] = None
    save_storage: Optional[str] = None
    target: str = "csharp"


def load_config_from_env() -> CodegenConfig:
    """環境変数から CodegenConfig を生成する。

    設定されていない環境変数はデフォルト値を使用する。
    不正なブラウザ名は警告を出して無視する。

    Returns:
        環境変数から読み込んだ設定
    """
    config = CodegenConfig()

    if _ENV_BROWSER in os.environ:
        val = os.environ[_ENV_BROWSER].lower()
        if val in _BROWSERS:
            config.browser_name = val
        else:
            logger.warning("RECGEN_BROWSER の値が不正です: %s", os.environ[_ENV_BROWSER])

    if os.environ.get(_ENV_DEVICE):
        config.device_name = os.environ[_ENV_DEVICE]

    if os.environ.get(_ENV_SAVE_STORAGE):
        config.save_storage = os.environ[_ENV_SAVE_STORAGE]

    if os.environ.get(_ENV_TARGET):
        config.target = os.environ[_ENV_TARGET]

    logger.debug("設定を読み込みました: %s", config)
    return config


def apply_overrides(
    config: CodegenConfig,
    recorded: Optional[GeneratorOptions] = None,
    browser_name: Optional[str] = None,
    device_name: Optional[str] = None,
    save_storage: Optional[str] = None,
) -> GeneratorOptions:
    """設定・記録ファイルの options・CLI 引数を合成して GeneratorOptions を作る。

    Args:
        config: 環境変数由来の設定
        recorded: 記録ファイルに含まれていた options（fields_set のみ優先）
        browser_name: CLI で指定されたブラウザ
        device_name: CLI で指定されたデバイス名
        save_storage: CLI で指定された保存先パス

    Returns:
        合成済みの生成オプション
    """
    values: dict = {
        "browserName": config.browser_name,
        "deviceName": config.device_name,
        "saveStorage": config.save_storage,
    }
    if recorded is not None:
        values.update(recorded.model_dump(include=recorded.model_fields_set))

    cli_values = {
        "browserName": browser_name,
        "deviceName": device_name,
        "saveStorage": save_storage,
    }
    values.update({key: value for key, value in cli_values.items() if value is not None})
    return GeneratorOptions(**values)
