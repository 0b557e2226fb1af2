"""
記録ファイル — レコーダー出力（YAML / JSON）の読み込みと検証

ruamel.yaml で記録ファイルを読み込み、Pydantic の Recording モデルに変換する。
JSON は YAML のサブセットとして同じローダーで扱う。

記録ファイルの形式::

    options:
      browserName: chromium
      launchOptions:
        headless: false
    actions:
      - pageAlias: page
        action:
          name: openPage
          url: about:blank
      - pageAlias: page
        action:
          name: navigate
          url: https://example.com
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic import ValidationError as PydanticValidationError
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .actions import ActionInContext
from .options import GeneratorOptions

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Recording モデル
# ---------------------------------------------------------------------------

class Recording(BaseModel):
    """記録されたアクション列と生成オプション。

    popup / download / dialog の変数名は記録全体で一意でなければならない。
    popup の変数名は openPage で開かれたページの変数名とも衝突してはならない。
    """

    model_config = ConfigDict(extra="forbid")

    options: GeneratorOptions = Field(default_factory=GeneratorOptions, description="生成オプション")
    actions: list[ActionInContext] = Field(default_factory=list, description="記録順のアクション")

    @model_validator(mode="after")
    def check_unique_aliases(self) -> "Recording":
        page_aliases = {
            item.pageAlias for item in self.actions if item.action.name == "openPage"
        }
        seen: set[tuple[str, str]] = set()
        for item in self.actions:
            for signal in item.action.signals:
                if signal.name == "popup":
                    key = ("popup", signal.popupAlias)
                    if signal.popupAlias in page_aliases:
                        raise ValueError(
                            f"popup の変数名 '{signal.popupAlias}' がページ変数と衝突しています"
                        )
                elif signal.name == "download":
                    key = ("download", signal.downloadAlias)
                elif signal.name == "dialog":
                    key = ("dialog", f"{item.pageAlias}:{signal.dialogAlias}")
                else:
                    continue
                if key in seen:
                    raise ValueError(f"{key[0]} の変数名 '{key[1]}' が重複しています")
                seen.add(key)
        return self


# ---------------------------------------------------------------------------
# バリデーションエラー表現
# ---------------------------------------------------------------------------

@dataclass
class RecordingValidationError:
    """記録ファイルの検証で検出されたエラー。

    Attributes:
        message: エラーメッセージ
        location: エラー箇所（フィールドパス等）
        line: ファイル内の行番号（取得可能な場合）
    """

    message: str
    location: str = ""
    line: Optional[int] = None


# ---------------------------------------------------------------------------
# RecordingLoader 本体
# ---------------------------------------------------------------------------

class RecordingLoader:
    """記録ファイルの読み込み・検証を担当するローダー。"""

    def __init__(self) -> None:
        self._yaml = YAML(typ="safe")

    def load(self, path: Path) -> Recording:
        """記録ファイルを読み込み、Recording モデルに変換する。

        Args:
            path: 読み込むファイルのパス（.yaml / .yml / .json）

        Returns:
            パース済みの Recording

        Raises:
            FileNotFoundError: ファイルが存在しない場合
            ValueError: 構文エラーまたはスキーマ検証エラーの場合
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"記録ファイルが見つかりません: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = self._yaml.load(f)
        except YAMLError as e:
            line_info = ""
            if getattr(e, "problem_mark", None) is not None:
                mark = e.problem_mark
                line_info = f" (行 {mark.line + 1}, 列 {mark.column + 1})"
            raise ValueError(f"構文エラー{line_info}: {e}") from e

        if data is None:
            raise ValueError("記録ファイルが空です")

        try:
            recording = Recording.model_validate(data)
        except PydanticValidationError as e:
            raise ValueError(f"スキーマ検証エラー: {e}") from e

        logger.info("記録ファイルを読み込みました: %s (%d アクション)", path, len(recording.actions))
        return recording

    def validate(self, path: Path) -> list[RecordingValidationError]:
        """記録ファイルを検証し、違反箇所をリストで返す。

        Args:
            path: 検証するファイルのパス

        Returns:
            検出されたエラーのリスト。問題がなければ空リスト
        """
        path = Path(path)
        errors: list[RecordingValidationError] = []

        if not path.exists():
            errors.append(RecordingValidationError(
                message=f"記録ファイルが見つかりません: {path}",
                location="file",
            ))
            return errors

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = self._yaml.load(f)
        except YAMLError as e:
            line = None
            if getattr(e, "problem_mark", None) is not None:
                line = e.problem_mark.line + 1
            errors.append(RecordingValidationError(
                message=f"構文エラー: {e}",
                location="yaml",
                line=line,
            ))
            return errors

        if data is None:
            errors.append(RecordingValidationError(
                message="記録ファイルが空です",
                location="file",
            ))
            return errors

        try:
            Recording.model_validate(data)
        except PydanticValidationError as e:
            for err in e.errors():
                loc_parts = [str(part) for part in err.get("loc", [])]
                errors.append(RecordingValidationError(
                    message=err.get("msg", "不明なエラー"),
                    location=" -> ".join(loc_parts) if loc_parts else "recording",
                ))

        return errors
