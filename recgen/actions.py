"""
アクションモデル — 記録されたユーザー操作の中間表現

レコーダーから受け取った操作（click, fill, navigate 等）と、
その操作が引き起こす副作用シグナル（popup, download, dialog, navigation）を
Pydantic v2 モデルとして定義する。

各アクションは ``name`` フィールドで判別される tagged union であり、
name によって保持するフィールドが一意に決まる。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# ---------------------------------------------------------------------------
# 修飾キー
# ---------------------------------------------------------------------------

# レコーダーが送るビットマスク（Alt=1, Control=2, Meta=4, Shift=8）
_MODIFIER_BITS: list[tuple[int, str]] = [
    (1, "Alt"),
    (2, "Control"),
    (4, "Meta"),
    (8, "Shift"),
]


def to_modifiers(modifiers: int) -> list[str]:
    """修飾キーのビットマスクをキー名リストに変換する。

    Args:
        modifiers: 修飾キーのビットマスク

    Returns:
        Alt, Control, Meta, Shift の順に並んだキー名リスト
    """
    return [name for bit, name in _MODIFIER_BITS if modifiers & bit]


# ---------------------------------------------------------------------------
# シグナル定義
# ---------------------------------------------------------------------------

class _Model(BaseModel):
    model_config = ConfigDict(extra="forbid")


class NavigationSignal(_Model):
    """操作によるページ遷移。

    isAsync が True の場合は遷移完了を待機するブロックで操作を包み、
    False の場合は操作後に URL を検証するコメントを出力する。
    """

    name: Literal["navigation"] = "navigation"
    url: str = Field(..., description="遷移先 URL")
    isAsync: bool = Field(default=False, description="遷移完了の待機が必要か")


class PopupSignal(_Model):
    """操作によって開かれるポップアップ（新しいページ）。"""

    name: Literal["popup"] = "popup"
    popupAlias: str = Field(..., description="ポップアップを束縛する変数名")


class DownloadSignal(_Model):
    """操作によって開始されるダウンロード。"""

    name: Literal["download"] = "download"
    downloadAlias: str = Field(default="", description="download 変数名の接尾辞")


class DialogSignal(_Model):
    """操作によって表示されるダイアログ（alert, confirm 等）。"""

    name: Literal["dialog"] = "dialog"
    dialogAlias: str = Field(default="", description="ハンドラ名の接尾辞")


Signal = Annotated[
    Union[NavigationSignal, PopupSignal, DownloadSignal, DialogSignal],
    Field(discriminator="name"),
]


@dataclass
class SignalMap:
    """アクションに付与されたシグナルを種別ごとに振り分けた結果。

    Attributes:
        dialog: ダイアログシグナル
        download: ダウンロードシグナル
        popup: ポップアップシグナル
        waitForNavigation: 待機付きの遷移シグナル（isAsync=True）
        assertNavigation: 事後検証する遷移シグナル（isAsync=False）
    """

    dialog: Optional[DialogSignal] = None
    download: Optional[DownloadSignal] = None
    popup: Optional[PopupSignal] = None
    waitForNavigation: Optional[NavigationSignal] = None
    assertNavigation: Optional[NavigationSignal] = None


def _signal_slot(signal: object) -> str:
    """シグナルが格納される SignalMap のフィールド名を返す。"""
    if isinstance(signal, NavigationSignal):
        return "waitForNavigation" if signal.isAsync else "assertNavigation"
    return signal.name  # type: ignore[attr-defined]


# ---------------------------------------------------------------------------
# アクション定義
# ---------------------------------------------------------------------------

class _ActionBase(_Model):
    signals: list[Signal] = Field(default_factory=list, description="操作が引き起こす副作用")

    @field_validator("signals")
    @classmethod
    def check_unique_signals(cls, signals: list) -> list:
        """同じ種別のシグナルが重複していないことを検証する。"""
        seen: set[str] = set()
        for signal in signals:
            slot = _signal_slot(signal)
            if slot in seen:
                raise ValueError(f"シグナル '{slot}' が重複しています")
            seen.add(slot)
        return signals


class OpenPageAction(_ActionBase):
    """新しいページを開く操作。"""

    name: Literal["openPage"] = "openPage"
    url: Optional[str] = Field(default=None, description="最初に表示された URL")


class ClosePageAction(_ActionBase):
    """ページを閉じる操作。"""

    name: Literal["closePage"] = "closePage"


class ClickAction(_ActionBase):
    """要素のクリック。clickCount が 2 の場合はダブルクリックとして扱う。"""

    name: Literal["click"] = "click"
    selector: str = Field(..., description="クリック対象のセレクタ")
    button: Literal["left", "middle", "right"] = Field(default="left", description="マウスボタン")
    modifiers: int = Field(default=0, ge=0, description="修飾キーのビットマスク")
    clickCount: int = Field(default=1, ge=1, description="クリック回数")


class CheckAction(_ActionBase):
    name: Literal["check"] = "check"
    selector: str = Field(..., description="チェック対象のセレクタ")


class UncheckAction(_ActionBase):
    name: Literal["uncheck"] = "uncheck"
    selector: str = Field(..., description="チェック解除対象のセレクタ")


class FillAction(_ActionBase):
    """入力フィールドへのテキスト入力。"""

    name: Literal["fill"] = "fill"
    selector: str = Field(..., description="入力対象のセレクタ")
    text: str = Field(..., description="入力するテキスト")


class SetInputFilesAction(_ActionBase):
    """ファイル入力要素へのファイル指定。files が空の場合は選択解除。"""

    name: Literal["setInputFiles"] = "setInputFiles"
    selector: str = Field(..., description="ファイル入力要素のセレクタ")
    files: list[str] = Field(default_factory=list, description="ファイルパスのリスト")


class PressAction(_ActionBase):
    """キー押下。modifiers と key は '+' で連結されたショートカットとして出力される。"""

    name: Literal["press"] = "press"
    selector: str = Field(..., description="キー押下対象のセレクタ")
    key: str = Field(..., description="キー名（Enter, Tab 等）")
    modifiers: int = Field(default=0, ge=0, description="修飾キーのビットマスク")


class NavigateAction(_ActionBase):
    name: Literal["navigate"] = "navigate"
    url: str = Field(..., description="遷移先 URL")


class SelectAction(_ActionBase):
    """select 要素のオプション選択。"""

    name: Literal["select"] = "select"
    selector: str = Field(..., description="select 要素のセレクタ")
    options: list[str] = Field(default_factory=list, description="選択するオプション値")


Action = Annotated[
    Union[
        OpenPageAction,
        ClosePageAction,
        ClickAction,
        CheckAction,
        UncheckAction,
        FillAction,
        SetInputFilesAction,
        PressAction,
        NavigateAction,
        SelectAction,
    ],
    Field(discriminator="name"),
]
"""全アクション種別の Union 型。``name`` で判別される。"""


class ActionInContext(_Model):
    """対象ページ・フレームの情報を付与したアクション。

    isMainFrame が False の場合、frameName または frameUrl のいずれかで
    操作対象のフレームを特定する（frameName が優先される）。
    """

    pageAlias: str = Field(..., description="操作対象ページの変数名")
    isMainFrame: bool = Field(default=True, description="メインフレームへの操作か")
    frameName: Optional[str] = Field(default=None, description="サブフレームの name 属性")
    frameUrl: Optional[str] = Field(default=None, description="サブフレームの URL")
    action: Action

    @model_validator(mode="after")
    def check_frame_address(self) -> "ActionInContext":
        if not self.isMainFrame and not self.frameName and not self.frameUrl:
            raise ValueError("サブフレームへの操作には frameName または frameUrl が必要です")
        return self


# ---------------------------------------------------------------------------
# ユーティリティ
# ---------------------------------------------------------------------------

def to_signal_map(action: _ActionBase) -> SignalMap:
    """アクションのシグナルリストを SignalMap に振り分ける。

    Args:
        action: 対象アクション

    Returns:
        種別ごとに振り分けたシグナル
    """
    signal_map = SignalMap()
    for signal in action.signals:
        setattr(signal_map, _signal_slot(signal), signal)
    return signal_map


def action_title(action: _ActionBase) -> str:
    """生成コードのコメントに使用する、人が読めるアクション名を返す。

    Args:
        action: 対象アクション

    Returns:
        "Click #submit" のようなタイトル文字列
    """
    name = action.name  # type: ignore[attr-defined]
    if name == "openPage":
        return "Open new page"
    if name == "closePage":
        return "Close page"
    if name == "check":
        return f"Check {action.selector}"
    if name == "uncheck":
        return f"Uncheck {action.selector}"
    if name == "click":
        if action.clickCount == 1:
            return f"Click {action.selector}"
        if action.clickCount == 2:
            return f"Double click {action.selector}"
        if action.clickCount == 3:
            return f"Triple click {action.selector}"
        return f"{action.clickCount}× click"
    if name == "fill":
        return f"Fill {action.selector}"
    if name == "setInputFiles":
        if not action.files:
            return "Clear selected files"
        return f"Upload {', '.join(action.files)}"
    if name == "navigate":
        return f"Go to {action.url}"
    if name == "press":
        return f"Press {'+'.join(to_modifiers(action.modifiers) + [action.key])}"
    if name == "select":
        return f"Select {', '.join(action.options)}"
    raise ValueError(f"未対応のアクション: {name}")
