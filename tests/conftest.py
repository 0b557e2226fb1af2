"""
テスト共通フィクスチャ・Hypothesis ストラテジー定義

全テストモジュールで共有するフィクスチャとデータ生成器を提供する。
"""

from pathlib import Path

import pytest
from hypothesis import strategies as st

from recgen.actions import (
    ActionInContext,
    CheckAction,
    ClickAction,
    ClosePageAction,
    DialogSignal,
    DownloadSignal,
    FillAction,
    NavigateAction,
    NavigationSignal,
    PopupSignal,
    PressAction,
    SelectAction,
    SetInputFilesAction,
    UncheckAction,
)
from recgen.csharp import CSharpLanguageGenerator


# ---------------------------------------------------------------------------
# pytest フィクスチャ
# ---------------------------------------------------------------------------

@pytest.fixture
def generator() -> CSharpLanguageGenerator:
    """C# 言語ジェネレータを提供する。"""
    return CSharpLanguageGenerator()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """RECGEN_* 環境変数がテストに影響しないよう削除する。"""
    for key in ("RECGEN_BROWSER", "RECGEN_DEVICE", "RECGEN_SAVE_STORAGE", "RECGEN_TARGET"):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def sample_recording_yaml() -> str:
    """サンプルの記録ファイル（YAML）。

    ページを開いて検索する最小構成のフローを表現している。
    """
    return """\
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
      url: https://example.com/
  - pageAlias: page
    action:
      name: fill
      selector: input[name="q"]
      text: playwright
  - pageAlias: page
    action:
      name: press
      selector: input[name="q"]
      key: Enter
      signals:
        - name: navigation
          url: https://example.com/search?q=playwright
          isAsync: true
"""


@pytest.fixture
def recording_file(tmp_path: Path, sample_recording_yaml: str) -> Path:
    """サンプル記録ファイルを書き出したパスを提供する。"""
    path = tmp_path / "recording.yaml"
    path.write_text(sample_recording_yaml, encoding="utf-8")
    return path


def in_page(action, page_alias: str = "page") -> ActionInContext:
    """メインフレーム上のアクションとして包む。"""
    return ActionInContext(pageAlias=page_alias, action=action)


# ---------------------------------------------------------------------------
# Hypothesis ストラテジー
#
# セレクタ・テキストは括弧や引用符を含まない文字に限定し、
# 生成コード中の括弧の対応を文字数で検証できるようにする。
# ---------------------------------------------------------------------------

_PLAIN = st.text(alphabet="abcdefghijklmnopqrstuvwxyz0123456789#.-_ ", min_size=1, max_size=20)


def make_signals_strategy():
    """各種別 0〜1 個のシグナルリストを生成するストラテジー。"""
    return st.tuples(
        st.one_of(st.none(), st.builds(DialogSignal, dialogAlias=st.sampled_from(["", "1", "2"]))),
        st.one_of(st.none(), st.builds(DownloadSignal, downloadAlias=st.sampled_from(["", "1"]))),
        st.one_of(st.none(), st.builds(PopupSignal, popupAlias=st.sampled_from(["page1", "page2"]))),
        st.one_of(st.none(), st.builds(NavigationSignal, url=_PLAIN, isAsync=st.booleans())),
    ).map(lambda signals: [signal for signal in signals if signal is not None])


def make_action_strategy():
    """openPage 以外のアクションを生成するストラテジー。"""
    signals = make_signals_strategy()
    return st.one_of(
        st.builds(ClosePageAction, signals=signals),
        st.builds(
            ClickAction,
            selector=_PLAIN,
            button=st.sampled_from(["left", "middle", "right"]),
            modifiers=st.integers(min_value=0, max_value=15),
            clickCount=st.integers(min_value=1, max_value=4),
            signals=signals,
        ),
        st.builds(CheckAction, selector=_PLAIN, signals=signals),
        st.builds(UncheckAction, selector=_PLAIN, signals=signals),
        st.builds(FillAction, selector=_PLAIN, text=_PLAIN, signals=signals),
        st.builds(SetInputFilesAction, selector=_PLAIN, files=st.lists(_PLAIN, max_size=3), signals=signals),
        st.builds(
            PressAction,
            selector=_PLAIN,
            key=st.sampled_from(["Enter", "Tab", "a"]),
            modifiers=st.integers(min_value=0, max_value=15),
            signals=signals,
        ),
        st.builds(NavigateAction, url=_PLAIN, signals=signals),
        st.builds(SelectAction, selector=_PLAIN, options=st.lists(_PLAIN, max_size=3), signals=signals),
    )


def make_action_in_context_strategy():
    """メインフレーム・名前付きフレーム・URL 指定フレームのアクションを生成する。"""
    action = make_action_strategy()
    return st.one_of(
        st.builds(ActionInContext, pageAlias=st.just("page"), action=action),
        st.builds(
            ActionInContext,
            pageAlias=st.just("page"),
            isMainFrame=st.just(False),
            frameName=_PLAIN,
            action=action,
        ),
        st.builds(
            ActionInContext,
            pageAlias=st.just("page"),
            isMainFrame=st.just(False),
            frameUrl=_PLAIN,
            action=action,
        ),
    )
