"""
Hypothesis によるプロパティテスト

任意のアクションについて、決定性・括弧の対応・待機ブロックの入れ子順序・
click オプションの省略条件が成り立つことを検証する。
"""

from __future__ import annotations

from hypothesis import given, settings, strategies as st

from conftest import make_action_in_context_strategy, make_action_strategy
from recgen.actions import ActionInContext, ClickAction, DownloadSignal, PopupSignal, to_modifiers
from recgen.codegen import CodeGenerator
from recgen.csharp import CSharpLanguageGenerator
from recgen.options import GeneratorOptions

_generator = CSharpLanguageGenerator()


@settings(max_examples=200)
@given(make_action_in_context_strategy())
def test_generation_is_deterministic(item: ActionInContext) -> None:
    """同じ入力からは常に同じテキストが生成されること。"""
    assert _generator.generate_action(item) == _generator.generate_action(item)


@settings(max_examples=200)
@given(make_action_in_context_strategy())
def test_action_block_brackets_balanced(item: ActionInContext) -> None:
    """アクションブロックの括弧が対応し、最終行がブロックの基準インデントに戻ること。"""
    block = _generator.generate_action(item)
    assert block.count("{") == block.count("}")
    assert block.count("(") == block.count(")")
    last = block.split("\n")[-1]
    assert last.startswith(" " * 8)
    assert not last.startswith(" " * 9)


@settings(max_examples=50)
@given(st.lists(make_action_in_context_strategy(), max_size=8))
def test_program_brackets_balanced(items: list[ActionInContext]) -> None:
    """ヘッダーからフッターまでのプログラム全体で括弧が対応していること。"""
    options = GeneratorOptions(
        launchOptions={"headless": False},
        contextOptions={"viewport": {"width": 1, "height": 2}},
        saveStorage="state.json",
    )
    source = CodeGenerator(options, _generator).generate(items)
    assert source.count("{") == source.count("}")
    assert source.count("(") == source.count(")")
    assert source.endswith("    }\n}\n")


@given(make_action_strategy())
def test_popup_encloses_download(action) -> None:
    """popup と download が両方ある場合、download の待機は popup の待機の内側にあること。"""
    signals = [s for s in action.signals if s.name not in ("popup", "download")]
    action = action.model_copy(
        update={"signals": signals + [DownloadSignal(downloadAlias="9"), PopupSignal(popupAlias="popup9")]}
    )
    block = _generator.generate_action(ActionInContext(pageAlias="page", action=action))
    popup_start = block.index("var popup9 = await page.RunAndWaitForPopupAsync")
    download_start = block.index("var download9 = await page.RunAndWaitForDownloadAsync")
    call = block.index(f"await page.{_generator._generate_action_call(action, True).split('(')[0]}(")
    assert popup_start < download_start < call

    lines = block.split("\n")
    popup_line = next(line for line in lines if "RunAndWaitForPopupAsync" in line)
    download_line = next(line for line in lines if "RunAndWaitForDownloadAsync" in line)
    indent = len(download_line) - len(download_line.lstrip())
    assert indent == len(popup_line) - len(popup_line.lstrip()) + 4


@given(
    st.sampled_from(["left", "middle", "right"]),
    st.integers(min_value=0, max_value=15),
    st.integers(min_value=1, max_value=5),
)
def test_click_options_only_when_needed(button: str, modifiers: int, click_count: int) -> None:
    """既定値以外のボタン・修飾キー・3 回以上のクリックのときだけオプションが付くこと。"""
    action = ClickAction(selector="#a", button=button, modifiers=modifiers, clickCount=click_count)
    call = _generator._generate_action_call(action, True)
    needs_options = button != "left" or bool(to_modifiers(modifiers)) or click_count > 2
    assert ("Options" in call) == needs_options
    if not needs_options:
        assert call.endswith('("#a")')
