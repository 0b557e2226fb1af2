"""
CSharpLanguageGenerator — 記録アクションを Playwright for .NET のコードに変換

1 アクションごとに、タイトルコメント・ダイアログハンドラ・
popup / download / navigation の待機ブロックで包んだ呼び出し文を生成する。
待機ブロックの入れ子は外側から popup → download → navigation → 呼び出し の順。
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from ..actions import ActionInContext, action_title, to_modifiers, to_signal_map
from ..devices import get_device
from ..languages import UnreachableActionError
from ..options import GeneratorOptions, sanitize_device_options
from .formatter import CSharpFormatter
from .values import format_object, quote, to_pascal

logger = logging.getLogger(__name__)

# 遷移を出力しない初期 URL
_BLANK_URLS = frozenset(["about:blank", "chrome://newtab/"])

# C# の 1 行コメントを終わらせる文字
_LINE_BREAKS = {"\r": "\\r", "\n": "\\n", "\u2028": "\\u2028", "\u2029": "\\u2029"}


def _single_line(text: str) -> str:
    """改行文字をエスケープ表記に置き換え、1 行コメントに収まる形にする。"""
    return "".join(_LINE_BREAKS.get(char, char) for char in text)


class CSharpLanguageGenerator:
    """C# (Playwright for .NET) 向けの言語ジェネレータ。"""

    id = "csharp"
    file_name = "C#"
    highlighter = "csharp"

    def generate_action(self, action_in_context: ActionInContext) -> str:
        """1 アクション分のコードブロックを生成する。

        先頭は空行、続いて "// <タイトル>" のコメント行となる。

        Args:
            action_in_context: 対象ページ・フレーム情報付きのアクション

        Returns:
            メソッド本体の深さ（8 スペース）でインデントされたコード

        Raises:
            UnreachableActionError: 未対応のアクション種別の場合
        """
        action = action_in_context.action
        page_alias = action_in_context.pageAlias
        formatter = CSharpFormatter(8)
        formatter.new_line()
        formatter.add("// " + _single_line(action_title(action)))

        if action.name == "openPage":
            formatter.add(f"var {page_alias} = await context.NewPageAsync();")
            if action.url and action.url not in _BLANK_URLS:
                formatter.add(f"await {page_alias}.GotoAsync({quote(action.url)});")
            return formatter.format()

        subject = self._subject(action_in_context)
        signals = to_signal_map(action)

        if signals.dialog:
            handler = f"{page_alias}_Dialog{signals.dialog.dialogAlias}_EventHandler"
            formatter.add(
                f"void {handler}(object sender, IDialog dialog)\n"
                "{\n"
                'Console.WriteLine($"Dialog message: {dialog.Message}");\n'
                "dialog.DismissAsync();\n"
                f"{page_alias}.Dialog -= {handler};\n"
                "}\n"
                f"{page_alias}.Dialog += {handler};"
            )

        action_call = self._generate_action_call(action, action_in_context.isMainFrame)
        lines: list[str] = []
        if signals.waitForNavigation:
            options_class = "Page" if action_in_context.isMainFrame else "Frame"
            lines.append(f"await {page_alias}.RunAndWaitForNavigationAsync(async () =>")
            lines.append("{")
            lines.append(f"await {subject}.{action_call};")
            lines.append(f"}}/*, new {options_class}WaitForNavigationOptions")
            lines.append("{")
            lines.append(f"UrlString = {quote(signals.waitForNavigation.url)}")
            lines.append("}*/);")
        else:
            lines.append(f"await {subject}.{action_call};")

        if signals.download:
            lines.insert(0, "{")
            lines.insert(
                0,
                f"var download{signals.download.downloadAlias} = "
                f"await {page_alias}.RunAndWaitForDownloadAsync(async () =>",
            )
            lines.append("});")

        if signals.popup:
            lines.insert(0, "{")
            lines.insert(
                0,
                f"var {signals.popup.popupAlias} = "
                f"await {page_alias}.RunAndWaitForPopupAsync(async () =>",
            )
            lines.append("});")

        for line in lines:
            formatter.add(line)

        if signals.assertNavigation:
            formatter.add(
                f"// Assert.Equal({quote(signals.assertNavigation.url)}, {page_alias}.Url);"
            )

        logger.debug("アクションを生成しました: %s (%s)", action.name, page_alias)
        return formatter.format()

    def _subject(self, action_in_context: ActionInContext) -> str:
        """アクションの呼び出し対象（ページまたはフレーム）の式を返す。"""
        page_alias = action_in_context.pageAlias
        if action_in_context.isMainFrame:
            return page_alias
        if action_in_context.frameName:
            return f"{page_alias}.Frame({quote(action_in_context.frameName)})"
        return f"{page_alias}.FrameByUrl({quote(action_in_context.frameUrl or '')})"

    def _generate_action_call(self, action: Any, is_page: bool) -> str:
        """アクションを "MethodAsync(引数...)" 形式の呼び出し式に変換する。

        Args:
            action: openPage 以外のアクション
            is_page: 呼び出し対象がページか（False ならフレーム）

        Returns:
            呼び出し式の文字列

        Raises:
            UnreachableActionError: openPage または未知のアクションの場合
        """
        name = action.name
        if name == "openPage":
            raise UnreachableActionError("openPage は呼び出し式に変換できません")
        if name == "closePage":
            return "CloseAsync()"
        if name == "click":
            method = "DblClick" if action.clickCount == 2 else "Click"
            modifiers = to_modifiers(action.modifiers)
            options: dict[str, Any] = {}
            if action.button != "left":
                options["button"] = action.button
            if modifiers:
                options["modifiers"] = modifiers
            if action.clickCount > 2:
                options["clickCount"] = action.clickCount
            if not options:
                return f"{method}Async({quote(action.selector)})"
            options_class = ("Page" if is_page else "Frame") + method + "Options"
            options_string = format_object(options, "    ", options_class)
            return f"{method}Async({quote(action.selector)}, {options_string})"
        if name == "check":
            return f"CheckAsync({quote(action.selector)})"
        if name == "uncheck":
            return f"UncheckAsync({quote(action.selector)})"
        if name == "fill":
            return f"FillAsync({quote(action.selector)}, {quote(action.text)})"
        if name == "setInputFiles":
            return f"SetInputFilesAsync({quote(action.selector)}, {format_object(action.files)})"
        if name == "press":
            shortcut = "+".join(to_modifiers(action.modifiers) + [action.key])
            return f"PressAsync({quote(action.selector)}, {quote(shortcut)})"
        if name == "navigate":
            return f"GotoAsync({quote(action.url)})"
        if name == "select":
            return f"SelectOptionAsync({quote(action.selector)}, {format_object(action.options)})"
        raise UnreachableActionError(f"未対応のアクション: {name}")

    def generate_header(self, options: GeneratorOptions) -> str:
        """using 宣言・Main メソッド・ブラウザ起動・コンテキスト生成を出力する。

        Args:
            options: 生成オプション

        Returns:
            Main メソッド本体の途中までのコード
        """
        launch_options = ""
        if options.launchOptions:
            launch_options = format_object(options.launchOptions, "    ", "BrowserTypeLaunchOptions")
        context_options = format_context_options(options.contextOptions, options.deviceName)
        formatter = CSharpFormatter(0)
        formatter.add(
            "using Microsoft.Playwright;\n"
            "using System;\n"
            "using System.Threading.Tasks;\n"
            "\n"
            "class Program\n"
            "{\n"
            "public static async Task Main()\n"
            "{\n"
            "using var playwright = await Playwright.CreateAsync();\n"
            f"await using var browser = await playwright.{to_pascal(options.browserName)}"
            f".LaunchAsync({launch_options});\n"
            f"var context = await browser.NewContextAsync({context_options});"
        )
        return formatter.format()

    def generate_footer(self, save_storage: Optional[str]) -> str:
        """ストレージ状態の保存（任意）と閉じ括弧を出力する。

        Args:
            save_storage: ストレージ状態の保存先パス。None なら保存しない

        Returns:
            末尾改行付きのコード
        """
        storage_state = ""
        if save_storage:
            formatter = CSharpFormatter(8)
            formatter.add(
                "await context.StorageStateAsync(new BrowserContextStorageStateOptions\n"
                "{\n"
                f"Path = {quote(save_storage)}\n"
                "});"
            )
            storage_state = "\n" + formatter.format() + "\n"
        return f"{storage_state}    }}\n}}\n"


def format_context_options(options: dict[str, Any], device_name: Optional[str]) -> str:
    """NewContextAsync に渡すコンテキストオプションの式を生成する。

    デバイス名が指定された場合、プリセットと同じ値のオプションは省略し、
    残りをデバイスプリセットを引数に取るコンストラクタの初期化子として出力する。

    Args:
        options: 明示的なコンテキストオプション
        device_name: デバイス名（任意）

    Returns:
        引数の式。オプションが無ければ空文字列

    Raises:
        UnknownDeviceError: デバイス名が見つからない場合
    """
    if not device_name:
        if not options:
            return ""
        return format_object(options, "    ", "BrowserNewContextOptions")

    device = get_device(device_name)
    device_expression = f"playwright.Devices[{quote(device_name)}]"
    options = sanitize_device_options(device, options)
    if not options:
        return device_expression
    return format_object(options, "    ", f"BrowserNewContextOptions({device_expression})")
