"""
CLI エントリポイント — Typer ベースのコマンドラインインターフェース

recgen コマンドとして以下のサブコマンドを提供する:
  - generate: 記録ファイルからソースコードを生成
  - validate: 記録ファイルのスキーマ検証
  - devices: 同梱デバイスプリセット一覧
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

logger = logging.getLogger(__name__)

app = typer.Typer(
    help=(
        "recgen — 記録したブラウザ操作を Playwright のコードに変換するツール\n\n"
        "基本の流れ:\n"
        "  1. recgen validate recording.yaml   記録ファイルを検証\n"
        "  2. recgen generate recording.yaml -o Program.cs   コードを生成\n"
    ),
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="デバッグログを出力する"),
) -> None:
    """recgen — 記録アクションのコード生成ツール。"""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )


# ---------------------------------------------------------------------------
# generate コマンド
# ---------------------------------------------------------------------------

@app.command()
def generate(
    recording_file: Path = typer.Argument(..., help="記録ファイル（.yaml / .json）"),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="出力先ファイル（省略時は標準出力）",
    ),
    browser: Optional[str] = typer.Option(
        None, "--browser", "-b", help="ブラウザ (chromium / firefox / webkit)",
    ),
    device: Optional[str] = typer.Option(
        None, "--device", help="エミュレートするデバイス名（例: \"iPhone 11\"）",
    ),
    save_storage: Optional[str] = typer.Option(
        None, "--save-storage", help="終了時にストレージ状態を保存するパス",
    ),
    target: Optional[str] = typer.Option(
        None, "--target", "-t", help="出力言語（デフォルト: csharp）",
    ),
) -> None:
    """記録ファイルからソースコードを生成する。"""
    from .codegen import CodeGenerator
    from .config import apply_overrides, load_config_from_env
    from .languages import get_language
    from .recording import RecordingLoader

    try:
        config = load_config_from_env()
        recording = RecordingLoader().load(recording_file)
        options = apply_overrides(
            config,
            recorded=recording.options,
            browser_name=browser,
            device_name=device,
            save_storage=save_storage,
        )
        language = get_language(target or config.target)
        source = CodeGenerator(options, language).generate(recording.actions)

        if output is None:
            typer.echo(source, nl=False)
            return

        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(source, encoding="utf-8")
        logger.info("ソースコードを出力しました: %s", output)
        typer.echo(f"生成完了: {output}", err=True)
    except Exception as exc:
        typer.echo(f"エラー: {exc}", err=True)
        raise typer.Exit(code=1)


# ---------------------------------------------------------------------------
# validate コマンド
# ---------------------------------------------------------------------------

@app.command()
def validate(
    recording_file: Path = typer.Argument(..., help="検証する記録ファイル"),
) -> None:
    """記録ファイルのスキーマ検証を行う。"""
    from .recording import RecordingLoader

    errors = RecordingLoader().validate(recording_file)

    if not errors:
        typer.echo(f"✓ {recording_file}: スキーマ検証 OK")
        return

    for err in errors:
        line_info = f" (行 {err.line})" if err.line else ""
        typer.echo(f"✗ {err.location}{line_info}: {err.message}", err=True)
    raise typer.Exit(code=1)


# ---------------------------------------------------------------------------
# devices コマンド
# ---------------------------------------------------------------------------

@app.command()
def devices() -> None:
    """同梱されているデバイスプリセットの一覧を表示する。"""
    from .devices import list_devices

    for name in list_devices():
        typer.echo(name)


if __name__ == "__main__":
    app()
