"""
タイポグラフ整形ツールのメインモジュール。

テキスト/HTMLファイルに組版ルールを適用し、整形済みファイルを出力する。
"""
import argparse
import sys
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from core import logger
from core.config import (
    COMMON_LANGUAGE,
    DEFAULT_MODE,
    LANGUAGE_CONFIGS,
    OUTPUT_MODES,
    OUTPUT_SUFFIX,
)
from core.exceptions import InputFileError, TypografError
from core.logger import LogLevel
from core.messages import msg
from typograf import Typograf


# =============================================================================
# データクラス
# =============================================================================

@dataclass
class ProcessingContext:
    """処理コンテキストを保持するデータクラス。"""
    start_time: datetime
    source_path: Path
    output_path: Path

    @classmethod
    def create(cls, source: str, output: str | None = None) -> "ProcessingContext":
        """処理コンテキストを生成する。"""
        source_path = Path(source)
        output_path = Path(output) if output else default_output_path(source_path)
        return cls(
            start_time=datetime.now(),
            source_path=source_path,
            output_path=output_path,
        )


# =============================================================================
# ユーティリティ関数
# =============================================================================

def default_output_path(source_path: Path) -> Path:
    """
    既定の出力ファイルパスを返す。

    例: /path/to/foo.html → /path/to/foo_typograf.html
    """
    return source_path.with_name(f"{source_path.stem}{OUTPUT_SUFFIX}{source_path.suffix}")


def _validate_file_exists(file_path: Path) -> None:
    """ファイルの存在をチェックする。"""
    if not file_path.is_file():
        raise InputFileError(str(file_path))


def _log_processing_end(ctx: ProcessingContext) -> None:
    """処理終了ログを出力する。"""
    end_time = datetime.now()
    logger.separator("=", 50)
    logger.info(msg("processing_end", time=end_time.strftime('%Y-%m-%d %H:%M:%S')))
    logger.info(msg("elapsed_time", time=end_time - ctx.start_time))
    logger.success(msg("output_file", path=ctx.output_path))


def _print_rules(tp: Typograf) -> None:
    """登録済みルールと有効/無効の状態を出力する。"""
    registry = tp.registry
    rules = registry.inner_rules + registry.rules
    logger.section(msg("rules_header", count=len(rules)))
    for rule in rules:
        state = msg("rule_enabled") if tp.enabled(rule.name) else msg("rule_disabled")
        logger.info(msg("rule_line", name=rule.name, queue=rule.queue.value, state=state))


# =============================================================================
# 処理本体
# =============================================================================

def process_file(ctx: ProcessingContext, tp: Typograf) -> Path:
    """
    入力ファイルを整形して出力ファイルに書き出す。

    Parameters
    ----------
    ctx : ProcessingContext
        入出力パスを保持するコンテキスト。
    tp : Typograf
        設定済みのエンジン。

    Returns
    -------
    Path
        出力ファイルのパス。

    Raises
    ------
    InputFileError
        入力ファイルが存在しない場合
    """
    _validate_file_exists(ctx.source_path)
    logger.info(msg("processing_start", path=ctx.source_path))
    logger.info(msg("language_and_mode", lang=tp.lang, mode=tp.mode))

    # 改行コードはエンジン側で \n に統一するため、読み込み時は変換しない
    with open(ctx.source_path, 'r', encoding='utf-8', newline='') as f:
        text = f.read()

    result = tp.execute(text)

    ctx.output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(ctx.output_path, 'w', encoding='utf-8', newline='') as f:
        f.write(result)

    return ctx.output_path


def build_parser() -> argparse.ArgumentParser:
    """コマンドライン引数のパーサーを生成する。"""
    langs = [COMMON_LANGUAGE] + list(LANGUAGE_CONFIGS.keys())
    parser = argparse.ArgumentParser(prog="typograf", description=msg("cli_description"))
    parser.add_argument("input", nargs="?", help=msg("arg_input"))
    parser.add_argument("-o", "--output", help=msg("arg_output", suffix=OUTPUT_SUFFIX))
    parser.add_argument(
        "-l", "--lang",
        choices=langs,
        default=COMMON_LANGUAGE,
        help=msg("arg_lang", langs=", ".join(langs)),
    )
    parser.add_argument(
        "-m", "--mode",
        choices=OUTPUT_MODES,
        default=DEFAULT_MODE,
        help=msg("arg_mode", modes=", ".join(OUTPUT_MODES)),
    )
    parser.add_argument("--enable", action="append", default=[], metavar="PATTERN", help=msg("arg_enable"))
    parser.add_argument("--disable", action="append", default=[], metavar="PATTERN", help=msg("arg_disable"))
    parser.add_argument("--list-rules", action="store_true", help=msg("arg_list_rules"))
    parser.add_argument("-v", "--verbose", action="store_true", help=msg("arg_verbose"))
    return parser


# =============================================================================
# メイン関数
# =============================================================================

def main(argv: list[str] | None = None) -> int:
    """タイポグラフ整形ツールのメイン処理。終了コードを返す。"""
    logger.use_utf8_stdout()
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logger.set_log_level(LogLevel.DEBUG)

    tp = Typograf(lang=args.lang, mode=args.mode, enable=args.enable, disable=args.disable)

    if args.list_rules:
        _print_rules(tp)
        return 0

    if not args.input:
        parser.error(msg("input_required"))

    logger.separator("=")
    logger.info(msg("tool_title"))
    logger.separator("=")

    ctx = ProcessingContext.create(args.input.strip().strip('"').strip("'"), args.output)
    try:
        process_file(ctx, tp)
    except TypografError as e:
        logger.error(str(e))
        logger.info(msg("processing_aborted"))
        return 1

    _log_processing_end(ctx)
    return 0


if __name__ == "__main__":
    sys.exit(main())
