"""
ロギングユーティリティモジュール。

エンジンとCLIで共通のログ出力を提供します。
ライブラリとして読み込まれた場合は標準出力を差し替えず、
CLIの起動時にのみ :func:`use_utf8_stdout` で出力先を調整します。
"""
import io
import logging
import sys
from enum import IntEnum
from typing import TextIO

from core.messages import msg


class LogLevel(IntEnum):
    """ログレベル定義。"""
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR


class ConsoleFormatter(logging.Formatter):
    """
    コンソール用のフォーマッタ。

    通常はメッセージのみを出力し、DEBUG レベル（ルールごとの適用ログなど）は
    ``[debug]`` を付けて通常の進捗表示と区別する。
    """

    DEBUG_PREFIX = "[debug] "

    def __init__(self):
        super().__init__("%(message)s")

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        if record.levelno <= logging.DEBUG:
            return self.DEBUG_PREFIX + text
        return text


# パッケージ用のロガーを作成
_logger = logging.getLogger("typograf")
_handler = logging.StreamHandler(sys.stdout)
_handler.setFormatter(ConsoleFormatter())
_logger.addHandler(_handler)
_logger.setLevel(logging.INFO)


def set_stream(stream: TextIO) -> None:
    """ログの出力先ストリームを変更する。"""
    _handler.setStream(stream)


def use_utf8_stdout() -> None:
    """
    標準出力がUTF-8以外（Windows cp932 など）の場合にUTF-8で包み直す。

    UnicodeEncodeError を避けるため CLI の起動時に呼ぶ。
    包み直した場合はログの出力先も新しい標準出力に切り替える。
    """
    encoding = sys.stdout.encoding
    if encoding and encoding.lower() != 'utf-8' and hasattr(sys.stdout, 'buffer'):
        sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding='utf-8', errors='replace')
        set_stream(sys.stdout)


def set_log_level(level: LogLevel) -> None:
    """ログレベルを設定する。"""
    _logger.setLevel(level)


def is_debug_enabled() -> bool:
    """デバッグログが出力される設定かどうか。"""
    return _logger.isEnabledFor(logging.DEBUG)


def debug(message: str) -> None:
    _logger.debug(message)


def info(message: str) -> None:
    _logger.info(message)


def warning(message: str) -> None:
    """警告メッセージを出力する。"""
    _logger.warning(msg("log_warning", message=message))


def error(message: str) -> None:
    """エラーメッセージを出力する。"""
    _logger.error(f"❌ {message}")


def success(message: str) -> None:
    _logger.info(f"✅ {msg('log_success', message=message)}")


def section(title: str) -> None:
    """セクション見出しを出力する。"""
    _logger.info("-" * 30)
    _logger.info(f"★{title}")


def separator(char: str = "=", length: int = 60) -> None:
    _logger.info(char * length)
