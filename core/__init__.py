"""
コアモジュール。

共通の例外、ロガー、設定、UIメッセージを提供する。
"""
from core.exceptions import (
    TypografError,
    SafeTagPatternError,
    RuleDefinitionError,
    InputFileError,
)
from core.logger import (
    debug, info, warning, error, success, section, separator,
    set_log_level, set_stream, use_utf8_stdout, LogLevel
)
from core.config import (
    LANGUAGE_CONFIGS,
    get_language_config,
    LanguageConfig,
    COMMON_LANGUAGE,
    DEFAULT_LANGUAGE,
    DEFAULT_MODE,
    OUTPUT_MODES,
)
from core.messages import msg, set_ui_language

__all__ = [
    # exceptions
    "TypografError",
    "SafeTagPatternError",
    "RuleDefinitionError",
    "InputFileError",
    # logger
    "debug", "info", "warning", "error", "success", "section", "separator",
    "set_log_level", "set_stream", "use_utf8_stdout", "LogLevel",
    # config
    "LANGUAGE_CONFIGS", "get_language_config", "LanguageConfig",
    "COMMON_LANGUAGE", "DEFAULT_LANGUAGE", "DEFAULT_MODE", "OUTPUT_MODES",
    # messages
    "msg", "set_ui_language",
]
