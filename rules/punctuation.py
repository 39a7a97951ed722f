"""
言語別の引用符ルール。

LANGUAGE_CONFIGS の各言語について "<言語>/punctuation/quot" を生成する。
"""
from core.config import LANGUAGE_CONFIGS
from typograf.quotes import normalize_quotes
from typograf.registry import Rule


def quot(text, settings, context):
    """引用符を言語の外側/内側の記号に正規化する。"""
    return normalize_quotes(text, settings, context.letters())


def build_quote_rules() -> tuple[Rule, ...]:
    """対応言語ごとの引用符ルールを返す。"""
    return tuple(
        Rule(
            name=f"{code}/punctuation/quot",
            func=quot,
            sort_index=700,
            settings=config.quote_settings,
        )
        for code, config in LANGUAGE_CONFIGS.items()
    )
