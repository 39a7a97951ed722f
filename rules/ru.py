"""
ロシア語のルール。
"""
import re

from typograf.registry import Rule

NBSP = "\u00a0"

# 語と語の間のハイフン/ダッシュ → ノーブレークスペース + エムダッシュ
DASH_PATTERN = re.compile(r"(?<=\S)[ \u00a0][-–—]{1,2} (?=\S)")

# 1～2文字の短い語（前置詞・接続詞）の後の空白
SHORT_WORD_PATTERN = re.compile(
    r"(?<![^\s(«„\u00a0])([а-яё]{1,2}) (?=\S)",
    re.IGNORECASE
)


def dash(text, settings, context):
    """
    語間のダッシュを整える。

    >>> dash("Москва - столица", {}, None)
    'Москва\\xa0— столица'
    """
    return DASH_PATTERN.sub(NBSP + "— ", text)


def nbsp_after_short_word(text, settings, context):
    """短い語を次の語と改行されないように結合する。"""
    return SHORT_WORD_PATTERN.sub(r"\1" + NBSP, text)


RULES: tuple[Rule, ...] = (
    Rule(name="ru/nbsp/afterShortWord", func=nbsp_after_short_word, sort_index=590),
    Rule(name="ru/dash/main", func=dash, sort_index=620),
)
