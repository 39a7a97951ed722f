"""
言語共通のルール。

空白・改行の整理、省略記号、著作権記号、HTMLタグの除去/エスケープを行う。
"""
import re
from html import escape

from typograf.registry import Queue, Rule

# =============================================================================
# 正規表現パターン
# =============================================================================

LEADING_BLANKS_PATTERN = re.compile(r"^[ \t]+", re.MULTILINE)
TRAILING_BLANKS_PATTERN = re.compile(r"[ \t]+$", re.MULTILINE)
# 行中の2つ以上の空白（行頭の字下げは対象外）
REPEAT_SPACE_PATTERN = re.compile(r"([^\n \t])[ \t]{2,}(?=[^\n \t])")
# 3つ以上の連続改行 → 空行1つ
REPEAT_NEWLINE_PATTERN = re.compile(r"\n{3,}")
# ちょうど3つのピリオド
ELLIPSIS_PATTERN = re.compile(r"(?<!\.)\.{3}(?!\.)")
# (c) はラテン文字・キリル文字の両方を受け付ける
COPY_PATTERN = re.compile(r"\((?:c|\u0441)\)", re.IGNORECASE)
REG_PATTERN = re.compile(r"\(r\)", re.IGNORECASE)
TRADE_PATTERN = re.compile(r"\(tm\)", re.IGNORECASE)
HTML_TAG_PATTERN = re.compile(r"<[^>]+>")


# =============================================================================
# ルール本体
# =============================================================================

def del_bom(text, settings, context):
    """先頭のBOM（U+FEFF）を削除する。"""
    return text[1:] if text.startswith("\ufeff") else text


def del_leading_blanks(text, settings, context):
    return LEADING_BLANKS_PATTERN.sub("", text)


def del_trailing_blanks(text, settings, context):
    return TRAILING_BLANKS_PATTERN.sub("", text)


def del_repeat_space(text, settings, context):
    """
    行中の連続した空白を1つにする。

    >>> del_repeat_space("a  b\\t\\t c", {}, None)
    'a b c'
    """
    return REPEAT_SPACE_PATTERN.sub(r"\1 ", text)


def del_repeat_newline(text, settings, context):
    return REPEAT_NEWLINE_PATTERN.sub("\n\n", text)


def ellipsis(text, settings, context):
    return ELLIPSIS_PATTERN.sub("…", text)


def copy_symbols(text, settings, context):
    """(c) → ©、(r) → ®、(tm) → ™"""
    text = COPY_PATTERN.sub("©", text)
    text = REG_PATTERN.sub("®", text)
    return TRADE_PATTERN.sub("™", text)


def strip_tags(text, settings, context):
    return HTML_TAG_PATTERN.sub("", text)


def escape_html(text, settings, context):
    return escape(text, quote=settings.get("quote", True))


def trim_left(text, settings, context):
    return text.lstrip()


def trim_right(text, settings, context):
    return text.rstrip()


# =============================================================================
# ルール定義
# =============================================================================

INNER_RULES: tuple[Rule, ...] = (
    Rule(name="common/space/delBOM", func=del_bom, queue=Queue.START, sort_index=-1),
)

RULES: tuple[Rule, ...] = (
    Rule(name="common/symbols/copy", func=copy_symbols, sort_index=10),
    Rule(name="common/punctuation/hellip", func=ellipsis, sort_index=20),
    Rule(name="common/space/delLeadingBlanks", func=del_leading_blanks, sort_index=504, enabled=False),
    Rule(name="common/space/delRepeatSpace", func=del_repeat_space, sort_index=540),
    Rule(name="common/space/delRepeatN", func=del_repeat_newline, sort_index=545),
    Rule(name="common/space/delTrailingBlanks", func=del_trailing_blanks, sort_index=550),
    # 以下は保護領域の復元後に実行する
    Rule(name="common/space/trimLeft", func=trim_left, queue=Queue.END, sort_index=100),
    Rule(name="common/space/trimRight", func=trim_right, queue=Queue.END, sort_index=100),
    Rule(name="common/html/stripTags", func=strip_tags, queue=Queue.END, sort_index=200, enabled=False),
    Rule(
        name="common/html/escape",
        func=escape_html,
        queue=Queue.END,
        sort_index=300,
        enabled=False,
        settings={"quote": True},
    ),
)
