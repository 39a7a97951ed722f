"""
引用符の正規化モジュール。

作者が使った引用符の種類（« » „ “ ” "）に関係なく、
言語ごとの外側/内側の引用符に統一し、入れ子を正しく表現します。
"""
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Mapping

from core.config import PRIVATE_LABEL

# 正規化の対象となる引用符
RAW_QUOTES = "«»„“”\""

# 開き引用符の直後に来得る句読点類（閉じ引用符の直後にも使用）
_PUNCTUATION = "!?.:;#*,"


@dataclass(frozen=True)
class QuoteConfig:
    """外側・内側の引用符の組。"""
    lquot: str
    rquot: str
    lquot2: str
    rquot2: str

    @classmethod
    def from_settings(cls, settings: Mapping[str, Any]) -> "QuoteConfig":
        return cls(
            lquot=settings["lquot"],
            rquot=settings["rquot"],
            lquot2=settings["lquot2"],
            rquot2=settings["rquot2"],
        )

    @property
    def is_single_level(self) -> bool:
        """外側と内側が同じ記号（入れ子の区別なし）かどうか。"""
        return self.lquot == self.lquot2 and self.rquot == self.rquot2


@dataclass(frozen=True)
class _QuotePatterns:
    opening: re.Pattern          # 文字・数字・省略記号の直前 → 開き
    inner_right: re.Pattern      # rquot2 … rquot2 → rquot2 … rquot
    inner_left: re.Pattern       # lquot2 … lquot2 → lquot … lquot2
    raw_quotes: re.Pattern
    first_quote: re.Pattern      # テキスト先頭（先頭の空白・改行の後）
    opening_tag: re.Pattern      # 空白/先頭 + 引用符 + プレースホルダー
    closing_tag: re.Pattern      # プレースホルダー + 引用符 + 空白/句読点/末尾
    double_opening: re.Pattern   # »« → ««


@lru_cache(maxsize=32)
def _compile(letters: str, quotes: QuoteConfig, label: str) -> _QuotePatterns:
    chars = r"\d" + letters + "\u0301"
    lq2 = re.escape(quotes.lquot2)
    rq2 = re.escape(quotes.rquot2)
    # 変換途中の内側記号も引用符として扱う
    markers = "[" + re.escape(RAW_QUOTES) + lq2 + rq2 + "]"
    lbl = re.escape(label)
    return _QuotePatterns(
        opening=re.compile(f"\"([…{chars}])", re.IGNORECASE),
        inner_right=re.compile(f"{rq2}([^{lq2}{rq2}]*?){rq2}"),
        inner_left=re.compile(f"{lq2}([^{lq2}{rq2}]*?){lq2}"),
        raw_quotes=re.compile("[" + re.escape(RAW_QUOTES) + "]"),
        first_quote=re.compile(rf"^(\s*){markers}"),
        opening_tag=re.compile(rf"(^|\s){markers}{lbl}"),
        closing_tag=re.compile(rf"{lbl}{markers}([\s{re.escape(_PUNCTUATION)}]|$)"),
        double_opening=re.compile(rf"(^|\w|\s){rq2}{lq2}"),
    )


def _collapse_single_level(text: str, quotes: QuoteConfig) -> str:
    """内側の記号を外側に置換し、隣接して重なった同方向の記号を1つにまとめる。

    例: ««Энергия» Синергия» → «Энергия» Синергия»
    """
    text = text.replace(quotes.lquot2, quotes.lquot).replace(quotes.rquot2, quotes.rquot)
    text = text.replace(quotes.lquot * 2, quotes.lquot)
    return text.replace(quotes.rquot * 2, quotes.rquot)


def normalize_quotes(
    text: str,
    settings: Mapping[str, Any] | QuoteConfig,
    letters: str,
    label: str = PRIVATE_LABEL,
) -> str:
    """
    引用符を言語の外側/内側の記号に正規化する。

    Parameters
    ----------
    text : str
        処理対象のテキスト。保護領域はプレースホルダーに置換済みの場合がある。
    settings : Mapping[str, Any] | QuoteConfig
        lquot / rquot / lquot2 / rquot2 を持つ設定。
    letters : str
        正規表現の文字クラス（角括弧なし、例: "a-zа-яё"）。
    label : str
        プレースホルダーの区切り文字。

    Returns
    -------
    str
        正規化されたテキスト。

    Examples
    --------
    >>> en = QuoteConfig("“", "”", "‘", "’")
    >>> normalize_quotes('He said "Go to the "store"" today', en, "a-z")
    'He said “Go to the ‘store’” today'
    >>> normalize_quotes("»«Title»", QuoteConfig("«", "»", "«", "»"), "a-z")
    '«Title»'

    Notes
    -----
    開き/閉じの判定はスタックを使わず、前後の文字だけで決める。
    そのため不均衡な引用符は誤判定され得る。
    内側の閉じ記号がアポストロフィと同じ言語（en の ’ など）では、
    引用符のないテキストでもアポストロフィが外側の閉じ記号に置換される。

    >>> normalize_quotes("I don’t know", en, "a-z")
    'I don”t know'

    処理手順:
    1. すべての引用符を " に統一
    2. 文字・数字・省略記号の直前の " を開き（内側記号）、残りを閉じ（内側記号）とする
    3. プレースホルダーに隣接する引用符、テキスト先頭の引用符、先頭の »« を補正
    4. 外側と内側が同じなら直接置換し、重なった記号をまとめる
    5. 異なる場合は入れ子の内側を残して外側に置換する。外側の開き/閉じが
       一度も現れなければ 4 と同じ処理に戻す
    """
    quotes = settings if isinstance(settings, QuoteConfig) else QuoteConfig.from_settings(settings)
    p = _compile(letters, quotes, label)
    lquot2, rquot2 = quotes.lquot2, quotes.rquot2

    text = p.raw_quotes.sub('"', text)
    text = p.opening.sub(lambda m: lquot2 + m.group(1), text)
    # 開きにならなかった残りはすべて閉じ
    text = text.replace('"', rquot2)
    text = p.opening_tag.sub(lambda m: m.group(1) + lquot2 + label, text)
    text = p.closing_tag.sub(lambda m: label + rquot2 + m.group(1), text)
    text = p.first_quote.sub(lambda m: m.group(1) + lquot2, text, count=1)
    text = p.double_opening.sub(lambda m: m.group(1) + lquot2 + lquot2, text)

    if quotes.is_single_level:
        return _collapse_single_level(text, quotes)

    text = p.inner_right.sub(lambda m: rquot2 + m.group(1) + quotes.rquot, text)
    text = p.inner_left.sub(lambda m: quotes.lquot + m.group(1) + lquot2, text)

    if quotes.lquot not in text or quotes.rquot not in text:
        text = _collapse_single_level(text, quotes)

    return text
