"""
HTML実体参照の変換モジュール。

数値・16進数・名前付きの実体参照をUnicode文字に変換（デコード）し、
出力モードに応じて名前付き/数値形式へ再変換（エンコード）します。
"""
import re
from dataclasses import dataclass
from html.entities import name2codepoint

from core.config import MODE_DIGIT, MODE_NAME, REPLACEMENT_CHAR

# マークアップとして意味を持つため対象外とする実体参照
MARKUP_ENTITY_NAMES: frozenset[str] = frozenset({"amp", "lt", "gt", "quot"})

DEC_ENTITY_PATTERN = re.compile(r"&#(\d{1,6});")
HEX_ENTITY_PATTERN = re.compile(r"&#x([\da-f]{1,6});", re.IGNORECASE)
NAMED_ENTITY_PATTERN = re.compile(r"&([a-z][a-z\d]*);", re.IGNORECASE)

# デコードが必要かどうかの簡易判定
_NUMERIC_MARKER = re.compile(r"&#")
_NAMED_MARKER = re.compile(r"&[a-z]", re.IGNORECASE)


@dataclass(frozen=True)
class EntityEntry:
    """実体参照と文字の対応。"""
    name: str       # 例: "nbsp"
    code: int       # 例: 160

    @property
    def char(self) -> str:
        return chr(self.code)

    @property
    def name_form(self) -> str:
        return f"&{self.name};"

    @property
    def digit_form(self) -> str:
        return f"&#{self.code};"


def build_default_entities() -> tuple[EntityEntry, ...]:
    """HTML 4の名前付き実体参照から対応表を作る（コードポイント順）。"""
    entries = [
        EntityEntry(name=name, code=code)
        for name, code in name2codepoint.items()
        if name not in MARKUP_ENTITY_NAMES
    ]
    return tuple(sorted(entries, key=lambda e: (e.code, e.name)))


DEFAULT_ENTITIES: tuple[EntityEntry, ...] = build_default_entities()


def code_point_to_char(code: int) -> str:
    """
    コードポイントを文字に変換する。

    NUL・サロゲート・U+10FFFF超は REPLACEMENT_CHAR（U+FFFD）に置き換える。
    """
    if code == 0 or 0xD800 <= code <= 0xDFFF or code > 0x10FFFF:
        return REPLACEMENT_CHAR
    return chr(code)


class EntityCodec:
    """実体参照のデコード/エンコードを行うクラス。"""

    def __init__(self, entities: tuple[EntityEntry, ...] | list[EntityEntry] = DEFAULT_ENTITIES):
        self.entities: tuple[EntityEntry, ...] = tuple(entities)
        self._by_name: dict[str, str] = {e.name: e.char for e in self.entities}

    def decode(self, text: str) -> str:
        """
        実体参照をUnicode文字に変換する。

        Examples
        --------
        >>> EntityCodec().decode("A&nbsp;&#8212;&#x2014;B")
        'A\\xa0——B'
        >>> EntityCodec().decode("&unknown;")
        '&unknown;'
        """
        if _NUMERIC_MARKER.search(text):
            text = self.decode_numeric(text)
        if _NAMED_MARKER.search(text):
            text = NAMED_ENTITY_PATTERN.sub(self._replace_named, text)
        return text

    @staticmethod
    def decode_numeric(text: str) -> str:
        """10進数・16進数の実体参照のみを変換する。"""
        text = DEC_ENTITY_PATTERN.sub(lambda m: code_point_to_char(int(m.group(1), 10)), text)
        return HEX_ENTITY_PATTERN.sub(lambda m: code_point_to_char(int(m.group(1), 16)), text)

    def _replace_named(self, m: re.Match) -> str:
        return self._by_name.get(m.group(1), m.group(0))

    def encode(self, text: str, mode: str) -> str:
        """
        対応表にある文字を実体参照に変換する。

        Parameters
        ----------
        text : str
            処理対象のテキスト。
        mode : str
            "name" は ``&nbsp;``、"digit" は ``&#160;`` 形式。
            それ以外は変換しない。
        """
        if mode not in (MODE_NAME, MODE_DIGIT):
            return text
        for entry in self.entities:
            if entry.char in text:
                form = entry.name_form if mode == MODE_NAME else entry.digit_form
                text = text.replace(entry.char, form)
        return text
