"""
保護領域（セーフタグ）処理モジュール。

コメント・CDATA・<pre>・<script> などのマークアップ領域を
プレースホルダーに置換して隠し、ルール適用後に元の文字列へ復元します。
"""
import re
from dataclasses import dataclass, field

from core.config import PRIVATE_LABEL
from core.exceptions import SafeTagPatternError

# 内容を一切変更してはならないタグ名
PROTECTED_TAG_NAMES: tuple[str, ...] = (
    "code",
    "kbd",
    "object",
    "pre",
    "samp",
    "script",
    "style",
    "var",
)

# 組み込みの保護領域: (開始パターン, 終了パターン)
BUILTIN_SAFE_TAGS: tuple[tuple[str, str], ...] = (
    (r"<!--", r"-->"),
    (r"<!ENTITY", r">"),
    (r"<!DOCTYPE", r">"),
    (r"<\?xml", r"\?>"),
    (r"<!\[CDATA\[", r"\]\]>"),
) + tuple(
    (rf"<{tag}(\s[^>]*?)?>", rf"</{tag}>") for tag in PROTECTED_TAG_NAMES
)

# 名前付きの保護領域で隠されなかった通常のタグ
HTML_TAG_PATTERN = re.compile(r"<[a-z/].*?>", re.IGNORECASE | re.DOTALL)

# プレースホルダー: <PRIVATE_LABEL>tf<番号><PRIVATE_LABEL>
LABEL_PATTERN = re.compile(re.escape(PRIVATE_LABEL) + r"tf\d+" + re.escape(PRIVATE_LABEL))


def make_label(index: int) -> str:
    """番号からプレースホルダー文字列を生成する。"""
    return f"{PRIVATE_LABEL}tf{index}{PRIVATE_LABEL}"


@dataclass(frozen=True)
class SafeTag:
    """保護領域の開始・終了パターンの組。"""
    start: str
    end: str
    pattern: re.Pattern

    @classmethod
    def compile(cls, start: str, end: str) -> "SafeTag":
        """
        開始・終了パターンから保護領域を生成する。

        開始から最短一致で終了までを、大文字小文字を区別せず、
        改行をまたいで一致させる。

        Raises
        ------
        SafeTagPatternError
            パターンが正規表現として不正な場合
        """
        try:
            pattern = re.compile(f"{start}.*?{end}", re.IGNORECASE | re.DOTALL)
        except re.error as e:
            raise SafeTagPatternError(f"{start} … {end}", str(e)) from e
        return cls(start=start, end=end, pattern=pattern)


@dataclass
class HiddenSpans:
    """1回の実行中に隠した領域の対応表（プレースホルダー → 元の文字列）。"""
    spans: dict[str, str] = field(default_factory=dict)

    def hide(self, text: str, pattern: re.Pattern) -> str:
        """パターンに一致する領域をすべてプレースホルダーに置換する。"""
        return pattern.sub(self._paste_label, text)

    def _paste_label(self, m: re.Match) -> str:
        label = make_label(len(self.spans))
        self.spans[label] = m.group(0)
        return label

    def _replace_label(self, m: re.Match) -> str:
        # 対応表にないプレースホルダーはそのまま残す
        return self.spans.get(m.group(0), m.group(0))

    def restore(self, text: str) -> str:
        """テキスト中のプレースホルダーを1段階だけ元に戻す。"""
        return LABEL_PATTERN.sub(self._replace_label, text)

    def clear(self) -> None:
        self.spans.clear()

    def __len__(self) -> int:
        return len(self.spans)


def builtin_safe_tags() -> list[SafeTag]:
    """組み込みの保護領域をコンパイルして返す。"""
    return [SafeTag.compile(start, end) for start, end in BUILTIN_SAFE_TAGS]


class SafeTagShield:
    """保護領域の隠蔽と復元を行うクラス。

    保護領域の一覧はインスタンスが保持するが、隠した領域の対応表
    （:class:`HiddenSpans`）は呼び出しごとに生成して引数・戻り値で受け渡す。
    """

    def __init__(self, extra_tags: list[SafeTag] | tuple[SafeTag, ...] = ()):
        self._tags: list[SafeTag] = builtin_safe_tags() + list(extra_tags)

    @property
    def tags(self) -> tuple[SafeTag, ...]:
        return tuple(self._tags)

    def add(self, start: str, end: str) -> SafeTag:
        """保護領域を追加する。不正なパターンは即座に SafeTagPatternError となる。"""
        tag = SafeTag.compile(start, end)
        self._tags.append(tag)
        return tag

    def hide(self, text: str) -> tuple[str, HiddenSpans]:
        """
        保護領域をプレースホルダーに置換する。

        Parameters
        ----------
        text : str
            処理対象のテキスト。

        Returns
        -------
        tuple[str, HiddenSpans]
            置換後のテキストと、復元用の対応表。

        Notes
        -----
        処理手順:
        1. 登録順に各保護領域を最短一致で隠す
        2. 残った通常のタグ（``<a href="...">`` など）を隠す
        """
        hidden = HiddenSpans()
        for tag in self._tags:
            text = hidden.hide(text, tag.pattern)
        text = hidden.hide(text, HTML_TAG_PATTERN)
        return text, hidden

    def show(self, text: str, hidden: HiddenSpans) -> str:
        """
        プレースホルダーを元の文字列に復元する。

        ある領域の中身に別のプレースホルダーが含まれる場合があるため、
        プレースホルダーがなくなるまで最大（保護領域の種類数 + 1）回繰り返す。
        """
        for _ in range(len(self._tags) + 1):
            text = hidden.restore(text)
            if not LABEL_PATTERN.search(text):
                break
        hidden.clear()
        return text
