"""
ルール登録モジュール。

変換ルール・内部ルール・共有データ・保護タグを保持する
追記専用のレジストリを提供します。
"""
from dataclasses import dataclass, field
from enum import Enum
from operator import attrgetter
from typing import Any, Callable, TYPE_CHECKING

from core.config import COMMON_LANGUAGE
from core.exceptions import RuleDefinitionError
from core.messages import msg
from typograf.safe_tags import SafeTag

if TYPE_CHECKING:
    from typograf.engine import RuleContext


class Queue(str, Enum):
    """ルールの実行フェーズを表す列挙型。

    - START: 保護領域の隠蔽・実体参照のデコードより前
    - MAIN: 保護領域を隠した状態（通常のルール）
    - END: 保護領域の復元より後
    """
    START = "start"
    MAIN = "main"
    END = "end"


RuleFunc = Callable[[str, dict[str, Any], "RuleContext"], str]

_MISSING = object()


@dataclass(frozen=True)
class Rule:
    """登録済みの変換ルール。

    ``func(text, settings, context)`` は変換後のテキストを返す。
    """
    name: str                                    # "言語/識別子"（例: "ru/dash/main"）
    func: RuleFunc
    queue: Queue = Queue.MAIN
    sort_index: int = 0
    enabled: bool = True                         # デフォルトの有効/無効
    settings: dict[str, Any] = field(default_factory=dict, hash=False, compare=False)

    def __post_init__(self):
        if not self.name:
            raise RuleDefinitionError(self.name, msg("reason_empty_name"))
        lang, sep, rest = self.name.partition("/")
        if not lang or not sep or not rest:
            raise RuleDefinitionError(self.name, msg("reason_no_lang"))
        try:
            queue = Queue(self.queue or Queue.MAIN)
        except ValueError:
            raise RuleDefinitionError(
                self.name, msg("reason_unknown_queue", queue=self.queue)
            ) from None
        # frozenのため object.__setattr__ で正規化する
        object.__setattr__(self, "queue", queue)

    @property
    def lang(self) -> str:
        """ルール名の先頭セグメント（言語コードまたは "common"）。"""
        return self.name.split("/", 1)[0]

    @property
    def is_common(self) -> bool:
        return self.lang == COMMON_LANGUAGE


class RuleRegistry:
    """ルールと共有データの追記専用レジストリ。

    ルールは ``(sort_index, 登録順)`` の順に保持される。
    削除操作は提供しない。
    """

    def __init__(self):
        self._rules: list[Rule] = []
        self._inner_rules: list[Rule] = []
        self._names: set[str] = set()
        self._data: dict[str, Any] = {}
        self._safe_tags: list[SafeTag] = []

    @property
    def rules(self) -> tuple[Rule, ...]:
        """通常ルール（ソート済み）。"""
        return tuple(self._rules)

    @property
    def inner_rules(self) -> tuple[Rule, ...]:
        """内部ルール（ソート済み）。各フェーズで通常ルールより先に実行される。"""
        return tuple(self._inner_rules)

    @property
    def safe_tags(self) -> tuple[SafeTag, ...]:
        return tuple(self._safe_tags)

    def register(self, rule: Rule) -> Rule:
        """通常ルールを登録する。"""
        self._append(self._rules, rule)
        return rule

    def register_inner(self, rule: Rule) -> Rule:
        """内部ルールを登録する。"""
        self._append(self._inner_rules, rule)
        return rule

    def _append(self, target: list[Rule], rule: Rule) -> None:
        if rule.name in self._names:
            raise RuleDefinitionError(rule.name, msg("reason_duplicate_name"))
        self._names.add(rule.name)
        target.append(rule)
        # list.sort は安定ソートのため、同じsort_indexは登録順を保つ
        target.sort(key=attrgetter("sort_index"))

    def names(self) -> list[str]:
        """登録済みの全ルール名（内部ルールを含む）を返す。"""
        return [rule.name for rule in self._inner_rules] + [rule.name for rule in self._rules]

    def get(self, name: str) -> Rule | None:
        for rule in self._inner_rules + self._rules:
            if rule.name == name:
                return rule
        return None

    def __contains__(self, name: str) -> bool:
        return name in self._names

    def __len__(self) -> int:
        return len(self._names)

    def data(self, key: str, value: Any = _MISSING) -> Any:
        """
        共有データを取得または設定する。

        Parameters
        ----------
        key : str
            データキー（例: "ru/letter"）
        value : Any, optional
            指定した場合は設定、省略した場合は取得

        Returns
        -------
        Any
            取得時は値（未登録ならNone）、設定時はNone
        """
        if value is _MISSING:
            return self._data.get(key)
        self._data[key] = value
        return None

    def register_safe_tag(self, start: str, end: str) -> SafeTag:
        """全インスタンス共通の保護タグを登録する。

        Raises
        ------
        SafeTagPatternError
            パターンが正規表現として不正な場合
        """
        tag = SafeTag.compile(start, end)
        self._safe_tags.append(tag)
        return tag


_default_registry: RuleRegistry | None = None


def get_default_registry() -> RuleRegistry:
    """
    パッケージ既定のレジストリを返す。

    初回呼び出し時に組み込みルールを登録する。
    """
    global _default_registry
    if _default_registry is None:
        # rules パッケージは typograf.registry を読み込むため、ここで遅延インポートする
        from rules import register_builtin_rules

        registry = RuleRegistry()
        register_builtin_rules(registry)
        _default_registry = registry
    return _default_registry
