"""
タイポグラフ処理エンジンモジュール。

登録済みのルールをフェーズ順に実行し、保護領域の隠蔽・復元と
実体参照の変換を組み合わせて1つのテキストを整形します。
"""
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable

from core import logger
from core.config import COMMON_LANGUAGE, COMMON_LETTERS, DEFAULT_LANGUAGE, DEFAULT_MODE, OUTPUT_MODES
from core.messages import msg
from typograf.entities import EntityCodec
from typograf.registry import Queue, Rule, RuleRegistry, get_default_registry
from typograf.safe_tags import HiddenSpans, SafeTagShield

# "<" + 英字 または "<!" があればマークアップとみなす
MARKUP_PATTERN = re.compile(r"<[a-z!]", re.IGNORECASE)

RuleHook = Callable[[str, str], None]


@dataclass
class RuleContext:
    """1回の execute 呼び出しに固有の状態。

    インスタンスには保持しないため、同じエンジンを並行して使える。
    """
    lang: str
    mode: str
    registry: RuleRegistry
    is_html: bool = False
    hidden: HiddenSpans = field(default_factory=HiddenSpans)

    def letters(self) -> str:
        """現在の言語の文字クラス（正規表現用、角括弧なし）を返す。"""
        return letters_for(self.registry, self.lang)


def letters_for(registry: RuleRegistry, lang: str | None) -> str:
    """共通の文字クラスに言語固有の文字クラスを連結して返す。"""
    common = registry.data(f"{COMMON_LANGUAGE}/letter") or COMMON_LETTERS
    if not lang or lang == COMMON_LANGUAGE:
        return common
    lang_letters = registry.data(f"{lang}/letter")
    if not lang_letters or lang_letters == common:
        return common
    return common + lang_letters


def _as_list(names: str | Iterable[str] | None) -> list[str]:
    if names is None:
        return []
    if isinstance(names, str):
        return [names]
    return list(names)


def mask_to_pattern(mask: str) -> re.Pattern:
    """ワイルドカード（*）付きのルール名を正規表現に変換する。

    例: "ru/*" → ``ru/.*``（ルール名の部分一致で判定）
    """
    return re.compile(".*".join(re.escape(part) for part in mask.split("*")))


class Typograf:
    """
    タイポグラフ処理エンジン。

    Parameters
    ----------
    lang : str, optional
        既定のルール言語（例: "ru", "en"）。省略時は共通ルールのみ実行。
    mode : str, optional
        実体参照の出力形式。"default"（UTF-8のまま）/ "digit" / "name"。
    enable, disable : str | list[str], optional
        有効/無効にするルール名。``*`` でワイルドカード指定できる。
        disable を先に適用し、enable を後に適用する（衝突時は enable が優先）。
    safe_tags : list[tuple[str, str]], optional
        追加の保護領域（開始パターン, 終了パターン）。
    on_before_rule, on_after_rule : Callable[[str, str], None], optional
        ルール実行前後に ``(ルール名, テキスト)`` で呼ばれる観測用フック。
    registry : RuleRegistry, optional
        使用するレジストリ。省略時はパッケージ既定のレジストリ。

    Examples
    --------
    >>> tp = Typograf(lang="ru")
    >>> tp.execute('Она сказала: "Привет"')
    'Она сказала: «Привет»'
    """

    def __init__(
        self,
        lang: str | None = None,
        mode: str | None = None,
        enable: str | Iterable[str] | None = None,
        disable: str | Iterable[str] | None = None,
        safe_tags: Iterable[tuple[str, str]] | None = None,
        on_before_rule: RuleHook | None = None,
        on_after_rule: RuleHook | None = None,
        registry: RuleRegistry | None = None,
    ):
        self._registry = registry if registry is not None else get_default_registry()
        self._lang = lang or DEFAULT_LANGUAGE
        self._mode = self._check_mode(mode)
        self._on_before_rule = on_before_rule
        self._on_after_rule = on_after_rule
        self._codec = EntityCodec()

        self._settings: dict[str, dict[str, Any]] = {}
        self._enabled_rules: dict[str, bool] = {}
        for rule in self._registry.inner_rules + self._registry.rules:
            self._prepare_rule(rule)

        self._shield = SafeTagShield(self._registry.safe_tags)
        for start, end in safe_tags or ():
            self.add_safe_tag(start, end)

        if disable:
            self.disable(disable)
        if enable:
            self.enable(enable)

    @property
    def lang(self) -> str:
        return self._lang

    @property
    def mode(self) -> str:
        return self._mode

    @property
    def registry(self) -> RuleRegistry:
        return self._registry

    def _prepare_rule(self, rule: Rule) -> None:
        self._settings[rule.name] = dict(rule.settings)
        self._enabled_rules[rule.name] = rule.enabled

    @staticmethod
    def _check_mode(mode: str | None) -> str:
        if mode is None:
            return DEFAULT_MODE
        if mode not in OUTPUT_MODES:
            logger.warning(msg("unknown_mode", mode=mode))
            return DEFAULT_MODE
        return mode

    # ------------------------------------------------------------------
    # 実行
    # ------------------------------------------------------------------

    def execute(self, text: Any, lang: str | None = None, mode: str | None = None) -> str:
        """
        テキストにルールを適用する。

        Parameters
        ----------
        text : Any
            処理対象。文字列以外は ``str()`` で変換される。
        lang : str, optional
            この呼び出しだけに使う言語。
        mode : str, optional
            この呼び出しだけに使う出力形式。

        Returns
        -------
        str
            整形されたテキスト。空の入力には空文字列を返す（ルールは実行しない）。

        Notes
        -----
        処理手順:
        1. 改行コードを \\n に統一
        2. start フェーズのルール
        3. マークアップがあれば保護領域を隠す
        4. 実体参照をUnicode文字に変換
        5. main フェーズのルール
        6. 出力形式に応じて実体参照に再変換
        7. 保護領域を復元
        8. end フェーズのルール

        ルール内の例外は捕捉せずに呼び出し元へ送出する。
        """
        text = str(text)
        if not text:
            return ""

        ctx = RuleContext(
            lang=lang or self._lang,
            mode=self._mode if mode is None else self._check_mode(mode),
            registry=self._registry,
        )

        text = fix_line_end(text)

        inner_queues = _group_by_queue(self._registry.inner_rules)
        queues = _group_by_queue(self._registry.rules)

        def run_queue(queue: Queue, value: str) -> str:
            for rule in inner_queues[queue] + queues[queue]:
                value = self._apply_rule(rule, value, ctx)
            return value

        text = run_queue(Queue.START, text)

        ctx.is_html = MARKUP_PATTERN.search(text) is not None
        if ctx.is_html:
            text, ctx.hidden = self._shield.hide(text)
            logger.debug(msg("safe_tags_hidden", count=len(ctx.hidden)))

        text = self._codec.decode(text)
        text = run_queue(Queue.MAIN, text)
        text = self._codec.encode(text, ctx.mode)

        if ctx.is_html:
            text = self._shield.show(text, ctx.hidden)

        return run_queue(Queue.END, text)

    def _apply_rule(self, rule: Rule, text: str, ctx: RuleContext) -> str:
        if rule.lang not in (COMMON_LANGUAGE, ctx.lang) or not self._enabled_rules.get(rule.name, rule.enabled):
            return text
        if self._on_before_rule:
            self._on_before_rule(rule.name, text)
        text = rule.func(text, self._settings.get(rule.name, rule.settings), ctx)
        if self._on_after_rule:
            self._on_after_rule(rule.name, text)
        if logger.is_debug_enabled():
            logger.debug(msg("rule_applied", name=rule.name))
        return text

    # ------------------------------------------------------------------
    # 設定
    # ------------------------------------------------------------------

    def setting(self, rule_name: str, key: str, *value: Any) -> Any:
        """
        ルールの設定を取得または変更する。

        ``setting(name, key)`` で取得、``setting(name, key, value)`` で変更し
        self を返す。変更はこのインスタンスにのみ影響する。
        """
        if not value:
            return self._settings.get(rule_name, {}).get(key)
        self._settings.setdefault(rule_name, {})[key] = value[0]
        return self

    def enabled(self, rule_name: str) -> bool:
        """ルールが有効かどうか。未登録のルールは False。"""
        if rule_name in self._enabled_rules:
            return self._enabled_rules[rule_name]
        rule = self._registry.get(rule_name)
        return rule.enabled if rule else False

    def disabled(self, rule_name: str) -> bool:
        """ルールが無効かどうか。"""
        return not self.enabled(rule_name)

    def enable(self, rule_names: str | Iterable[str]) -> "Typograf":
        """ルールを有効にする。一致するルールがない名前は無視する。"""
        return self._enable(rule_names, True)

    def disable(self, rule_names: str | Iterable[str]) -> "Typograf":
        """ルールを無効にする。一致するルールがない名前は無視する。"""
        return self._enable(rule_names, False)

    def _enable(self, rule_names: str | Iterable[str], enabled: bool) -> "Typograf":
        for name in _as_list(rule_names):
            self._enable_by_mask(name, enabled)
        return self

    def _enable_by_mask(self, mask: str, enabled: bool) -> None:
        if "*" in mask:
            pattern = mask_to_pattern(mask)
            for name in self._registry.names():
                if pattern.search(name):
                    self._enabled_rules[name] = enabled
        elif mask in self._registry:
            self._enabled_rules[mask] = enabled

    def add_safe_tag(self, start: str, end: str) -> "Typograf":
        """
        保護領域を追加する。

        Raises
        ------
        SafeTagPatternError
            パターンが正規表現として不正な場合
        """
        self._shield.add(start, end)
        return self

    def letters(self) -> str:
        """既定の言語の文字クラスを返す。"""
        return letters_for(self._registry, self._lang)


def fix_line_end(text: str) -> str:
    """改行コードを \\n に統一する（Windows: \\r\\n, 旧MacOS: \\r）。"""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def _group_by_queue(rules: Iterable[Rule]) -> dict[Queue, list[Rule]]:
    """ルールをキューごとに分ける（各キュー内の順序は保つ）。"""
    grouped: dict[Queue, list[Rule]] = {queue: [] for queue in Queue}
    for rule in rules:
        grouped[rule.queue].append(rule)
    return grouped
