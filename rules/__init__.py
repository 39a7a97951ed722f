"""
組み込みルールモジュール。

共通ルール・言語別の引用符ルール・ロシア語ルールをレジストリに登録する。
"""
from core.config import COMMON_LANGUAGE, COMMON_LETTERS, LANGUAGE_CONFIGS
from rules import common, punctuation, ru
from typograf.registry import RuleRegistry


def register_builtin_rules(registry: RuleRegistry) -> None:
    """
    組み込みルールと文字クラスのデータを登録する。

    Parameters
    ----------
    registry : RuleRegistry
        登録先のレジストリ。同じレジストリに2回登録すると
        RuleDefinitionError（同名ルール）となる。
    """
    registry.data(f"{COMMON_LANGUAGE}/letter", COMMON_LETTERS)
    for code, config in LANGUAGE_CONFIGS.items():
        registry.data(f"{code}/letter", config.letters)

    for rule in common.INNER_RULES:
        registry.register_inner(rule)
    for rule in common.RULES + punctuation.build_quote_rules() + ru.RULES:
        registry.register(rule)


__all__ = [
    "register_builtin_rules",
]
