"""
タイポグラフ処理モジュール。

ルールの登録・実行、保護領域の隠蔽、実体参照の変換、引用符の正規化を提供する。
組み込みルールは rules パッケージが提供し、既定のレジストリの初回利用時に登録される。
"""
from typograf.registry import Queue, Rule, RuleRegistry, get_default_registry
from typograf.safe_tags import SafeTag, SafeTagShield, HiddenSpans
from typograf.entities import EntityCodec, EntityEntry, DEFAULT_ENTITIES
from typograf.quotes import QuoteConfig, normalize_quotes
from typograf.engine import Typograf, RuleContext, fix_line_end

__all__ = [
    # registry
    "Queue",
    "Rule",
    "RuleRegistry",
    "get_default_registry",
    # safe_tags
    "SafeTag",
    "SafeTagShield",
    "HiddenSpans",
    # entities
    "EntityCodec",
    "EntityEntry",
    "DEFAULT_ENTITIES",
    # quotes
    "QuoteConfig",
    "normalize_quotes",
    # engine
    "Typograf",
    "RuleContext",
    "fix_line_end",
]
