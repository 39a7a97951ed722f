# -*- coding: utf-8 -*-
"""
共通フィクスチャ。
"""

import pytest

from typograf.registry import Queue, Rule, RuleRegistry


@pytest.fixture
def registry() -> RuleRegistry:
    """テストごとに独立したレジストリ（組み込みルールなし）。"""
    reg = RuleRegistry()
    reg.data("common/letter", "a-z")
    reg.data("ru/letter", "а-яё")
    return reg


def make_rule(name, func=None, queue=Queue.MAIN, sort_index=0, enabled=True, settings=None, calls=None):
    """テキストに印を付けるだけのルールを作る。calls を渡すと実行順を記録する。"""

    def default_func(text, rule_settings, context):
        if calls is not None:
            calls.append(name)
        return text

    return Rule(
        name=name,
        func=func or default_func,
        queue=queue,
        sort_index=sort_index,
        enabled=enabled,
        settings=settings or {},
    )
