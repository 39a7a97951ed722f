# -*- coding: utf-8 -*-
"""
Typograf エンジンのテスト（組み込みルールを使わない独立したレジストリで検証）。
"""

import pytest

from typograf.engine import Typograf, fix_line_end, mask_to_pattern
from typograf.registry import Queue

from conftest import make_rule


def _append(mark):
    def func(text, settings, context):
        return text + mark
    return func


def test_empty_input_runs_no_rules(registry):
    seen = []
    registry.register(make_rule("common/x", func=_append("!")))
    tp = Typograf(registry=registry, on_before_rule=lambda name, text: seen.append(name))

    assert tp.execute("") == ""
    assert seen == [], "空文字列ではルールを実行しない"


def test_non_string_input_is_coerced(registry):
    tp = Typograf(registry=registry)
    assert tp.execute(123) == "123"


def test_line_endings_are_normalized_before_rules(registry):
    received = []

    def spy(text, settings, context):
        received.append(text)
        return text

    registry.register(make_rule("common/spy", func=spy, queue=Queue.START))
    result = Typograf(registry=registry).execute("a\r\nb\rc\n")

    assert received == ["a\nb\nc\n"]
    assert result == "a\nb\nc\n"
    assert fix_line_end("x\r\n\r\ny") == "x\n\ny"


def test_queue_order_inner_rules_first(registry):
    calls = []
    registry.register(make_rule("common/end", queue=Queue.END, calls=calls))
    registry.register(make_rule("common/main", calls=calls))
    registry.register(make_rule("common/start", queue=Queue.START, calls=calls))
    registry.register_inner(make_rule("common/inner-end", queue=Queue.END, calls=calls))
    registry.register_inner(make_rule("common/inner-main", sort_index=99, calls=calls))
    registry.register_inner(make_rule("common/inner-start", queue=Queue.START, calls=calls))

    Typograf(registry=registry).execute("text")

    assert calls == [
        "common/inner-start",
        "common/start",
        "common/inner-main",
        "common/main",
        "common/inner-end",
        "common/end",
    ], "start → main → end、各キューでは内部ルールが先"


def test_sort_index_order_within_queue(registry):
    registry.register(make_rule("common/b", func=_append("b"), sort_index=2))
    registry.register(make_rule("common/a", func=_append("a"), sort_index=1))
    registry.register(make_rule("common/c", func=_append("c"), sort_index=2))

    assert Typograf(registry=registry).execute("x") == "xabc"


def test_language_filter(registry):
    registry.register(make_rule("ru/mark", func=_append("[ru]")))
    registry.register(make_rule("en/mark", func=_append("[en]")))
    registry.register(make_rule("common/mark", func=_append("[c]")))

    tp = Typograf(lang="ru", registry=registry)
    assert tp.execute("x") == "x[ru][c]"
    assert tp.execute("x", lang="en") == "x[en][c]", "呼び出し単位で言語を上書きできる"
    assert tp.lang == "ru", "呼び出し単位の上書きはインスタンスに残らない"
    assert Typograf(registry=registry).execute("x") == "x[c]", "言語なしでは共通ルールのみ"


def test_disabled_by_default_rule(registry):
    registry.register(make_rule("common/off", func=_append("!"), enabled=False))
    tp = Typograf(registry=registry)

    assert tp.execute("x") == "x"
    assert tp.disabled("common/off")
    tp.enable("common/off")
    assert tp.execute("x") == "x!"


def _three_rules(registry):
    registry.register(make_rule("ru/quotes"))
    registry.register(make_rule("ru/dash"))
    registry.register(make_rule("en/quotes"))


def test_disable_by_wildcard(registry):
    _three_rules(registry)
    tp = Typograf(registry=registry, disable="ru/*")

    assert tp.disabled("ru/quotes")
    assert tp.disabled("ru/dash")
    assert tp.enabled("en/quotes")


def test_wildcard_in_middle(registry):
    _three_rules(registry)
    tp = Typograf(registry=registry).disable("*/quotes")

    assert tp.disabled("ru/quotes")
    assert tp.disabled("en/quotes")
    assert tp.enabled("ru/dash")


def test_enable_wins_over_disable_in_constructor(registry):
    _three_rules(registry)
    tp = Typograf(registry=registry, disable="ru/*", enable=["ru/dash"])

    assert tp.disabled("ru/quotes")
    assert tp.enabled("ru/dash"), "disable の後に enable を適用する"


def test_unknown_rule_name_is_ignored(registry):
    _three_rules(registry)
    tp = Typograf(registry=registry, enable="fr/nothing", disable="de/*")

    assert not tp.enabled("fr/nothing"), "未登録のルールは無効扱い"
    assert tp.enabled("ru/quotes")


def test_enable_state_is_per_instance(registry):
    _three_rules(registry)
    first = Typograf(registry=registry, disable="*")
    second = Typograf(registry=registry)

    assert first.disabled("ru/dash")
    assert second.enabled("ru/dash")


def test_mask_to_pattern_escapes_regex_characters():
    pattern = mask_to_pattern("common/html.*")
    assert pattern.search("common/html.escape")
    assert not pattern.search("common/htmlXescape")


def test_setting_overlay_is_per_instance(registry):
    def repeat(text, settings, context):
        return text * settings["times"]

    registry.register(make_rule("common/repeat", func=repeat, settings={"times": 2}))
    tp = Typograf(registry=registry)
    other = Typograf(registry=registry)

    assert tp.setting("common/repeat", "times") == 2
    assert tp.setting("common/repeat", "times", 3) is tp
    assert tp.execute("a") == "aaa"
    assert other.execute("a") == "aa", "設定の変更は他のインスタンスに影響しない"
    assert registry.get("common/repeat").settings == {"times": 2}


def test_hooks_receive_name_and_text(registry):
    events = []
    registry.register(make_rule("common/up", func=lambda t, s, c: t.upper()))
    tp = Typograf(
        registry=registry,
        on_before_rule=lambda name, text: events.append(("before", name, text)),
        on_after_rule=lambda name, text: events.append(("after", name, text)),
    )

    assert tp.execute("ab") == "AB"
    assert events == [("before", "common/up", "ab"), ("after", "common/up", "AB")]


def test_hooks_skip_disabled_rules(registry):
    events = []
    registry.register(make_rule("common/off", enabled=False))
    Typograf(registry=registry, on_before_rule=lambda n, t: events.append(n)).execute("x")
    assert events == []


def test_rule_exception_propagates(registry):
    def broken(text, settings, context):
        raise ValueError("boom")

    registry.register(make_rule("common/broken", func=broken))
    with pytest.raises(ValueError, match="boom"):
        Typograf(registry=registry).execute("x")


def test_main_rules_see_placeholders_instead_of_markup(registry):
    seen = {}

    def spy(key):
        def func(text, settings, context):
            seen[key] = text
            return text
        return func

    registry.register(make_rule("common/start", func=spy("start"), queue=Queue.START))
    registry.register(make_rule("common/main", func=spy("main")))
    registry.register(make_rule("common/end", func=spy("end"), queue=Queue.END))

    source = 'a <b class="x">bold</b> <!-- note --> z'
    result = Typograf(registry=registry).execute(source)

    assert seen["start"] == source
    assert "<" not in seen["main"], "main フェーズではタグが隠されている"
    assert "bold" in seen["main"]
    assert seen["end"] == source
    assert result == source


def test_context_reports_markup(registry):
    flags = []
    registry.register(make_rule("common/flag", func=lambda t, s, c: flags.append(c.is_html) or t))
    tp = Typograf(registry=registry)
    tp.execute("plain 1 < 2")
    tp.execute("<p>tag</p>")
    assert flags == [False, True]


def test_entities_decoded_for_main_and_encoded_by_mode(registry):
    seen = []
    registry.register(make_rule("common/spy", func=lambda t, s, c: seen.append(t) or t))

    assert Typograf(registry=registry).execute("a&nbsp;b") == "a\u00a0b"
    assert seen == ["a\u00a0b"], "main フェーズでは実体参照が文字に変換済み"

    tp = Typograf(registry=registry, mode="name")
    assert tp.execute("a\u00a0b") == "a&nbsp;b"
    assert tp.execute("a\u00a0b", mode="digit") == "a&#160;b", "呼び出し単位で出力形式を上書きできる"
    assert tp.mode == "name"


def test_markup_entities_are_not_decoded(registry):
    tp = Typograf(registry=registry, mode="name")
    assert tp.execute("a &lt; b &amp; c") == "a &lt; b &amp; c"


def test_unknown_mode_falls_back_to_default(registry):
    tp = Typograf(registry=registry, mode="xml")
    assert tp.mode == "default"
    assert tp.execute("a\u00a0b") == "a\u00a0b"
    assert tp.execute("a\u00a0b", mode="bogus") == "a\u00a0b"


def test_execute_is_deterministic(registry):
    registry.register(make_rule("common/x", func=_append("!")))
    tp = Typograf(registry=registry)
    source = "<p>x &mdash; y</p>"
    assert tp.execute(source) == tp.execute(source)


def test_nested_execute_uses_separate_state(registry):
    tp = None

    def nested(text, settings, context):
        return text + tp.execute("<i>a</i>", lang="en")

    registry.register(make_rule("ru/nested", func=nested))
    tp = Typograf(lang="ru", registry=registry)

    assert tp.execute("<b>x</b>") == "<b>x</b><i>a</i>", "入れ子の呼び出しでもプレースホルダーが混ざらない"


def test_instance_safe_tag(registry):
    registry.register(make_rule("common/up", func=lambda t, s, c: t.replace("a", "A").replace("b", "B")))
    tp = Typograf(registry=registry, safe_tags=[(r"\{\{", r"\}\}")])

    assert tp.execute("<p>a {{ keep }} b</p>") == "<p>A {{ keep }} B</p>"


def test_context_letters(registry):
    letters = []
    registry.register(make_rule("common/l", func=lambda t, s, c: letters.append(c.letters()) or t))
    Typograf(lang="ru", registry=registry).execute("x")
    Typograf(registry=registry).execute("x")

    assert letters == ["a-zа-яё", "a-z"]


def test_instance_letters(registry):
    assert Typograf(lang="ru", registry=registry).letters() == "a-zа-яё"
    assert Typograf(lang="en", registry=registry).letters() == "a-z", "未登録の言語は共通の文字クラス"


def test_registry_safe_tag_applies_to_all_instances(registry):
    registry.register_safe_tag(r"<math>", r"</math>")
    registry.register(make_rule("common/x", func=lambda t, s, c: t.replace("x", "y")))

    assert Typograf(registry=registry).execute("x <math>x</math>") == "y <math>x</math>"
