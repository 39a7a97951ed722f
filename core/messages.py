"""
UIメッセージ国際化モジュール。

OSのロケールに基づいて日本語/英語のUIメッセージを自動切替する。
"""
import locale
import os
import sys

MESSAGES: dict[str, dict[str, str]] = {
    "ja": {
        # ツールタイトル
        "tool_title": "Typograf - タイポグラフ整形ツール",
        "cli_description": "テキスト/HTMLファイルに組版ルールを適用します。",

        # 引数ヘルプ
        "arg_input": "入力ファイル（UTF-8）",
        "arg_output": "出力ファイル（省略時: 入力ファイル名に「{suffix}」を付加）",
        "arg_lang": "ルールの言語（{langs}）",
        "arg_mode": "HTML実体参照の出力形式（{modes}）",
        "arg_enable": "有効にするルール名（* ワイルドカード可）",
        "arg_disable": "無効にするルール名（* ワイルドカード可）",
        "arg_list_rules": "登録済みルールの一覧を表示して終了する",
        "arg_verbose": "ルールごとのデバッグログを出力する",

        # 処理ログ
        "processing_start": "処理開始: {path}",
        "processing_end": "処理終了: {time}",
        "elapsed_time": "所要時間: {time}",
        "output_file": "生成ファイル: {path}",
        "language_and_mode": "言語: {lang} / 出力形式: {mode}",
        "processing_aborted": "処理を中断しました。",
        "rules_header": "登録済みルール（{count} 件）:",
        "rule_enabled": "有効",
        "rule_disabled": "無効",
        "rule_line": "  {name} [{queue}] ({state})",

        # エンジンログ
        "rule_applied": "ルール適用: {name}",
        "unknown_mode": "未対応の出力形式: {mode}（default として扱います）",
        "safe_tags_hidden": "保護領域を {count} 件隠しました。",

        # エラー・バリデーション
        "file_not_found": "ファイルが見つかりません: {path}",
        "input_required": "入力ファイルを指定してください。",

        # ロガープレフィックス
        "log_warning": "警告: {message}",
        "log_success": "成功: {message}",

        # 例外メッセージ
        "exception_safe_tag_pattern": "保護タグのパターンが不正です: {pattern}（{reason}）",
        "exception_rule_definition": "ルール定義が不正です: {name}（{reason}）",
        "reason_empty_name": "名前が空です",
        "reason_no_lang": "名前は「言語/識別子」の形式が必要です",
        "reason_unknown_queue": "未対応のキュー: {queue}",
        "reason_duplicate_name": "同名のルールが既に登録されています",
    },
    "en": {
        # Tool title
        "tool_title": "Typograf - typography formatter",
        "cli_description": "Apply typographic rules to a text/HTML file.",

        # Argument help
        "arg_input": "input file (UTF-8)",
        "arg_output": "output file (default: input file name with \"{suffix}\" appended)",
        "arg_lang": "rule language ({langs})",
        "arg_mode": "HTML entity output mode ({modes})",
        "arg_enable": "rule names to enable (* wildcard allowed)",
        "arg_disable": "rule names to disable (* wildcard allowed)",
        "arg_list_rules": "list registered rules and exit",
        "arg_verbose": "print a debug line for every applied rule",

        # Processing log
        "processing_start": "Processing started: {path}",
        "processing_end": "Processing finished: {time}",
        "elapsed_time": "Elapsed time: {time}",
        "output_file": "Output file: {path}",
        "language_and_mode": "Language: {lang} / Output mode: {mode}",
        "processing_aborted": "Processing aborted.",
        "rules_header": "Registered rules ({count}):",
        "rule_enabled": "enabled",
        "rule_disabled": "disabled",
        "rule_line": "  {name} [{queue}] ({state})",

        # Engine log
        "rule_applied": "Rule applied: {name}",
        "unknown_mode": "Unsupported output mode: {mode} (treated as default)",
        "safe_tags_hidden": "Hid {count} protected span(s).",

        # Errors / validation
        "file_not_found": "File not found: {path}",
        "input_required": "an input file is required",

        # Logger prefixes
        "log_warning": "Warning: {message}",
        "log_success": "Success: {message}",

        # Exception messages
        "exception_safe_tag_pattern": "Invalid safe tag pattern: {pattern} ({reason})",
        "exception_rule_definition": "Invalid rule definition: {name} ({reason})",
        "reason_empty_name": "name is empty",
        "reason_no_lang": "name must have the form \"lang/id\"",
        "reason_unknown_queue": "unsupported queue: {queue}",
        "reason_duplicate_name": "a rule with the same name is already registered",
    },
}

# UI言語を明示する環境変数（"ja" / "en"）
UI_LANG_ENV = "TYPOGRAF_UI_LANG"


# OS言語判定
def _detect_ui_language() -> str:
    """環境変数・OSのロケールから UI 言語を判定する。"""
    explicit = os.environ.get(UI_LANG_ENV, "")
    if explicit:
        return "ja" if explicit.startswith("ja") else "en"
    # macOS: システム言語設定（AppleLanguages）を優先
    if sys.platform == "darwin":
        import subprocess
        try:
            result = subprocess.run(
                ["defaults", "read", "-g", "AppleLanguages"],
                capture_output=True, text=True, timeout=2
            )
        except (OSError, subprocess.SubprocessError):
            result = None
        if result is not None and result.returncode == 0:
            # 出力例: ("ja-JP", "en-US", ...) → 先頭の言語コードを取得
            for line in result.stdout.splitlines():
                line = line.strip().strip('",() ')
                if line:
                    return "ja" if line.startswith("ja") else "en"
    # C / C.UTF-8 / POSIX は言語指定なしとして除外
    for env_var in ("LC_ALL", "LC_MESSAGES", "LANG"):
        value = os.environ.get(env_var, "")
        if value and not value.startswith("C") and value != "POSIX":
            return "ja" if value.startswith("ja") else "en"
    try:
        loc = locale.getlocale()[0] or ""
    except ValueError:
        loc = ""
    return "ja" if loc.lower().startswith("ja") else "en"

_ui_lang = _detect_ui_language()


def set_ui_language(lang_code: str) -> None:
    """
    UIメッセージ言語を手動で設定する。

    Parameters
    ----------
    lang_code : str
        "ja" で始まる場合は日本語、それ以外は英語を使用する。
    """
    global _ui_lang
    _ui_lang = "ja" if lang_code.startswith("ja") else "en"


def get_ui_language() -> str:
    """現在のUIメッセージ言語（"ja" / "en"）を返す。"""
    return _ui_lang


def msg(key: str, **kwargs) -> str:
    """
    指定キーのUIメッセージを現在のロケールに応じて返す。

    Parameters
    ----------
    key : str
        メッセージキー
    **kwargs
        メッセージ内のプレースホルダーに渡す値

    Returns
    -------
    str
        ロケールに応じたメッセージ文字列。未登録のキーはキー自体を返す。
    """
    template = MESSAGES[_ui_lang].get(key, key)
    if kwargs:
        return template.format(**kwargs)
    return template
