"""
タイポグラフ処理用のカスタム例外クラス。

ルール提供側の設定ミスや入力ファイルのエラーを明確に分類し、
適切なエラーハンドリングを可能にします。
"""
from core.messages import msg


class TypografError(Exception):
    """タイポグラフ処理の基底例外クラス。"""
    pass


class SafeTagPatternError(TypografError):
    """保護タグのパターンが正規表現として不正な場合の例外。"""

    def __init__(self, pattern: str, reason: str = ""):
        self.pattern = pattern
        self.reason = reason
        super().__init__(msg("exception_safe_tag_pattern", pattern=pattern, reason=reason))


class RuleDefinitionError(TypografError):
    """ルール定義（名前・キュー）が不正な場合の例外。"""

    def __init__(self, rule_name: str, reason: str):
        self.rule_name = rule_name
        self.reason = reason
        super().__init__(msg("exception_rule_definition", name=rule_name, reason=reason))


class InputFileError(TypografError):
    """入力ファイルが見つからない・読めない場合の例外。"""

    def __init__(self, file_path: str):
        self.file_path = file_path
        super().__init__(msg("file_not_found", path=file_path))
