"""
タイポグラフ処理の設定定数モジュール。

言語ごとの引用符・文字クラスや出力モードなど、
プロジェクト全体で使用される設定値を一元管理します。
"""
from dataclasses import dataclass


# --- 言語設定 ---
@dataclass(frozen=True)
class LanguageConfig:
    """言語ごとの設定を保持するデータクラス。"""
    code: str                    # 言語コード（例: "ru", "en"）
    display_name: str            # 表示名
    letters: str                 # 正規表現の文字クラス（角括弧なし）
    lquot: str                   # 外側の開き引用符
    rquot: str                   # 外側の閉じ引用符
    lquot2: str                  # 内側の開き引用符
    rquot2: str                  # 内側の閉じ引用符

    @property
    def is_single_level(self) -> bool:
        """外側と内側の引用符が同一かどうか。"""
        return self.lquot == self.lquot2 and self.rquot == self.rquot2

    @property
    def quote_settings(self) -> dict[str, str]:
        """引用符ルールの設定辞書を返す。"""
        return {
            "lquot": self.lquot,
            "rquot": self.rquot,
            "lquot2": self.lquot2,
            "rquot2": self.rquot2,
        }


# 対応言語の設定
LANGUAGE_CONFIGS: dict[str, LanguageConfig] = {
    "en": LanguageConfig(
        code="en",
        display_name="English",
        letters="a-z",
        lquot="“", rquot="”",
        lquot2="‘", rquot2="’",
    ),
    "ru": LanguageConfig(
        code="ru",
        display_name="Русский",
        letters="а-яё",
        lquot="«", rquot="»",
        lquot2="„", rquot2="“",
    ),
    "uk": LanguageConfig(
        code="uk",
        display_name="Українська",
        letters="а-яєіїґ",
        lquot="«", rquot="»",
        lquot2="„", rquot2="“",
    ),
    "de": LanguageConfig(
        code="de",
        display_name="Deutsch",
        letters="a-zäöüß",
        lquot="„", rquot="“",
        lquot2="‚", rquot2="‘",
    ),
}

# 言語共通ルールの言語名。言語指定なしの場合はこのルールのみ実行される
COMMON_LANGUAGE = "common"
COMMON_LETTERS = "a-z"

# デフォルト言語
DEFAULT_LANGUAGE = COMMON_LANGUAGE

# --- 出力モード設定 ---
# default: UTF-8のまま / digit: &#160; / name: &nbsp;
MODE_DEFAULT = "default"
MODE_DIGIT = "digit"
MODE_NAME = "name"
OUTPUT_MODES: tuple[str, ...] = (MODE_DEFAULT, MODE_DIGIT, MODE_NAME)
DEFAULT_MODE = MODE_DEFAULT

# --- 保護領域設定 ---
# プレースホルダーの区切り文字（U+10FFFD、第16面私用領域）
PRIVATE_LABEL = "\U0010FFFD"

# 不正な数値実体参照の代替文字
REPLACEMENT_CHAR = "\ufffd"

# --- CLI設定 ---
OUTPUT_SUFFIX = "_typograf"  # 出力ファイル名に付加する接尾辞


def get_language_config(lang_code: str) -> LanguageConfig:
    """言語コードから設定を取得する。

    Parameters
    ----------
    lang_code : str
        言語コード（例: "ru", "en"）

    Returns
    -------
    LanguageConfig
        言語設定

    Raises
    ------
    ValueError
        未対応の言語コードの場合
    """
    if lang_code not in LANGUAGE_CONFIGS:
        available = ", ".join(LANGUAGE_CONFIGS.keys())
        raise ValueError(f"未対応の言語コード: {lang_code}（対応言語: {available}）")
    return LANGUAGE_CONFIGS[lang_code]
