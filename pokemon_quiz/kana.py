"""Kana helpers for shiritori chaining.

Chaining works on the reading's last mora rather than its last character, so
``ー`` takes the vowel of the kana before it and small kana count as their
full-size form.
"""
import unicodedata

LONG_VOWEL = "ー"
TERMINAL_MORA = "ン"

SMALL_TO_FULL = {
    "ァ": "ア", "ィ": "イ", "ゥ": "ウ", "ェ": "エ", "ォ": "オ",
    "ッ": "ツ", "ャ": "ヤ", "ュ": "ユ", "ョ": "ヨ", "ヮ": "ワ",
    "ヵ": "カ", "ヶ": "ケ",
}

# each row lists the a/i/u/e/o columns; "・" marks an empty slot
_ROWS = (
    "アイウエオ", "カキクケコ", "ガギグゲゴ", "サシスセソ", "ザジズゼゾ",
    "タチツテト", "ダヂヅデド", "ナニヌネノ", "ハヒフヘホ", "バビブベボ",
    "パピプペポ", "マミムメモ", "ヤ・ユ・ヨ", "ラリルレロ", "ワヰ・ヱヲ",
    "ァィゥェォ", "ャ・ュ・ョ", "ヮ・・・・", "・・ヴ・・",
)
VOWEL_OF = {
    kana: "アイウエオ"[col]
    for row in _ROWS
    for col, kana in enumerate(row)
    if kana != "・"
}


def to_katakana(text: str) -> str:
    """NFKC-normalizes, drops whitespace and folds hiragana into katakana."""
    text = "".join(unicodedata.normalize("NFKC", text).split())
    return "".join(
        chr(ord(c) + 0x60) if "ぁ" <= c <= "ゖ" else c for c in text)


def is_kana(ch: str) -> bool:
    return "ァ" <= ch <= "ヺ" or ch == LONG_VOWEL


def last_mora(word: str) -> str:
    """Mora the next word has to start with.

    Trailing symbols such as ``♀`` or digits are skipped. Returns an empty
    string when the word contains no kana at all.
    """
    word = to_katakana(word)
    i = len(word) - 1
    while i >= 0 and not is_kana(word[i]):
        i -= 1
    if i < 0:
        return ""

    ch = word[i]
    if ch == LONG_VOWEL:
        j = i - 1
        while j >= 0 and word[j] == LONG_VOWEL:
            j -= 1
        if j < 0 or not is_kana(word[j]):
            return ""
        ch = VOWEL_OF.get(word[j], word[j])
    return SMALL_TO_FULL.get(ch, ch)


def first_mora(word: str) -> str:
    word = to_katakana(word)
    return word[0] if word else ""


def ends_with_terminal(word: str) -> bool:
    return last_mora(word) == TERMINAL_MORA
