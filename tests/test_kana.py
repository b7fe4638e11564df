import pytest

from pokemon_quiz.kana import (ends_with_terminal, first_mora, last_mora,
                               to_katakana)


def test_to_katakana_folds_hiragana_and_spaces():
    assert to_katakana("ぴかちゅう") == "ピカチュウ"
    assert to_katakana(" ピカ チュウ ") == "ピカチュウ"
    # half-width katakana
    assert to_katakana("ﾋﾟｶﾁｭｳ") == "ピカチュウ"


@pytest.mark.parametrize("word,expected", [
    ("ピカチュウ", "ウ"),
    ("ヒトカゲ", "ゲ"),
    ("ピィ", "イ"),
    ("ニャ", "ヤ"),
    ("テスッ", "ツ"),
    ("ゲンガー", "ア"),
    ("ミュウツー", "ウ"),
    ("カイリュー", "ウ"),
    ("ウパー", "ア"),
    ("ニドラン♀", "ン"),
    ("ポリゴン2", "ン"),
    ("タイプ：ヌル", "ル"),
    ("ぴかちゅう", "ウ"),
])
def test_last_mora(word, expected):
    assert last_mora(word) == expected


def test_last_mora_without_kana():
    assert last_mora("123") == ""
    assert last_mora("ー") == ""
    assert last_mora("") == ""


def test_first_mora():
    assert first_mora("ひとかげ") == "ヒ"
    assert first_mora("") == ""


def test_ends_with_terminal():
    assert ends_with_terminal("カビゴン")
    assert ends_with_terminal("ポリゴンZ")
    assert not ends_with_terminal("ゲンガー")
