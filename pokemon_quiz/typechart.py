"""Simplified type chart used by the weakness quiz.

Only the "super effective" relation is modelled: resistances, immunities and
abilities are ignored, so a type counts as a weakness as soon as it is strong
against any one of the defending types.
"""
import random
from typing import List, Sequence, Tuple

NO_WEAKNESS = "なし"

TYPE_NAMES_JA = {
    "normal": "ノーマル",
    "fire": "ほのお",
    "water": "みず",
    "electric": "でんき",
    "grass": "くさ",
    "ice": "こおり",
    "fighting": "かくとう",
    "poison": "どく",
    "ground": "じめん",
    "flying": "ひこう",
    "psychic": "エスパー",
    "bug": "むし",
    "rock": "いわ",
    "ghost": "ゴースト",
    "dragon": "ドラゴン",
    "dark": "あく",
    "steel": "はがね",
    "fairy": "フェアリー",
}

ALL_TYPES: List[str] = list(TYPE_NAMES_JA.values())

# attacking type -> defending types it hits for double damage
SUPER_EFFECTIVE = {
    "ノーマル": [],
    "ほのお": ["くさ", "こおり", "むし", "はがね"],
    "みず": ["ほのお", "じめん", "いわ"],
    "でんき": ["みず", "ひこう"],
    "くさ": ["みず", "じめん", "いわ"],
    "こおり": ["くさ", "じめん", "ひこう", "ドラゴン"],
    "かくとう": ["ノーマル", "こおり", "いわ", "あく", "はがね"],
    "どく": ["くさ", "フェアリー"],
    "じめん": ["ほのお", "でんき", "どく", "いわ", "はがね"],
    "ひこう": ["くさ", "かくとう", "むし"],
    "エスパー": ["かくとう", "どく"],
    "むし": ["くさ", "エスパー", "あく"],
    "いわ": ["ほのお", "こおり", "ひこう", "むし"],
    "ゴースト": ["エスパー", "ゴースト"],
    "ドラゴン": ["ドラゴン"],
    "あく": ["エスパー", "ゴースト"],
    "はがね": ["こおり", "いわ", "フェアリー"],
    "フェアリー": ["かくとう", "ドラゴン", "あく"],
}


def get_weaknesses(defending_types: Sequence[str]) -> List[str]:
    """Attacking types that are super effective against any defending type.

    Returns ``[NO_WEAKNESS]`` when no attacker qualifies.
    """
    defending = set(defending_types)
    weaknesses = [
        attacker for attacker, targets in SUPER_EFFECTIVE.items()
        if defending.intersection(targets)
    ]
    return weaknesses or [NO_WEAKNESS]


def build_weakness_choices(defending_types: Sequence[str],
                           rng=None,
                           count: int = 4) -> Tuple[str, List[str]]:
    """Returns ``(answer, choices)`` for one weakness question.

    The answer is one true weakness; the other ``count - 1`` choices are
    distinct types that are not weaknesses at all.
    """
    rng = rng or random
    weaknesses = get_weaknesses(defending_types)
    answer = rng.choice(weaknesses)

    pool = [t for t in ALL_TYPES if t not in weaknesses]
    if len(pool) < count - 1:
        raise ValueError(
            f"Only {len(pool)} non-weakness types left, need {count - 1}")
    choices = rng.sample(pool, count - 1) + [answer]
    rng.shuffle(choices)
    return answer, choices
