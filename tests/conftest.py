import os
import sys

# Ensure repository root is on sys.path so tests can import "pokemon_quiz".
REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

import pytest

from pokemon_quiz.api import PokeAPIError
from pokemon_quiz.models import Pokemon

NAMES = {
    1: "フシギダネ",
    4: "ヒトカゲ",
    7: "ゼニガメ",
    25: "ピカチュウ",
    39: "プリン",
    52: "ニャース",
    54: "コダック",
    94: "ゲンガー",
    131: "ラプラス",
    143: "カビゴン",
}

TYPES = {
    1: ["くさ", "どく"],
    4: ["ほのお"],
    7: ["みず"],
    25: ["でんき"],
    39: ["ノーマル", "フェアリー"],
    52: ["ノーマル"],
    54: ["みず"],
    94: ["ゴースト", "どく"],
    131: ["みず", "こおり"],
    143: ["ノーマル"],
}


class FakeClient:
    """Stands in for PokeAPIClient with a fixed set of species."""

    def __init__(self, names=None, failing=()):
        self.names = dict(NAMES if names is None else names)
        self.failing = set(failing)
        self.calls = []

    def get_species_name(self, species_id):
        self.calls.append(("name", species_id))
        if species_id in self.failing or species_id not in self.names:
            raise PokeAPIError(f"No species data for #{species_id}")
        return self.names[species_id]

    def fetch_pokemon(self, species_id, rng=None):
        self.calls.append(("pokemon", species_id))
        if species_id in self.failing or species_id not in self.names:
            raise PokeAPIError(f"Incomplete data for #{species_id}")
        return Pokemon(
            id=species_id,
            name=self.names[species_id],
            image=f"https://img.example/{species_id}.png",
            types=list(TYPES.get(species_id, ["ノーマル"])),
        )

    def close(self):
        pass


class IdPicker:
    """random.Random replacement that draws ids from a fixed sequence."""

    def __init__(self, ids):
        self.ids = list(ids)

    def randint(self, a, b):
        return self.ids.pop(0)

    def shuffle(self, seq):
        pass

    def choice(self, seq):
        return seq[0]

    def sample(self, seq, k):
        return list(seq)[:k]

    def random(self):
        return 1.0


@pytest.fixture
def fake_client():
    return FakeClient()


@pytest.fixture
def make_client():
    return FakeClient


@pytest.fixture
def make_picker():
    return IdPicker
