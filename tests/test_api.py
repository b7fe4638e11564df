import pytest
import requests

from pokemon_quiz.api import (FALLBACK_NAME, PokeAPIClient, PokeAPIError,
                              flavor_text, localized_name)

SPECIES = {
    "names": [
        {"language": {"name": "ja-Hrkt"}, "name": "ピカチュウ"},
        {"language": {"name": "ja"}, "name": "ピカチュウ"},
        {"language": {"name": "en"}, "name": "Pikachu"},
    ],
    "flavor_text_entries": [
        {"language": {"name": "ja"}, "flavor_text": "ほっぺの\nりょうがわに\fちいさい"},
        {"language": {"name": "en"}, "flavor_text": "It keeps its tail raised."},
        {"language": {"name": "ja"}, "flavor_text": "つよい　でんきを\nためこむ。"},
    ],
    "genera": [
        {"language": {"name": "en"}, "genus": "Mouse Pokémon"},
        {"language": {"name": "ja"}, "genus": "ねずみポケモン"},
    ],
}

VARIETY = {
    "sprites": {
        "other": {
            "official-artwork": {
                "front_default": "https://img.example/25.png",
                "front_shiny": "https://img.example/shiny/25.png",
            }
        }
    },
    "cries": {"latest": "https://cry.example/25.ogg", "legacy": None},
    "types": [
        {"slot": 2, "type": {"name": "flying"}},
        {"slot": 1, "type": {"name": "electric"}},
    ],
}


class AlwaysShiny:
    def random(self):
        return 0.0


def _client(monkeypatch, species=SPECIES, variety=VARIETY):
    client = PokeAPIClient()
    monkeypatch.setattr(client, "get_species", lambda i: species)
    monkeypatch.setattr(client, "get_pokemon", lambda i: variety)
    return client


def test_rejects_non_pokeapi_urls():
    with pytest.raises(ValueError):
        PokeAPIClient("http://pokeapi.co/api/v2")
    with pytest.raises(ValueError):
        PokeAPIClient("https://example.com/api/v2")


def test_get_logs_and_returns_none_on_error(monkeypatch):
    client = PokeAPIClient()

    def boom(*args, **kwargs):
        raise requests.ConnectionError("offline")

    monkeypatch.setattr(client.session, "get", boom)
    assert client.get_species(25) is None
    with pytest.raises(PokeAPIError):
        client.get_species_name(25)


def test_fetch_pokemon_parses_payloads(monkeypatch):
    client = _client(monkeypatch)

    p = client.fetch_pokemon(25, rng=AlwaysShiny())

    assert p.id == 25
    assert p.name == "ピカチュウ"
    assert p.image == "https://img.example/25.png"
    assert p.is_shiny
    assert p.display_image == "https://img.example/shiny/25.png"
    assert p.cry == "https://cry.example/25.ogg"
    assert p.types == ["でんき", "ひこう"]
    assert p.genus == "ねずみポケモン"
    assert p.flavor_text == "つよい でんきを ためこむ。"


def test_fetch_pokemon_without_artwork_fails(monkeypatch):
    client = _client(monkeypatch, variety={"sprites": {}, "types": []})
    with pytest.raises(PokeAPIError):
        client.fetch_pokemon(25)


def test_missing_species_fails(monkeypatch):
    client = _client(monkeypatch, species=None)
    with pytest.raises(PokeAPIError):
        client.fetch_pokemon(25)


def test_unknown_type_is_looked_up_once(monkeypatch):
    client = PokeAPIClient()
    calls = []

    def get_type(name):
        calls.append(name)
        return {"names": [{"language": {"name": "ja-Hrkt"}, "name": "ステラ"}]}

    monkeypatch.setattr(client, "get_type", get_type)
    assert client.type_name("stellar") == "ステラ"
    assert client.type_name("stellar") == "ステラ"
    assert client.type_name("fire") == "ほのお"
    assert calls == ["stellar"]


def test_fallbacks_for_missing_fields():
    assert localized_name([]) == FALLBACK_NAME
    assert localized_name([{"language": {"name": "en"}, "name": "Mew"}]) == FALLBACK_NAME
    assert flavor_text([]) is None
