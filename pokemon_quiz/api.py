import logging
import random
from typing import Dict, Iterable, List, Optional
from urllib.parse import urlparse

import requests

from .config import API_URL, REQUEST_TIMEOUT, SHINY_RATE
from .models import Pokemon
from .typechart import TYPE_NAMES_JA

logger = logging.getLogger(__name__)

NAME_LANGUAGES = ("ja-Hrkt", "ja")
TEXT_LANGUAGES = ("ja", "ja-Hrkt")
FALLBACK_NAME = "???"


class PokeAPIError(Exception):
    pass


class PokeAPIClient:

    def __init__(self, base_url=API_URL, timeout=REQUEST_TIMEOUT):
        self.base_url = self._validate_url(base_url)
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({
            "User-Agent": "Pokemon-Quiz/1.0",
            "Accept": "application/json"
        })
        self._type_names: Dict[str, str] = dict(TYPE_NAMES_JA)

    def _validate_url(self, url: str) -> str:
        parsed = urlparse(url)
        if parsed.scheme != "https" or "pokeapi.co" not in parsed.netloc:
            raise ValueError("Invalid PokéAPI URL")
        return url.rstrip("/")

    def _get(self, endpoint: str) -> Optional[Dict]:
        try:
            resp = self.session.get(f"{self.base_url}/{endpoint.lstrip('/')}",
                                    timeout=self.timeout)
            resp.raise_for_status()
            return resp.json()
        except Exception as e:
            logger.error(f"API error on {endpoint}: {e}")
            return None

    def close(self):
        self.session.close()

    def get_species(self, species_id: int) -> Optional[Dict]:
        return self._get(f"pokemon-species/{species_id}")

    def get_pokemon(self, pokemon_id: int) -> Optional[Dict]:
        return self._get(f"pokemon/{pokemon_id}")

    def get_type(self, type_name: str) -> Optional[Dict]:
        return self._get(f"type/{type_name}")

    def get_species_name(self, species_id: int) -> str:
        species = self.get_species(species_id)
        if not species:
            raise PokeAPIError(f"No species data for #{species_id}")
        return localized_name(species.get("names", []))

    def type_name(self, slug: str) -> str:
        """Japanese name of a type, asking the type endpoint for unknown slugs."""
        if slug not in self._type_names:
            data = self.get_type(slug)
            name = localized_name(data.get("names", [])) if data else None
            self._type_names[slug] = (name if name and name != FALLBACK_NAME
                                      else slug)
        return self._type_names[slug]

    def fetch_pokemon(self, species_id: int,
                      rng: Optional[random.Random] = None) -> Pokemon:
        """Builds a full Pokemon from its species and default variety."""
        rng = rng or random
        species = self.get_species(species_id)
        variety = self.get_pokemon(species_id)
        if not species or not variety:
            raise PokeAPIError(f"Incomplete data for #{species_id}")

        artwork = (variety.get("sprites", {}).get("other", {})
                   .get("official-artwork", {}))
        image = artwork.get("front_default")
        if not image:
            raise PokeAPIError(f"No artwork for #{species_id}")

        cries = variety.get("cries") or {}
        slots = sorted(variety.get("types", []), key=lambda t: t.get("slot", 0))
        return Pokemon(
            id=species_id,
            name=localized_name(species.get("names", [])),
            image=image,
            shiny_image=artwork.get("front_shiny"),
            is_shiny=rng.random() < SHINY_RATE,
            cry=cries.get("latest") or cries.get("legacy"),
            flavor_text=flavor_text(species.get("flavor_text_entries", [])),
            types=[self.type_name(t["type"]["name"]) for t in slots],
            genus=genus(species.get("genera", [])),
        )


def _pick(entries: Iterable[Dict], key: str,
          languages=NAME_LANGUAGES) -> Optional[str]:
    by_lang = {}
    for e in entries:
        lang = e.get("language", {}).get("name")
        if lang and e.get(key):
            by_lang[lang] = e[key]
    for lang in languages:
        if lang in by_lang:
            return by_lang[lang]
    return None


def localized_name(names: List[Dict]) -> str:
    return _pick(names, "name") or FALLBACK_NAME


def flavor_text(entries: List[Dict]) -> Optional[str]:
    # later entries win, so the newest game's text is used
    text = _pick(entries, "flavor_text", TEXT_LANGUAGES)
    if text is None:
        return None
    for ch in ("\n", "\f", "　"):
        text = text.replace(ch, " ")
    return " ".join(text.split())


def genus(genera: List[Dict]) -> Optional[str]:
    return _pick(genera, "genus", TEXT_LANGUAGES)
