import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Tuple

from .api import FALLBACK_NAME, PokeAPIClient
from .config import MAX_POKEMON_ID, ROSTER_WORKERS
from .storage import DatabaseManager

logger = logging.getLogger(__name__)


class RosterLoader:
    """Loads every species name used as shiritori vocabulary.

    Names come from the sqlite cache while it is fresh, otherwise from the
    species endpoint one id at a time. Ids that fail to load are left out.
    """

    def __init__(self, api: PokeAPIClient, db: DatabaseManager,
                 max_id=MAX_POKEMON_ID, workers=ROSTER_WORKERS):
        self.api = api
        self.db = db
        self.max_id = max_id
        self.workers = workers

    def load(self) -> List[Tuple[int, str]]:
        if self.db.is_cache_valid():
            cached = self.db.get_species_names()
            if cached:
                return cached
        return self._fetch_from_api()

    def _fetch_name(self, species_id: int) -> Optional[Tuple[int, str]]:
        try:
            name = self.api.get_species_name(species_id)
        except Exception as e:
            logger.warning(f"Skipping species #{species_id}: {e}")
            return None
        if name == FALLBACK_NAME:
            return None
        return species_id, name

    def _fetch_from_api(self) -> List[Tuple[int, str]]:
        ids = range(1, self.max_id + 1)
        with ThreadPoolExecutor(max_workers=self.workers) as executor:
            results = executor.map(self._fetch_name, ids)
            roster = [r for r in results if r is not None]

        if not roster:
            return []
        self.db.save_species_names(roster)
        missing = self.max_id - len(roster)
        if missing:
            # partial rosters are stored but refetched on the next run
            logger.warning(f"Roster loaded with {missing} species missing")
        else:
            self.db.update_cache_timestamp()
        return roster
