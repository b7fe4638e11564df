import logging
from typing import Dict

from .models import Pokemon
from .quiz import QuizSession
from .storage import DatabaseManager

logger = logging.getLogger(__name__)

BEST_SCORE = "best_score"
MAX_STREAK = "max_streak"
TOTAL_CORRECT = "total_correct"
TIME_ATTACK_BEST = "time_attack_best"


class StatsRecorder:
    """Persists the player's records. Counters only ever go up."""

    def __init__(self, db: DatabaseManager):
        self.db = db

    def record_answer(self, pokemon: Pokemon, correct: bool) -> bool:
        """Returns True when a correct answer catches a new Pokémon."""
        if not correct:
            return False
        self.db.set_stat(TOTAL_CORRECT,
                         self.db.get_stat(TOTAL_CORRECT, 0) + 1)
        is_new = self.db.add_caught(pokemon.id)
        if is_new:
            logger.info(f"Caught #{pokemon.id} {pokemon.name}")
        return is_new

    def record_game(self, session: QuizSession) -> Dict[str, bool]:
        """Stores new records from a finished session.

        Returns which records were broken.
        """
        broken = {
            BEST_SCORE: self._raise(BEST_SCORE, session.score),
            MAX_STREAK: self._raise(MAX_STREAK, session.max_streak),
            TIME_ATTACK_BEST: False,
        }
        if session.time_limit:
            bests = self.db.get_stat(TIME_ATTACK_BEST, {})
            key = str(session.time_limit)
            if session.score > bests.get(key, 0):
                bests[key] = session.score
                self.db.set_stat(TIME_ATTACK_BEST, bests)
                broken[TIME_ATTACK_BEST] = True
        return broken

    def _raise(self, key: str, value: int) -> bool:
        if value > self.db.get_stat(key, 0):
            self.db.set_stat(key, value)
            return True
        return False

    def summary(self) -> Dict:
        return {
            BEST_SCORE: self.db.get_stat(BEST_SCORE, 0),
            MAX_STREAK: self.db.get_stat(MAX_STREAK, 0),
            TOTAL_CORRECT: self.db.get_stat(TOTAL_CORRECT, 0),
            TIME_ATTACK_BEST: self.db.get_stat(TIME_ATTACK_BEST, {}),
            "caught": len(self.db.get_caught()),
        }
