import logging
import random
import time
from concurrent.futures import Future, ThreadPoolExecutor
from typing import List, Optional

from .api import FALLBACK_NAME, PokeAPIClient, PokeAPIError
from .config import CHOICE_COUNT, LEVEL_STEP, MAX_POKEMON_ID
from .kana import to_katakana
from .models import GameMode, Pokemon, QuizQuestion
from .typechart import build_weakness_choices

logger = logging.getLogger(__name__)

MAX_DISTRACTOR_ATTEMPTS = 20


def normalize_answer(text: str) -> str:
    return to_katakana(text)


class QuizBuilder:

    def __init__(self, api: PokeAPIClient, rng=None, max_id=MAX_POKEMON_ID):
        self.api = api
        self.rng = rng or random.Random()
        self.max_id = max_id

    def random_id(self) -> int:
        return self.rng.randint(1, self.max_id)

    def fetch_random_pokemon(self) -> Pokemon:
        pokemon_id = self.random_id()
        try:
            return self.api.fetch_pokemon(pokemon_id, self.rng)
        except PokeAPIError as e:
            logger.error(f"Error fetching pokemon #{pokemon_id}: {e}")
            # one retry with a different id
            return self.api.fetch_pokemon(self.random_id(), self.rng)

    def build(self, mode: GameMode) -> QuizQuestion:
        if mode is GameMode.WEAKNESS:
            return self.build_weakness_question()
        return self.build_name_question()

    def build_name_question(self) -> QuizQuestion:
        correct = self.fetch_random_pokemon()
        names = self._distractor_names(correct)
        choices = names + [correct.name]
        self.rng.shuffle(choices)
        return QuizQuestion(correct_pokemon=correct,
                            choices=tuple(choices),
                            correct_answer=correct.name)

    def build_weakness_question(self) -> QuizQuestion:
        correct = self.fetch_random_pokemon()
        answer, choices = build_weakness_choices(correct.types, self.rng,
                                                 CHOICE_COUNT)
        return QuizQuestion(correct_pokemon=correct,
                            choices=tuple(choices),
                            correct_answer=answer)

    def _distractor_names(self, correct: Pokemon) -> List[str]:
        seen_ids = {correct.id}
        names: List[str] = []
        for _ in range(MAX_DISTRACTOR_ATTEMPTS):
            if len(names) == CHOICE_COUNT - 1:
                return names
            pokemon_id = self.random_id()
            if pokemon_id in seen_ids:
                continue
            seen_ids.add(pokemon_id)
            name = self.api.get_species_name(pokemon_id)
            if name == FALLBACK_NAME or name == correct.name or name in names:
                continue
            names.append(name)
        if len(names) == CHOICE_COUNT - 1:
            return names
        raise PokeAPIError("Could not collect enough distractor names")


class QuizService:
    """Hands out questions while the next one loads in the background.

    The buffer holds at most one pending question. A question that fails to
    load is logged and reported as None.
    """

    def __init__(self, builder: QuizBuilder, mode: GameMode):
        self.builder = builder
        self.mode = mode
        self._executor = ThreadPoolExecutor(max_workers=1)
        self._buffer: Optional[Future] = None

    def _load(self) -> QuizQuestion:
        return self.builder.build(self.mode)

    def prefetch(self):
        self._buffer = self._executor.submit(self._load)

    def next_question(self) -> Optional[QuizQuestion]:
        future = self._buffer or self._executor.submit(self._load)
        self._buffer = None
        try:
            return future.result()
        except Exception as e:
            logger.error(f"Failed to load question: {e}")
            return None
        finally:
            self.prefetch()

    def close(self):
        self._buffer = None
        self._executor.shutdown(wait=False, cancel_futures=True)


class QuizSession:
    """Score, streak and level counters for one quiz run."""

    def __init__(self, time_limit: Optional[int] = None,
                 clock=time.monotonic):
        self.time_limit = time_limit
        self.clock = clock
        self.score = 0
        self.answered = 0
        self.streak = 0
        self.max_streak = 0
        self.deadline: Optional[float] = None

    @property
    def level(self) -> int:
        return self.score // LEVEL_STEP + 1

    def start(self):
        if self.time_limit:
            self.deadline = self.clock() + self.time_limit

    def answer(self, question: QuizQuestion, answer: str) -> bool:
        correct = (normalize_answer(answer)
                   == normalize_answer(question.correct_answer))
        self.answered += 1
        if correct:
            self.score += 1
            self.streak += 1
            self.max_streak = max(self.max_streak, self.streak)
        else:
            self.streak = 0
        return correct

    def time_left(self) -> Optional[float]:
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - self.clock())

    def is_time_up(self) -> bool:
        left = self.time_left()
        return left is not None and left <= 0
