import logging
import random
from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Set, Tuple

from .config import SPRITE_URL
from .kana import ends_with_terminal, first_mora, last_mora, to_katakana
from .models import ChatTurn, Sender, ShiritoriState

logger = logging.getLogger(__name__)

Entry = Tuple[int, str]

MESSAGES = {
    "not-your-turn": "今はあなたの番ではありません",
    "unknown": "「{word}」というポケモンはいません",
    "used": "「{word}」はもう使われています",
    "mismatch": "「{mora}」から始まるポケモンを答えてください",
}


class ShiritoriRuleError(ValueError):

    def __init__(self, reason: str, **context):
        self.reason = reason
        self.context = context
        super().__init__(MESSAGES[reason].format(**context))


class ShiritoriGame:
    """One shiritori battle between the player and a scripted opponent.

    Only species names from ``roster`` are valid words. A word ending in
    ``ン`` loses on the spot; the opponent also loses when it has no unused
    name left for the required mora.
    """

    def __init__(self, roster: Iterable[Entry], rng=None):
        self.rng = rng or random.Random()
        self._by_key: Dict[str, Entry] = {}
        self._by_first: Dict[str, List[Entry]] = defaultdict(list)
        for pokemon_id, name in roster:
            key = to_katakana(name)
            if not key or key in self._by_key:
                continue
            self._by_key[key] = (pokemon_id, name)
            self._by_first[first_mora(key)].append((pokemon_id, name))
        self.reset()

    def reset(self):
        self.state = ShiritoriState.IDLE
        self.history: List[ChatTurn] = []
        self.used_words: Set[str] = set()
        self.winner: Optional[Sender] = None

    @property
    def roster_size(self) -> int:
        return len(self._by_key)

    @property
    def is_over(self) -> bool:
        return self.state in (ShiritoriState.PLAYER_WINS,
                              ShiritoriState.OPPONENT_WINS)

    @property
    def last_word(self) -> Optional[str]:
        return self.history[-1].word if self.history else None

    @property
    def required_mora(self) -> str:
        return last_mora(self.last_word) if self.last_word else ""

    def start(self) -> ChatTurn:
        """Resets the battle and lets the opponent open."""
        if not self._by_key:
            raise ValueError("Cannot start shiritori with an empty roster")
        self.reset()
        self.state = ShiritoriState.OPPONENT_OPENS
        entries = list(self._by_key.values())
        openers = [e for e in entries if self._is_safe(e[1])]
        turn = self._play(Sender.AI, self.rng.choice(openers or entries))
        self.state = ShiritoriState.PLAYER_TURN
        if not self._is_safe(turn.word):
            self._finish(Sender.PLAYER)
        return turn

    def submit(self, word: str) -> Optional[ChatTurn]:
        """Plays the player's word and returns the opponent's reply, if any.

        Raises ShiritoriRuleError without touching the game state when the
        word is not playable.
        """
        if self.state != ShiritoriState.PLAYER_TURN:
            raise ShiritoriRuleError("not-your-turn")
        key = to_katakana(word)
        entry = self._by_key.get(key)
        if entry is None:
            raise ShiritoriRuleError("unknown", word=word.strip())
        if key in self.used_words:
            raise ShiritoriRuleError("used", word=entry[1])
        required = self.required_mora
        if first_mora(key) != required:
            raise ShiritoriRuleError("mismatch", mora=required)

        self._play(Sender.PLAYER, entry)
        if ends_with_terminal(entry[1]):
            self._finish(Sender.AI)
            return None
        self.state = ShiritoriState.OPPONENT_TURN
        return self._respond()

    def give_up(self):
        if not self.is_over:
            self._finish(Sender.AI)

    def candidates(self, mora: str) -> List[Entry]:
        return [
            e for e in self._by_first.get(mora, [])
            if to_katakana(e[1]) not in self.used_words
        ]

    def _respond(self) -> Optional[ChatTurn]:
        candidates = self.candidates(self.required_mora)
        if not candidates:
            logger.info(f"No names left for {self.required_mora}, player wins")
            self._finish(Sender.PLAYER)
            return None

        safe = [e for e in candidates if self._is_safe(e[1])]
        turn = self._play(Sender.AI, self.rng.choice(safe or candidates))
        if self._is_safe(turn.word):
            self.state = ShiritoriState.PLAYER_TURN
        else:
            self._finish(Sender.PLAYER)
        return turn

    @staticmethod
    def _is_safe(word: str) -> bool:
        mora = last_mora(word)
        return bool(mora) and not ends_with_terminal(word)

    def _play(self, sender: Sender, entry: Entry) -> ChatTurn:
        pokemon_id, name = entry
        self.used_words.add(to_katakana(name))
        turn = ChatTurn(sender=sender, word=name,
                        image=SPRITE_URL.format(id=pokemon_id))
        self.history.append(turn)
        return turn

    def _finish(self, winner: Sender):
        self.winner = winner
        self.state = (ShiritoriState.PLAYER_WINS if winner is Sender.PLAYER
                      else ShiritoriState.OPPONENT_WINS)
