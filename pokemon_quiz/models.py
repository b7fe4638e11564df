from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class GameMode(Enum):
    CHOICE = "choice"
    INPUT = "input"
    WEAKNESS = "weakness"
    SHIRITORI = "shiritori"


class DisplayMode(Enum):
    ARTWORK = "artwork"
    SILHOUETTE = "silhouette"
    CRY = "cry"


class Sender(Enum):
    PLAYER = "player"
    AI = "ai"


class ShiritoriState(Enum):
    IDLE = "idle"
    OPPONENT_OPENS = "opponent-opens"
    PLAYER_TURN = "player-turn"
    OPPONENT_TURN = "opponent-turn"
    PLAYER_WINS = "player-wins"
    OPPONENT_WINS = "opponent-wins"


@dataclass
class Pokemon:
    id: int
    name: str
    image: str
    shiny_image: Optional[str] = None
    is_shiny: bool = False
    cry: Optional[str] = None
    flavor_text: Optional[str] = None
    types: List[str] = field(default_factory=list)
    genus: Optional[str] = None

    @property
    def display_image(self) -> str:
        if self.is_shiny and self.shiny_image:
            return self.shiny_image
        return self.image


@dataclass(frozen=True)
class QuizQuestion:
    correct_pokemon: Pokemon
    choices: tuple
    correct_answer: str


@dataclass
class ChatTurn:
    sender: Sender
    word: str
    image: str
