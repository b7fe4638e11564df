import logging
import os
from pathlib import Path

API_URL = "https://pokeapi.co/api/v2"
SPRITE_URL = ("https://raw.githubusercontent.com/PokeAPI/sprites/master/"
              "sprites/pokemon/other/official-artwork/{id}.png")
MAX_POKEMON_ID = 1025  # Gen 9 included
REQUEST_TIMEOUT = 10
CACHE_DAYS = 7
ROSTER_WORKERS = 20

SHINY_RATE = 1 / 64
LEVEL_STEP = 5
TIME_LIMITS = (30, 60, 120)
CHOICE_COUNT = 4

DATA_DIR = Path(os.environ.get("POKEMON_QUIZ_DATA_DIR", "data"))
LOG_FILE = "pokemon_quiz.log"
DB_FILE = "pokemon_quiz.db"


def setup_logging(data_dir=DATA_DIR, level=logging.INFO):
    data_dir = Path(data_dir)
    data_dir.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[
            logging.FileHandler(data_dir / LOG_FILE, encoding="utf-8"),
            logging.StreamHandler()
        ],
    )
