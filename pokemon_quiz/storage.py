import json
import sqlite3
from datetime import datetime, timedelta, timezone
from typing import Any, List, Tuple

from .config import CACHE_DAYS


class DatabaseManager:

    def __init__(self, db_path="pokemon_quiz.db", cache_days=CACHE_DAYS):
        self.db_path = str(db_path)
        self.cache_days = cache_days
        self._init_db()

    def _init_db(self):
        with sqlite3.connect(self.db_path) as conn:
            c = conn.cursor()
            c.execute("""CREATE TABLE IF NOT EXISTS species_names (
                id INTEGER PRIMARY KEY,
                name TEXT NOT NULL,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )""")
            c.execute("""CREATE TABLE IF NOT EXISTS cache_metadata (
                key TEXT PRIMARY KEY,
                value TEXT,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )""")
            c.execute("""CREATE TABLE IF NOT EXISTS stats (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )""")
            c.execute("""CREATE TABLE IF NOT EXISTS caught (
                id INTEGER PRIMARY KEY,
                caught_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )""")
            conn.commit()

    def get_species_names(self) -> List[Tuple[int, str]]:
        with sqlite3.connect(self.db_path) as conn:
            c = conn.cursor()
            c.execute("SELECT id, name FROM species_names ORDER BY id")
            return [(row[0], row[1]) for row in c.fetchall()]

    def save_species_names(self, names: List[Tuple[int, str]]):
        """Saves (id, name) pairs using a bulk insert."""
        with sqlite3.connect(self.db_path) as conn:
            conn.executemany(
                """INSERT OR REPLACE INTO species_names (id, name)
                   VALUES (?, ?)""",
                names,
            )
            conn.commit()

    def is_cache_valid(self) -> bool:
        with sqlite3.connect(self.db_path) as conn:
            c = conn.cursor()
            c.execute(
                "SELECT updated_at FROM cache_metadata WHERE key = 'roster'")
            row = c.fetchone()
            # CURRENT_TIMESTAMP is stored in UTC
            now = datetime.now(timezone.utc).replace(tzinfo=None)
            return bool(row and now - datetime.fromisoformat(row[0])
                        < timedelta(days=self.cache_days))

    def update_cache_timestamp(self):
        with sqlite3.connect(self.db_path) as conn:
            conn.execute("""INSERT OR REPLACE INTO cache_metadata
                   (key, value, updated_at) VALUES ('roster', 'complete', CURRENT_TIMESTAMP)"""
                         )
            conn.commit()

    def get_stat(self, key: str, default: Any = None) -> Any:
        with sqlite3.connect(self.db_path) as conn:
            c = conn.cursor()
            c.execute("SELECT value FROM stats WHERE key = ?", (key, ))
            row = c.fetchone()
            return json.loads(row[0]) if row else default

    def set_stat(self, key: str, value: Any):
        with sqlite3.connect(self.db_path) as conn:
            conn.execute(
                """INSERT OR REPLACE INTO stats (key, value, updated_at)
                   VALUES (?, ?, CURRENT_TIMESTAMP)""",
                (key, json.dumps(value)),
            )
            conn.commit()

    def add_caught(self, pokemon_id: int) -> bool:
        """Returns True when the id was not caught before."""
        with sqlite3.connect(self.db_path) as conn:
            cur = conn.execute("INSERT OR IGNORE INTO caught (id) VALUES (?)",
                               (pokemon_id, ))
            conn.commit()
            return cur.rowcount == 1

    def get_caught(self) -> List[int]:
        with sqlite3.connect(self.db_path) as conn:
            c = conn.cursor()
            c.execute("SELECT id FROM caught ORDER BY id")
            return [row[0] for row in c.fetchall()]
