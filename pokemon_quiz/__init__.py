"""Pokémon quiz and shiritori game on top of PokéAPI."""

__version__ = "1.0.0"
