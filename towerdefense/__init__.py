"""Rules and state for a grid-based tower defense game: maps, turrets, stage play, widgets and scores."""

__version__ = "0.1.0"

__all__ = [
    "grid",
    "keys",
    "play",
    "scoreboard",
    "turret",
    "ui",
]