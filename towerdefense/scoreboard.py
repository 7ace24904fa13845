"""High-score file, paged score listing and the name entry shown after a win."""

from __future__ import annotations

import re
from collections import deque
from os import PathLike
from typing import Iterable

from towerdefense.keys import Key, key_to_char

PAGE_SIZE = 6
MAX_NAME_LENGTH = 10
NAME_PROMPT = "enteryourname"
EMPTY_NAME_MESSAGE = "Name cannot be empty!"
NOT_ALLOWED_MESSAGE = "notallowed"
SAVE_FAILED_MESSAGE = "Failed to save name!"

_LEADING_INT = re.compile(r"[+-]?\d+")

Entry = tuple[str, int]


def _sorted_entries(entries: Iterable[Entry]) -> list[Entry]:
    # Highest score first; equal scores keep their file order.
    return sorted(entries, key=lambda entry: entry[1], reverse=True)


def parse_scores(text: str) -> list[Entry]:
    """Parse 'name score' lines, skipping unreadable ones, highest score first."""
    entries: list[Entry] = []
    for line in text.splitlines():
        parts = line.split()
        if len(parts) < 2:
            continue
        match = _LEADING_INT.match(parts[1])
        if match is None:
            continue
        entries.append((parts[0], int(match.group())))
    return _sorted_entries(entries)


def load_scores(path: str | PathLike[str]) -> list[Entry]:
    """Read a score file; a missing or unreadable file holds no scores."""
    try:
        with open(path, encoding="utf-8") as fh:
            text = fh.read()
    except OSError:
        return []
    return parse_scores(text)


def append_score(path: str | PathLike[str], name: str, score: int) -> None:
    """Append one 'name score' line to a score file."""
    if not name or any(ch.isspace() for ch in name):
        raise ValueError("name must be non-empty and contain no whitespace")
    with open(path, "a", encoding="utf-8") as fh:
        fh.write(f"{name} {score}\n")


def compute_score(money: int, lives: int) -> int:
    """Score of a won stage: whole hundreds of money plus ten per remaining life."""
    hundreds = abs(money) // 100
    return (hundreds if money >= 0 else -hundreds) + lives * 10


class Scoreboard:
    """Scores listed six to a page, best first."""

    def __init__(self, entries: Iterable[Entry] = ()) -> None:
        self.entries: list[Entry] = _sorted_entries(entries)
        self.page = 0

    @classmethod
    def from_file(cls, path: str | PathLike[str]) -> Scoreboard:
        return cls(load_scores(path))

    @property
    def page_count(self) -> int:
        return max(1, -(-len(self.entries) // PAGE_SIZE))

    def rows(self) -> list[str]:
        """The six lines of the current page as 'rank name score', blank where empty."""
        start = self.page * PAGE_SIZE
        lines = []
        for rank in range(start, start + PAGE_SIZE):
            if rank < len(self.entries):
                name, score = self.entries[rank]
                lines.append(f"{rank + 1} {name} {score}")
            else:
                lines.append("")
        return lines

    def prev_page(self) -> bool:
        """Go back one page if possible; return whether the page changed."""
        if self.page > 0:
            self.page -= 1
            return True
        return False

    def next_page(self) -> bool:
        """Go forward one page if more scores follow; return whether the page changed."""
        if (self.page + 1) * PAGE_SIZE < len(self.entries):
            self.page += 1
            return True
        return False


class NameEntry:
    """Typing a player name of up to ten letters and digits after a win."""

    def __init__(self) -> None:
        self._chars: deque[str] = deque(maxlen=MAX_NAME_LENGTH)
        self.text = NAME_PROMPT
        self.saved = False

    @property
    def name(self) -> str:
        return "".join(self._chars)

    def on_key_down(self, key: int) -> bool:
        """Handle a key press; return True when Enter submits a non-empty name."""
        if self.saved:
            return False
        if key == Key.ENTER:
            if not self._chars:
                self.text = EMPTY_NAME_MESSAGE
                return False
            return True
        if key == Key.SPACE:
            self.text = NOT_ALLOWED_MESSAGE
            return False
        if key == Key.BACKSPACE and self._chars:
            self._chars.pop()
        char = key_to_char(key)
        if char is not None:
            self._chars.append(char)
        self.text = self.name or NAME_PROMPT
        return False

    def save(self, path: str | PathLike[str], score: int) -> bool:
        """Append the name and score to the score file once; return whether it was written."""
        if self.saved:
            return False
        if not self._chars:
            self.text = EMPTY_NAME_MESSAGE
            return False
        try:
            append_score(path, self.name, score)
        except OSError:
            self.text = SAVE_FAILED_MESSAGE
            return False
        self.text = f"{self.name} {score}"
        self.saved = True
        return True