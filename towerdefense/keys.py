"""Keyboard codes used by the game and helpers to turn them into text."""

from __future__ import annotations

from enum import IntEnum


class Key(IntEnum):
    """Key codes as delivered by the input layer."""

    A = 1
    B = 2
    C = 3
    D = 4
    E = 5
    F = 6
    G = 7
    H = 8
    I = 9  # noqa: E741
    J = 10
    K = 11
    L = 12
    M = 13
    N = 14
    O = 15  # noqa: E741
    P = 16
    Q = 17
    R = 18
    S = 19
    T = 20
    U = 21
    V = 22
    W = 23
    X = 24
    Y = 25
    Z = 26
    NUM_0 = 27
    NUM_1 = 28
    NUM_2 = 29
    NUM_3 = 30
    NUM_4 = 31
    NUM_5 = 32
    NUM_6 = 33
    NUM_7 = 34
    NUM_8 = 35
    NUM_9 = 36
    ESCAPE = 59
    BACKSPACE = 63
    TAB = 64
    ENTER = 67
    SPACE = 75
    LEFT = 82
    RIGHT = 83
    UP = 84
    DOWN = 85
    LSHIFT = 215


def key_to_char(code: int) -> str | None:
    """Return the upper-case letter or digit a key types, or None for other keys."""
    if Key.A <= code <= Key.Z:
        return chr(ord("A") + code - Key.A)
    if Key.NUM_0 <= code <= Key.NUM_9:
        return chr(ord("0") + code - Key.NUM_0)
    return None