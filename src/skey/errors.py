"""Exceptions raised by skey.

Every user-facing failure derives from SkeyError and keeps the offending
token on the instance so callers can report it and retry.
"""

from __future__ import annotations

from typing import Sequence


class SkeyError(Exception):
    """Base class for all skey errors."""

    pass


class InvalidRoundCount(SkeyError):
    """Raised when the round count is not a non-negative integer."""

    def __init__(self, token: object):
        self.token = token
        super().__init__(f"invalid number of rounds specified: {token!r}")


class UnknownHashAlgorithm(SkeyError):
    """Raised when a hash token does not name a supported algorithm."""

    def __init__(self, token: str):
        self.token = token
        super().__init__(f"unknown hash function specified: {token}")


class UnknownWord(SkeyError):
    """Raised when a word is not in the dictionary."""

    def __init__(self, word: str):
        self.word = word
        super().__init__(f'unknown word "{word}" in input')


class InvalidWordCharacter(SkeyError):
    """Raised when a word contains something other than ASCII letters."""

    def __init__(self, word: str, char: str):
        self.word = word
        self.char = char
        super().__init__(f'char out of bounds: {char!r} in word "{word}"')


class InputTooShort(SkeyError):
    """Raised when fewer than six words are available."""

    def __init__(self, count: int):
        self.count = count
        super().__init__(f"expected 6 words, got {count}")


class InputTooLong(SkeyError):
    """Raised when more than six words are handed to the parser."""

    def __init__(self, count: int):
        self.count = count
        super().__init__(f"expected 6 words, got {count}")


class ChecksumMismatch(SkeyError):
    """Raised when checksum verification is requested and fails."""

    def __init__(self, words: Sequence[str]):
        self.words = tuple(words)
        super().__init__(f"checksum mismatch in \"{' '.join(self.words)}\"")


class SkeyConfigError(SkeyError):
    """Raised when configuration values are invalid."""

    pass
