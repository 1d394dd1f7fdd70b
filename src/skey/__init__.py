"""skey - RFC 2289 (S/Key) one-time password calculator.

Usage:
    from skey import generate, parse

    otp = generate("otp-md5", 99, "ke1234", b"my secret pass phrase")
    otp.hex      # '...' 16 lowercase hex characters
    otp.words    # ('...', ...) six dictionary words

    # Back from words to hex
    parse("INCH SEA ANNE LONG AHEM TOUR")   # '9e876134d90499dd'
"""

from skey._version import __version__
from skey.errors import (
    ChecksumMismatch,
    InputTooLong,
    InputTooShort,
    InvalidRoundCount,
    InvalidWordCharacter,
    SkeyConfigError,
    SkeyError,
    UnknownHashAlgorithm,
    UnknownWord,
)
from skey.hashes import HashAlgorithm
from skey.otp import OneTimePassword, generate, parse, to_words, words_to_bytes

__all__ = [
    "__version__",
    "HashAlgorithm",
    "OneTimePassword",
    "generate",
    "parse",
    "to_words",
    "words_to_bytes",
    "SkeyError",
    "SkeyConfigError",
    "InvalidRoundCount",
    "UnknownHashAlgorithm",
    "UnknownWord",
    "InvalidWordCharacter",
    "InputTooShort",
    "InputTooLong",
    "ChecksumMismatch",
]
