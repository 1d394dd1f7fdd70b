"""Command-line S/Key calculator.

Two commands:
- skey [otp-<hash>] <rounds> <seed>: prompts for the secret pass phrase and
  prints the one-time password in hex and as six words
- skey-read [WORD ...]: converts six words back to hex, prompting for them
  if fewer than six are given

Defaults come from ~/.config/skey/config.yaml (see skey.config).
"""

from __future__ import annotations

import getpass
import logging
import sys
from typing import Callable, NoReturn, Sequence

import cyclopts

from ._version import __version__
from .config import SkeyConfig
from .errors import InputTooShort, SkeyConfigError, SkeyError
from .hashes import HashAlgorithm
from .otp import WORD_COUNT, OneTimePassword, generate, parse, parse_rounds

logger = logging.getLogger(__name__)

USAGE = "usage: skey [otp-<hash>] <rounds> <seed>"

app = cyclopts.App(
    name="skey",
    help="Compute RFC 2289 one-time passwords",
    version=__version__,
)

read_app = cyclopts.App(
    name="skey-read",
    help="Convert six S/Key words back to hexadecimal",
    version=__version__,
)


class UsageError(SkeyError):
    """Raised when the generator gets the wrong number of arguments."""

    pass


def prompt_secret(prompt: str = "Secret: ") -> bytes:
    """Read the pass phrase from the terminal without echo."""
    return getpass.getpass(prompt).encode("utf-8")


def prompt_words(prompt: str = "enter s/key: ") -> list[str]:
    """Read whitespace-separated words from stdin."""
    print(prompt, end="", file=sys.stderr, flush=True)
    return sys.stdin.readline().split()


def run_generate(
    tokens: Sequence[str],
    *,
    config: SkeyConfig,
    read_secret: Callable[[], bytes] | None = None,
    lowercase_seed: bool = False,
) -> OneTimePassword:
    """Resolve generator arguments, read the secret and compute the password.

    Arguments are validated before the secret is requested.

    Raises:
        UsageError: Fewer than two or more than three tokens.
        UnknownHashAlgorithm: The hash token is not recognized.
        InvalidRoundCount: The round count is negative or not a number.
    """
    if len(tokens) < 2:
        raise UsageError("missing arguments")
    if len(tokens) > 3:
        raise UsageError(f"too many arguments: {' '.join(tokens[3:])}")

    if len(tokens) == 3:
        algorithm = HashAlgorithm.from_token(tokens[0])
        rounds, seed = tokens[1], tokens[2]
    else:
        algorithm = config.algorithm
        rounds, seed = tokens

    count = parse_rounds(rounds)
    if lowercase_seed or config.lowercase_seed:
        seed = seed.lower()

    if read_secret is None:
        read_secret = prompt_secret
    secret = read_secret()

    logger.debug(f"Generating {algorithm.token} password for sequence {count}")
    return generate(algorithm, count, seed, secret)


def run_read(
    words: Sequence[str],
    *,
    config: SkeyConfig,
    read_words: Callable[[], list[str]] | None = None,
    verify: bool = False,
) -> str:
    """Decode six words to hex, prompting for them if fewer are given.

    Words past the sixth are ignored.

    Raises:
        InputTooShort: Still fewer than six words after prompting.
        InvalidWordCharacter: A word contains a non-letter.
        UnknownWord: A word is not in the dictionary.
        ChecksumMismatch: Verification is on and the checksum is wrong.
    """
    word_list = list(words)
    if len(word_list) < WORD_COUNT:
        if read_words is None:
            read_words = prompt_words
        word_list = read_words()
    if len(word_list) < WORD_COUNT:
        raise InputTooShort(len(word_list))

    return parse(word_list[:WORD_COUNT], verify=verify or config.verify_checksum)


def _fail(error: object) -> NoReturn:
    print(f"Error: {error}", file=sys.stderr)
    raise SystemExit(1)


def _load_config(verbose: bool) -> SkeyConfig:
    try:
        config = SkeyConfig.load()
    except SkeyConfigError as e:
        _fail(e)
    logging.basicConfig(
        level=logging.DEBUG if verbose else config.logging_level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    return config


@app.default
def generate_command(
    *tokens: str,
    lowercase_seed: bool = False,
    verbose: bool = False,
):
    """Compute a one-time password.

    Usage: skey [otp-<hash>] <rounds> <seed>

    You will be prompted for your secret pass phrase. Prints the password
    in hexadecimal on the first line and as six words on the second.

    Args:
        tokens: Optional hash (otp-md4, otp-md5, otp-sha1), rounds, seed
        lowercase_seed: Lowercase the seed before hashing (RFC 2289)
        verbose: Log debug output to stderr
    """
    config = _load_config(verbose)

    try:
        otp = run_generate(tokens, config=config, lowercase_seed=lowercase_seed)
    except UsageError as e:
        print(f"skey v{__version__}", file=sys.stderr)
        print(USAGE, file=sys.stderr)
        _fail(e)
    except SkeyError as e:
        _fail(e)
    except (EOFError, KeyboardInterrupt):
        print(file=sys.stderr)
        _fail("no secret entered")

    print(otp.hex)
    print(" ".join(otp.words))


@read_app.default
def read_command(
    *words: str,
    verify: bool = False,
    verbose: bool = False,
):
    """Convert six words back to the hexadecimal password.

    Usage: skey-read [WORD ...]

    If fewer than six words are given you will be prompted for them.

    Args:
        words: The six words of a one-time password
        verify: Reject words whose embedded checksum does not match
        verbose: Log debug output to stderr
    """
    config = _load_config(verbose)

    try:
        hex_value = run_read(words, config=config, verify=verify)
    except SkeyError as e:
        _fail(e)
    except (EOFError, KeyboardInterrupt):
        print(file=sys.stderr)
        _fail("no words entered")

    print(hex_value)


def main():
    """Entry point for skey."""
    app()


def read_main():
    """Entry point for skey-read."""
    read_app()


if __name__ == "__main__":
    main()
