"""Command-line argument validation for the dining philosophers simulation."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

MAX_PHILOS = 200
MIN_TIME_MS = 60
INT_MAX = 2**31 - 1
MAX_NUMBER_LENGTH = 10

_DIGITS = frozenset("0123456789")


class ArgumentError(ValueError):
    """Raised when the simulation arguments are malformed or out of range."""


@dataclass(frozen=True)
class Settings:
    """Validated simulation parameters; times are in milliseconds."""

    philosophers: int
    time_to_die: int
    time_to_eat: int
    time_to_sleep: int
    must_eat: int | None = None


def is_digits(text: str) -> bool:
    """Return True if every character of ``text`` is an ASCII decimal digit."""
    return all(char in _DIGITS for char in text)


def parse_number(text: str) -> int:
    """Parse an optionally negative decimal integer of at most ten characters.

    Raises ArgumentError for malformed text or a value above the 32-bit limit.
    """
    if len(text) > MAX_NUMBER_LENGTH:
        raise ArgumentError(f"number too long: {text!r}")
    digits = text[1:] if text.startswith("-") else text
    if not digits or not is_digits(digits):
        raise ArgumentError(f"not a number: {text!r}")
    value = int(text)
    if value > INT_MAX:
        raise ArgumentError(f"number too large: {text!r}")
    return value


def _positive(text: str) -> int:
    if not is_digits(text):
        raise ArgumentError(f"not a positive number: {text!r}")
    value = parse_number(text)
    if value <= 0:
        raise ArgumentError(f"not a positive number: {text!r}")
    return value


def parse_settings(args: Sequence[str]) -> Settings:
    """Build Settings from the four or five positional arguments.

    The arguments are: number_of_philosophers time_to_die time_to_eat
    time_to_sleep [number_of_times_each_philosopher_must_eat].
    """
    if len(args) not in (4, 5):
        raise ArgumentError(f"expected 4 or 5 arguments, got {len(args)}")
    values = [_positive(arg) for arg in args]
    philosophers, time_to_die, time_to_eat, time_to_sleep = values[:4]
    if philosophers > MAX_PHILOS:
        raise ArgumentError(f"at most {MAX_PHILOS} philosophers are allowed")
    if min(time_to_die, time_to_eat, time_to_sleep) < MIN_TIME_MS:
        raise ArgumentError(f"times must be at least {MIN_TIME_MS} ms")
    must_eat = values[4] if len(values) == 5 else None
    return Settings(
        philosophers=philosophers,
        time_to_die=time_to_die,
        time_to_eat=time_to_eat,
        time_to_sleep=time_to_sleep,
        must_eat=must_eat,
    )