"""Command-line argument parsing and validation of simulation settings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from codexion.heap import Scheduler

INT_MAX = 2147483647
_SPACES = frozenset("\t\n\v\f\r ")
_DIGITS = frozenset("0123456789")


class InputError(ValueError):
    """Raised when the command-line input is malformed or out of range."""


@dataclass(frozen=True)
class Config:
    """Settings for one simulation run; times are in milliseconds."""

    n_coders: int
    burn_time: int
    compile_time: int
    debug_time: int
    refactor_time: int
    n_compiles: int
    cooldown_time: int
    scheduler: Scheduler

    def validate(self) -> None:
        """Raise InputError unless every value is in its allowed range."""
        if self.n_coders <= 0:
            raise InputError("input: number of coders must be > 0")
        if (
            self.burn_time <= 0
            or self.compile_time <= 0
            or self.debug_time <= 0
            or self.refactor_time <= 0
            or self.n_compiles <= 0
            or self.cooldown_time < 0
        ):
            raise InputError("input: Should be: Time values > 0, n_compiles >= 0")


def parse_number(text: str) -> int:
    """Parse a non-negative decimal integer no larger than INT_MAX."""
    if text is None:
        raise InputError("Input is NULL, Fix the input")
    rest = text.lstrip("".join(_SPACES))
    if rest.startswith("+"):
        rest = rest[1:]
    elif rest.startswith("-"):
        raise InputError("Negative values detected: give only positive values")
    if not rest or rest[0] not in _DIGITS:
        raise InputError("Input is not Correct Digit, Update the input")
    digit_count = 0
    for char in rest:
        if char not in _DIGITS:
            break
        digit_count += 1
    if digit_count > 10:
        raise InputError("value is not fitting in Int Range")
    if digit_count < len(rest):
        raise InputError("Invalid input, something other than digit is included")
    value = int(rest)
    if value > INT_MAX:
        raise InputError("The Value is too big, No. within INT_MAX is good number")
    return value


def parse_scheduler(text: str) -> Scheduler:
    """Map 'edf'/'EDF' or 'fifo'/'FIFO' to a Scheduler."""
    if text in ("EDF", "edf"):
        return Scheduler.EDF
    if text in ("FIFO", "fifo"):
        return Scheduler.FIFO
    raise InputError("Algorithm can be 'edf' or 'fifo' or 'EDF' or 'FIFO'")


def parse_args(args: Sequence[str]) -> Config:
    """Build a validated Config from the eight positional arguments."""
    if len(args) != 8:
        raise InputError("Fix the input: The input is not as desired!")
    numbers = [parse_number(arg) for arg in args[:7]]
    scheduler = parse_scheduler(args[7])
    config = Config(*numbers, scheduler=scheduler)
    config.validate()
    return config