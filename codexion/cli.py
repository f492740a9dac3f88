"""Command-line entry point for the coding simulation."""

from __future__ import annotations

import sys
from typing import Sequence

from codexion.parsing import InputError, parse_args
from codexion.simulation import Simulation

_EXPECTED_ARGS = 8
_USAGE = (
    "Fix the input: The input is not as desired!\n"
    "Example: codexion n_coders t_burnout t_compile "
    "t_debug t_refactor n_compiles cooldown scheduler"
)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the simulation from command-line arguments and return the exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != _EXPECTED_ARGS:
        print(_USAGE)
        return 0
    try:
        config = parse_args(args)
    except InputError as exc:
        print(exc)
        return 1
    Simulation(config, sys.stdout).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())