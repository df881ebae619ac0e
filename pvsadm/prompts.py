"""Interactive prompts on the terminal."""

from __future__ import annotations

import logging
from collections.abc import Sequence

_log = logging.getLogger(__name__)


def select_item(msg: str, choices: Sequence[str]) -> str:
    """Ask the user to pick one of ``choices`` by number or by name."""
    options = list(choices)
    if not options:
        raise ValueError("no options to select from")
    print(msg)
    for number, option in enumerate(options, 1):
        print(f"  {number}) {option}")
    while True:
        try:
            answer = input("Select an option: ").strip()
        except EOFError as err:
            _log.error("couldn't process the inputs: %s", err)
            raise
        if answer in options:
            return answer
        if answer.isdigit() and 1 <= int(answer) <= len(options):
            return options[int(answer) - 1]
        print(f"invalid choice {answer!r}, please retry")


def ask_confirmation(message: str) -> bool:
    """Ask a yes/no question; the default answer is no.

    Exits the program if no input can be read.
    """
    while True:
        try:
            answer = input(f"{message} [y/N]: ").strip().lower()
        except EOFError as err:
            _log.critical("couldn't process inputs: %s", err)
            raise SystemExit(1) from err
        if answer in ("y", "yes"):
            return True
        if answer in ("", "n", "no"):
            return False
        print("please answer yes or no")


def read_user_input(message: str) -> str:
    """Read a line from the user, asking again until it is not empty."""
    while True:
        data = input(f"{message} ")
        if data:
            return data
        print("input cannot be empty, please retry")