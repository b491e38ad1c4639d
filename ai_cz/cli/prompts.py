"""Interactive terminal prompts: numbered choices, confirmation and text input."""

import getpass
from typing import Any, Callable

from ai_cz.output import bold, dim, info, print_error

Validator = Callable[[str], str | None]


class PromptCancelled(Exception):
    """User quit a prompt (q, Ctrl-C or end of input)."""
    pass


def _ask(prompt: str, reader: Callable[[str], str] | None = None) -> str:
    reader = reader or input
    try:
        return reader(prompt)
    except (KeyboardInterrupt, EOFError):
        print()
        raise PromptCancelled() from None


def choose(prompt: str, options: list[tuple[str, Any]], separator_after: int | None = None) -> Any:
    """Show numbered ``(label, value)`` options and return the chosen value."""
    print(f"\n{bold(prompt)}")
    for i, (label, _) in enumerate(options, 1):
        print(f"  {info(f'[{i}]')} {label}")
        if i == separator_after and i < len(options):
            print(dim("  ────────"))

    while True:
        choice = _ask(f"Select [1-{len(options)}] or (q)uit: ").strip().lower()
        if choice == 'q':
            raise PromptCancelled()
        if choice.isdigit() and 1 <= int(choice) <= len(options):
            return options[int(choice) - 1][1]
        print(f"Enter 1-{len(options)} or q")


def confirm(prompt: str, default: bool = True) -> bool:
    hint = '[Y/n]' if default else '[y/N]'
    while True:
        answer = _ask(f"{prompt} {hint}: ").strip().lower()
        if not answer:
            return default
        if answer in ('y', 'yes'):
            return True
        if answer in ('n', 'no'):
            return False
        print("Please answer y or n")


def text_input(prompt: str, validator: Validator | None = None, secret: bool = False) -> str:
    """Read a line until ``validator`` returns no error. ``secret`` hides the input."""
    reader = getpass.getpass if secret else input
    while True:
        value = _ask(f"{prompt} ", reader)
        problem = validator(value) if validator else None
        if not problem:
            return value
        print_error(problem)


def not_empty(what: str) -> Validator:
    def _validate(value: str) -> str | None:
        return None if value.strip() else f"{what} cannot be empty"
    return _validate
