"""
Terminal prompts: free text, numbered choice lists and yes/no confirmation.
Input and output functions are injectable so the menu can be driven from tests.
"""

from typing import Any, Callable, Optional, Sequence, Tuple


Validator = Callable[[str], Optional[str]]  # returns an error message, or None if valid


class Prompter:

    def __init__(
        self,
        input_fn: Optional[Callable[[str], str]] = None,
        output_fn: Optional[Callable[[str], None]] = None,
    ):
        self.input_fn = input_fn or input
        self.output_fn = output_fn or print

    def text(self, message: str, validate: Optional[Validator] = None) -> str:
        while True:
            answer = self.input_fn(f"{message} ").strip()
            error = validate(answer) if validate else None
            if error is None:
                return answer
            self.output_fn(f">> {error}")

    def choice(self, message: str, options: Sequence[Tuple[str, Any]]) -> Any:
        """Show numbered options and return the value of the one picked."""
        self.output_fn(message)
        for number, (label, _) in enumerate(options, start=1):
            self.output_fn(f"  {number}) {label}")

        while True:
            answer = self.input_fn(f"Choose 1-{len(options)}: ").strip()
            if answer.isdigit() and 1 <= int(answer) <= len(options):
                return options[int(answer) - 1][1]
            self.output_fn(">> Please enter one of the listed numbers")

    def confirm(self, message: str, default: bool = False) -> bool:
        hint = "Y/n" if default else "y/N"
        answer = self.input_fn(f"{message} ({hint}) ").strip().lower()
        if not answer:
            return default
        return answer in ("y", "yes")


def not_empty(label: str) -> Validator:
    def _check(answer: str) -> Optional[str]:
        return None if answer else f"{label} cannot be empty"
    return _check


def positive_number(answer: str) -> Optional[str]:
    try:
        value = float(answer)
    except ValueError:
        return "Please enter a valid salary"
    return None if value > 0 else "Please enter a valid salary"
