"""Terminal prompts built on rich."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from rich.console import Console
from rich.prompt import Confirm, IntPrompt, Prompt

from partman_wizard.wizard.interaction import Choice, Validator


class ConsolePrompter:
    """Asks the operator questions on the terminal.

    Free text re-asks until the validator accepts; lists are numbered and
    answered by number.
    """

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def text(
        self,
        message: str,
        default: str | None = None,
        validate: Validator | None = None,
    ) -> str:
        while True:
            if default is None:
                answer = Prompt.ask(message, console=self.console)
            else:
                answer = Prompt.ask(message, console=self.console, default=default)
            answer = answer.strip()

            if validate is None:
                return answer
            verdict = validate(answer)
            if verdict is True:
                return answer
            self.console.print(str(verdict), style="red", markup=False)

    def confirm(self, message: str, default: bool = False) -> bool:
        return Confirm.ask(message, console=self.console, default=default)

    def choose(self, message: str, choices: Sequence[Choice]) -> Any:
        if not choices:
            raise ValueError("choose() needs at least one choice")

        self.console.print(message)
        for number, choice in enumerate(choices, start=1):
            self.console.print(f"  {number}) {choice.label}", markup=False, highlight=False)

        number = IntPrompt.ask(
            "  Answer",
            console=self.console,
            choices=[str(n) for n in range(1, len(choices) + 1)],
            show_choices=False,
        )
        return choices[number - 1].value
