"""Operator prompts: query, user and instance selection."""

from typing import Optional

from rich.prompt import IntPrompt, Prompt
from rich.table import Table

from ..core import BaseDisplay
from ..models import Candidate


class InstancePrompt(BaseDisplay):
    def _ask(self, question: str, default: Optional[str]) -> str:
        if default:
            return Prompt.ask(question, default=default, console=self.console)
        return Prompt.ask(question, console=self.console)

    def ask_query(self, default: str = "") -> str:
        return self._ask("What are you looking for?", default)

    def ask_user(self, default: Optional[str] = None) -> str:
        return self._ask("As who would you like to connect?", default)

    def show_choices(self, candidates: list[Candidate]):
        table = Table(show_header=True, header_style="bold", box=None)
        table.add_column("#", style="dim", justify="right")
        table.add_column("Instance")
        for i, candidate in enumerate(candidates, 1):
            table.add_row(str(i), candidate.display_label)
        self.console.print(table)

    def choose(self, candidates: list[Candidate]) -> str:
        """Show the ranked candidates and return the selected connection target"""
        if not candidates:
            raise ValueError("No candidates to choose from")
        self.show_choices(candidates)
        index = IntPrompt.ask(
            "Which system would you like to connect to?",
            choices=[str(i) for i in range(1, len(candidates) + 1)],
            default=1,
            show_choices=False,
            console=self.console,
        )
        return candidates[index - 1].value
