"""User interaction boundary of the override pipeline.

The pipeline only talks to the operator through :class:`UserInteraction`.
Both methods may suspend for as long as the operator needs; an empty
multi-selection is a normal answer.
"""

import asyncio
import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Generic, Protocol, TypeVar

from rich.console import Console
from rich.prompt import IntPrompt, Prompt

from extendgen.codegen.types import ExportRecord

__all__ = ['Choice', 'UserInteraction', 'ConsoleInteraction', 'choose_exports']

T = TypeVar('T')


@dataclass(frozen=True)
class Choice(Generic[T]):
    display_name: str
    value: T


class UserInteraction(Protocol):
    async def multi_select(
        self, prompt: str, options: Sequence[Choice[Any]]
    ) -> list[Any]:
        ...

    async def select(self, prompt: str, options: Sequence[Choice[Any]]) -> Any:
        ...


def parse_selection(answer: str, count: int) -> list[int] | None:
    """Parse '1, 3 4' into zero-based indexes; None if any token is invalid."""
    indexes = []
    for token in re.split(r'[\s,]+', answer.strip()):
        if not token:
            continue
        if not token.isdigit() or not 1 <= int(token) <= count:
            return None
        index = int(token) - 1
        if index not in indexes:
            indexes.append(index)
    return sorted(indexes)


class ConsoleInteraction:
    """Terminal implementation of :class:`UserInteraction` built on rich."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def _print_options(self, prompt: str, options: Sequence[Choice[Any]]) -> None:
        self.console.print(f'[bold]{prompt}[/bold]')
        for number, option in enumerate(options, start=1):
            self.console.print(f'  [cyan]{number}[/cyan]) {option.display_name}')

    async def multi_select(
        self, prompt: str, options: Sequence[Choice[Any]]
    ) -> list[Any]:
        if not options:
            return []

        self._print_options(prompt, options)
        while True:
            answer = await asyncio.to_thread(
                Prompt.ask,
                'Numbers separated by commas (leave empty for none)',
                console=self.console,
                default='',
                show_default=False,
            )
            indexes = parse_selection(answer, len(options))
            if indexes is not None:
                return [options[index].value for index in indexes]
            self.console.print('[red]Please enter numbers from the list.[/red]')

    async def select(self, prompt: str, options: Sequence[Choice[Any]]) -> Any:
        self._print_options(prompt, options)
        number = await asyncio.to_thread(
            IntPrompt.ask,
            'Number',
            console=self.console,
            choices=[str(n) for n in range(1, len(options) + 1)],
            default=1,
        )
        return options[number - 1].value


async def choose_exports(
    interaction: UserInteraction,
    file_name: str,
    candidates: Sequence[ExportRecord],
) -> list[ExportRecord]:
    """Ask which named exports of ``file_name`` to extend.

    The answer is restricted to ``candidates`` and returned in their order.
    """
    chosen = await interaction.multi_select(
        f'Choose things to extend in {file_name}',
        [Choice(display_name=record.name, value=record) for record in candidates],
    )
    chosen = chosen or []
    return [record for record in candidates if record in chosen]
