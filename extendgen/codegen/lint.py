"""Best-effort lint auto-fixing of generated files."""

import logging
import subprocess
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)

__all__ = ['LintFixer', 'EslintFixer']


class LintFixer(Protocol):
    def fix(self, file_paths: Sequence[str]) -> None:
        ...


class EslintFixer:
    """Runs ``eslint --fix`` (or any configured command) over files.

    Failures are logged and never raised: the files are already written and
    stay valid whether or not they get reformatted.
    """

    def __init__(
        self,
        command: Sequence[str] = ('npx', 'eslint', '--fix'),
        cwd: str | Path | None = None,
        logger: logging.Logger = logger,
    ):
        self.command = list(command)
        self.cwd = cwd
        self.logger = logger

    def fix(self, file_paths: Sequence[str]) -> None:
        if not file_paths or not self.command:
            return

        try:
            result = subprocess.run(
                [*self.command, *file_paths],
                cwd=self.cwd,
                capture_output=True,
                text=True,
            )
        except (FileNotFoundError, subprocess.SubprocessError) as e:
            self.logger.warning(f'Could not run {self.command[0]}: {e}')
            return

        if result.returncode != 0:
            self.logger.warning(
                f'Lint auto-fix exited with code {result.returncode}: '
                f'{result.stderr.strip() or result.stdout.strip()}'
            )
