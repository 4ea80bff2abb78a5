"""Create-only file writing for generated override files.

Generated files never replace existing ones: an operator may already have
customised a file at the target path.
"""

from pathlib import Path

from upath import UPath

from extendgen.exceptions import OutputError

__all__ = ['FileMaterializer']


class FileMaterializer:
    """Writes generated content to files that do not exist yet.

    Example:
        >>> writer = FileMaterializer()
        >>> writer.write('src/component/Header/Header.component.js', code)
        True
        >>> writer.write('src/component/Header/Header.component.js', code)
        False
    """

    def write(self, path: UPath | Path | str, content: str) -> bool:
        """Write ``content`` to ``path`` unless the path already exists.

        The file is opened in exclusive-create mode, so a file appearing
        between the existence check and the write is left untouched too.

        Args:
            path: Target file path. Missing parent directories are created.
            content: Text to write.

        Returns:
            True if the file was created, False if it already existed.

        Raises:
            OutputError: If the file cannot be written.
        """
        path = UPath(path)

        if path.exists():
            return False

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open('x', encoding='utf-8') as f:
                f.write(content)
        except FileExistsError:
            return False
        except OSError as e:
            raise OutputError(str(path), cause=e) from e

        return True
