"""Module discovery by walking the directory hierarchy.

A module is any directory holding the configured marker file (a
``package.json`` by default). Its name, type and import alias are read from
that file.
"""

import json
import logging
from pathlib import Path

from extendgen.codegen.types import ModuleInfo
from extendgen.config import ExtendConfig
from extendgen.exceptions import ModuleResolutionError

logger = logging.getLogger(__name__)

__all__ = [
    'walk_directory_up',
    'resolve_module',
    'get_parent_module_name',
    'resolve_package',
]


def walk_directory_up(path: str | Path, marker: str = 'package.json') -> Path:
    """Return the closest directory at or above ``path`` containing ``marker``.

    Args:
        path: A file or directory inside the module.
        marker: Name of the file marking a module root.

    Raises:
        ModuleResolutionError: If the filesystem root is reached first.
    """
    start = Path(path).resolve()
    directory = start if start.is_dir() else start.parent

    for candidate in (directory, *directory.parents):
        if (candidate / marker).is_file():
            return candidate

    raise ModuleResolutionError(str(start), marker)


def _read_marker(root: Path, config: ExtendConfig) -> dict:
    return json.loads((root / config.marker_file).read_text(encoding='utf-8'))


def resolve_module(path: str | Path, config: ExtendConfig) -> ModuleInfo:
    """Resolve the module owning ``path``.

    The module is resolved fresh on every call; nothing is cached.
    """
    root = walk_directory_up(path, config.marker_file)
    manifest = _read_marker(root, config)
    metadata = manifest.get(config.metadata_key) or {}

    return ModuleInfo(
        root_path=root,
        name=manifest.get('name') or root.name,
        type=metadata.get('type') or config.default_module_type,
        alias=metadata.get(config.alias_key),
    )


def get_parent_module_name(module: ModuleInfo, config: ExtendConfig) -> str | None:
    """Return the parent module declared in the module metadata, if any."""
    manifest = _read_marker(module.root_path, config)
    metadata = manifest.get(config.metadata_key) or {}
    return metadata.get(config.parent_key)


def resolve_package(
    name: str, from_directory: str | Path, config: ExtendConfig
) -> Path | None:
    """Find the root of the module called ``name`` as seen from a directory.

    Relative names are resolved against ``from_directory``. Package names are
    looked up in ``node_modules`` of ``from_directory`` and every directory
    above it.
    """
    base = Path(from_directory).resolve()

    if name.startswith('.'):
        candidate = (base / name).resolve()
        return candidate if (candidate / config.marker_file).is_file() else None

    for directory in (base, *base.parents):
        candidate = directory / 'node_modules' / name
        if (candidate / config.marker_file).is_file():
            return candidate

    logger.debug(f'Package {name} is not installed above {base}')
    return None
