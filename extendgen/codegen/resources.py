"""Resource location across the module hierarchy.

This module answers three questions for the override pipeline:
- where a resource lives inside any module (a pure function of its name
  and type),
- which ancestor module defines the resource to extend,
- which files of that resource are processed, and in which order.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path, PurePosixPath

from extendgen.codegen.modules import (
    get_parent_module_name,
    resolve_module,
    resolve_package,
    walk_directory_up,
)
from extendgen.codegen.types import ResourceType
from extendgen.config import ExtendConfig
from extendgen.exceptions import ResourceNotFoundError

logger = logging.getLogger(__name__)

__all__ = [
    'get_relative_resource_directory',
    'find_resource_in_module',
    'iter_candidate_modules',
    'locate_resource',
    'get_file_list',
    'resolve_target_resource_directory',
    'validate_resource_existence',
]

POSTFIX_ORDER = ('component', 'container', 'config', 'type')


def get_relative_resource_directory(
    resource_name: str, resource_type: ResourceType
) -> PurePosixPath:
    """Directory of a resource relative to its module root.

    Queries share one directory; every other resource type gets a directory
    named after the resource.
    """
    match resource_type:
        case ResourceType.QUERY:
            return PurePosixPath('src', 'query')
        case ResourceType.COMPONENT | ResourceType.ROUTE | ResourceType.STORE:
            return PurePosixPath('src', resource_type.value, resource_name)


def find_resource_in_module(
    module_root: Path,
    resource_name: str,
    resource_type: ResourceType,
    config: ExtendConfig,
) -> Path | None:
    """Return the resource path inside ``module_root`` or None if absent.

    For queries the resource path is the query file itself, for other types
    it is the resource directory.
    """
    directory = module_root / get_relative_resource_directory(
        resource_name, resource_type
    )

    if resource_type is ResourceType.QUERY:
        for extension in config.script_extensions:
            candidate = directory / f'{resource_name}.query{extension}'
            if candidate.is_file():
                return candidate
        return None

    return directory if directory.is_dir() else None


def iter_candidate_modules(
    target_module_path: str | Path, config: ExtendConfig
) -> Iterator[Path]:
    """Yield module roots that may define a resource, highest precedence first.

    The parent chain declared in the module metadata comes first, followed by
    the configured fallback modules. The target module itself is never
    yielded and each module is yielded once.
    """
    target = resolve_module(target_module_path, config)
    seen = {target.root_path}

    current = target
    while True:
        parent_name = get_parent_module_name(current, config)
        if not parent_name:
            break

        parent_root = resolve_package(parent_name, current.root_path, config)
        if parent_root is None:
            logger.warning(
                f'Parent module {parent_name} of {current.name} is not installed'
            )
            break
        if parent_root in seen:
            break

        seen.add(parent_root)
        yield parent_root
        current = resolve_module(parent_root, config)

    for name in config.fallback_source_modules:
        root = resolve_package(name, target.root_path, config)
        if root is not None and root not in seen:
            seen.add(root)
            yield root


def locate_resource(
    resource_name: str,
    resource_type: ResourceType,
    target_module_path: str | Path,
    source_module_path: str | Path | None,
    config: ExtendConfig,
) -> Path:
    """Find the resource to extend.

    Args:
        resource_name: Name of the resource, e.g. 'Header'.
        resource_type: Type of the resource.
        target_module_path: Path inside the module the override is created in.
        source_module_path: Optional path inside the module to extend from.
            When given, only that module is searched.
        config: Active configuration.

    Returns:
        Path of the resource (directory, or file for queries).

    Raises:
        ResourceNotFoundError: If no searched module defines the resource.
    """
    if source_module_path is not None:
        candidates = [walk_directory_up(source_module_path, config.marker_file)]
    else:
        candidates = iter_candidate_modules(target_module_path, config)

    searched = []
    for module_root in candidates:
        searched.append(str(module_root))
        found = find_resource_in_module(
            module_root, resource_name, resource_type, config
        )
        if found is not None:
            return found

    raise ResourceNotFoundError(resource_type.value, resource_name, searched)


def _file_sort_key(file_name: str, resource_name: str) -> tuple[int, str]:
    postfix = file_name[len(resource_name) + 1 :].split('.')[0]
    if postfix in POSTFIX_ORDER:
        return POSTFIX_ORDER.index(postfix), file_name
    return len(POSTFIX_ORDER), file_name


def get_file_list(
    resource_type: ResourceType,
    resource_name: str,
    source_resource_path: Path,
    config: ExtendConfig,
) -> tuple[str, ...]:
    """Files of a resource in processing order.

    Queries consist of the single query file. Other resources list the
    script files named ``<Name>.<postfix>...`` in their directory, ordered
    component, container, config, type, then alphabetically.
    """
    if resource_type is ResourceType.QUERY:
        return (source_resource_path.name,)

    files = [
        entry.name
        for entry in source_resource_path.iterdir()
        if entry.is_file()
        and entry.name.startswith(f'{resource_name}.')
        and entry.suffix in config.script_extensions
    ]
    return tuple(sorted(files, key=lambda name: _file_sort_key(name, resource_name)))


def resolve_target_resource_directory(
    relative_resource_directory: PurePosixPath,
    target_module_path: str | Path,
    source_module_type: str,
    source_module_name: str,
) -> Path:
    """Directory the override files are written to.

    Overrides of theme resources mirror the source layout. Overrides of
    extension resources are nested under ``src/<extension name>`` so the
    build can tell which extension they replace.
    """
    target_root = Path(target_module_path).resolve()

    if source_module_type == 'extension':
        return (
            target_root
            / 'src'
            / source_module_name
            / relative_resource_directory.relative_to('src')
        )

    return target_root / relative_resource_directory


def validate_resource_existence(
    source_resource_path: Path,
    source_module_path: Path,
    target_module_path: Path,
    resource_type: ResourceType,
    resource_name: str,
    logger: logging.Logger = logger,
) -> bool:
    """Check the located resource can be extended into the target module."""
    if not source_resource_path.exists():
        logger.warning(
            f'{resource_type.alias_suffix} {resource_name} does not exist '
            f'at {source_resource_path}'
        )
        return False

    if source_module_path.resolve() == target_module_path.resolve():
        logger.warning(
            f'{resource_type.alias_suffix} {resource_name} is defined '
            'in the target module itself'
        )
        return False

    return True
