"""extendgen - Override resources of modular front-end themes.

extendgen creates an override of a component, route, query or store that an
ancestor theme or extension defines. The override re-exports everything the
operator leaves alone and scaffolds an extension for every export the
operator picks, so customising a resource never means forking it.

Quick Start:
    >>> import asyncio
    >>> from extendgen import ResourceType, extend
    >>> from extendgen.interaction import ConsoleInteraction
    >>>
    >>> created = asyncio.run(
    ...     extend(ResourceType.COMPONENT, 'Header', './my-theme', None,
    ...            ConsoleInteraction())
    ... )

CLI Usage:
    $ extendgen extend component Header --target ./my-theme
    $ extendgen extend query ProductList --typescript
"""

from extendgen.codegen.extend import ExtendPipeline, extend
from extendgen.codegen.types import ResourceType, StyleOption
from extendgen.config import ExtendConfig, get_config
from extendgen.exceptions import (
    CodeGenerationError,
    ConfigurationError,
    ExtendGenError,
    ModuleResolutionError,
    OutputError,
    ResourceNotFoundError,
)

__all__ = [
    # Main entry points
    'extend',
    'ExtendPipeline',
    'ResourceType',
    'StyleOption',
    # Configuration
    'ExtendConfig',
    'get_config',
    # Exceptions
    'ExtendGenError',
    'ModuleResolutionError',
    'ResourceNotFoundError',
    'CodeGenerationError',
    'ConfigurationError',
    'OutputError',
]

try:
    from importlib.metadata import version as _version

    __version__ = _version('extendgen')
except ImportError:
    __version__ = 'unknown'
