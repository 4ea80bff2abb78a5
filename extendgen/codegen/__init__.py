"""Override generation module for extendgen.

This module provides the pipeline that creates an override of a resource
from an ancestor module inside a descendant module.

Main Components:
    - ExtendPipeline / extend: orchestrate one override run
    - resolve_module: find the module owning a path
    - locate_resource: find the ancestor module defining a resource
    - analyze_exports: enumerate exports with their source spans
    - synthesize: build the text of an override file
    - FileMaterializer: create-only file writing

Example:
    >>> import asyncio
    >>> from extendgen.codegen import ResourceType, extend
    >>> from extendgen.interaction import ConsoleInteraction
    >>>
    >>> asyncio.run(
    ...     extend(ResourceType.COMPONENT, 'Header', './my-theme', None,
    ...            ConsoleInteraction())
    ... )
"""

from extendgen.codegen.exports import (
    analyze_exports,
    get_default_export_code,
    strip_type_assertions,
)
from extendgen.codegen.extend import ExtendPipeline, extend
from extendgen.codegen.file_writer import FileMaterializer
from extendgen.codegen.lint import EslintFixer, LintFixer
from extendgen.codegen.modules import resolve_module, walk_directory_up
from extendgen.codegen.resources import (
    get_file_list,
    get_relative_resource_directory,
    locate_resource,
)
from extendgen.codegen.synthesis import synthesize
from extendgen.codegen.types import (
    ExportKind,
    ExportMap,
    ExportRecord,
    GeneratedFile,
    ModuleInfo,
    Resource,
    ResourceType,
    StyleOption,
    SynthesisContext,
)

__all__ = [
    # Pipeline
    'ExtendPipeline',
    'extend',
    # Resolution
    'resolve_module',
    'walk_directory_up',
    'locate_resource',
    'get_file_list',
    'get_relative_resource_directory',
    # Analysis and synthesis
    'analyze_exports',
    'get_default_export_code',
    'strip_type_assertions',
    'synthesize',
    # Output
    'FileMaterializer',
    'LintFixer',
    'EslintFixer',
    # Data model
    'ExportKind',
    'ExportMap',
    'ExportRecord',
    'GeneratedFile',
    'ModuleInfo',
    'Resource',
    'ResourceType',
    'StyleOption',
    'SynthesisContext',
]
