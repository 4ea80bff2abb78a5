"""Synthesis of override files.

An override file consists of, in order:
- import statements the default export block depends on,
- one import of the original symbols from the source module,
- style imports for component files that got a new style file,
- passthrough re-exports of every named export that is not extended,
- one extension scaffold per extended export,
- the original default export block, copied verbatim.

Nothing here re-prints parsed code: every piece of the original file that
ends up in the output is a slice of the original text.
"""

import posixpath
import re
from pathlib import PurePosixPath

from extendgen.codegen.exports import has_syntax_errors
from extendgen.codegen.styles import is_style_file_applicable
from extendgen.codegen.types import (
    ExportKind,
    ExportMap,
    ExportRecord,
    ImportRecord,
    ResourceType,
    StyleOption,
    SynthesisContext,
)
from extendgen.codegen.utils import (
    replace_ts_with_js,
    source_local_name,
    strip_script_extension,
)
from extendgen.exceptions import CodeGenerationError

__all__ = [
    'get_source_import_path',
    'get_module_import_directory',
    'collect_copied_imports',
    'partition_exports',
    'render_extension',
    'synthesize',
]

MAP_TO_PROPS_PATTERN = re.compile(r'^map\w*ToProps$')

INDENT = '    '


def get_source_import_path(
    module_name: str,
    module_alias: str | None,
    resource_type: ResourceType,
    relative_resource_directory: PurePosixPath,
    file_name: str,
) -> str:
    """Import path of a source file as seen from the overriding module.

    Aliased modules are imported through their alias so the build keeps
    resolving overrides, e.g. ``SourceComponent/Header/Header.component``.
    Other modules are imported by package name.
    """
    stem = strip_script_extension(file_name)

    if module_alias:
        # drop the leading 'src/<type>' of the relative directory
        nested = relative_resource_directory.parts[2:]
        return '/'.join(
            (f'{module_alias}{resource_type.alias_suffix}', *nested, stem)
        )

    directory = get_module_import_directory(module_name, relative_resource_directory)
    return f'{directory}/{stem}'


def get_module_import_directory(
    module_name: str, relative_resource_directory: PurePosixPath
) -> str:
    return f'{module_name}/{relative_resource_directory}'


def _rebuild_import(record: ImportRecord, kept: set[str], module_path: str) -> str:
    unbraced = [c.text for c in record.clauses if not c.braced and c.local in kept]
    braced = [c.text for c in record.clauses if c.braced and c.local in kept]
    parts = list(unbraced)
    if braced:
        parts.append(f'{{ {", ".join(braced)} }}')
    keyword = 'import type' if record.type_only else 'import'
    return f"{keyword} {', '.join(parts)} from '{module_path}';"


def collect_copied_imports(
    export_map: ExportMap,
    source_text: str,
    references: frozenset[str],
    module_import_directory: str,
    is_typescript: bool = False,
) -> list[str]:
    """Import statements of the source file the default export block needs.

    Statements are copied verbatim; only relative module specifiers are
    rewritten so they point into the source module. Names the file exports
    are bound by the override itself, so bindings of those names are left
    out of the copied statements.
    """
    source = source_text.encode('utf-8')
    exported = set(export_map.names)
    copied = []

    for record in export_map.imports:
        kept = {name for name in record.bindings if name not in exported}
        if not references.intersection(kept):
            continue
        if record.type_only and not is_typescript:
            continue

        module_path = record.source
        if record.is_relative:
            module_path = posixpath.normpath(
                posixpath.join(module_import_directory, record.source)
            )

        if len(kept) < len(record.bindings):
            copied.append(_rebuild_import(record, kept, module_path))
            continue

        start, end = record.span
        statement = source[start:end]

        if record.is_relative:
            fragment_start = record.source_span[0] - start
            fragment_end = record.source_span[1] - start
            statement = (
                statement[:fragment_start]
                + module_path.encode('utf-8')
                + statement[fragment_end:]
            )

        copied.append(statement.decode('utf-8'))

    return copied


def partition_exports(
    all_exports: list[ExportRecord], chosen_exports: list[ExportRecord]
) -> tuple[list[ExportRecord], list[ExportRecord]]:
    """Split exports into (passthrough, extended), keeping source order."""
    chosen_names = {record.name for record in chosen_exports}
    passthrough = [r for r in all_exports if r.name not in chosen_names]
    extended = [r for r in all_exports if r.name in chosen_names]
    return passthrough, extended


def _braced(keyword: str, names: list[str], path: str) -> str:
    if len(names) == 1:
        return f"{keyword} {{ {names[0]} }} from '{path}';"
    lines = ''.join(f'{INDENT}{name},\n' for name in names)
    return f"{keyword} {{\n{lines}}} from '{path}';"


def render_extension(record: ExportRecord, is_typescript: bool = False) -> str:
    """Scaffold that extends ``record`` while keeping its external contract."""
    name = record.name
    source = source_local_name(name)
    annotation = f': typeof {source}' if is_typescript else ''

    match record.kind:
        case ExportKind.CLASS:
            return (
                f'export class {name} extends {source} {{\n'
                f'{INDENT}// TODO implement logic\n'
                '}'
            )
        case ExportKind.FUNCTION if MAP_TO_PROPS_PATTERN.match(name):
            return (
                f'export const {name}{annotation} = (...args) => ({{\n'
                f'{INDENT}...{source}(...args),\n'
                f'{INDENT}// TODO extend {name}\n'
                '});'
            )
        case ExportKind.FUNCTION:
            return f'export const {name}{annotation} = (...args) => {source}(...args);'
        case ExportKind.OBJECT:
            return (
                f'export const {name}{annotation} = {{\n'
                f'{INDENT}...{source},\n'
                f'{INDENT}// TODO extend {name}\n'
                '};'
            )
        case ExportKind.INTERFACE:
            return (
                f'export interface {name} extends {source} {{\n'
                f'{INDENT}// TODO extend {name}\n'
                '}'
            )
        case ExportKind.TYPE:
            return (
                f'export type {name} = {source} & {{\n'
                f'{INDENT}// TODO extend {name}\n'
                '};'
            )
        case ExportKind.ENUM if is_typescript:
            return (
                f'export const {name} = {source};\n'
                f'export type {name} = {source};'
            )
        case ExportKind.ENUM | ExportKind.VALUE | ExportKind.REFERENCE:
            return f'export const {name} = {source};'


def _style_imports(context: SynthesisContext) -> list[str]:
    if not is_style_file_applicable(context.resource_type, context.file_name):
        return []

    local_style = f"import './{context.resource_name}.style';"

    match context.chosen_style_option:
        case StyleOption.EXTEND:
            directory = context.source_import_path.rsplit('/', 1)[0]
            source_style = f"import '{directory}/{context.resource_name}.style';"
            return [source_style, local_style]
        case StyleOption.OVERRIDE:
            return [local_style]
        case StyleOption.KEEP | None:
            return []


def synthesize(context: SynthesisContext) -> str:
    """Produce the full text of an override file.

    Raises:
        CodeGenerationError: If the produced text does not parse.
    """
    path = context.source_import_path
    passthrough, extended = partition_exports(
        context.all_exports, context.chosen_exports
    )
    chosen_names = {record.name for record in extended}

    imports = list(context.copied_imports)

    specifiers = []
    for record in context.all_exports:
        if record.name in chosen_names:
            specifiers.append(f'{record.name} as {source_local_name(record.name)}')
        elif record.name in context.default_references:
            specifiers.append(record.name)
    if specifiers:
        imports.append(_braced('import', specifiers, path))

    imports.extend(_style_imports(context))

    sections = ['\n'.join(imports)]

    type_passthrough = [
        r.name for r in passthrough if context.is_typescript and r.kind.is_type_only
    ]
    value_passthrough = [
        r.name for r in passthrough if r.name not in type_passthrough
    ]
    if value_passthrough:
        sections.append(_braced('export', value_passthrough, path))
    if type_passthrough:
        sections.append(_braced('export type', type_passthrough, path))

    sections.extend(render_extension(r, context.is_typescript) for r in extended)

    if context.default_export_code:
        sections.append(context.default_export_code)

    content = '\n\n'.join(section for section in sections if section) + '\n'

    output_name = (
        context.file_name
        if context.is_typescript
        else replace_ts_with_js(context.file_name)
    )
    if has_syntax_errors(content, output_name):
        raise CodeGenerationError(
            'Generated code has invalid syntax', context=output_name
        )

    return content
