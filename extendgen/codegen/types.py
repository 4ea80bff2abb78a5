"""Data model shared by the override pipeline.

This module provides:
- Enums for resource types, export kinds and style options
- Dataclasses for resolved modules, resources, analysed exports and
  generated files
- SynthesisContext, the bundle handed to the code synthesizer
"""

import dataclasses
import enum
from pathlib import Path, PurePosixPath

__all__ = [
    'ResourceType',
    'ExportKind',
    'StyleOption',
    'ModuleInfo',
    'Resource',
    'ExportRecord',
    'ImportClause',
    'ImportRecord',
    'ExportMap',
    'GeneratedFile',
    'SynthesisContext',
]


class ResourceType(str, enum.Enum):
    COMPONENT = 'component'
    ROUTE = 'route'
    QUERY = 'query'
    STORE = 'store'

    @property
    def has_styles(self) -> bool:
        match self:
            case ResourceType.COMPONENT | ResourceType.ROUTE:
                return True
            case ResourceType.QUERY | ResourceType.STORE:
                return False

    @property
    def alias_suffix(self) -> str:
        """Suffix appended to a module alias, e.g. 'Source' + 'Component'."""
        return self.value.capitalize()


class ExportKind(str, enum.Enum):
    CLASS = 'class'
    FUNCTION = 'function'
    OBJECT = 'object'
    ENUM = 'enum'
    VALUE = 'value'
    INTERFACE = 'interface'
    TYPE = 'type'
    REFERENCE = 'reference'

    @property
    def is_type_only(self) -> bool:
        return self in (ExportKind.INTERFACE, ExportKind.TYPE)


class StyleOption(str, enum.Enum):
    KEEP = 'keep'
    EXTEND = 'extend'
    OVERRIDE = 'override'

    @property
    def description(self) -> str:
        match self:
            case StyleOption.KEEP:
                return 'Keep the original styles'
            case StyleOption.EXTEND:
                return 'Extend the original styles'
            case StyleOption.OVERRIDE:
                return 'Override the original styles'


@dataclasses.dataclass(frozen=True)
class ModuleInfo:
    root_path: Path
    name: str
    type: str
    alias: str | None = None


@dataclasses.dataclass(frozen=True)
class Resource:
    type: ResourceType
    name: str
    source_path: Path
    file_list: tuple[str, ...] = ()


@dataclasses.dataclass(frozen=True)
class ExportRecord:
    """A symbol exported by a source file.

    Attributes:
        name: Exported name ('default' for the default export).
        span: (start, end) byte offsets of the export statement in the
            original text.
        kind: What the export binds; decides how it is extended.
        is_default: Whether this is the default export.
        references: Identifiers used inside the default export statement.
    """

    name: str
    span: tuple[int, int]
    kind: ExportKind = ExportKind.VALUE
    is_default: bool = False
    references: frozenset[str] = frozenset()


@dataclasses.dataclass(frozen=True)
class ImportClause:
    """One binding of an import statement.

    Attributes:
        local: Name the binding introduces.
        text: Source text of the binding, e.g. ``a as b`` or ``* as utils``.
        braced: Whether the binding sits inside ``{ ... }``.
    """

    local: str
    text: str
    braced: bool = False


@dataclasses.dataclass(frozen=True)
class ImportRecord:
    bindings: tuple[str, ...]
    span: tuple[int, int]
    source: str
    source_span: tuple[int, int]
    type_only: bool = False
    clauses: tuple[ImportClause, ...] = ()

    @property
    def is_relative(self) -> bool:
        return self.source.startswith('.')


@dataclasses.dataclass(frozen=True)
class ExportMap:
    default: ExportRecord | None
    named: tuple[ExportRecord, ...]
    imports: tuple[ImportRecord, ...] = ()

    @property
    def names(self) -> list[str]:
        return [record.name for record in self.named]


@dataclasses.dataclass
class GeneratedFile:
    path: Path
    content: str
    created: bool = False


@dataclasses.dataclass
class SynthesisContext:
    """Everything the synthesizer needs to write one override file.

    `source_import_path` is the aliased path the new file imports the
    original symbols from; `copied_imports` are verbatim import statements
    the default export block depends on.
    """

    all_exports: list[ExportRecord]
    chosen_exports: list[ExportRecord]
    default_export_code: str | None
    file_name: str
    resource_type: ResourceType
    resource_name: str
    relative_resource_directory: PurePosixPath
    source_module_name: str
    source_module_type: str
    source_module_alias: str | None
    source_import_path: str
    chosen_style_option: StyleOption | None = None
    copied_imports: list[str] = dataclasses.field(default_factory=list)
    default_references: frozenset[str] = frozenset()
    is_typescript: bool = False
