"""Export analysis of resource source files.

The analyzer parses a JavaScript or TypeScript file once with tree-sitter and
records where every export lives in the original text. Generated files are
assembled from slices of that text, so the author's formatting and comments
survive untouched.
"""

import logging
from collections.abc import Iterator
from functools import lru_cache

import tree_sitter_typescript
from tree_sitter import Language, Node, Parser, Tree

from extendgen.codegen.types import (
    ExportKind,
    ExportMap,
    ExportRecord,
    ImportClause,
    ImportRecord,
)

logger = logging.getLogger(__name__)

__all__ = [
    'parse_source',
    'has_syntax_errors',
    'analyze_exports',
    'get_default_export_code',
    'strip_type_assertions',
    'collect_references',
]

REFERENCE_NODE_TYPES = {
    'identifier',
    'type_identifier',
    'shorthand_property_identifier',
}

TYPE_ASSERTION_NODE_TYPES = {
    'as_expression',
    'satisfies_expression',
    'non_null_expression',
    'type_assertion',
}

FUNCTION_VALUE_TYPES = {
    'arrow_function',
    'function',
    'function_expression',
    'generator_function',
}

DECLARATION_KINDS = {
    'class_declaration': ExportKind.CLASS,
    'abstract_class_declaration': ExportKind.CLASS,
    'function_declaration': ExportKind.FUNCTION,
    'generator_function_declaration': ExportKind.FUNCTION,
    'function_signature': ExportKind.FUNCTION,
    'interface_declaration': ExportKind.INTERFACE,
    'type_alias_declaration': ExportKind.TYPE,
    'enum_declaration': ExportKind.ENUM,
}


@lru_cache(maxsize=None)
def _get_parser(dialect: str) -> Parser:
    if dialect == 'typescript':
        language = Language(tree_sitter_typescript.language_typescript())
    else:
        language = Language(tree_sitter_typescript.language_tsx())
    return Parser(language)


def _dialect_for(file_name: str) -> str:
    # .tsx, .js and .jsx all parse with the TSX grammar
    return 'typescript' if file_name.endswith('.ts') else 'tsx'


def parse_source(source: bytes, file_name: str) -> Tree:
    return _get_parser(_dialect_for(file_name)).parse(source)


def has_syntax_errors(code: str, file_name: str) -> bool:
    """Check whether ``code`` fails to parse in the dialect of ``file_name``."""
    return parse_source(code.encode('utf-8'), file_name).root_node.has_error


def _text(node: Node) -> str:
    return node.text.decode('utf-8')


def _span(node: Node) -> tuple[int, int]:
    return node.start_byte, node.end_byte


def _walk(node: Node) -> Iterator[Node]:
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def _has_keyword(node: Node, keyword: str) -> bool:
    return any(not child.is_named and child.type == keyword for child in node.children)


def _asserted_expression(node: Node) -> Node | None:
    """Expression wrapped by a type assertion, dropping the asserted type."""
    if not node.named_children:
        return None
    # <T>value keeps the type arguments first
    if node.type == 'type_assertion':
        return node.named_children[-1]
    return node.named_children[0]


def _value_kind(value: Node | None) -> ExportKind:
    if value is None:
        return ExportKind.VALUE
    if value.type in FUNCTION_VALUE_TYPES:
        return ExportKind.FUNCTION
    if value.type == 'class':
        return ExportKind.CLASS
    if value.type == 'object':
        return ExportKind.OBJECT
    if value.type in TYPE_ASSERTION_NODE_TYPES | {'parenthesized_expression'}:
        return _value_kind(_asserted_expression(value))
    return ExportKind.VALUE


def _declared_names(declaration: Node) -> list[tuple[str, ExportKind]]:
    """Names bound by a top-level declaration, with what they bind."""
    if declaration.type in DECLARATION_KINDS:
        name = declaration.child_by_field_name('name')
        if name is None:
            return []
        return [(_text(name), DECLARATION_KINDS[declaration.type])]

    if declaration.type not in ('lexical_declaration', 'variable_declaration'):
        return []

    names = []
    for declarator in declaration.named_children:
        if declarator.type != 'variable_declarator':
            continue
        name = declarator.child_by_field_name('name')
        if name is None:
            continue
        if name.type == 'identifier':
            value = declarator.child_by_field_name('value')
            names.append((_text(name), _value_kind(value)))
            continue
        # destructuring pattern
        for node in _walk(name):
            if node.type in ('identifier', 'shorthand_property_identifier_pattern'):
                names.append((_text(node), ExportKind.VALUE))
    return names


def _clause_records(
    statement: Node, local_kinds: dict[str, ExportKind]
) -> list[ExportRecord]:
    clause = next(
        (c for c in statement.named_children if c.type == 'export_clause'), None
    )
    if clause is None:
        return []

    is_type_clause = _has_keyword(statement, 'type')
    has_source = statement.child_by_field_name('source') is not None
    records = []

    for specifier in clause.named_children:
        if specifier.type != 'export_specifier':
            continue
        local = specifier.child_by_field_name('name')
        exported = specifier.child_by_field_name('alias') or local
        if exported is None:
            continue

        name = _text(exported).strip('\'"')
        if name == 'default':
            continue

        if is_type_clause or _has_keyword(specifier, 'type'):
            kind = ExportKind.TYPE
        elif not has_source:
            kind = local_kinds.get(_text(local), ExportKind.REFERENCE)
        else:
            kind = ExportKind.REFERENCE
        records.append(ExportRecord(name=name, span=_span(statement), kind=kind))

    return records


def _import_record(statement: Node) -> ImportRecord | None:
    source = statement.child_by_field_name('source')
    if source is None:
        return None

    fragment = next(
        (c for c in source.named_children if c.type == 'string_fragment'), None
    )
    if fragment is None:
        return None

    clauses = []
    for clause in statement.named_children:
        if clause.type != 'import_clause':
            continue
        for child in clause.named_children:
            if child.type == 'identifier':
                clauses.append(ImportClause(local=_text(child), text=_text(child)))
            elif child.type == 'namespace_import':
                clauses.extend(
                    ImportClause(local=_text(n), text=_text(child))
                    for n in child.named_children
                    if n.type == 'identifier'
                )
            elif child.type == 'named_imports':
                for specifier in child.named_children:
                    if specifier.type != 'import_specifier':
                        continue
                    bound = specifier.child_by_field_name(
                        'alias'
                    ) or specifier.child_by_field_name('name')
                    if bound is not None:
                        clauses.append(
                            ImportClause(
                                local=_text(bound),
                                text=_text(specifier),
                                braced=True,
                            )
                        )

    return ImportRecord(
        bindings=tuple(c.local for c in clauses),
        span=_span(statement),
        source=_text(fragment),
        source_span=_span(fragment),
        type_only=_has_keyword(statement, 'type'),
        clauses=tuple(clauses),
    )


def _default_record(statement: Node) -> ExportRecord:
    declaration = statement.child_by_field_name('declaration')
    if declaration is not None:
        declared = _declared_names(declaration)
        kind = declared[0][1] if declared else ExportKind.VALUE
    else:
        kind = _value_kind(statement.child_by_field_name('value'))

    references = frozenset(
        _text(node) for node in _walk(statement) if node.type in REFERENCE_NODE_TYPES
    )
    return ExportRecord(
        name='default',
        span=_span(statement),
        kind=kind,
        is_default=True,
        references=references,
    )


def analyze_exports(
    source_text: str, file_name: str, include_types: bool = True
) -> ExportMap:
    """Enumerate the exports and imports of a source file.

    Args:
        source_text: The original file content.
        file_name: File name, used to pick the grammar (.ts vs everything else).
        include_types: When False, interface and type alias exports are left
            out, as they cannot be re-exported from JavaScript.

    Returns:
        ExportMap with byte spans pointing into ``source_text`` encoded as UTF-8.
    """
    tree = parse_source(source_text.encode('utf-8'), file_name)
    root = tree.root_node

    if root.has_error:
        logger.debug(f'{file_name} contains syntax errors, exports may be incomplete')

    local_kinds: dict[str, ExportKind] = {}
    for node in root.named_children:
        if node.type == 'export_statement':
            node = node.child_by_field_name('declaration')
        if node is not None:
            local_kinds.update(_declared_names(node))

    default = None
    named: list[ExportRecord] = []
    imports: list[ImportRecord] = []

    for node in root.named_children:
        if node.type == 'import_statement':
            record = _import_record(node)
            if record is not None:
                imports.append(record)
            continue

        if node.type != 'export_statement':
            continue

        if _has_keyword(node, 'default'):
            default = _default_record(node)
            continue

        declaration = node.child_by_field_name('declaration')
        if declaration is not None:
            named.extend(
                ExportRecord(name=name, span=_span(node), kind=kind)
                for name, kind in _declared_names(declaration)
            )
        else:
            named.extend(_clause_records(node, local_kinds))

    seen = set()
    unique = []
    for record in named:
        if record.name in seen:
            continue
        if not include_types and record.kind.is_type_only:
            continue
        seen.add(record.name)
        unique.append(record)

    return ExportMap(default=default, named=tuple(unique), imports=tuple(imports))


def get_default_export_code(export_map: ExportMap, source_text: str) -> str | None:
    """Slice the default export statement out of the original text."""
    if export_map.default is None:
        return None
    start, end = export_map.default.span
    return source_text.encode('utf-8')[start:end].decode('utf-8')


def _outermost(root: Node, types: set[str]) -> list[Node]:
    found = []
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type in types:
            found.append(node)
            continue
        stack.extend(node.children)
    return found


def strip_type_assertions(code: str, file_name: str = 'snippet.tsx') -> str:
    """Remove TypeScript-only expressions from a code snippet.

    ``x as unknown as T``, ``<T>x``, ``x satisfies T`` and ``x!`` become ``x``;
    type arguments such as ``connect<Props>(...)`` are dropped. The snippet is
    parsed in the dialect of ``file_name``, the file it was sliced from.
    """
    source = code.encode('utf-8')

    while True:
        root = parse_source(source, file_name).root_node
        nodes = _outermost(root, TYPE_ASSERTION_NODE_TYPES | {'type_arguments'})
        if not nodes:
            break

        for node in sorted(nodes, key=lambda n: n.start_byte, reverse=True):
            inner = None
            if node.type != 'type_arguments':
                inner = _asserted_expression(node)
            if inner is None:
                replacement = b''
            else:
                replacement = source[inner.start_byte : inner.end_byte]
            source = source[: node.start_byte] + replacement + source[node.end_byte :]

    return source.decode('utf-8')


def collect_references(code: str, file_name: str) -> frozenset[str]:
    """Identifiers used anywhere in ``code``."""
    root = parse_source(code.encode('utf-8'), file_name).root_node
    return frozenset(
        _text(node) for node in _walk(root) if node.type in REFERENCE_NODE_TYPES
    )
