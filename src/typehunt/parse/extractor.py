"""Declaration extraction from parsed TypeScript units.

Walks one syntax tree and emits a ``DeclarationRecord`` per interface,
type alias, enum and re-exported name. Re-export records come first, in
statement order, followed by declarations in depth-first document order.
"""

from tree_sitter import Node

from typehunt.models import DeclarationKind, DeclarationRecord, SourceLocation
from typehunt.normalize import normalize_shape
from typehunt.parse.frontend import ParsedUnit, parse_source

__all__ = [
    "DECLARATION_NODE_KINDS",
    "extract_declarations",
    "extract_from_tree",
    "extract_unit",
]

# Closed mapping from tree-sitter node type to declaration kind
DECLARATION_NODE_KINDS: dict[str, DeclarationKind] = {
    "interface_declaration": DeclarationKind.INTERFACE,
    "type_alias_declaration": DeclarationKind.TYPE_ALIAS,
    "enum_declaration": DeclarationKind.ENUM,
}

# Statements that wrap a declaration and belong to its source span
_WRAPPER_NODE_TYPES = frozenset({"export_statement", "ambient_declaration"})


# ---------------------------------------------------------------------------
# Node helpers
# ---------------------------------------------------------------------------


def _text(node: Node, source: bytes) -> str:
    return source[node.start_byte : node.end_byte].decode("utf-8")


def _line(node: Node) -> int:
    return node.start_point[0] + 1


def _outer_declaration(node: Node) -> Node:
    """Climb through ``export``/``declare`` wrappers owning ``node``."""
    outer = node
    parent = node.parent
    while parent is not None and parent.type in _WRAPPER_NODE_TYPES:
        outer = parent
        parent = parent.parent
    return outer


def _signature_names(body: Node | None, source: bytes) -> list[str]:
    if body is None:
        return []
    names: list[str] = []
    for member in body.named_children:
        if member.type != "property_signature":
            continue
        name = member.child_by_field_name("name")
        if name is not None:
            names.append(_text(name, source))
    return names


def _enum_member_names(body: Node | None, source: bytes) -> list[str]:
    if body is None:
        return []
    names: list[str] = []
    for member in body.named_children:
        if member.type == "comment":
            continue
        if member.type == "enum_assignment":
            name = member.child_by_field_name("name")
            if name is not None:
                names.append(_text(name, source))
        else:
            names.append(_text(member, source))
    return names


def _property_names(node: Node, kind: DeclarationKind, source: bytes) -> tuple[str, ...]:
    """Collect member names, sorted ascending."""
    if kind is DeclarationKind.INTERFACE:
        names = _signature_names(node.child_by_field_name("body"), source)
    elif kind is DeclarationKind.TYPE_ALIAS:
        value = node.child_by_field_name("value")
        if value is not None and value.type == "object_type":
            names = _signature_names(value, source)
        else:
            names = []
    else:
        names = _enum_member_names(node.child_by_field_name("body"), source)
    return tuple(sorted(names))


# ---------------------------------------------------------------------------
# Re-export detection
# ---------------------------------------------------------------------------


def _export_name(node: Node, source: bytes) -> str:
    text = _text(node, source)
    if node.type == "string":
        return text[1:-1]
    return text


def _collect_reexport_records(
    unit_id: str, source: bytes, root: Node
) -> list[DeclarationRecord]:
    """Collect names re-exported from other modules.

    Patterns detected:
    - ``export { Foo } from "./bar";``
    - ``export { Foo as Bar } from "./bar";``
    - ``export type { Foo } from "./bar";``

    ``export * from`` and ``export * as ns from`` are ignored.
    """
    records: list[DeclarationRecord] = []

    for statement in root.named_children:
        if statement.type != "export_statement":
            continue
        if statement.child_by_field_name("source") is None:
            continue

        clause = next(
            (c for c in statement.named_children if c.type == "export_clause"),
            None,
        )
        if clause is None:
            continue

        snippet = _text(statement, source)
        location = SourceLocation(unit_id, _line(statement))

        for specifier in clause.named_children:
            if specifier.type != "export_specifier":
                continue
            name_node = specifier.child_by_field_name("alias")
            if name_node is None:
                name_node = specifier.child_by_field_name("name")
            if name_node is None:
                continue
            exported_name = _export_name(name_node, source)

            records.append(
                DeclarationRecord(
                    name=exported_name,
                    kind=DeclarationKind.REEXPORT,
                    location=location,
                    raw_snippet=snippet,
                    shape_fingerprint=normalize_shape(snippet, exported_name),
                    is_reexport=True,
                    property_names=(),
                )
            )

    return records


# ---------------------------------------------------------------------------
# Declaration collection (single unit)
# ---------------------------------------------------------------------------


def _declaration_record(
    unit_id: str,
    source: bytes,
    node: Node,
    kind: DeclarationKind,
) -> DeclarationRecord | None:
    name_node = node.child_by_field_name("name")
    if name_node is None:
        return None
    name = _text(name_node, source)

    outer = _outer_declaration(node)
    snippet = _text(outer, source)

    return DeclarationRecord(
        name=name,
        kind=kind,
        location=SourceLocation(unit_id, _line(outer)),
        raw_snippet=snippet,
        shape_fingerprint=normalize_shape(snippet, name),
        is_reexport=False,
        property_names=_property_names(node, kind, source),
    )


def extract_from_tree(
    unit_id: str,
    source: bytes,
    root: Node,
    *,
    include_enums: bool = True,
) -> list[DeclarationRecord]:
    """Extract declaration records from a parsed tree.

    Parameters
    ----------
    unit_id : str
        Source unit identifier stored in each record's location.
    source : bytes
        UTF-8 source the tree was parsed from.
    root : Node
        Root node of the tree.
    include_enums : bool, optional
        Emit enum declarations, by default True.

    Returns
    -------
    list[DeclarationRecord]
        Re-export records followed by declarations in document order.
    """
    records = _collect_reexport_records(unit_id, source, root)

    stack = [root]
    while stack:
        node = stack.pop()
        kind = DECLARATION_NODE_KINDS.get(node.type)
        if kind is DeclarationKind.ENUM and not include_enums:
            kind = None
        if kind is not None:
            record = _declaration_record(unit_id, source, node, kind)
            if record is not None:
                records.append(record)
        stack.extend(reversed(node.named_children))

    return records


def extract_unit(unit: ParsedUnit, *, include_enums: bool = True) -> list[DeclarationRecord]:
    """Extract declaration records from a ``ParsedUnit``."""
    return extract_from_tree(unit.unit_id, unit.source_bytes, unit.root, include_enums=include_enums)


def extract_declarations(
    unit_id: str,
    source_text: str,
    *,
    include_enums: bool = True,
    tsx: bool | None = None,
) -> list[DeclarationRecord]:
    """Parse a source unit and extract its declarations.

    Parameters
    ----------
    unit_id : str
        Source unit identifier.
    source_text : str
        TypeScript source.
    include_enums : bool, optional
        Emit enum declarations, by default True.
    tsx : bool | None, optional
        Force the TSX grammar; inferred from ``unit_id`` if None.

    Returns
    -------
    list[DeclarationRecord]
        Extracted records.

    Raises
    ------
    UnitParseError
        If the source does not parse cleanly.

    Examples
    --------
        >>> records = extract_declarations("a.ts", "export { A, B } from './m';")
        >>> [r.name for r in records]
        ['A', 'B']
    """
    unit = parse_source(unit_id, source_text, tsx=tsx)
    return extract_unit(unit, include_enums=include_enums)
