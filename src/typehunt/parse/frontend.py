"""Tree-sitter front-end for TypeScript source units.

Parses TypeScript and TSX text into a syntax tree and rejects units whose
tree contains syntax errors, so the extractor only ever sees clean trees.
"""

from dataclasses import dataclass
from functools import cache

import tree_sitter_typescript
from tree_sitter import Language, Node, Parser, Tree

from typehunt.errors import UnitParseError

__all__ = ["ParsedUnit", "get_language", "is_tsx_unit", "parse_source"]


@dataclass(frozen=True)
class ParsedUnit:
    """A successfully parsed source unit.

    Attributes
    ----------
    unit_id : str
        Source unit identifier.
    source_bytes : bytes
        UTF-8 encoded source; tree byte offsets index into it.
    tree : Tree
        Tree-sitter syntax tree.
    """

    unit_id: str
    source_bytes: bytes
    tree: Tree

    @property
    def root(self) -> Node:
        return self.tree.root_node


@cache
def get_language(tsx: bool = False) -> Language:
    """Load the TypeScript or TSX grammar (cached, read-only)."""
    if tsx:
        return Language(tree_sitter_typescript.language_tsx())
    return Language(tree_sitter_typescript.language_typescript())


def is_tsx_unit(unit_id: str) -> bool:
    return unit_id.lower().endswith(".tsx")


def _first_error_line(root: Node) -> int | None:
    """Return the 1-based line of the first ERROR or missing node."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            return node.start_point[0] + 1
        if node.has_error:
            stack.extend(reversed(node.children))
    return None


def parse_source(unit_id: str, source_text: str, *, tsx: bool | None = None) -> ParsedUnit:
    """Parse TypeScript source text.

    A new ``Parser`` is created per call, so concurrent calls from worker
    threads never share parser state.

    Parameters
    ----------
    unit_id : str
        Source unit identifier.
    source_text : str
        Source text.
    tsx : bool | None, optional
        Use the TSX grammar. If None, inferred from the ``.tsx`` extension.

    Returns
    -------
    ParsedUnit
        Parsed unit.

    Raises
    ------
    UnitParseError
        If the text cannot be encoded or the tree contains syntax errors.
    """
    if tsx is None:
        tsx = is_tsx_unit(unit_id)

    try:
        source_bytes = source_text.encode("utf-8")
    except UnicodeEncodeError as e:
        raise UnitParseError(
            f"Source text is not valid Unicode: {e.reason}", unit_id=unit_id
        ) from e

    parser = Parser(get_language(tsx))
    tree = parser.parse(source_bytes)

    if tree.root_node.has_error:
        line = _first_error_line(tree.root_node)
        where = f" at line {line}" if line is not None else ""
        raise UnitParseError(f"Syntax error{where}", unit_id=unit_id, line=line)

    return ParsedUnit(unit_id=unit_id, source_bytes=source_bytes, tree=tree)
