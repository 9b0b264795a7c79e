"""
Depth-first traversal of a PDF page object graph.

Cycles are avoided by tracking the identities of the entries on the current
path only, so a node shared by two branches is visited once per branch.
"""

from enum import Enum
from typing import Any, Callable, Hashable, Iterable, Iterator, Set, Tuple

from pdfminer.pdftypes import PDFObjRef, PDFStream


class NodeKind(str, Enum):
    """Kind of a graph node."""
    DICT = "dict"
    ARRAY = "array"
    STREAM = "stream"
    SCALAR = "scalar"


def node_kind(node: Any) -> NodeKind:
    if isinstance(node, PDFStream):
        return NodeKind.STREAM
    if isinstance(node, dict):
        return NodeKind.DICT
    if isinstance(node, list):
        return NodeKind.ARRAY
    return NodeKind.SCALAR


def resolve(value: Any) -> Any:
    """Follow indirect references until a direct object is reached."""
    while isinstance(value, PDFObjRef):
        value = value.resolve()
    return value


def entry_identity(value: Any) -> Hashable:
    """
    Stable identity of a dictionary or array entry.

    Indirect objects are identified by object number, direct ones by the
    Python object they are held in.
    """
    if isinstance(value, PDFObjRef):
        return ("ref", value.objid)
    return ("direct", id(value))


def iter_children(
    node: Any,
    skip_keys: Iterable[str] = (),
) -> Iterator[Tuple[Hashable, Any]]:
    """Yield (identity, resolved child) pairs of a dictionary or array node."""
    kind = node_kind(node)
    if kind == NodeKind.DICT:
        for key, value in node.items():
            if key in skip_keys:
                continue
            yield entry_identity(value), resolve(value)
    elif kind == NodeKind.ARRAY:
        for value in node:
            yield entry_identity(value), resolve(value)


def walk(
    root: Any,
    visit: Callable[[Any], None],
    skip_keys: Iterable[str] = (),
) -> None:
    """
    Invoke visit on every node reachable from root, in pre-order.

    An exception raised by visit stops the traversal and propagates to the
    caller. Dictionary entries named in skip_keys are not descended into.
    """
    skip_keys = frozenset(skip_keys)
    on_path: Set[Hashable] = set()

    def walk_node(node: Any) -> None:
        visit(node)
        for identity, child in iter_children(node, skip_keys):
            if identity in on_path:
                continue
            on_path.add(identity)
            try:
                walk_node(child)
            finally:
                on_path.discard(identity)

    walk_node(resolve(root))
