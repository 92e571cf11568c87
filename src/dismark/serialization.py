"""AST serialization — JSON round-trip for dismark trees.

Converts nodes to/from JSON-compatible dicts, e.g. to cache parsed messages
or ship them to another process. Output is deterministic (sorted keys).

Example:
    from dismark import Parser
    from dismark.serialization import to_json, from_json

    doc = Parser().parse("**hi** @here")
    assert from_json(to_json(doc)) == doc

Thread Safety:
    All functions are pure and safe to call from any thread.

"""

import json
from dataclasses import fields
from typing import Any

from dismark.nodes import (
    URL,
    BlockQuote,
    Bold,
    BulletList,
    ChannelMention,
    Code,
    CustomEmoji,
    Document,
    Header,
    Italics,
    Node,
    RoleMention,
    SpecialMention,
    Spoiler,
    Strikethrough,
    Text,
    Timestamp,
    Underline,
    UserMention,
)
from dismark.visitor import walk

# Registry of node type names to classes for deserialization
_NODE_TYPES: dict[str, type[Node]] = {
    "Document": Document,
    "Text": Text,
    "BlockQuote": BlockQuote,
    "Code": Code,
    "Spoiler": Spoiler,
    "URL": URL,
    "CustomEmoji": CustomEmoji,
    "ChannelMention": ChannelMention,
    "RoleMention": RoleMention,
    "UserMention": UserMention,
    "SpecialMention": SpecialMention,
    "Timestamp": Timestamp,
    "Header": Header,
    "BulletList": BulletList,
    "Bold": Bold,
    "Underline": Underline,
    "Italics": Italics,
    "Strikethrough": Strikethrough,
}


def _payload(node: Node) -> dict[str, Any]:
    return {f.name: getattr(node, f.name) for f in fields(node) if f.name != "children"}


def to_dict(node: Node) -> dict[str, Any]:
    """Convert a node and its subtree to a JSON-compatible dict.

    Each dict carries a ``_type`` discriminator, the node's payload fields
    and a ``children`` list.

    Args:
        node: Any dismark node.

    Returns:
        Dict with ``_type``, payload fields and ``children``.

    """
    root: dict[str, Any] = {}
    open_dicts: list[dict[str, Any]] = []

    def _walker(current: Node, entering: bool) -> None:
        if not entering:
            open_dicts.pop()
            return
        data = {"_type": type(current).__name__, **_payload(current), "children": []}
        if open_dicts:
            open_dicts[-1]["children"].append(data)
        else:
            root.update(data)
            data = root
        open_dicts.append(data)

    walk(node, _walker)
    return root


def from_dict(data: dict[str, Any]) -> Node:
    """Reconstruct a node tree from a dict produced by ``to_dict``.

    Args:
        data: Dict with ``_type`` discriminator.

    Returns:
        Reconstructed node.

    Raises:
        ValueError: If ``_type`` is missing or unknown.

    """
    root = _build_node(data)
    stack: list[tuple[Node, list[dict[str, Any]]]] = [(root, data.get("children", []))]
    while stack:
        parent, children = stack.pop()
        for child_data in children:
            child = _build_node(child_data)
            parent.add_child(child)
            stack.append((child, child_data.get("children", [])))
    return root


def _build_node(data: dict[str, Any]) -> Node:
    type_name = data.get("_type")
    if type_name is None:
        msg = "Missing '_type' field in node dict"
        raise ValueError(msg)

    cls = _NODE_TYPES.get(type_name)
    if cls is None:
        msg = f"Unknown node type: {type_name!r}"
        raise ValueError(msg)

    kwargs = {k: v for k, v in data.items() if k not in ("_type", "children")}
    return cls(**kwargs)


def to_json(node: Node, *, indent: int | None = None) -> str:
    """Serialize a node tree to a JSON string (sorted keys)."""
    return json.dumps(to_dict(node), sort_keys=True, indent=indent, ensure_ascii=False)


def from_json(json_str: str) -> Node:
    """Deserialize a node tree from a JSON string."""
    return from_dict(json.loads(json_str))


__all__ = ["from_dict", "from_json", "to_dict", "to_json"]
