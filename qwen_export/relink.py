"""
relink.py

Stage: ORDERED NODE IDS -> QUALIFYING NODES (re-linked)

Walks the chosen path and keeps only nodes that become Qwen messages:
- the node has a message
- the role is "user" or "assistant"
- the extracted text is not empty

Then parent/children are rebuilt over the survivors only, in two passes:
1) resolve each survivor's parent by climbing the ORIGINAL parent chain
   until another survivor (or the top) is reached
2) derive every survivor's children from those resolved parents

The raw mapping is never modified.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Dict, List, Optional, Set

from .content import extract_text_from_message
from .model import QualifyingNode
from .paths import parent_of

logger = logging.getLogger(__name__)

ACCEPTED_ROLES = ("user", "assistant")


def normalize_role(role: Any) -> str:
    """
    "user" and "assistant" pass through, other explicit roles ("system",
    "tool", ...) are kept as-is and later filtered. A missing or empty
    role is read as "assistant".
    """
    if role in ACCEPTED_ROLES:
        return role
    if not role:
        return "assistant"
    return str(role)


def message_role(message: Dict[str, Any]) -> str:
    author = message.get("author")
    if not isinstance(author, dict):
        return normalize_role(None)
    return normalize_role(author.get("role"))


def select_qualifying_nodes(mapping: Dict[str, Any], ordered_ids: List[str]) -> List[QualifyingNode]:
    """
    Filter the path down to message-bearing user/assistant nodes with text.
    Survivors keep path order and have no links yet.
    """
    survivors: List[QualifyingNode] = []

    for node_id in ordered_ids:
        node = mapping.get(node_id)
        if not isinstance(node, dict):
            continue

        message = node.get("message")
        if not isinstance(message, dict):
            continue

        role = message_role(message)
        if role not in ACCEPTED_ROLES:
            logger.debug("Skipping node %s with role %r", node_id, role)
            continue

        text = extract_text_from_message(message)
        if not text:
            logger.debug("Skipping node %s with empty content", node_id)
            continue

        survivors.append(QualifyingNode(node_id=node_id, message=message, role=role, text=text))

    return survivors


def find_included_ancestor(mapping: Dict[str, Any], start_id: Optional[str], included: Set[str]) -> Optional[str]:
    """
    Climb the original parent chain from start_id (inclusive) and return the
    first id in `included`, or None when the chain runs out.

    The climb stops after len(mapping) steps or on a repeated id, so cyclic
    parent pointers cannot hang it.
    """
    seen: Set[str] = set()
    current = start_id

    while current and current not in seen and len(seen) <= len(mapping):
        if current in included:
            return current
        seen.add(current)
        current = parent_of(mapping, current)

    return None


def relink_nodes(mapping: Dict[str, Any], survivors: List[QualifyingNode]) -> List[QualifyingNode]:
    """
    Return new QualifyingNode copies with parent_node_id/children_node_ids
    restricted to the survivor set.

    A parent can only be a survivor that comes earlier in path order. On a
    well-formed tree every ancestor already does; on a broken export with a
    parent cycle this keeps the links acyclic.
    """
    # Pass 1: resolved parent per survivor.
    resolved_parent: Dict[str, Optional[str]] = {}
    earlier: Set[str] = set()
    for n in survivors:
        resolved_parent[n.node_id] = find_included_ancestor(mapping, parent_of(mapping, n.node_id), earlier)
        earlier.add(n.node_id)

    # Pass 2: children grouped by resolved parent, in survivor order.
    children: Dict[str, List[str]] = {n.node_id: [] for n in survivors}
    for n in survivors:
        parent = resolved_parent[n.node_id]
        if parent is not None:
            children[parent].append(n.node_id)

    return [
        replace(
            n,
            parent_node_id=resolved_parent[n.node_id],
            children_node_ids=children[n.node_id],
        )
        for n in survivors
    ]


def qualifying_nodes(mapping: Dict[str, Any], ordered_ids: List[str]) -> List[QualifyingNode]:
    """Filter the path, then rebuild links among the survivors."""
    return relink_nodes(mapping, select_qualifying_nodes(mapping, ordered_ids))
