"""
paths.py

Stage: RAW MAPPING -> ORDERED NODE IDS

Picks the single linear path through a conversation tree:
- if the conversation points at a current_node, take its ancestors
  (root first) and then keep descending from there
- otherwise descend from the first root

At every branch point the FIRST listed child wins. Sibling branches
(regenerations, edits) are dropped from the output.

Every walk keeps a visited set so broken exports with cycles still finish.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Set

logger = logging.getLogger(__name__)


def parent_of(mapping: Dict[str, Any], node_id: str) -> Optional[str]:
    node = mapping.get(node_id)
    if not isinstance(node, dict):
        return None
    parent = node.get("parent")
    return parent if isinstance(parent, str) and parent else None


def children_of(mapping: Dict[str, Any], node_id: str) -> List[str]:
    node = mapping.get(node_id)
    if not isinstance(node, dict):
        return []
    kids = node.get("children") or []
    if not isinstance(kids, list):
        return []
    # Ids must be strings; anything else in the export is ignored.
    return [k for k in kids if isinstance(k, str) and k]


def find_root_ids(mapping: Dict[str, Any]) -> List[str]:
    """
    Roots are nodes without a parent, or whose parent is missing from the
    mapping. A parent that is not a string id counts as no parent. Order
    follows the mapping's own key order.
    """
    roots: List[str] = []
    for node_id, node in mapping.items():
        if not isinstance(node, dict):
            continue
        parent = node.get("parent")
        if not isinstance(parent, str) or not parent or parent not in mapping:
            roots.append(node_id)
    return roots


def get_path_to_root(mapping: Dict[str, Any], node_id: str) -> List[str]:
    """
    Ancestors of node_id (inclusive), root first.
    """
    path: List[str] = []
    seen: Set[str] = set()
    current: Optional[str] = node_id

    while current and current in mapping and current not in seen:
        seen.add(current)
        path.append(current)
        current = parent_of(mapping, current)

    if current in seen:
        logger.debug("Parent cycle detected at node %s", current)

    path.reverse()
    return path


def traverse_from_node(mapping: Dict[str, Any], node_id: Optional[str], visited: Set[str]) -> List[str]:
    """
    Depth-first descent from node_id, always taking the first child that
    can still be entered (present in the mapping and not visited yet).

    visited is updated in place. A node that was already visited yields an
    empty continuation.
    """
    sequence: List[str] = []
    current = node_id

    while current and current not in visited:
        visited.add(current)
        if current not in mapping:
            break
        sequence.append(current)

        nxt: Optional[str] = None
        for child_id in children_of(mapping, current):
            if child_id not in visited and child_id in mapping:
                nxt = child_id
                break
        current = nxt

    return sequence


def expand_path(mapping: Dict[str, Any], ancestors: List[str]) -> List[str]:
    """
    Extend a root-first ancestor path forward.

    The first ancestor that has children gets a first-child descent appended
    right after it and extension stops there. For a root with children that
    means the descent starts at the root's first child, whichever branch
    current_node sits on. The result has no duplicates and keeps first-seen
    order.
    """
    result: List[str] = []
    for node_id in ancestors:
        result.append(node_id)
        kids = children_of(mapping, node_id)
        if kids:
            result.extend(traverse_from_node(mapping, kids[0], set(result)))
            break

    return list(dict.fromkeys(result))


def reconstruct_message_path(conversation: Dict[str, Any]) -> List[str]:
    """
    Ordered node ids for one conversation, or [] for empty/malformed trees.
    """
    mapping = conversation.get("mapping")
    if not isinstance(mapping, dict) or not mapping:
        return []

    roots = find_root_ids(mapping)
    if not roots:
        logger.debug("No root node found in %d-node mapping", len(mapping))
        return []

    current_node = conversation.get("current_node")
    if isinstance(current_node, str) and current_node in mapping:
        return expand_path(mapping, get_path_to_root(mapping, current_node))

    return traverse_from_node(mapping, roots[0], set())
