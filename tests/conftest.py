"""Shared builders for ChatGPT export mappings."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import pytest


def make_message(
    role: Optional[str],
    parts: Optional[List[Any]] = None,
    message_id: Optional[str] = None,
    create_time: Any = None,
    model_slug: Optional[str] = None,
) -> Dict[str, Any]:
    message: Dict[str, Any] = {
        "author": {"role": role},
        "content": {"content_type": "text", "parts": parts if parts is not None else []},
        "create_time": create_time,
        "metadata": {},
    }
    if message_id is not None:
        message["id"] = message_id
    if model_slug is not None:
        message["metadata"]["model_slug"] = model_slug
    return message


def make_node(
    node_id: str,
    parent: Optional[str] = None,
    children: Optional[List[str]] = None,
    message: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    return {
        "id": node_id,
        "parent": parent,
        "children": list(children or []),
        "message": message,
    }


def chain(*pairs) -> Dict[str, Any]:
    """
    Build a single-branch mapping from (node_id, message) pairs, each node
    the parent of the next.
    """
    mapping: Dict[str, Any] = {}
    ids = [node_id for node_id, _ in pairs]
    for i, (node_id, message) in enumerate(pairs):
        parent = ids[i - 1] if i > 0 else None
        children = [ids[i + 1]] if i + 1 < len(ids) else []
        mapping[node_id] = make_node(node_id, parent, children, message)
    return mapping


@pytest.fixture
def linear_conversation() -> Dict[str, Any]:
    """root -> a (user) -> b (assistant) -> c (system) -> d (assistant)."""
    mapping = chain(
        ("r", None),
        ("a", make_message("user", ["hi"], message_id="a", create_time=1700000001)),
        ("b", make_message("assistant", ["hello"], message_id="b", create_time=1700000002, model_slug="gpt-4o")),
        ("c", make_message("system", ["ignored"], message_id="c")),
        ("d", make_message("assistant", ["bye"], message_id="d", create_time=1700000004.9)),
    )
    return {
        "conversation_id": "conv-1",
        "title": "Greetings",
        "create_time": 1700000000.5,
        "update_time": 1700000100.2,
        "current_node": "d",
        "default_model_slug": "gpt-4",
        "mapping": mapping,
    }


@pytest.fixture
def branched_mapping() -> Dict[str, Any]:
    """
    root -> u1 (user) -> a1 (assistant) -> u2 (user) -> a2 (assistant)
                      -> a1b (assistant, regenerated)  -> u3 (user)
    """
    return {
        "root": make_node("root", None, ["u1"]),
        "u1": make_node("u1", "root", ["a1", "a1b"], make_message("user", ["question"], "u1")),
        "a1": make_node("a1", "u1", ["u2"], make_message("assistant", ["first answer"], "a1")),
        "a1b": make_node("a1b", "u1", ["u3"], make_message("assistant", ["second answer"], "a1b")),
        "u2": make_node("u2", "a1", ["a2"], make_message("user", ["follow up"], "u2")),
        "a2": make_node("a2", "u2", [], make_message("assistant", ["done"], "a2")),
        "u3": make_node("u3", "a1b", [], make_message("user", ["other branch"], "u3")),
    }
