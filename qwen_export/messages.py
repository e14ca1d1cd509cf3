"""
messages.py

Stage: QUALIFYING NODE -> QWEN MESSAGE

User and assistant messages have different Qwen shapes:
- user: text goes in `content`, the model slug (if any) in `models`
- assistant: `content` stays "", text goes in a single content_list entry,
  plus `model` and a display `modelName`
"""

from __future__ import annotations

import re
from typing import Any, Dict, Optional

from .model import AssistantMessage, ContentItem, QualifyingNode, QwenMessage, UserMessage
from .timestamps import sanitize_timestamp

_SLUG_SEPARATORS = re.compile(r"[-_]")


def format_model_name(slug: Optional[str]) -> Optional[str]:
    """
    "gpt-4-turbo" -> "Gpt 4 Turbo". Only the first letter of each segment
    is touched.
    """
    if not slug:
        return None
    return " ".join(part[:1].upper() + part[1:] for part in _SLUG_SEPARATORS.split(slug))


def resolve_model_slug(message: Dict[str, Any], default_model: Optional[str]) -> Optional[str]:
    """Message metadata first, then the conversation default."""
    metadata = message.get("metadata")
    if isinstance(metadata, dict) and metadata.get("model_slug"):
        return str(metadata["model_slug"])
    return default_model or None


def build_qwen_message(
    node: QualifyingNode,
    id_of: Dict[str, str],
    default_model: Optional[str] = None,
) -> QwenMessage:
    """
    Project one re-linked node into its Qwen message.

    id_of maps mapping keys to output message ids so parentId/childrenIds
    point at other Qwen messages.
    """
    message_id = id_of.get(node.node_id, node.message_id)
    parent_id = id_of.get(node.parent_node_id) if node.parent_node_id else None
    children_ids = [id_of[c] for c in node.children_node_ids if c in id_of]
    timestamp = sanitize_timestamp(node.message.get("create_time"))
    slug = resolve_model_slug(node.message, default_model)

    if node.role == "assistant":
        return AssistantMessage(
            id=message_id,
            content_list=[ContentItem(content=node.text)],
            model=slug,
            model_name=format_model_name(slug),
            parent_id=parent_id,
            children_ids=children_ids,
            timestamp=timestamp,
        )

    return UserMessage(
        id=message_id,
        content=node.text,
        models=[slug] if slug else [],
        parent_id=parent_id,
        children_ids=children_ids,
        timestamp=timestamp,
    )
