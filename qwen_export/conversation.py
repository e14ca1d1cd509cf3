from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from .config import DEFAULT_TITLE, ConvertConfig
from .messages import build_qwen_message
from .model import QwenChat, QwenMessage
from .paths import reconstruct_message_path
from .relink import qualifying_nodes
from .timestamps import sanitize_timestamp

logger = logging.getLogger(__name__)


def collect_models(messages: List[QwenMessage]) -> List[str]:
    """
    Every assistant model plus every entry of a message's own `models`
    list, de-duplicated in first-seen order.
    """
    seen: Dict[str, None] = {}
    for message in messages:
        if message.role == "assistant" and message.model:
            seen.setdefault(message.model)
        for model in message.models:
            if model:
                seen.setdefault(model)
    return list(seen)


def pick_current(messages: List[QwenMessage]) -> Optional[QwenMessage]:
    """Last assistant message, else the last message, else None."""
    for message in reversed(messages):
        if message.role == "assistant":
            return message
    return messages[-1] if messages else None


def conversation_id(raw: Dict[str, Any], index: int) -> str:
    cid = raw.get("conversation_id") or raw.get("id")
    if cid:
        return str(cid)
    return f"conversation-{index}"


def transform_conversation(raw: Dict[str, Any], index: int, config: Optional[ConvertConfig] = None) -> QwenChat:
    """
    Convert one raw export conversation into a QwenChat.

    - selects the linear path (first child wins at branches)
    - keeps user/assistant nodes with text, re-linked among themselves
    - projects them into Qwen messages and derives the chat pointers

    Never raises on odd data: an empty or broken mapping gives an empty chat.
    """
    config = config or ConvertConfig()

    mapping = raw.get("mapping")
    if not isinstance(mapping, dict):
        mapping = {}

    ordered_ids = reconstruct_message_path(raw)
    nodes = qualifying_nodes(mapping, ordered_ids)

    id_of = {n.node_id: n.message_id for n in nodes}
    default_model = config.default_model or raw.get("default_model_slug") or None
    messages = [build_qwen_message(n, id_of, default_model) for n in nodes]

    current = pick_current(messages)
    current_id = current.id if current else None
    current_response_ids = [current_id] if current is not None and current.role == "assistant" else []

    models = collect_models(messages)

    create_time = raw.get("create_time")
    update_time = raw.get("update_time")
    created_at = sanitize_timestamp(create_time)
    updated_at = sanitize_timestamp(update_time if update_time is not None else create_time)

    chat = QwenChat(
        id=conversation_id(raw, index),
        title=str(raw.get("title") or DEFAULT_TITLE),
        user_id=config.user_id,
        messages=messages,
        current_id=current_id,
        current_response_ids=current_response_ids,
        models=models or None,
        created_at=created_at,
        updated_at=updated_at,
    )

    logger.debug(
        "Conversation %s: %d path node(s), %d message(s)",
        chat.id,
        len(ordered_ids),
        len(messages),
    )
    return chat
