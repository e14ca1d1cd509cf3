"""
model.py

This file defines the *internal* data shapes used by the converter.

Think of this as:
- "Which export nodes survived filtering, and how are they linked now?"
- "What does a Qwen message / chat look like?"

It does NOT parse raw export JSON directly.
It does NOT read or write files.

Output shapes carry a to_dict() that produces the exact Qwen JSON keys
(camelCase where Qwen uses camelCase).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union


@dataclass(frozen=True)
class QualifyingNode:
    """
    An export node that survived filtering.

    node_id:
      - the mapping key of the node
    message:
      - the raw export message dict (never mutated)
    role:
      - "user" or "assistant"
    text:
      - extracted, non-empty display text
    parent_node_id:
      - nearest surviving ancestor (mapping key), or None
    children_node_ids:
      - surviving nodes whose resolved parent is this node, in path order
    """

    node_id: str
    message: Dict[str, Any]
    role: str
    text: str
    parent_node_id: Optional[str] = None
    children_node_ids: List[str] = field(default_factory=list)

    @property
    def message_id(self) -> str:
        return str(self.message.get("id") or self.node_id)


@dataclass
class ContentItem:
    """One entry of an assistant message's content_list."""

    content: str
    phase: str = "answer"
    status: str = "finished"
    role: str = "assistant"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "content": self.content,
            "phase": self.phase,
            "status": self.status,
            "extra": None,
            "role": self.role,
            "usage": None,
        }


@dataclass
class UserMessage:
    id: str
    content: str
    models: List[str] = field(default_factory=list)
    parent_id: Optional[str] = None
    children_ids: List[str] = field(default_factory=list)
    timestamp: Optional[int] = None

    role = "user"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "role": self.role,
            "content": self.content,
            "models": list(self.models),
            "chat_type": None,
            "sub_chat_type": None,
            "edited": False,
            "error": None,
            "extra": None,
            "feature_config": None,
            "parentId": self.parent_id,
            "turn_id": None,
            "childrenIds": list(self.children_ids),
            "files": [],
            "timestamp": self.timestamp,
        }


@dataclass
class AssistantMessage:
    """
    Assistant reply. The body lives in content_list; content stays "".
    """

    id: str
    content_list: List[ContentItem]
    model: Optional[str] = None
    model_name: Optional[str] = None
    parent_id: Optional[str] = None
    children_ids: List[str] = field(default_factory=list)
    timestamp: Optional[int] = None
    content: str = ""

    role = "assistant"

    @property
    def models(self) -> List[str]:
        return []

    def to_dict(self) -> Dict[str, Any]:
        return {
            "role": self.role,
            "content": self.content,
            "reasoning_content": None,
            "chat_type": None,
            "sub_chat_type": None,
            "model": self.model,
            "modelName": self.model_name,
            "modelIdx": 0,
            "id": self.id,
            "parentId": self.parent_id,
            "childrenIds": list(self.children_ids),
            "feature_config": None,
            "content_list": [item.to_dict() for item in self.content_list],
            "is_stop": False,
            "edited": False,
            "error": None,
            "meta": {},
            "extra": None,
            "feedbackId": None,
            "turn_id": None,
            "annotation": None,
            "done": True,
            "info": None,
            "timestamp": self.timestamp,
        }


QwenMessage = Union[UserMessage, AssistantMessage]


@dataclass
class QwenChat:
    """
    One converted conversation.

    messages:
      - linear message list (path order)
    current_id:
      - last assistant message id, else last message id, else None
    current_response_ids:
      - [current_id] only when current_id is an assistant message
    models:
      - first-seen, de-duplicated model slugs; None when there are none
    """

    id: str
    title: str
    user_id: str
    messages: List[QwenMessage] = field(default_factory=list)
    current_id: Optional[str] = None
    current_response_ids: List[str] = field(default_factory=list)
    models: Optional[List[str]] = None
    created_at: Optional[int] = None
    updated_at: Optional[int] = None

    @property
    def history_messages(self) -> Dict[str, QwenMessage]:
        return {message.id: message for message in self.messages}

    def meta(self) -> Dict[str, Any]:
        if self.created_at:
            return {"timestamp": self.created_at * 1000, "tags": []}
        return {"tags": []}

    def to_dict(self) -> Dict[str, Any]:
        messages = [message.to_dict() for message in self.messages]
        history = {mid: message.to_dict() for mid, message in self.history_messages.items()}
        models = list(self.models) if self.models else None

        return {
            "id": self.id,
            "user_id": self.user_id,
            "title": self.title,
            "chat": {
                "history": {
                    "messages": history,
                    "currentId": self.current_id,
                    "currentResponseIds": list(self.current_response_ids),
                },
                "models": models,
                "messages": messages,
            },
            "updated_at": self.updated_at,
            "created_at": self.created_at,
            "share_id": None,
            "archived": False,
            "pinned": False,
            "meta": self.meta(),
            "folder_id": None,
            "currentResponseIds": list(self.current_response_ids),
            "currentId": self.current_id,
            "chat_type": None,
            "models": list(models) if models else None,
        }
