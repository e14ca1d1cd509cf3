from __future__ import annotations

from typing import Any, Dict, List, Optional

from .config import ASSET_PLACEHOLDER


def extract_text_from_message(message: Optional[Dict[str, Any]]) -> str:
    """
    Flatten a message's content parts into one display string.

    Typical export shape:
      {"content": {"content_type": "text", "parts": ["hello", "world"]}}

    - string parts are kept verbatim
    - {"text": "..."} parts contribute their text
    - {"asset_pointer": "..."} parts (images, files) become "[Asset]"
    - anything else is dropped

    Returns "" when there is nothing to show.
    """
    if not isinstance(message, dict):
        return ""

    content = message.get("content")
    if not isinstance(content, dict):
        return ""

    parts = content.get("parts")
    if not isinstance(parts, list):
        return ""

    pieces: List[str] = []
    for part in parts:
        if isinstance(part, str):
            pieces.append(part)
        elif isinstance(part, dict):
            text = part.get("text")
            if isinstance(text, str):
                pieces.append(text)
            elif part.get("asset_pointer"):
                pieces.append(ASSET_PLACEHOLDER)

    return "\n".join(pieces).strip()
