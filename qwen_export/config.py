"""
config.py

Run options shared by the converter stages.

Values come from the command line (see convert.py). The core only reads them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

DEFAULT_USER_ID = "00000000-0000-0000-0000-000000000000"
DEFAULT_TITLE = "Untitled Conversation"
ASSET_PLACEHOLDER = "[Asset]"


@dataclass(frozen=True)
class ConvertConfig:
    """
    Options for one conversion run.

    - limit: keep only the N most recent conversations (None = all)
    - user_id: owner id written into every output chat
    - default_model: when set, replaces every conversation's default_model_slug
    - verbose: DEBUG logging on the console
    """

    limit: Optional[int] = None
    user_id: str = DEFAULT_USER_ID
    default_model: Optional[str] = None
    verbose: bool = False
