"""
convert.py

Conversion entry point.

Goal:
- Load a ChatGPT export JSON file (conversations.json)
- Order conversations newest first (update_time, else create_time, else 0)
- Optionally keep only the latest N
- For each conversation:
    - pick the linear path through the message tree
    - keep user/assistant messages with text, re-linked among themselves
    - build the Qwen chat record
- Write the Qwen export envelope: {"success", "request_id", "data"}

Fatal problems (missing file, bad JSON, wrong top-level shape) stop the run
with a message. Odd conversations never do.
"""

from __future__ import annotations

import argparse
import json
import logging
import uuid
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from .config import DEFAULT_USER_ID, ConvertConfig
from .conversation import transform_conversation
from .log_config import setup_logger
from .model import QwenChat
from .timestamps import comparable_timestamp

logger = logging.getLogger(__name__)


def sort_conversations(conversations: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Newest first. Ties keep input order."""
    return sorted(conversations, key=comparable_timestamp, reverse=True)


def convert_conversations(conversations: Sequence[Any], config: Optional[ConvertConfig] = None) -> List[QwenChat]:
    """
    Convert an already-parsed export list.

    Non-dict entries are skipped. The index used for placeholder ids is the
    position after sorting and limiting.
    """
    config = config or ConvertConfig()

    raw_convos: List[Dict[str, Any]] = []
    for i, item in enumerate(conversations):
        if isinstance(item, dict):
            raw_convos.append(item)
        else:
            logger.warning("Skipping entry %d: expected an object, got %s", i, type(item).__name__)

    ordered = sort_conversations(raw_convos)
    if config.limit is not None:
        ordered = ordered[: config.limit]

    return [transform_conversation(raw, index, config) for index, raw in enumerate(ordered)]


def build_envelope(chats: List[QwenChat]) -> Dict[str, Any]:
    return {
        "success": True,
        "request_id": str(uuid.uuid4()),
        "data": [chat.to_dict() for chat in chats],
    }


def load_conversations(input_path: Path) -> List[Any]:
    if not input_path.exists():
        raise SystemExit(f"Input file not found: {input_path}")

    try:
        raw_text = input_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SystemExit(f"Failed to read input file at {input_path}: {exc}") from exc

    try:
        raw_data = json.loads(raw_text)
    except json.JSONDecodeError as exc:
        raise SystemExit(f"Input file is not valid JSON: {exc}") from exc

    if not isinstance(raw_data, list):
        raise SystemExit("Expected the top-level JSON to be a list of conversations.")

    return raw_data


def convert_file(input_path: Path, config: Optional[ConvertConfig] = None) -> Dict[str, Any]:
    """
    Read an export file and return the Qwen envelope (not yet written).
    """
    conversations = load_conversations(input_path)
    chats = convert_conversations(conversations, config)
    return build_envelope(chats)


def write_output(out_path: Path, envelope: Dict[str, Any]) -> None:
    try:
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(
            json.dumps(envelope, indent=2, ensure_ascii=False),
            encoding="utf-8",
        )
    except OSError as exc:
        raise SystemExit(f"Failed to write output file at {out_path}: {exc}") from exc


def positive_int(value: str) -> int:
    try:
        parsed = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"limit must be a positive integer, got {value!r}")
    if parsed <= 0:
        raise argparse.ArgumentTypeError(f"limit must be a positive integer, got {value!r}")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=(
            "Convert a ChatGPT export conversations.json into the Qwen chat "
            "export format (one linear message list per chat)."
        )
    )

    parser.add_argument("input", help="Path to the ChatGPT conversations.json")
    parser.add_argument("output", help="Output JSON file path")

    # Bare trailing number is accepted as the limit too: `in.json out.json 20`.
    parser.add_argument(
        "count",
        nargs="?",
        type=positive_int,
        default=None,
        help="Same as --limit",
    )
    parser.add_argument(
        "--limit",
        type=positive_int,
        default=None,
        help="Only convert the N most recently updated conversations",
    )
    parser.add_argument(
        "--user-id",
        default=DEFAULT_USER_ID,
        help=f"Owner id written into every chat (defaults to {DEFAULT_USER_ID})",
    )
    parser.add_argument(
        "--default-model",
        default=None,
        help="Model slug used instead of each conversation's default_model_slug",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log skipped nodes and other details",
    )
    return parser


def config_from_args(args: argparse.Namespace) -> ConvertConfig:
    return ConvertConfig(
        limit=args.limit if args.limit is not None else args.count,
        user_id=args.user_id,
        default_model=args.default_model or None,
        verbose=args.verbose,
    )


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    config = config_from_args(args)
    setup_logger(verbose=config.verbose)

    input_path = Path(args.input)
    out_path = Path(args.output)

    envelope = convert_file(input_path, config)
    write_output(out_path, envelope)

    limit_info = f" (latest {config.limit})" if config.limit else ""

    print()
    print("=" * 72)
    print("Conversion complete")
    print("=" * 72)
    print(f"Input:  {input_path}")
    print(f"Output: {out_path}")
    print(f"Conversations: {len(envelope['data'])}{limit_info}")
    print()


if __name__ == "__main__":
    main()
