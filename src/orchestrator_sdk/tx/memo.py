"""
Memo formatting utilities.
"""

import json
from typing import Any, Optional

from orchestrator_sdk.errors import ValidationError

MAX_MEMO_LENGTH = 256

APP_IDENTIFIER = "Chain Orchestrator"

_SEPARATOR = " | "


def format_memo(memo: str) -> str:
    """
    Strip non-printable characters and truncate to the chain's memo limit.

    Examples:
        >>> format_memo("Hello\\x00World")
        'HelloWorld'
        >>> len(format_memo("A" * 300))
        256
    """
    if not memo:
        return ""

    cleaned = "".join(ch for ch in memo if 0x20 <= ord(ch) <= 0x7E)

    if len(cleaned) > MAX_MEMO_LENGTH:
        return cleaned[:MAX_MEMO_LENGTH - 3] + "..."

    return cleaned


def create_app_memo(action: str, metadata: Optional[dict[str, Any]] = None) -> str:
    """
    Memo tagged with the application identifier, e.g.
    'Chain Orchestrator: Submit Proposal | {"type":"param_change"}'.
    """
    base = f"{APP_IDENTIFIER}: {action}"

    if not metadata:
        return base

    try:
        meta_str = json.dumps(metadata, separators=(",", ":"))
    except (TypeError, ValueError):
        return base

    available = MAX_MEMO_LENGTH - len(base) - len(_SEPARATOR)
    if len(meta_str) <= available:
        return f"{base}{_SEPARATOR}{meta_str}"

    return f"{base}{_SEPARATOR}{meta_str[:available - 3]}..."


def create_proposal_memo(proposal_type: str, proposal_title: Optional[str] = None) -> str:
    metadata = {"type": proposal_type}
    if proposal_title:
        metadata["title"] = proposal_title
    return create_app_memo("Submit Proposal", metadata)


def create_vote_memo(proposal_id: str, option: str) -> str:
    return create_app_memo("Vote", {"proposal": proposal_id, "vote": option})


def validate_memo_length(memo: str) -> bool:
    if len(memo) > MAX_MEMO_LENGTH:
        raise ValidationError(f"Memo exceeds maximum length of {MAX_MEMO_LENGTH} characters")
    return True


def extract_metadata(memo: str) -> Optional[dict[str, Any]]:
    """Parse the JSON metadata out of an app-generated memo, or None."""
    if not memo.startswith(APP_IDENTIFIER):
        return None

    parts = memo.split(_SEPARATOR, 1)
    if len(parts) < 2:
        return None

    try:
        parsed = json.loads(parts[1])
    except json.JSONDecodeError:
        return None

    return parsed if isinstance(parsed, dict) else None
