"""
Validation of caller-supplied proposal input.

The builders trust their input. Anything that comes from a form, a file or the
command line goes through these helpers first so that malformed input is
reported as a ValidationError instead of ending up in a proposal.
"""

import re
from collections.abc import Mapping
from typing import Any, Sequence, Union

from orchestrator_sdk.errors import InvalidMessageStructure, ValidationError, parse_json_input
from orchestrator_sdk.governance.builder import ParameterSelection
from orchestrator_sdk.governance.messages import CustomMessage
from orchestrator_sdk.governance.params import MODULE_PARAMS
from orchestrator_sdk.tx.types import Coin

_AMOUNT_RE = re.compile(r"^\d+$")


def parse_upgrade_info(text: str) -> str:
    """
    Check that software upgrade info is a JSON object and return it unchanged.

    An empty string is accepted and means "no info".

    Raises:
        JsonParseError: If the text is not JSON
        ValidationError: If it is JSON but not an object
    """
    if not text:
        return text

    parsed = parse_json_input(text, "info")
    if not isinstance(parsed, dict):
        raise ValidationError("info must be a JSON object")
    return text


def parse_custom_messages(text: str) -> list[CustomMessage]:
    """
    Parse a JSON array (or a single object) of messages carrying "@type".

    Example:
        parse_custom_messages('[{"@type": "/cosmos.bank.v1beta1.MsgSend", "from_address": "..."}]')

    Raises:
        JsonParseError: If the text is not JSON
        InvalidMessageStructure: If an entry is not an object with a "/"-prefixed "@type"
    """
    parsed = parse_json_input(text, "messages")
    entries = parsed if isinstance(parsed, list) else [parsed]

    if not entries:
        raise InvalidMessageStructure("Messages array cannot be empty")

    messages = []
    for idx, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise InvalidMessageStructure(f"Message[{idx}] must be an object")
        type_url = entry.get("@type")
        if not isinstance(type_url, str) or not type_url.startswith("/"):
            raise InvalidMessageStructure(f"Message[{idx}] must have an @type starting with /")

        body = {k: v for k, v in entry.items() if k != "@type"}
        authority = body.get("authority", body.get("signer"))
        messages.append(CustomMessage(
            type_url=type_url,
            authority=authority if isinstance(authority, str) else None,
            body=body,
        ))

    return messages


def validate_parameter_selections(selections: Sequence[ParameterSelection]) -> bool:
    """
    Raises:
        ValidationError: On an unknown module or parameter, or a repeated (module, parameter) pair
    """
    seen: set[tuple[str, str]] = set()
    for sel in selections:
        known = MODULE_PARAMS.get(sel.module)
        if known is None:
            raise ValidationError(f"Unknown module: {sel.module!r}. Supported modules: {sorted(MODULE_PARAMS)}")
        if sel.parameter not in known:
            raise ValidationError(f"Unknown {sel.module} parameter: {sel.parameter!r}")

        key = (sel.module, sel.parameter)
        if key in seen:
            raise ValidationError(f"Parameter {sel.module}.{sel.parameter} is selected more than once")
        seen.add(key)

    return True


def validate_coin(coin: Union[Coin, Mapping[str, Any]]) -> bool:
    if isinstance(coin, Coin):
        amount, denom = coin.amount, coin.denom
    elif isinstance(coin, Mapping):
        amount, denom = coin.get("amount"), coin.get("denom")
    else:
        raise ValidationError("Coin must be an object")

    if not isinstance(amount, str) or not _AMOUNT_RE.match(amount):
        raise ValidationError(f"Amount must be a non-negative integer string, got {amount!r}")
    if not isinstance(denom, str) or not 3 <= len(denom) <= 128:
        raise ValidationError(f"Denom must be 3-128 characters, got {denom!r}")

    return True
