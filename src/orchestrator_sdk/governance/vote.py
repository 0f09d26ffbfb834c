"""
Vote message helpers and proposal id extraction.
"""

from collections.abc import Mapping
from enum import IntEnum
from typing import Any, Optional, Sequence, Union

from orchestrator_sdk.governance.params import MSG_TYPES
from orchestrator_sdk.tx.types import EncodeObject


class VoteOption(IntEnum):
    """cosmos.gov.v1.VoteOption"""
    UNSPECIFIED = 0
    YES = 1
    ABSTAIN = 2
    NO = 3
    NO_WITH_VETO = 4


def create_vote_message(
    proposal_id: str,
    voter: str,
    option: VoteOption = VoteOption.YES,
) -> EncodeObject:
    return EncodeObject(
        type_url=MSG_TYPES.VOTE,
        value={
            "proposalId": str(proposal_id),
            "voter": voter,
            "option": int(option),
            "metadata": "",
        },
    )


def create_weighted_vote_message(
    proposal_id: str,
    voter: str,
    options: Sequence[tuple[VoteOption, str]],
) -> EncodeObject:
    """
    Split vote, e.g. [(VoteOption.YES, "0.7"), (VoteOption.ABSTAIN, "0.3")].

    Weights are decimal strings and are expected to sum to 1; the chain
    enforces it, this helper does not.
    """
    return EncodeObject(
        type_url=MSG_TYPES.VOTE_WEIGHTED,
        value={
            "proposalId": str(proposal_id),
            "voter": voter,
            "options": [{"option": int(option), "weight": str(weight)} for option, weight in options],
            "metadata": "",
        },
    )


def generate_auto_vote_message(proposal_id: str, voter_address: str) -> EncodeObject:
    """YES vote cast right after submitting a proposal."""
    return create_vote_message(proposal_id, voter_address, VoteOption.YES)


def _get(obj: Any, name: str) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(name)
    return getattr(obj, name, None)


def extract_proposal_id(tx_result: Union[Mapping[str, Any], Any, None]) -> Optional[str]:
    """
    Find the proposal id emitted by the gov module's `submit_proposal` event.

    Args:
        tx_result: BroadcastResult or a tx response mapping with an `events` list

    Returns:
        The proposal id, or None if the result carries no such event
    """
    if tx_result is None:
        return None

    events = _get(tx_result, "events")
    if not events:
        return None

    submit_event = next((e for e in events if _get(e, "type") == "submit_proposal"), None)
    if submit_event is None:
        return None

    for attr in _get(submit_event, "attributes") or []:
        if _get(attr, "key") == "proposal_id":
            value = _get(attr, "value")
            return str(value) if value else None

    return None


_VOTE_OPTION_LABELS = {
    VoteOption.YES: "Yes",
    VoteOption.NO: "No",
    VoteOption.ABSTAIN: "Abstain",
    VoteOption.NO_WITH_VETO: "No With Veto",
}


def format_vote_option(option: Union[VoteOption, int]) -> str:
    return _VOTE_OPTION_LABELS.get(option, "Unspecified")
