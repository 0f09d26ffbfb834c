from dataclasses import dataclass
from typing import Sequence

from orchestrator_sdk.tx.types import Coin, EncodeObject

MSG_SEND_TYPE_URL = "/cosmos.bank.v1beta1.MsgSend"


@dataclass
class SendOutput:
    to_addr: str
    amount: list[Coin]


def build_send_messages(from_addr: str, outputs: Sequence[SendOutput]) -> list[EncodeObject]:
    """
    Build one MsgSend per recipient.

    Args:
        from_addr: Sender bech32 address
        outputs: Recipients and the coins each one receives

    Returns:
        MsgSend messages in the same order as `outputs`
    """
    return [
        EncodeObject(
            type_url=MSG_SEND_TYPE_URL,
            value={
                "fromAddress": from_addr,
                "toAddress": o.to_addr,
                "amount": [c.to_dict() for c in o.amount],
            },
        )
        for o in outputs
    ]
