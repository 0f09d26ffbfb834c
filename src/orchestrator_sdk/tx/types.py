from dataclasses import dataclass, field
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class Coin:
    amount: str
    denom: str

    def to_dict(self) -> dict[str, str]:
        return {"amount": self.amount, "denom": self.denom}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'Coin':
        return cls(amount=str(data["amount"]), denom=str(data["denom"]))


@dataclass(frozen=True)
class Fee:
    """Transaction fee: coins paid, gas limit, and optional payer/granter."""
    amount: tuple[Coin, ...]
    gas: str
    payer: Optional[str] = None
    granter: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "amount": [c.to_dict() for c in self.amount],
            "gas": self.gas,
        }
        if self.payer:
            data["payer"] = self.payer
        if self.granter:
            data["granter"] = self.granter
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'Fee':
        return cls(
            amount=tuple(Coin.from_dict(c) for c in data["amount"]),
            gas=str(data["gas"]),
            payer=data.get("payer") or None,
            granter=data.get("granter") or None,
        )


@dataclass(frozen=True)
class EncodeObject:
    """
    A message ready to be handed to a signing client.

    `value` is either a JSON-shaped mapping (field names as in the protobuf
    JSON mapping) or an already constructed protobuf message.
    """
    type_url: str
    value: Any


@dataclass
class BroadcastResult:
    code: int
    transaction_hash: str
    raw_log: str = ""
    height: int = 0
    gas_wanted: int = 0
    gas_used: int = 0
    codespace: str = ""
    events: list[dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_tx_response(cls, tx_response: Mapping[str, Any]) -> 'BroadcastResult':
        """Build from the `tx_response` object returned by the LCD tx endpoints."""
        return cls(
            code=int(tx_response.get("code", 0) or 0),
            transaction_hash=tx_response.get("txhash", ""),
            raw_log=tx_response.get("raw_log", "") or "",
            height=int(tx_response.get("height", 0) or 0),
            gas_wanted=int(tx_response.get("gas_wanted", 0) or 0),
            gas_used=int(tx_response.get("gas_used", 0) or 0),
            codespace=tx_response.get("codespace", "") or "",
            events=list(tx_response.get("events") or []),
        )


@dataclass(frozen=True)
class WalletAccount:
    """Account exposed by a signing backend."""
    address: str
    pubkey: bytes
    algorithm: str = "secp256k1"
