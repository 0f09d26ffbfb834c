"""
Proposal message variants.

Each governance message a proposal can carry is a frozen dataclass tagged with a
MessageKind. `to_json()` renders the chain's JSON shape: an "@type" entry, the
authority field (named "signer" for ERC20 registration) and the variant payload.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Optional

from orchestrator_sdk.errors import InvalidMessageStructure
from orchestrator_sdk.governance.params import GOVERNANCE_AUTHORITY, MSG_TYPES
from orchestrator_sdk.tx.types import Coin, EncodeObject


class MessageKind(str, Enum):
    PARAMS_UPDATE = "params_update"
    COMMUNITY_POOL_SPEND = "community_pool_spend"
    SOFTWARE_UPGRADE = "software_upgrade"
    CANCEL_UPGRADE = "cancel_upgrade"
    IBC_CLIENT_PARAMS = "ibc_client_params"
    REGISTER_PREINSTALLS = "register_preinstalls"
    REGISTER_ERC20 = "register_erc20"
    TOGGLE_CONVERSION = "toggle_conversion"
    CUSTOM = "custom"


@dataclass(frozen=True, kw_only=True)
class ProposalMessage:
    type_url: str
    authority: Optional[str] = GOVERNANCE_AUTHORITY

    kind: ClassVar[MessageKind]
    authority_field: ClassVar[str] = "authority"

    def __post_init__(self):
        if not isinstance(self.type_url, str) or not self.type_url.startswith("/"):
            raise InvalidMessageStructure(f"Message type must start with '/', got {self.type_url!r}")

    def payload(self) -> dict[str, Any]:
        return {}

    def to_json(self) -> dict[str, Any]:
        data: dict[str, Any] = {"@type": self.type_url}
        if self.authority is not None:
            data[self.authority_field] = self.authority
        data.update(self.payload())
        return data

    def to_encode_object(self) -> EncodeObject:
        """Protobuf JSON form (without "@type") for signing clients."""
        value = self.to_json()
        del value["@type"]
        return EncodeObject(type_url=self.type_url, value=value)


@dataclass(frozen=True, kw_only=True)
class ParamsUpdateMessage(ProposalMessage):
    params: dict[str, Any]
    kind = MessageKind.PARAMS_UPDATE

    def payload(self) -> dict[str, Any]:
        return {"params": dict(self.params)}


@dataclass(frozen=True, kw_only=True)
class CommunityPoolSpendMessage(ProposalMessage):
    type_url: str = MSG_TYPES.COMMUNITY_POOL_SPEND
    recipient: str
    amount: tuple[Coin, ...]
    kind = MessageKind.COMMUNITY_POOL_SPEND

    def payload(self) -> dict[str, Any]:
        return {"recipient": self.recipient, "amount": [c.to_dict() for c in self.amount]}


@dataclass(frozen=True)
class UpgradePlan:
    name: str
    height: str
    info: str

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "height": self.height, "info": self.info}


@dataclass(frozen=True, kw_only=True)
class SoftwareUpgradeMessage(ProposalMessage):
    type_url: str = MSG_TYPES.SOFTWARE_UPGRADE
    plan: UpgradePlan
    kind = MessageKind.SOFTWARE_UPGRADE

    def payload(self) -> dict[str, Any]:
        return {"plan": self.plan.to_dict()}


@dataclass(frozen=True, kw_only=True)
class CancelUpgradeMessage(ProposalMessage):
    type_url: str = MSG_TYPES.CANCEL_UPGRADE
    kind = MessageKind.CANCEL_UPGRADE


@dataclass(frozen=True, kw_only=True)
class IbcClientParamsMessage(ProposalMessage):
    type_url: str = MSG_TYPES.IBC_CLIENT_UPDATE_PARAMS
    allowed_clients: tuple[str, ...]
    kind = MessageKind.IBC_CLIENT_PARAMS

    def payload(self) -> dict[str, Any]:
        return {"params": {"allowed_clients": list(self.allowed_clients)}}


@dataclass(frozen=True)
class Preinstall:
    name: str
    address: str
    code: str

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "address": self.address, "code": self.code}


@dataclass(frozen=True, kw_only=True)
class RegisterPreinstallsMessage(ProposalMessage):
    type_url: str = MSG_TYPES.VM_REGISTER_PREINSTALLS
    preinstalls: tuple[Preinstall, ...]
    kind = MessageKind.REGISTER_PREINSTALLS

    def payload(self) -> dict[str, Any]:
        return {"preinstalls": [p.to_dict() for p in self.preinstalls]}


@dataclass(frozen=True, kw_only=True)
class RegisterErc20Message(ProposalMessage):
    """The ERC20 module names its authority field `signer`."""
    type_url: str = MSG_TYPES.ERC20_REGISTER
    erc20addresses: tuple[str, ...]
    kind = MessageKind.REGISTER_ERC20
    authority_field = "signer"

    @property
    def signer(self) -> Optional[str]:
        return self.authority

    def payload(self) -> dict[str, Any]:
        return {"erc20addresses": list(self.erc20addresses)}


@dataclass(frozen=True, kw_only=True)
class ToggleConversionMessage(ProposalMessage):
    type_url: str = MSG_TYPES.ERC20_TOGGLE_CONVERSION
    token: str
    kind = MessageKind.TOGGLE_CONVERSION

    def payload(self) -> dict[str, Any]:
        return {"token": self.token}


@dataclass(frozen=True, kw_only=True)
class CustomMessage(ProposalMessage):
    """
    Caller-supplied message carried verbatim. `body` holds every field except
    "@type"; the authority, if any, is whatever the body contains.
    """
    authority: Optional[str] = None
    body: dict[str, Any] = field(default_factory=dict)
    kind = MessageKind.CUSTOM

    def to_json(self) -> dict[str, Any]:
        return {"@type": self.type_url, **self.body}
