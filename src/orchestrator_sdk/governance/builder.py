"""
Proposal message builders.

Turns structured proposal input into ProposalMessage variants and assembles them
into a submittable proposal. Builders are pure and assume their input has
already been validated (see orchestrator_sdk.governance.inputs); they do not
re-check addresses or amounts.
"""

import json
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional, Sequence, Union

from orchestrator_sdk.config import ChainConfig
from orchestrator_sdk.errors import UnknownModuleError
from orchestrator_sdk.governance.messages import (
    CancelUpgradeMessage,
    CommunityPoolSpendMessage,
    IbcClientParamsMessage,
    ParamsUpdateMessage,
    Preinstall,
    ProposalMessage,
    RegisterErc20Message,
    RegisterPreinstallsMessage,
    SoftwareUpgradeMessage,
    ToggleConversionMessage,
    UpgradePlan,
)
from orchestrator_sdk.governance.params import (
    GOVERNANCE_AUTHORITY,
    MSG_TYPES,
    PARAM_MODULE_MSG_TYPES,
    STANDARD_MODULE_MSG_TYPES,
)
from orchestrator_sdk.tx.types import Coin, EncodeObject

CoinLike = Union[Coin, Mapping[str, Any]]


@dataclass(frozen=True)
class ParameterSelection:
    module: str
    parameter: str
    value: Any
    description: Optional[str] = None


def _coin(coin: CoinLike) -> Coin:
    return coin if isinstance(coin, Coin) else Coin.from_dict(coin)


def build_parameter_change_messages(
    selections: Sequence[ParameterSelection],
    authority: str = GOVERNANCE_AUTHORITY,
) -> list[ProposalMessage]:
    """
    Build one MsgUpdateParams per module from a set of parameter selections.

    Selections are grouped by module in order of each module's first
    appearance, and every module's parameters are merged into a single
    `params` object.

    Args:
        selections: Parameter selections, unique per (module, parameter)
        authority: Governance module account issuing the messages

    Returns:
        One ParamsUpdateMessage per distinct module

    Raises:
        UnknownModuleError: If a selection names a module without an update message

    Example:
        build_parameter_change_messages([
            ParameterSelection("vm", "evm_denom", "aatom"),
            ParameterSelection("vm", "allow_unprotected_txs", True),
            ParameterSelection("erc20", "enable_erc20", False),
        ])
        # => [vm MsgUpdateParams with both params, erc20 MsgUpdateParams]
    """
    params_by_module: dict[str, dict[str, Any]] = {}
    for sel in selections:
        params_by_module.setdefault(sel.module, {})[sel.parameter] = sel.value

    messages: list[ProposalMessage] = []
    for module, params in params_by_module.items():
        msg_type = PARAM_MODULE_MSG_TYPES.get(module)
        if msg_type is None:
            raise UnknownModuleError(module, list(PARAM_MODULE_MSG_TYPES))
        messages.append(ParamsUpdateMessage(type_url=msg_type, authority=authority, params=params))

    return messages


def build_community_pool_spend_message(
    recipient: str,
    amount: Iterable[CoinLike],
    authority: str = GOVERNANCE_AUTHORITY,
) -> CommunityPoolSpendMessage:
    return CommunityPoolSpendMessage(
        authority=authority,
        recipient=recipient,
        amount=tuple(_coin(c) for c in amount),
    )


def build_software_upgrade_message(
    name: str,
    height: str,
    info: str,
    authority: str = GOVERNANCE_AUTHORITY,
) -> SoftwareUpgradeMessage:
    """`info` is passed through untouched; callers validate it with parse_upgrade_info()."""
    return SoftwareUpgradeMessage(
        authority=authority,
        plan=UpgradePlan(name=name, height=str(height), info=info),
    )


def build_cancel_upgrade_message(authority: str = GOVERNANCE_AUTHORITY) -> CancelUpgradeMessage:
    return CancelUpgradeMessage(authority=authority)


def build_ibc_client_params_message(
    allowed_clients: Iterable[str],
    authority: str = GOVERNANCE_AUTHORITY,
) -> IbcClientParamsMessage:
    return IbcClientParamsMessage(authority=authority, allowed_clients=tuple(allowed_clients))


def build_register_preinstalls_message(
    preinstalls: Iterable[Union[Preinstall, Mapping[str, str]]],
    authority: str = GOVERNANCE_AUTHORITY,
) -> RegisterPreinstallsMessage:
    entries = tuple(
        p if isinstance(p, Preinstall) else Preinstall(name=p["name"], address=p["address"], code=p["code"])
        for p in preinstalls
    )
    return RegisterPreinstallsMessage(authority=authority, preinstalls=entries)


def build_register_erc20_message(
    erc20_addresses: Iterable[str],
    authority: str = GOVERNANCE_AUTHORITY,
) -> RegisterErc20Message:
    return RegisterErc20Message(authority=authority, erc20addresses=tuple(erc20_addresses))


def build_toggle_conversion_message(token: str, authority: str = GOVERNANCE_AUTHORITY) -> ToggleConversionMessage:
    return ToggleConversionMessage(authority=authority, token=token)


def build_standard_module_params_message(
    module: str,
    params: Mapping[str, Any],
    authority: str = GOVERNANCE_AUTHORITY,
) -> ParamsUpdateMessage:
    """
    MsgUpdateParams for a stock Cosmos SDK module (gov, bank, staking,
    distribution, slashing, mint, consensus).

    Raises:
        UnknownModuleError: For any other module name
    """
    msg_type = STANDARD_MODULE_MSG_TYPES.get(module)
    if msg_type is None:
        raise UnknownModuleError(module, list(STANDARD_MODULE_MSG_TYPES))
    return ParamsUpdateMessage(type_url=msg_type, authority=authority, params=dict(params))


@dataclass(frozen=True)
class BuiltProposal:
    messages: tuple[ProposalMessage, ...]
    title: str
    summary: str
    deposit: tuple[Coin, ...]
    expedited: bool = False
    metadata: str = ""

    def to_json(self) -> dict[str, Any]:
        return {
            "messages": [m.to_json() for m in self.messages],
            "metadata": self.metadata,
            "deposit": [c.to_dict() for c in self.deposit],
            "title": self.title,
            "summary": self.summary,
            "expedited": self.expedited,
        }


def build_proposal(
    messages: Sequence[ProposalMessage],
    title: str,
    summary: str,
    deposit: CoinLike,
    expedited: bool = False,
) -> BuiltProposal:
    return BuiltProposal(
        messages=tuple(messages),
        title=title,
        summary=summary,
        deposit=(_coin(deposit),),
        expedited=expedited,
    )


def build_submit_proposal_message(proposal: BuiltProposal, proposer: str) -> EncodeObject:
    """
    Wrap a built proposal into a MsgSubmitProposal signed by `proposer`.

    Inner messages keep their "@type" so they pack as Any values.
    """
    return EncodeObject(
        type_url=MSG_TYPES.SUBMIT_PROPOSAL,
        value={
            "messages": [m.to_json() for m in proposal.messages],
            "initialDeposit": [c.to_dict() for c in proposal.deposit],
            "proposer": proposer,
            "metadata": proposal.metadata,
            "title": proposal.title,
            "summary": proposal.summary,
            "expedited": proposal.expedited,
        },
    )


def generate_cli_command(
    proposal: BuiltProposal,
    chain: Union[ChainConfig, str],
    chain_binary: Optional[str] = None,
) -> str:
    """
    Shell command submitting proposal.json with the node binary. Not executed here.

    `chain` is either a ChainConfig, which supplies both the chain id and the
    binary name, or a bare chain id. An explicit `chain_binary` wins over both.
    """
    if isinstance(chain, ChainConfig):
        chain_id = chain.chain_id
        chain_binary = chain_binary or chain.chain_binary
    else:
        chain_id = chain
        chain_binary = chain_binary or "evmd"
    return (
        f"{chain_binary} tx gov submit-proposal proposal.json \\\n"
        f"  --from=<your-key> \\\n"
        f"  --chain-id={chain_id} \\\n"
        f"  --gas=auto \\\n"
        f"  --gas-adjustment=1.5 \\\n"
        f"  --fees=<fee>"
    )


def export_proposal_json(proposal: BuiltProposal) -> str:
    return json.dumps(proposal.to_json(), indent=2, ensure_ascii=False)


class ProposalBuilder:
    """
    Builders bound to one chain.

    Every message is issued from the chain's configured governance authority,
    and the CLI command uses the chain's id and node binary.

    Example:
        builder = ProposalBuilder(ChainConfig.from_env())
        proposal = builder.proposal(
            [builder.cancel_upgrade()],
            title="Cancel upgrade",
            summary="...",
            deposit={"amount": "10000000", "denom": "uatom"},
        )
        print(builder.cli_command(proposal))
    """

    def __init__(self, chain: ChainConfig):
        self.chain = chain

    @property
    def authority(self) -> str:
        return self.chain.governance_authority

    def parameter_changes(self, selections: Sequence[ParameterSelection]) -> list[ProposalMessage]:
        return build_parameter_change_messages(selections, authority=self.authority)

    def community_pool_spend(self, recipient: str, amount: Iterable[CoinLike]) -> CommunityPoolSpendMessage:
        return build_community_pool_spend_message(recipient, amount, authority=self.authority)

    def software_upgrade(self, name: str, height: str, info: str) -> SoftwareUpgradeMessage:
        return build_software_upgrade_message(name, height, info, authority=self.authority)

    def cancel_upgrade(self) -> CancelUpgradeMessage:
        return build_cancel_upgrade_message(authority=self.authority)

    def ibc_client_params(self, allowed_clients: Iterable[str]) -> IbcClientParamsMessage:
        return build_ibc_client_params_message(allowed_clients, authority=self.authority)

    def register_preinstalls(
        self, preinstalls: Iterable[Union[Preinstall, Mapping[str, str]]]
    ) -> RegisterPreinstallsMessage:
        return build_register_preinstalls_message(preinstalls, authority=self.authority)

    def register_erc20(self, erc20_addresses: Iterable[str]) -> RegisterErc20Message:
        return build_register_erc20_message(erc20_addresses, authority=self.authority)

    def toggle_conversion(self, token: str) -> ToggleConversionMessage:
        return build_toggle_conversion_message(token, authority=self.authority)

    def standard_module_params(self, module: str, params: Mapping[str, Any]) -> ParamsUpdateMessage:
        return build_standard_module_params_message(module, params, authority=self.authority)

    def proposal(
        self,
        messages: Sequence[ProposalMessage],
        title: str,
        summary: str,
        deposit: CoinLike,
        expedited: bool = False,
    ) -> BuiltProposal:
        return build_proposal(messages, title, summary, deposit, expedited=expedited)

    def cli_command(self, proposal: BuiltProposal) -> str:
        return generate_cli_command(proposal, self.chain)

    def export_json(self, proposal: BuiltProposal) -> str:
        return export_proposal_json(proposal)
