"""
Governance message types and the parameter catalogue of the evmd modules.
"""

from dataclasses import dataclass
from typing import Any

GOVERNANCE_AUTHORITY = "cosmos10d07y265gmmuvt4z0w9aw880jnsr700j6zn9kn"


class MSG_TYPES:
    VM_UPDATE_PARAMS = "/cosmos.evm.vm.v1.MsgUpdateParams"
    VM_REGISTER_PREINSTALLS = "/cosmos.evm.vm.v1.MsgRegisterPreinstalls"
    ERC20_UPDATE_PARAMS = "/cosmos.evm.erc20.v1.MsgUpdateParams"
    ERC20_REGISTER = "/cosmos.evm.erc20.v1.MsgRegisterERC20"
    ERC20_TOGGLE_CONVERSION = "/cosmos.evm.erc20.v1.MsgToggleConversion"
    FEEMARKET_UPDATE_PARAMS = "/cosmos.evm.feemarket.v1.MsgUpdateParams"
    COMMUNITY_POOL_SPEND = "/cosmos.distribution.v1beta1.MsgCommunityPoolSpend"
    SOFTWARE_UPGRADE = "/cosmos.upgrade.v1beta1.MsgSoftwareUpgrade"
    CANCEL_UPGRADE = "/cosmos.upgrade.v1beta1.MsgCancelUpgrade"
    IBC_CLIENT_UPDATE_PARAMS = "/ibc.core.client.v1.MsgUpdateParams"
    SUBMIT_PROPOSAL = "/cosmos.gov.v1.MsgSubmitProposal"
    VOTE = "/cosmos.gov.v1.MsgVote"
    VOTE_WEIGHTED = "/cosmos.gov.v1.MsgVoteWeighted"


# Modules whose parameters are edited field by field
PARAM_MODULE_MSG_TYPES: dict[str, str] = {
    "vm": MSG_TYPES.VM_UPDATE_PARAMS,
    "erc20": MSG_TYPES.ERC20_UPDATE_PARAMS,
    "feemarket": MSG_TYPES.FEEMARKET_UPDATE_PARAMS,
}

STANDARD_MODULE_MSG_TYPES: dict[str, str] = {
    "gov": "/cosmos.gov.v1.MsgUpdateParams",
    "bank": "/cosmos.bank.v1beta1.MsgUpdateParams",
    "staking": "/cosmos.staking.v1beta1.MsgUpdateParams",
    "distribution": "/cosmos.distribution.v1beta1.MsgUpdateParams",
    "slashing": "/cosmos.slashing.v1beta1.MsgUpdateParams",
    "mint": "/cosmos.mint.v1beta1.MsgUpdateParams",
    "consensus": "/cosmos.consensus.v1.MsgUpdateParams",
}


@dataclass(frozen=True)
class ParamSpec:
    type: str
    default: Any
    description: str


_PERMISSIONLESS = {"access_type": "ACCESS_TYPE_PERMISSIONLESS", "access_control_list": []}

VM_PARAMS: dict[str, ParamSpec] = {
    "evm_denom": ParamSpec("string", "atest", "Token denomination used to run the EVM state transitions"),
    "allow_unprotected_txs": ParamSpec("boolean", False, "Allow replay-protected (i.e non EIP155 signed) transactions"),
    "extra_eips": ParamSpec("array", [], "Additional EIPs for the vm.Config"),
    "active_static_precompiles": ParamSpec("array", [], "Hex addresses of active precompiled contracts"),
    "evm_channels": ParamSpec("array", [], "IBC channel identifiers from EVM compatible chains"),
    "access_control": ParamSpec(
        "object",
        {"create": dict(_PERMISSIONLESS), "call": dict(_PERMISSIONLESS)},
        "Permission policy for EVM contract creation and calls",
    ),
}

ERC20_PARAMS: dict[str, ParamSpec] = {
    "enable_erc20": ParamSpec("boolean", True, "Enable ERC20 module functionality"),
    "permissionless_registration": ParamSpec("boolean", True, "Allow permissionless ERC20 token registration"),
}

FEEMARKET_PARAMS: dict[str, ParamSpec] = {
    "no_base_fee": ParamSpec("boolean", False, "Disable base fee mechanism"),
    "base_fee_change_denominator": ParamSpec("number", 8, "Base fee adjustment denominator (cannot be 0)"),
    "elasticity_multiplier": ParamSpec("number", 2, "Block gas limit elasticity multiplier (cannot be 0)"),
    "base_fee": ParamSpec("string", "1000000000", "Initial base fee (1 gwei, cannot be negative)"),
    "enable_height": ParamSpec("number", 0, "Height to enable fee market (cannot be negative)"),
    "min_gas_price": ParamSpec("string", "0", "Minimum gas price (cannot be negative)"),
    "min_gas_multiplier": ParamSpec("string", "0.5", "Minimum gas multiplier (0 <= value <= 1)"),
}

MODULE_PARAMS: dict[str, dict[str, ParamSpec]] = {
    "vm": VM_PARAMS,
    "erc20": ERC20_PARAMS,
    "feemarket": FEEMARKET_PARAMS,
}
