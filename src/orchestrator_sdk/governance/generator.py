"""
Generate proposal titles and markdown summaries from the same structured input
the builders consume. Output is deterministic; value shapes that have no
dedicated rendering fall back to str().
"""

import json
from typing import Any, Iterable, Mapping, Sequence, Union

from orchestrator_sdk.governance.builder import ParameterSelection
from orchestrator_sdk.governance.messages import Preinstall
from orchestrator_sdk.tx.types import Coin

CoinLike = Union[Coin, Mapping[str, Any]]


def _title_case(parameter: str) -> str:
    return " ".join(w[:1].upper() + w[1:] for w in parameter.split("_"))


def _group_by_module(selections: Iterable[ParameterSelection]) -> dict[str, list[ParameterSelection]]:
    grouped: dict[str, list[ParameterSelection]] = {}
    for sel in selections:
        grouped.setdefault(sel.module, []).append(sel)
    return grouped


def _coin_parts(coin: CoinLike) -> tuple[str, str]:
    if isinstance(coin, Coin):
        return coin.amount, coin.denom
    return str(coin["amount"]), str(coin["denom"])


def _short(value: str, head: int, tail: int) -> str:
    return f"{value[:head]}...{value[-tail:]}"


def format_value_for_display(value: Any) -> str:
    """
    Examples:
        >>> format_value_for_display(True)
        'Enabled'
        >>> format_value_for_display("aatom")
        '"aatom"'
        >>> format_value_for_display([1, 2, 3, 4])
        '[4 items]'
    """
    if isinstance(value, bool):
        return "Enabled" if value else "Disabled"

    if isinstance(value, str):
        return f'"{value}"'

    if isinstance(value, (int, float)):
        return str(value)

    if isinstance(value, (list, tuple)):
        if len(value) == 0:
            return "[]"
        if len(value) <= 3:
            return "[" + ", ".join(f'"{v}"' if isinstance(v, str) else str(v) for v in value) + "]"
        return f"[{len(value)} items]"

    if isinstance(value, Mapping):
        try:
            return json.dumps(value, indent=2)
        except (TypeError, ValueError):
            return str(value)

    return str(value)


def generate_parameter_change_title(selections: Sequence[ParameterSelection]) -> str:
    """
    "Update VM Evm Denom" for a single parameter, "Update 3 FEEMARKET Parameters"
    for one module, "Update Parameters Across VM, ERC20 Modules" otherwise.
    """
    if not selections:
        return ""

    modules = list(_group_by_module(selections))

    if len(modules) == 1 and len(selections) == 1:
        sel = selections[0]
        return f"Update {sel.module.upper()} {_title_case(sel.parameter)}"

    if len(modules) == 1:
        return f"Update {len(selections)} {modules[0].upper()} Parameters"

    return f"Update Parameters Across {', '.join(m.upper() for m in modules)} Modules"


def generate_parameter_change_summary(selections: Sequence[ParameterSelection]) -> str:
    if not selections:
        return ""

    lines = ["This proposal updates the following chain parameters:", ""]

    for module, params in _group_by_module(selections).items():
        lines.append(f"**{module.upper()} Module:**")
        for sel in params:
            lines.append(f"- {_title_case(sel.parameter)}: {format_value_for_display(sel.value)}")
            if sel.description:
                lines.append(f"  _{sel.description}_")
        lines.append("")

    lines.append("**Rationale:**")
    lines.append("These parameter changes are proposed to [add rationale here - edit as needed].")

    return "\n".join(lines)


def generate_community_spend_title(recipient: str, amount: Sequence[CoinLike]) -> str:
    total = ", ".join(f"{a} {d}" for a, d in map(_coin_parts, amount))
    short_addr = _short(recipient, 10, 8) if len(recipient) > 20 else recipient
    return f"Community Pool Spend: {total} to {short_addr}"


def generate_community_spend_summary(recipient: str, amount: Sequence[CoinLike]) -> str:
    amount_list = "\n".join(f"- {a} {d}" for a, d in map(_coin_parts, amount))
    return (
        "This proposal requests funds from the community pool to be sent to the following address:\n"
        "\n"
        f"**Recipient:** {recipient}\n"
        "\n"
        "**Amount:**\n"
        f"{amount_list}\n"
        "\n"
        "**Purpose:**\n"
        "[Describe the purpose of this community pool spend - edit as needed]\n"
        "\n"
        "**Expected Outcome:**\n"
        "[Describe the expected benefits to the community - edit as needed]"
    )


def generate_software_upgrade_title(name: str, height: str) -> str:
    return f"Software Upgrade: {name} at Block {height}"


def generate_software_upgrade_summary(name: str, height: str, info: str) -> str:
    return (
        "This proposal schedules a software upgrade for the chain.\n"
        "\n"
        f"**Upgrade Name:** {name}\n"
        f"**Upgrade Height:** {height}\n"
        f"**Information:** {info or 'No additional information provided'}\n"
        "\n"
        "**Changes:**\n"
        "[Describe the changes included in this upgrade - edit as needed]\n"
        "\n"
        "**Preparation:**\n"
        f"Validators and node operators should prepare to upgrade their software before block {height}.\n"
        "\n"
        "**Resources:**\n"
        "[Add links to upgrade documentation, binaries, or instructions - edit as needed]"
    )


def generate_ibc_client_title(allowed_clients: Sequence[str]) -> str:
    if len(allowed_clients) == 1:
        return f"Update IBC Allowed Client: {allowed_clients[0]}"
    return f"Update IBC Allowed Clients ({len(allowed_clients)} types)"


def generate_ibc_client_summary(allowed_clients: Sequence[str]) -> str:
    client_list = "\n".join(f"- {c}" for c in allowed_clients)
    return (
        "This proposal updates the allowed IBC client types for cross-chain communication.\n"
        "\n"
        "**Allowed Client Types:**\n"
        f"{client_list}\n"
        "\n"
        "**Rationale:**\n"
        "[Explain why these client types should be allowed - edit as needed]\n"
        "\n"
        "**Security Considerations:**\n"
        "[Describe any security implications - edit as needed]"
    )


def generate_preinstall_title(preinstalls: Sequence[Preinstall]) -> str:
    if len(preinstalls) == 1:
        return f"Register Preinstalled Contract: {preinstalls[0].name}"
    return f"Register {len(preinstalls)} Preinstalled Contracts"


def generate_preinstall_summary(preinstalls: Sequence[Preinstall]) -> str:
    # bytecode is cut to "0x" + 32 bytes
    contract_list = "\n\n".join(
        f"- **{p.name}**\n  Address: {p.address}\n  Bytecode: {p.code[:66]}..."
        for p in preinstalls
    )
    return (
        "This proposal registers preinstalled smart contracts in the EVM state.\n"
        "\n"
        "**Contracts:**\n"
        f"{contract_list}\n"
        "\n"
        "**Purpose:**\n"
        "[Describe the purpose of these preinstalled contracts - edit as needed]\n"
        "\n"
        "**Verification:**\n"
        "[Add information about contract verification and audits - edit as needed]"
    )


def generate_erc20_registration_title(addresses: Sequence[str]) -> str:
    if len(addresses) == 1:
        return f"Register ERC20 Token: {_short(addresses[0], 10, 6)}"
    return f"Register {len(addresses)} ERC20 Tokens"


def generate_erc20_registration_summary(addresses: Sequence[str]) -> str:
    address_list = "\n".join(f"- {a}" for a in addresses)
    return (
        "This proposal registers ERC20 token contracts for Cosmos Coin conversion.\n"
        "\n"
        "**ERC20 Contracts:**\n"
        f"{address_list}\n"
        "\n"
        "**Purpose:**\n"
        "These tokens will be enabled for bidirectional conversion between ERC20 and Cosmos Coin formats.\n"
        "\n"
        "**Token Details:**\n"
        "[Add information about the tokens being registered - edit as needed]"
    )


def generate_toggle_conversion_title(token: str) -> str:
    display = _short(token, 10, 6) if token.startswith("0x") else token
    return f"Toggle Conversion for {display}"


def generate_toggle_conversion_summary(token: str) -> str:
    token_type = "ERC20 contract" if token.startswith("0x") else "Cosmos denomination"
    return (
        "This proposal toggles the conversion status for the following token.\n"
        "\n"
        f"**Token Identifier:** {token}\n"
        f"**Type:** {token_type}\n"
        "\n"
        "**Action:**\n"
        "If conversion is currently enabled, this will disable it. If disabled, this will enable it.\n"
        "\n"
        "**Rationale:**\n"
        "[Explain why conversion should be toggled - edit as needed]\n"
        "\n"
        "**Impact:**\n"
        "[Describe the impact on users and applications - edit as needed]"
    )
