from .params import GOVERNANCE_AUTHORITY, MSG_TYPES, MODULE_PARAMS, PARAM_MODULE_MSG_TYPES, STANDARD_MODULE_MSG_TYPES
from .messages import (
    MessageKind,
    ProposalMessage,
    ParamsUpdateMessage,
    CommunityPoolSpendMessage,
    SoftwareUpgradeMessage,
    UpgradePlan,
    CancelUpgradeMessage,
    IbcClientParamsMessage,
    RegisterPreinstallsMessage,
    Preinstall,
    RegisterErc20Message,
    ToggleConversionMessage,
    CustomMessage,
)
from .builder import (
    ParameterSelection,
    BuiltProposal,
    build_parameter_change_messages,
    build_community_pool_spend_message,
    build_software_upgrade_message,
    build_cancel_upgrade_message,
    build_ibc_client_params_message,
    build_register_preinstalls_message,
    build_register_erc20_message,
    build_toggle_conversion_message,
    build_standard_module_params_message,
    build_proposal,
    build_submit_proposal_message,
    generate_cli_command,
    export_proposal_json,
    ProposalBuilder,
)
from .vote import (
    VoteOption,
    create_vote_message,
    create_weighted_vote_message,
    generate_auto_vote_message,
    extract_proposal_id,
    format_vote_option,
)
from .inputs import parse_upgrade_info, parse_custom_messages, validate_parameter_selections, validate_coin
from .generator import (
    format_value_for_display,
    generate_parameter_change_title,
    generate_parameter_change_summary,
    generate_community_spend_title,
    generate_community_spend_summary,
    generate_software_upgrade_title,
    generate_software_upgrade_summary,
    generate_ibc_client_title,
    generate_ibc_client_summary,
    generate_preinstall_title,
    generate_preinstall_summary,
    generate_erc20_registration_title,
    generate_erc20_registration_summary,
    generate_toggle_conversion_title,
    generate_toggle_conversion_summary,
)

__all__ = [
    "GOVERNANCE_AUTHORITY",
    "MSG_TYPES",
    "MODULE_PARAMS",
    "PARAM_MODULE_MSG_TYPES",
    "STANDARD_MODULE_MSG_TYPES",
    # Message variants
    "MessageKind",
    "ProposalMessage",
    "ParamsUpdateMessage",
    "CommunityPoolSpendMessage",
    "SoftwareUpgradeMessage",
    "UpgradePlan",
    "CancelUpgradeMessage",
    "IbcClientParamsMessage",
    "RegisterPreinstallsMessage",
    "Preinstall",
    "RegisterErc20Message",
    "ToggleConversionMessage",
    "CustomMessage",
    # Builders
    "ParameterSelection",
    "BuiltProposal",
    "build_parameter_change_messages",
    "build_community_pool_spend_message",
    "build_software_upgrade_message",
    "build_cancel_upgrade_message",
    "build_ibc_client_params_message",
    "build_register_preinstalls_message",
    "build_register_erc20_message",
    "build_toggle_conversion_message",
    "build_standard_module_params_message",
    "build_proposal",
    "build_submit_proposal_message",
    "generate_cli_command",
    "export_proposal_json",
    "ProposalBuilder",
    # Voting
    "VoteOption",
    "create_vote_message",
    "create_weighted_vote_message",
    "generate_auto_vote_message",
    "extract_proposal_id",
    "format_vote_option",
    # Input parsing
    "parse_upgrade_info",
    "parse_custom_messages",
    "validate_parameter_selections",
    "validate_coin",
    # Titles and summaries
    "format_value_for_display",
    "generate_parameter_change_title",
    "generate_parameter_change_summary",
    "generate_community_spend_title",
    "generate_community_spend_summary",
    "generate_software_upgrade_title",
    "generate_software_upgrade_summary",
    "generate_ibc_client_title",
    "generate_ibc_client_summary",
    "generate_preinstall_title",
    "generate_preinstall_summary",
    "generate_erc20_registration_title",
    "generate_erc20_registration_summary",
    "generate_toggle_conversion_title",
    "generate_toggle_conversion_summary",
]
