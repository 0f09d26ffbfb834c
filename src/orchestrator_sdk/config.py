import os
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from orchestrator_sdk.errors import ValidationError

DEFAULT_GOVERNANCE_AUTHORITY = "cosmos10d07y265gmmuvt4z0w9aw880jnsr700j6zn9kn"
DEFAULT_FEATURES = ["stargate", "ibc-transfer"]


@dataclass
class ChainConfig:
    """
    Configuration for a target Cosmos SDK chain.

    Mirrors the chain record kept by the chain store: endpoints, address prefix,
    display/minimal denominations and the default gas price descriptor
    (e.g. "0.025uatom"). `governance_authority` is the gov module account that
    governance-gated messages are issued from, and `chain_binary` is the node
    binary used in generated CLI commands.
    """

    chain_id: str
    chain_name: str
    rpc: str
    rest: str
    bech32_prefix: str
    coin_denom: str
    coin_minimal_denom: str
    coin_decimals: int
    gas_price: str
    features: Optional[list[str]] = None
    coin_type: int = 118
    governance_authority: str = DEFAULT_GOVERNANCE_AUTHORITY
    chain_binary: str = "evmd"

    def __post_init__(self):
        if not self.chain_id:
            raise ValidationError("chain_id is required")
        # orchestrator_sdk.tx imports this module, so import lazily
        from orchestrator_sdk.tx.fee import parse_gas_price
        parse_gas_price(self.gas_price)

    @property
    def gas_price_denom(self) -> str:
        from orchestrator_sdk.tx.fee import parse_gas_price
        return parse_gas_price(self.gas_price)[1]

    @classmethod
    def local(
        cls,
        chain_id="cosmos_262144-1",
        chain_name="Local evmd",
        rpc="http://localhost:26657",
        rest="http://localhost:1317",
        bech32_prefix="cosmos",
        coin_denom="ATOM",
        coin_minimal_denom="aatom",
        coin_decimals=18,
        gas_price="10000000aatom",
        coin_type=60,
    ) -> 'ChainConfig':
        return cls(
            chain_id=chain_id,
            chain_name=chain_name,
            rpc=rpc,
            rest=rest,
            bech32_prefix=bech32_prefix,
            coin_denom=coin_denom,
            coin_minimal_denom=coin_minimal_denom,
            coin_decimals=coin_decimals,
            gas_price=gas_price,
            coin_type=coin_type,
        )

    @classmethod
    def from_env(cls, env_prefix: str | None = None) -> 'ChainConfig':
        prefix = env_prefix or ""
        features = os.getenv(prefix + "FEATURES")
        return cls(
            chain_id=require_env(prefix + "CHAIN_ID"),
            chain_name=os.getenv(prefix + "CHAIN_NAME", require_env(prefix + "CHAIN_ID")),
            rpc=require_env(prefix + "RPC_ENDPOINT"),
            rest=require_env(prefix + "REST_ENDPOINT"),
            bech32_prefix=require_env(prefix + "BECH32_PREFIX"),
            coin_denom=require_env(prefix + "COIN_DENOM"),
            coin_minimal_denom=require_env(prefix + "COIN_MINIMAL_DENOM"),
            coin_decimals=int(require_env(prefix + "COIN_DECIMALS")),
            gas_price=require_env(prefix + "GAS_PRICE"),
            features=[f.strip() for f in features.split(",") if f.strip()] if features else None,
            coin_type=int(os.getenv(prefix + "COIN_TYPE", "118")),
            governance_authority=os.getenv(prefix + "GOVERNANCE_AUTHORITY", DEFAULT_GOVERNANCE_AUTHORITY),
            chain_binary=os.getenv(prefix + "CHAIN_BINARY", "evmd"),
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'ChainConfig':
        """Build from the camelCase record produced by the chain store."""
        return cls(
            chain_id=data["chainId"],
            chain_name=data["chainName"],
            rpc=data["rpc"],
            rest=data["rest"],
            bech32_prefix=data["bech32Prefix"],
            coin_denom=data["coinDenom"],
            coin_minimal_denom=data["coinMinimalDenom"],
            coin_decimals=int(data["coinDecimals"]),
            gas_price=data["gasPrice"],
            features=list(data["features"]) if data.get("features") else None,
            coin_type=int(data.get("coinType", 118)),
            governance_authority=data.get("governanceAuthority", DEFAULT_GOVERNANCE_AUTHORITY),
            chain_binary=data.get("chainBinary", "evmd"),
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "chainId": self.chain_id,
            "chainName": self.chain_name,
            "rpc": self.rpc,
            "rest": self.rest,
            "bech32Prefix": self.bech32_prefix,
            "coinDenom": self.coin_denom,
            "coinMinimalDenom": self.coin_minimal_denom,
            "coinDecimals": self.coin_decimals,
            "gasPrice": self.gas_price,
        }
        if self.features:
            data["features"] = list(self.features)
        return data


def require_env(name: str) -> str:
    value = os.getenv(name)
    if value is None:
        raise RuntimeError(f"environment variable {name} is required")
    return value
