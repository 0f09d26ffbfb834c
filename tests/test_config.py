"""
Tests for ChainConfig construction from defaults, environment and chain store records.
"""

import pytest

from orchestrator_sdk.config import DEFAULT_GOVERNANCE_AUTHORITY, ChainConfig
from orchestrator_sdk.errors import InvalidGasPrice, ValidationError

CHAIN_RECORD = {
    "chainId": "cosmoshub-4",
    "chainName": "Cosmos Hub",
    "rpc": "https://rpc.example.org",
    "rest": "https://rest.example.org",
    "bech32Prefix": "cosmos",
    "coinDenom": "ATOM",
    "coinMinimalDenom": "uatom",
    "coinDecimals": 6,
    "gasPrice": "0.025uatom",
    "features": ["stargate"],
}


class TestChainConfig:
    def test_local_defaults(self):
        chain = ChainConfig.local()
        assert chain.chain_id == "cosmos_262144-1"
        assert chain.coin_type == 60
        assert chain.gas_price_denom == "aatom"
        assert chain.governance_authority == DEFAULT_GOVERNANCE_AUTHORITY

    def test_rejects_empty_chain_id(self):
        with pytest.raises(ValidationError):
            ChainConfig.local(chain_id="")

    def test_rejects_bad_gas_price(self):
        with pytest.raises(InvalidGasPrice):
            ChainConfig.local(gas_price="cheap")

    def test_dict_round_trip(self):
        chain = ChainConfig.from_dict(CHAIN_RECORD)
        assert chain.coin_decimals == 6
        assert chain.coin_type == 118
        assert chain.to_dict() == CHAIN_RECORD

    def test_to_dict_omits_empty_features(self):
        assert "features" not in ChainConfig.local().to_dict()


class TestChainConfigFromEnv:
    @pytest.fixture
    def chain_env(self, monkeypatch):
        values = {
            "ORCH_CHAIN_ID": "testnet-1",
            "ORCH_RPC_ENDPOINT": "http://node:26657",
            "ORCH_REST_ENDPOINT": "http://node:1317",
            "ORCH_BECH32_PREFIX": "cosmos",
            "ORCH_COIN_DENOM": "ATOM",
            "ORCH_COIN_MINIMAL_DENOM": "uatom",
            "ORCH_COIN_DECIMALS": "6",
            "ORCH_GAS_PRICE": "0.025uatom",
        }
        for key, value in values.items():
            monkeypatch.setenv(key, value)
        return values

    def test_from_env(self, chain_env, monkeypatch):
        monkeypatch.setenv("ORCH_FEATURES", "stargate, ibc-transfer,")
        chain = ChainConfig.from_env("ORCH_")
        assert chain.chain_id == "testnet-1"
        assert chain.chain_name == "testnet-1"
        assert chain.coin_decimals == 6
        assert chain.features == ["stargate", "ibc-transfer"]
        assert chain.chain_binary == "evmd"

    def test_missing_variable(self, chain_env, monkeypatch):
        monkeypatch.delenv("ORCH_GAS_PRICE")
        with pytest.raises(RuntimeError, match="ORCH_GAS_PRICE"):
            ChainConfig.from_env("ORCH_")
