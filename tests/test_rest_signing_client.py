"""
Tests for the REST signing client.

HTTP traffic to the REST gateway is mocked with respx; signing uses a real
local key so the produced signatures can be verified.
"""

import base64
import hashlib
import json

import pytest
import respx
from cosmpy.crypto.keypairs import PublicKey
from cosmpy.protos.cosmos.bank.v1beta1.tx_pb2 import MsgSend
from cosmpy.protos.cosmos.tx.v1beta1.tx_pb2 import AuthInfo, SignDoc, TxBody, TxRaw
from httpx import Response

from orchestrator_sdk.errors import InvalidMessageStructure, TxTimeoutError
from orchestrator_sdk.tx.client import RestError, RestSigningClient, register_message_type, to_protobuf
from orchestrator_sdk.tx.fee import build_fee
from orchestrator_sdk.tx.types import EncodeObject
from orchestrator_sdk.wallet.local import LocalKeyring

BASE_URL = "http://localhost:1317"
CHAIN_ID = "testnet-1"
TEST_PRIVATE_KEY = "0123456789abcdef0123456789abcdef0123456789abcdef0123456789abcdef"
TX_HASH = "A1B2C3"


async def make_signer():
    keyring = LocalKeyring.from_private_key(TEST_PRIVATE_KEY)
    await keyring.enable(CHAIN_ID)
    signer = keyring.get_offline_signer(CHAIN_ID)
    return signer, (await signer.get_accounts())[0]


def send_message(address: str) -> EncodeObject:
    return EncodeObject(
        type_url="/cosmos.bank.v1beta1.MsgSend",
        value={"fromAddress": address, "toAddress": address, "amount": [{"amount": "1", "denom": "uatom"}]},
    )


def mock_account_info(address: str, account_number: str = "7", sequence: str = "3"):
    return respx.get(f"{BASE_URL}/cosmos/auth/v1beta1/account_info/{address}").mock(
        return_value=Response(200, json={"info": {
            "address": address,
            "account_number": account_number,
            "sequence": sequence,
        }})
    )


@pytest.mark.asyncio
@respx.mock
async def test_connect_fetches_chain_id():
    """Chain id comes from node_info when not supplied"""
    respx.get(f"{BASE_URL}/cosmos/base/tendermint/v1beta1/node_info").mock(
        return_value=Response(200, json={"default_node_info": {"network": CHAIN_ID}})
    )
    signer, _ = await make_signer()

    client = await RestSigningClient.connect_with_signer(BASE_URL + "/", signer)

    assert client.chain_id == CHAIN_ID
    assert client.endpoint == BASE_URL
    await client.close()


@pytest.mark.asyncio
@respx.mock
async def test_connect_with_explicit_chain_id_skips_query():
    route = respx.get(f"{BASE_URL}/cosmos/base/tendermint/v1beta1/node_info")
    signer, _ = await make_signer()

    client = await RestSigningClient.connect_with_signer(BASE_URL, signer, chain_id=CHAIN_ID)

    assert client.chain_id == CHAIN_ID
    assert not route.called
    await client.close()


@pytest.mark.asyncio
@respx.mock
async def test_get_account_info():
    signer, account = await make_signer()
    mock_account_info(account.address)

    client = RestSigningClient(BASE_URL, signer, chain_id=CHAIN_ID)
    assert await client.get_account_info(account.address) == (7, 3)
    await client.close()


@pytest.mark.asyncio
@respx.mock
async def test_sign_and_broadcast_waits_for_inclusion():
    """Signed tx is broadcast in sync mode and polled until it is found"""
    signer, account = await make_signer()
    mock_account_info(account.address)
    broadcast = respx.post(f"{BASE_URL}/cosmos/tx/v1beta1/txs").mock(
        return_value=Response(200, json={"tx_response": {"code": 0, "txhash": TX_HASH, "raw_log": ""}})
    )
    respx.get(f"{BASE_URL}/cosmos/tx/v1beta1/txs/{TX_HASH}").mock(side_effect=[
        Response(404, json={"code": 5, "message": f"tx not found: {TX_HASH}"}),
        Response(200, json={"tx_response": {
            "code": 0,
            "txhash": TX_HASH,
            "height": "12",
            "gas_wanted": "200000",
            "gas_used": "81234",
            "events": [{"type": "message", "attributes": [{"key": "action", "value": "send"}]}],
        }}),
    ])

    client = RestSigningClient(BASE_URL, signer, chain_id=CHAIN_ID, poll_interval_secs=0)
    fee = build_fee(200000, "0.025uatom")
    result = await client.sign_and_broadcast(account.address, [send_message(account.address)], fee, "hello")
    await client.close()

    assert result.code == 0
    assert result.transaction_hash == TX_HASH
    assert result.height == 12
    assert result.gas_used == 81234
    assert result.events[0]["type"] == "message"

    payload = json.loads(broadcast.calls.last.request.content)
    assert payload["mode"] == "BROADCAST_MODE_SYNC"

    raw = TxRaw()
    raw.ParseFromString(base64.b64decode(payload["tx_bytes"]))
    body = TxBody()
    body.ParseFromString(raw.body_bytes)
    auth_info = AuthInfo()
    auth_info.ParseFromString(raw.auth_info_bytes)

    assert body.memo == "hello"
    assert body.messages[0].type_url == "/cosmos.bank.v1beta1.MsgSend"
    assert auth_info.fee.gas_limit == 200000
    assert auth_info.fee.amount[0].amount == "5000"
    assert auth_info.signer_infos[0].sequence == 3

    sign_doc = SignDoc(
        body_bytes=raw.body_bytes,
        auth_info_bytes=raw.auth_info_bytes,
        chain_id=CHAIN_ID,
        account_number=7,
    ).SerializeToString()
    assert len(raw.signatures) == 1
    assert PublicKey(account.pubkey).verify_digest(hashlib.sha256(sign_doc).digest(), raw.signatures[0])


@pytest.mark.asyncio
@respx.mock
async def test_check_tx_failure_returned_without_polling():
    signer, account = await make_signer()
    mock_account_info(account.address)
    respx.post(f"{BASE_URL}/cosmos/tx/v1beta1/txs").mock(
        return_value=Response(200, json={"tx_response": {
            "code": 5,
            "txhash": TX_HASH,
            "codespace": "sdk",
            "raw_log": "insufficient funds",
        }})
    )
    poll = respx.get(f"{BASE_URL}/cosmos/tx/v1beta1/txs/{TX_HASH}")

    client = RestSigningClient(BASE_URL, signer, chain_id=CHAIN_ID)
    result = await client.sign_and_broadcast(account.address, [send_message(account.address)], build_fee(1000, "1uatom"))
    await client.close()

    assert result.code == 5
    assert result.raw_log == "insufficient funds"
    assert not poll.called


@pytest.mark.asyncio
@respx.mock
async def test_mapping_fee_is_accepted():
    signer, account = await make_signer()
    mock_account_info(account.address)
    broadcast = respx.post(f"{BASE_URL}/cosmos/tx/v1beta1/txs").mock(
        return_value=Response(200, json={"tx_response": {"code": 5, "txhash": TX_HASH, "raw_log": "rejected"}})
    )
    fee = {"amount": [{"amount": "5000", "denom": "uatom"}], "gas": "200000"}

    client = RestSigningClient(BASE_URL, signer, chain_id=CHAIN_ID)
    result = await client.sign_and_broadcast(account.address, [send_message(account.address)], fee)
    await client.close()

    assert result.code == 5
    tx_bytes = base64.b64decode(json.loads(broadcast.calls.last.request.content)["tx_bytes"])
    auth_info = AuthInfo.FromString(TxRaw.FromString(tx_bytes).auth_info_bytes)
    assert auth_info.fee.gas_limit == 200000
    assert auth_info.fee.amount[0].amount == "5000"


@pytest.mark.asyncio
@respx.mock
async def test_poll_timeout():
    signer, _ = await make_signer()
    respx.get(f"{BASE_URL}/cosmos/tx/v1beta1/txs/{TX_HASH}").mock(
        return_value=Response(404, json={"code": 5, "message": "tx not found"})
    )

    client = RestSigningClient(BASE_URL, signer, chain_id=CHAIN_ID, poll_interval_secs=0, poll_timeout_secs=0)
    with pytest.raises(TxTimeoutError, match=TX_HASH):
        await client.wait_for_tx(TX_HASH)
    await client.close()


@pytest.mark.asyncio
@respx.mock
async def test_broadcast_http_error():
    signer, account = await make_signer()
    mock_account_info(account.address)
    respx.post(f"{BASE_URL}/cosmos/tx/v1beta1/txs").mock(
        return_value=Response(500, json={"code": 2, "message": "internal error"})
    )

    client = RestSigningClient(BASE_URL, signer, chain_id=CHAIN_ID)
    with pytest.raises(RestError) as exc_info:
        await client.sign_and_broadcast(account.address, [send_message(account.address)], build_fee(1000, "1uatom"))
    await client.close()

    assert exc_info.value.status_code == 500
    assert exc_info.value.message == "internal error"


@pytest.mark.asyncio
@respx.mock
async def test_unknown_message_type_is_rejected_before_broadcast():
    signer, account = await make_signer()
    mock_account_info(account.address)
    broadcast = respx.post(f"{BASE_URL}/cosmos/tx/v1beta1/txs")

    client = RestSigningClient(BASE_URL, signer, chain_id=CHAIN_ID)
    with pytest.raises(InvalidMessageStructure, match="No protobuf type registered"):
        await client.sign_and_broadcast(
            account.address,
            [EncodeObject("/unknown.v1.MsgDoThings", {})],
            build_fee(1000, "1uatom"),
        )
    await client.close()

    assert not broadcast.called


@pytest.mark.asyncio
async def test_signer_without_account():
    signer, _ = await make_signer()
    client = RestSigningClient(BASE_URL, signer, chain_id=CHAIN_ID)
    with pytest.raises(RuntimeError, match="no account"):
        await client.sign_and_broadcast("cosmos1nobody", [], build_fee(1000, "1uatom"))
    await client.close()


class TestToProtobuf:
    def test_json_shaped_message(self):
        msg = to_protobuf(send_message("cosmos1abc"))
        assert isinstance(msg, MsgSend)
        assert msg.from_address == "cosmos1abc"
        assert msg.amount[0].denom == "uatom"

    def test_protobuf_value_passes_through(self):
        proto = MsgSend(from_address="cosmos1abc")
        assert to_protobuf(EncodeObject("/cosmos.bank.v1beta1.MsgSend", proto)) is proto

    def test_unknown_field(self):
        with pytest.raises(InvalidMessageStructure, match="Cannot encode"):
            to_protobuf(EncodeObject("/cosmos.bank.v1beta1.MsgSend", {"sender": "cosmos1abc"}))

    def test_registered_type(self):
        register_message_type("/example.v1.MsgTransfer", MsgSend)
        msg = to_protobuf(EncodeObject("/example.v1.MsgTransfer", {"toAddress": "cosmos1xyz"}))
        assert msg.to_address == "cosmos1xyz"
