import json
from unittest.mock import MagicMock

import pytest

from besu_bridge.core.blockchain import CONTRACT_ABI, Web3ChainClient, get_web3, load_contract_abi

# Hardhat/Besu dev account #0
PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
SIGNER = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
CONTRACT_ADDRESS = "0x5FbDB2315678afecb367f032d93F642f64180aa3"


@pytest.fixture()
def w3():
    w3 = MagicMock()
    w3.eth.chain_id = 1337
    w3.eth.get_transaction_count.return_value = 7
    w3.eth.send_raw_transaction.return_value = bytes.fromhex("ab" * 32)
    return w3


@pytest.fixture()
def chain_client(w3):
    client = Web3ChainClient(w3, CONTRACT_ADDRESS.lower(), PRIVATE_KEY)

    def build_transaction(params):
        return {**params, "to": CONTRACT_ADDRESS, "value": 0, "data": "0x60fe47b1" + f"{456:064x}"}

    client.contract.functions.set.return_value.build_transaction.side_effect = build_transaction
    return client


def test_client_uses_checksum_address_and_builtin_abi(w3, chain_client):
    w3.eth.contract.assert_called_once_with(address=CONTRACT_ADDRESS, abi=CONTRACT_ABI)
    assert chain_client.account.address == SIGNER


def test_read_value(chain_client):
    chain_client.contract.functions.get.return_value.call.return_value = 42
    assert chain_client.read_value() == 42


def test_chain_id(chain_client):
    assert chain_client.chain_id() == 1337


def test_write_value_signs_and_broadcasts(w3, chain_client):
    tx_hash = chain_client.write_value(456)

    assert tx_hash == "0x" + "ab" * 32
    chain_client.contract.functions.set.assert_called_once_with(456)
    w3.eth.get_transaction_count.assert_called_once_with(SIGNER, "pending")

    params = chain_client.contract.functions.set.return_value.build_transaction.call_args[0][0]
    assert params["from"] == SIGNER
    assert params["nonce"] == 7
    assert params["gas"] == 300000
    assert params["gasPrice"] == 0
    assert params["chainId"] == 1337

    raw = w3.eth.send_raw_transaction.call_args[0][0]
    assert isinstance(raw, bytes) and len(raw) > 0
    # Fire-and-forget: no receipt polling
    w3.eth.wait_for_transaction_receipt.assert_not_called()


def test_write_value_uses_configured_gas(w3):
    client = Web3ChainClient(w3, CONTRACT_ADDRESS, PRIVATE_KEY, gas_limit=100000, gas_price=5)
    client.contract.functions.set.return_value.build_transaction.side_effect = (
        lambda params: {**params, "to": CONTRACT_ADDRESS, "value": 0, "data": "0x"}
    )

    client.write_value(1)

    params = client.contract.functions.set.return_value.build_transaction.call_args[0][0]
    assert params["gas"] == 100000
    assert params["gasPrice"] == 5


def test_malformed_private_key_rejected(w3):
    with pytest.raises(ValueError):
        Web3ChainClient(w3, CONTRACT_ADDRESS, "zz" * 32)


def test_malformed_contract_address_rejected(w3):
    with pytest.raises(ValueError):
        Web3ChainClient(w3, "0x1234", PRIVATE_KEY)


def test_load_contract_abi_default():
    assert load_contract_abi(None) == CONTRACT_ABI
    names = {entry["name"] for entry in CONTRACT_ABI}
    assert names == {"get", "set"}


def test_load_contract_abi_from_artifact(tmp_path):
    artifact = tmp_path / "SimpleStorage.json"
    artifact.write_text(json.dumps({"contractName": "SimpleStorage", "abi": CONTRACT_ABI[:1]}))
    assert load_contract_abi(str(artifact)) == CONTRACT_ABI[:1]

    bare = tmp_path / "abi.json"
    bare.write_text(json.dumps(CONTRACT_ABI))
    assert load_contract_abi(str(bare)) == CONTRACT_ABI


def test_load_contract_abi_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_contract_abi(str(tmp_path / "missing.json"))


def test_get_web3_unreachable_node():
    with pytest.raises(ConnectionError):
        get_web3("http://127.0.0.1:1", timeout=1)
