"""
Blockchain interaction utilities.
"""
import json
import logging
from pathlib import Path
from typing import Optional

from eth_account import Account
from web3 import Web3

from .config import Settings

logger = logging.getLogger(__name__)

# get()/set(uint256) pair of the value-store contract
CONTRACT_ABI = [
    {
        "inputs": [],
        "name": "get",
        "outputs": [{"internalType": "uint256", "name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [{"internalType": "uint256", "name": "_value", "type": "uint256"}],
        "name": "set",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    },
]


def load_contract_abi(abi_path: Optional[str] = None) -> list:
    """Load contract ABI from a compiled artifact, falling back to the built-in ABI."""
    if not abi_path:
        return CONTRACT_ABI

    path = Path(abi_path)
    if not path.exists():
        raise FileNotFoundError(f"ABI not found at {path}")

    with open(path) as f:
        artifact = json.load(f)

    # Hardhat/Truffle artifacts wrap the ABI, plain ABI files are a bare list
    if isinstance(artifact, dict):
        return artifact.get("abi", [])
    return artifact


def get_web3(rpc_url: str, timeout: float = 10.0) -> Web3:
    """Get Web3 instance connected to the node."""
    w3 = Web3(Web3.HTTPProvider(rpc_url, request_kwargs={"timeout": timeout}))

    if not w3.is_connected():
        raise ConnectionError(f"Could not connect to {rpc_url}")

    return w3


class Web3ChainClient:
    """Reads and writes the contract value through a JSON-RPC node."""

    def __init__(
        self,
        w3: Web3,
        contract_address: str,
        private_key: str,
        abi: Optional[list] = None,
        gas_limit: int = 300000,
        gas_price: int = 0,
    ):
        self.w3 = w3
        self.account = Account.from_key(private_key)
        self.contract = w3.eth.contract(
            address=Web3.to_checksum_address(contract_address),
            abi=abi or CONTRACT_ABI,
        )
        self.gas_limit = gas_limit
        self.gas_price = gas_price

    @classmethod
    def from_settings(cls, settings: Settings) -> "Web3ChainClient":
        logger.info(f"Connecting to chain node at {settings.BESU_RPC_URL}")
        w3 = get_web3(settings.BESU_RPC_URL, timeout=settings.RPC_TIMEOUT)
        return cls(
            w3,
            settings.CONTRACT_ADDRESS,
            settings.PRIVATE_KEY,
            abi=load_contract_abi(settings.CONTRACT_ABI_PATH),
            gas_limit=settings.GAS_LIMIT,
            gas_price=settings.GAS_PRICE,
        )

    def chain_id(self) -> int:
        return self.w3.eth.chain_id

    def read_value(self) -> int:
        return self.contract.functions.get().call()

    def write_value(self, value: int) -> str:
        """
        Sign and broadcast a set(value) transaction.
        Returns the transaction hash without waiting for the receipt.
        """
        # Build transaction
        tx = self.contract.functions.set(value).build_transaction({
            "from": self.account.address,
            "nonce": self.w3.eth.get_transaction_count(self.account.address, "pending"),
            "gas": self.gas_limit,
            "gasPrice": self.gas_price,
            "chainId": self.w3.eth.chain_id,
        })

        # Sign transaction
        signed_txn = self.account.sign_transaction(tx)

        # Send transaction
        tx_hash = self.w3.eth.send_raw_transaction(signed_txn.raw_transaction)
        return Web3.to_hex(tx_hash)
