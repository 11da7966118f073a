"""Network names and Soroban RPC endpoints, configured from the environment."""

import os
from typing import Literal

NetworkType = Literal["testnet", "mainnet"]

NETWORKS: tuple[NetworkType, ...] = ("testnet", "mainnet")

SOROBAN_TESTNET_RPC = os.environ.get("SOROBAN_TESTNET_RPC") or "https://soroban-testnet.stellar.org"
SOROBAN_MAINNET_RPC = os.environ.get("SOROBAN_MAINNET_RPC") or "https://mainnet.sorobanrpc.com"
DEFAULT_STATE_PATH = os.environ.get("ESCROW_VIEWER_STATE") or os.path.join(
    os.path.expanduser("~"), ".escrow-viewer", "state.json"
)


def is_network(value: object) -> bool:
    return isinstance(value, str) and value in NETWORKS


def normalize_network(value: str | None) -> NetworkType:
    """Lower-case and validate a network name. Raises ValueError for anything else."""
    name = (value or "").strip().lower()
    if name == "mainnet":
        return "mainnet"
    if name == "testnet":
        return "testnet"
    raise ValueError(f"Unknown network: {value!r}")


def get_default_network() -> NetworkType:
    """Default network from ESCROW_VIEWER_NETWORK; anything unrecognised means testnet."""
    try:
        return normalize_network(os.environ.get("ESCROW_VIEWER_NETWORK") or "testnet")
    except ValueError:
        return "testnet"


def rpc_url(network: str) -> str:
    return SOROBAN_MAINNET_RPC if (network or "").strip().lower() == "mainnet" else SOROBAN_TESTNET_RPC
