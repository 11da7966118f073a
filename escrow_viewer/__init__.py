"""Read-only Soroban transaction history client for the escrow viewer."""

from escrow_viewer.formatting import format_display_time, truncate_for_display
from escrow_viewer.models import ListingPage, TransactionDetail, TransactionStatus, TransactionSummary
from escrow_viewer.network import NetworkType, get_default_network
from escrow_viewer.network_selector import InMemoryStore, JsonFileStore, NetworkSelector
from escrow_viewer.soroban_client import TransactionClient, fetch_transaction_detail, fetch_transactions

__all__ = [
    "InMemoryStore",
    "JsonFileStore",
    "ListingPage",
    "NetworkSelector",
    "NetworkType",
    "TransactionClient",
    "TransactionDetail",
    "TransactionStatus",
    "TransactionSummary",
    "fetch_transaction_detail",
    "fetch_transactions",
    "format_display_time",
    "get_default_network",
    "truncate_for_display",
]
