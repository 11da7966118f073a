"""Fetch contract transaction history from Soroban JSON-RPC.

Both operations are read-only and never raise: listings degrade to an empty
ListingPage with an explanatory notice, detail lookups degrade to None.
"""

import logging
import string
from typing import Any

import httpx
from pydantic import ValidationError
from stellar_sdk import StrKey

from escrow_viewer.errors import RpcError
from escrow_viewer.models import (
    ListingPage,
    RawEnvelope,
    RawMeta,
    TransactionDetail,
    TransactionStatus,
    TransactionSummary,
)
from escrow_viewer.network import get_default_network
from escrow_viewer.network import rpc_url as network_rpc_url

log = logging.getLogger("escrow_viewer")

DEFAULT_LIMIT = 50
RETENTION_ERROR_CODE = -32600
SIGNER_PLACEHOLDER = "(Signature validation required)"

NO_RECENT_NOTICE = "No recent transactions found. Note: RPC typically retains 24h-7 days of history."
RETENTION_NOTICE = "Transaction data beyond retention period. RPC typically retains 24h-7 days of history."
UNAVAILABLE_NOTICE = "Unable to fetch transaction history. This may be due to retention limits or network issues."


def resolve_contract_address(contract_id: str) -> str:
    """
    Canonical C... strkey for a contract.
    Accepts a strkey or the 64-char hex contract hash; raises ValueError otherwise.
    """
    value = (contract_id or "").strip()
    if len(value) == 64 and all(c in string.hexdigits for c in value):
        return StrKey.encode_contract(bytes.fromhex(value))
    if not StrKey.is_valid_contract(value):
        raise ValueError(f"Invalid contract id: {contract_id!r}")
    return StrKey.encode_contract(StrKey.decode_contract(value))


def is_retention_error(error: Any) -> bool:
    # The RPC has no dedicated code for pruned history: -32600 is the real signal,
    # the message match is a heuristic.
    if not isinstance(error, dict):
        return False
    if error.get("code") == RETENTION_ERROR_CODE:
        return True
    return "retention" in str(error.get("message") or "")


def _empty_page(notice: str) -> ListingPage:
    return ListingPage(items=[], latest_ledger=0, oldest_ledger=0, has_more=False, retention_notice=notice)


class TransactionClient:
    """
    Read-only Soroban RPC client.
    network selects the endpoint from configuration; rpc_url overrides it.
    transport is passed to httpx (tests use httpx.MockTransport).
    """

    def __init__(
        self,
        network: str | None = None,
        *,
        rpc_url: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.network = network or get_default_network()
        self.rpc_url = rpc_url or network_rpc_url(self.network)
        self._transport = transport

    async def _rpc_call(self, request_id: int, method: str, params: dict[str, Any]) -> dict[str, Any]:
        """POST one JSON-RPC request and return the decoded envelope. Raises on HTTP errors."""
        log.debug("RPC %s -> %s", method, self.rpc_url)
        async with httpx.AsyncClient(transport=self._transport) as client:
            resp = await client.post(
                self.rpc_url,
                json={
                    "jsonrpc": "2.0",
                    "id": request_id,
                    "method": method,
                    "params": params,
                },
                headers={"Content-Type": "application/json"},
            )
            resp.raise_for_status()
            data = resp.json()
        if not isinstance(data, dict):
            raise ValueError(f"Unexpected RPC response: {type(data).__name__}")
        return data

    async def list_transactions(
        self,
        contract_id: str,
        *,
        start_ledger: int | None = None,
        cursor: str | None = None,
        limit: int = DEFAULT_LIMIT,
    ) -> ListingPage:
        """
        Recent transactions touching contract_id, newest first as the RPC returns them.
        Always returns a ListingPage; failures are reported through retention_notice.
        """
        try:
            address = resolve_contract_address(contract_id)
            params: dict[str, Any] = {
                "startLedger": start_ledger,
                "cursor": cursor,
                "limit": limit,
                "filters": [{"type": "contract", "contractIds": [address]}],
            }
            params = {k: v for k, v in params.items() if v is not None}
            data = await self._rpc_call(1, "getTransactions", params)

            error = data.get("error")
            if error is not None:
                if is_retention_error(error):
                    log.info("getTransactions for %s hit the retention window: %s", address, error)
                    return _empty_page(RETENTION_NOTICE)
                raise RpcError.from_payload(error)

            result = data.get("result") or {}
            items = [
                TransactionSummary(
                    hash=tx.get("id"),
                    ledger_sequence=tx.get("ledger"),
                    created_at=tx.get("createdAt") or "",
                    status=tx.get("status"),
                    application_order=tx.get("applicationOrder"),
                )
                for tx in result.get("transactions") or []
            ]
            next_cursor = result.get("cursor") or None
            return ListingPage(
                items=items,
                latest_ledger=result.get("latestLedger") or 0,
                oldest_ledger=result.get("oldestLedger") or 0,
                cursor=next_cursor,
                has_more=next_cursor is not None,
                retention_notice=NO_RECENT_NOTICE if not items else None,
            )
        except Exception as e:
            log.error("Error fetching transactions: %s", e)
            return _empty_page(UNAVAILABLE_NOTICE)

    async def get_transaction_detail(self, tx_hash: str) -> TransactionDetail | None:
        """Full detail for one transaction hash, or None when it cannot be found or fetched."""
        try:
            data = await self._rpc_call(2, "getTransaction", {"hash": tx_hash})
            if data.get("error") is not None:
                log.error("Error fetching transaction details: %s", data["error"])
                return None
            tx = data.get("result")
            if not tx:
                return None
            if tx.get("status") == TransactionStatus.NOT_FOUND.value:
                log.info("Transaction %s not found", tx_hash)
                return None
            return _build_detail(tx, tx_hash)
        except Exception as e:
            log.error("Error fetching transaction details: %s", e)
            return None


def _parse_envelope(raw: Any) -> RawEnvelope | None:
    if raw is None:
        return None
    try:
        return RawEnvelope.model_validate(raw)
    except ValidationError as e:
        log.warning("Could not parse transaction envelope: %s", e)
        return None


def _parse_meta(raw: Any) -> RawMeta | None:
    if raw is None:
        return None
    try:
        return RawMeta.model_validate(raw)
    except ValidationError as e:
        log.warning("Could not parse transaction meta: %s", e)
        return None


def _extract_signers(tx: dict[str, Any]) -> list[str]:
    # Real signer identities need XDR decoding; report that signatures exist.
    # Read from the raw envelope so a malformed operation list does not hide them.
    envelope = tx.get("envelope")
    if not tx.get("envelopeXdr") or not isinstance(envelope, dict):
        return []
    v1 = envelope.get("v1")
    has_signatures = envelope.get("signatures") is not None or (
        isinstance(v1, dict) and v1.get("signatures") is not None
    )
    return [SIGNER_PLACEHOLDER] if has_signatures else []


def _extract_call(envelope: RawEnvelope | None) -> tuple[str | None, list[Any] | None]:
    """Function name and args of the first invokeHostFunction operation, if any."""
    if envelope is None or envelope.v1 is None or envelope.v1.tx is None:
        return None, None
    for op in envelope.v1.tx.operations or []:
        if op.body is None or op.body.invoke_host_function is None:
            continue
        host_function = op.body.invoke_host_function.host_function
        if host_function is None or host_function.invoke_contract is None:
            return None, None
        call = host_function.invoke_contract
        return call.function_name or "invoke_contract", call.args or []
    return None, None


def _extract_return_value(meta: RawMeta | None) -> Any:
    if meta is None or meta.v3 is None or meta.v3.soroban_meta is None:
        return None
    # Falsy return values are treated as absent.
    return meta.v3.soroban_meta.return_value or None


def _build_detail(tx: dict[str, Any], tx_hash: str) -> TransactionDetail:
    raw_envelope = tx.get("envelope")
    raw_meta = tx.get("meta")
    envelope = _parse_envelope(raw_envelope)

    called_function: str | None = None
    args: list[Any] | None = None
    result: Any = None
    if tx.get("resultMetaXdr") and raw_meta:
        called_function, args = _extract_call(envelope)
        result = _extract_return_value(_parse_meta(raw_meta))

    return TransactionDetail(
        hash=tx.get("id") or tx_hash,
        ledger_sequence=tx.get("ledger"),
        created_at=tx.get("createdAt") or "",
        status=str(tx.get("status") or ""),
        application_order=tx.get("applicationOrder"),
        signers=_extract_signers(tx),
        called_function=called_function,
        args=args,
        result=result,
        envelope=raw_envelope,
        meta=raw_meta,
    )


async def fetch_transactions(
    contract_id: str,
    network: str | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
    **options: Any,
) -> ListingPage:
    """One-shot list_transactions for callers that do not keep a client."""
    return await TransactionClient(network, transport=transport).list_transactions(contract_id, **options)


async def fetch_transaction_detail(
    tx_hash: str,
    network: str | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> TransactionDetail | None:
    return await TransactionClient(network, transport=transport).get_transaction_detail(tx_hash)
