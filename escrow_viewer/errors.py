"""Exceptions raised inside the client layer."""

from typing import Any


class EscrowViewerError(Exception):
    pass


class RpcError(EscrowViewerError):
    """A JSON-RPC error object returned by the Soroban endpoint."""

    def __init__(self, code: int | None, message: str | None, data: Any = None):
        self.code = code
        self.message = message or "Failed to fetch transactions"
        self.data = data
        super().__init__(f"RPC error {code}: {self.message}" if code is not None else self.message)

    @classmethod
    def from_payload(cls, error: Any) -> "RpcError":
        if isinstance(error, dict):
            return cls(error.get("code"), error.get("message"), error.get("data"))
        return cls(None, str(error))
