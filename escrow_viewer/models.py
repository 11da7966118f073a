"""Pydantic models for Soroban RPC transaction listings and details."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class TransactionStatus(str, Enum):
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"
    NOT_FOUND = "NOT_FOUND"


class TransactionSummary(BaseModel):
    """One row of a contract's transaction listing."""

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    hash: str = Field(min_length=1)
    ledger_sequence: int = Field(ge=0)
    created_at: str = ""  # opaque, as produced by the RPC
    status: TransactionStatus
    application_order: int | None = None


class TransactionDetail(BaseModel):
    """Full record for one transaction. envelope/meta are the raw RPC payloads."""

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    hash: str = Field(min_length=1)
    ledger_sequence: int = Field(ge=0)
    created_at: str = ""
    status: str
    application_order: int | None = None
    signers: list[str] = []
    called_function: str | None = None
    args: list[Any] | None = None
    result: Any = None
    envelope: Any = None
    meta: Any = None


class ListingPage(BaseModel):
    """Result of a paginated getTransactions call."""

    model_config = ConfigDict(frozen=True)

    items: list[TransactionSummary] = []
    latest_ledger: int = 0
    oldest_ledger: int = 0
    cursor: str | None = None
    has_more: bool = False
    retention_notice: str | None = None


# Partial schema of the raw getTransaction payload.
# Every field is optional and unknown keys are kept, so only the paths we read are checked.


class _RawModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")


class RawInvokeContract(_RawModel):
    function_name: str | None = None
    args: list[Any] | None = None


class RawHostFunction(_RawModel):
    invoke_contract: RawInvokeContract | None = None


class RawInvokeHostFunction(_RawModel):
    host_function: RawHostFunction | None = None


class RawOperationBody(_RawModel):
    invoke_host_function: RawInvokeHostFunction | None = None


class RawOperation(_RawModel):
    body: RawOperationBody | None = None


class RawTx(_RawModel):
    operations: list[RawOperation] | None = None


class RawEnvelopeV1(_RawModel):
    tx: RawTx | None = None


class RawEnvelope(_RawModel):
    v1: RawEnvelopeV1 | None = None


class RawSorobanMeta(_RawModel):
    return_value: Any = None


class RawMetaV3(_RawModel):
    soroban_meta: RawSorobanMeta | None = None


class RawMeta(_RawModel):
    v3: RawMetaV3 | None = None
