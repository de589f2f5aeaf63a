# SPDX-License-Identifier: MIT
"""Pydantic models describing registry records, results and configuration.

These definitions are the contract between the registry, the ledger, the
command-line interface and any persistence backend. Records are frozen; an
edit produces a new instance via ``model_copy``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from .constants import (
    BIPS_DENOMINATOR,
    DEFAULT_PROTOCOL_OWNER,
    DEFAULT_REFERRER_FEE_BIPS,
    DEFAULT_REGISTRATION_FEE,
)


class StrictModel(BaseModel):
    """Base model with strict settings to prevent shape drift."""

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=False)


class IdentifierRecord(StrictModel):
    """A committed slug registration."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    sequence_number: Annotated[
        int, Field(ge=1, description="Monotonic identifier assigned at commit.")
    ]
    slug: Annotated[str, Field(min_length=1, description="Human-facing identifier.")]
    destination: Annotated[
        str, Field(min_length=1, description="Current destination string.")
    ]
    is_custom: bool = Field(
        False, description="Whether the slug was chosen by the caller."
    )


class Registration(StrictModel):
    """Outcome of a successful ``Registry.register`` call."""

    slug: str
    sequence_number: int = Field(..., ge=1)
    is_custom: bool
    refund: int = Field(0, ge=0, description="Amount to hand back to the payer.")


class LedgerTotals(StrictModel):
    """Running totals used to audit the ledger."""

    collected: int = Field(0, ge=0, description="All value credited so far.")
    paid_out: int = Field(0, ge=0, description="All value withdrawn so far.")
    outstanding: int = Field(0, ge=0, description="Sum of current balances.")


class AppConfig(StrictModel):
    """Top-level application configuration read from YAML."""

    registration_fee: int = Field(
        DEFAULT_REGISTRATION_FEE,
        ge=0,
        description="Flat fee charged for a custom slug.",
    )
    referrer_fee_bips: int = Field(
        DEFAULT_REFERRER_FEE_BIPS,
        ge=0,
        le=BIPS_DENOMINATOR,
        description="Referrer share of the fee in basis points.",
    )
    protocol_owner: Annotated[
        str, Field(min_length=1, description="Address credited with protocol fees.")
    ] = DEFAULT_PROTOCOL_OWNER
    state_file: Path | None = Field(
        None, description="JSON lines snapshot file; in-memory when omitted."
    )
    log_level: Annotated[
        str, Field(min_length=1, description="Logging verbosity level.")
    ] = "warn"


__all__ = [
    "StrictModel",
    "IdentifierRecord",
    "Registration",
    "LedgerTotals",
    "AppConfig",
]
