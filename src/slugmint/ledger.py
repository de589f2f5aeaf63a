# SPDX-License-Identifier: MIT
"""Fee ledger splitting registration fees between referrer and protocol owner.

Balances are pull-based: credits accumulate per address and an address
withdraws its whole balance in one step. The ledger never holds refunds;
``settle`` returns them for the caller to hand back immediately.

The ledger keeps two running totals so that, at any point,
``sum(balances) + paid_out == collected``.
"""

from __future__ import annotations

import logfire

from .constants import BIPS_DENOMINATOR
from .errors import InsufficientPayment, LedgerImbalance, NoBalance
from .events import EventSink, Withdrawal, dispatch
from .io_utils.store import StateStore
from .models import LedgerTotals

_BALANCES = "balances"
_TOTALS = "ledger_totals"


def referrer_share(cost: int, referrer_fee_bips: int) -> int:
    """Return the referrer's part of ``cost``, rounded down."""
    return cost * referrer_fee_bips // BIPS_DENOMINATOR


class FeeLedger:
    """Track withdrawable balances per address."""

    def __init__(
        self,
        store: StateStore,
        protocol_owner: str,
        referrer_fee_bips: int,
        sinks: list[EventSink] | None = None,
    ) -> None:
        if not 0 <= referrer_fee_bips <= BIPS_DENOMINATOR:
            raise ValueError(
                f"referrer_fee_bips must be within 0..{BIPS_DENOMINATOR}"
            )
        if not protocol_owner:
            raise ValueError("protocol_owner must be non-empty")
        self._store = store
        self.protocol_owner = protocol_owner
        self.referrer_fee_bips = referrer_fee_bips
        self._sinks: list[EventSink] = list(sinks or [])

    def balance_of(self, address: str) -> int:
        """Return the withdrawable balance of ``address``."""
        return self._store.get(_BALANCES, address, 0)

    def _credit(self, address: str, amount: int) -> None:
        self._store.put(_BALANCES, address, self.balance_of(address) + amount)

    def _bump_total(self, name: str, amount: int) -> None:
        self._store.put(_TOTALS, name, self._store.get(_TOTALS, name, 0) + amount)

    def settle(
        self,
        payment: int,
        cost: int,
        referrer: str | None = None,
        protocol_owner: str | None = None,
    ) -> int:
        """Credit the fee split for one paid registration and return the refund.

        Args:
            payment: Amount handed over by the payer.
            cost: Registration cost to retain.
            referrer: Address earning the referrer share. Defaults to the
                protocol owner, collapsing both shares into one credit.
            protocol_owner: Overrides the configured protocol owner.

        Returns:
            ``payment - cost``, to be returned to the payer.

        Raises:
            InsufficientPayment: If ``payment`` is below ``cost``.
        """
        if cost < 0:
            raise ValueError("cost must be non-negative")
        if payment < cost:
            raise InsufficientPayment(payment, cost)
        owner = protocol_owner or self.protocol_owner
        earner = referrer or owner
        share = referrer_share(cost, self.referrer_fee_bips)
        with self._store.transaction():
            self._credit(earner, share)
            self._credit(owner, cost - share)
            self._bump_total("collected", cost)
        refund = payment - cost
        logfire.debug(
            "Fee settled",
            cost=cost,
            referrer=earner,
            referrer_share=share,
            owner=owner,
            refund=refund,
        )
        return refund

    def credit_incoming(self, sender: str, amount: int) -> int:
        """Credit value received outside a registration to the protocol owner.

        Returns:
            The protocol owner's new balance.
        """
        if amount < 0:
            raise ValueError("amount must be non-negative")
        with self._store.transaction():
            self._credit(self.protocol_owner, amount)
            self._bump_total("collected", amount)
            balance = self.balance_of(self.protocol_owner)
        logfire.info(
            "Incoming value credited",
            sender=sender,
            amount=amount,
            owner=self.protocol_owner,
        )
        return balance

    def withdraw(self, address: str) -> int:
        """Zero the balance of ``address`` and return the amount withdrawn.

        Raises:
            NoBalance: If ``address`` has nothing to withdraw.
        """
        with logfire.span("ledger.withdraw", attributes={"address": address}):
            with self._store.transaction():
                amount = self.balance_of(address)
                if amount <= 0:
                    raise NoBalance(f"No balance for {address}")
                self._store.put(_BALANCES, address, 0)
                self._bump_total("paid_out", amount)
            logfire.info("Balance withdrawn", address=address, amount=amount)
        self._emit(Withdrawal(address=address, amount=amount))
        return amount

    def totals(self) -> LedgerTotals:
        """Return collected, paid out and outstanding amounts."""
        with self._store.transaction():
            outstanding = sum(amount for _, amount in self._store.items(_BALANCES))
            return LedgerTotals(
                collected=self._store.get(_TOTALS, "collected", 0),
                paid_out=self._store.get(_TOTALS, "paid_out", 0),
                outstanding=outstanding,
            )

    def audit(self) -> LedgerTotals:
        """Verify ``outstanding + paid_out == collected``.

        Raises:
            LedgerImbalance: If the totals disagree.
        """
        totals = self.totals()
        if totals.outstanding + totals.paid_out != totals.collected:
            logfire.error("Ledger imbalance", **totals.model_dump())
            raise LedgerImbalance(
                f"outstanding {totals.outstanding} + paid out {totals.paid_out}"
                f" != collected {totals.collected}"
            )
        return totals

    def subscribe(self, sink: EventSink) -> None:
        """Register an additional event sink."""
        self._sinks.append(sink)

    def _emit(self, event: Withdrawal) -> None:
        dispatch(self._sinks, event)


__all__ = ["FeeLedger", "referrer_share"]
