"""Settlement engine: turns a poker ledger into peer-to-peer transfers."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal

from .player import SETTLED_TOLERANCE, Number, Player, round_money, to_money

logger = logging.getLogger("pokersettle.domain.settlement")


@dataclass(slots=True, frozen=True)
class Transfer:
    payer_id: str
    payee_id: str
    amount: Decimal


@dataclass(slots=True, frozen=True)
class Totals:
    total_buy_ins: Decimal
    total_cash_outs: Decimal

    @property
    def difference(self) -> Decimal:
        return self.total_cash_outs - self.total_buy_ins


@dataclass(slots=True, frozen=True)
class GameBalance:
    totals: Totals
    imbalance_threshold: Decimal

    @property
    def difference(self) -> Decimal:
        return self.totals.difference

    @property
    def is_balanced(self) -> bool:
        return abs(self.difference) <= SETTLED_TOLERANCE

    @property
    def is_within_threshold(self) -> bool:
        return abs(self.difference) <= self.imbalance_threshold


@dataclass(slots=True)
class _Balance:
    player_id: str
    name: str
    amount: Decimal
    position: int


def calculate_totals(players: Sequence[Player]) -> Totals:
    return Totals(
        total_buy_ins=sum((player.buy_in for player in players), Decimal("0")),
        total_cash_outs=sum((player.cash_out for player in players), Decimal("0")),
    )


def check_balance(players: Sequence[Player], imbalance_threshold: Number) -> GameBalance:
    return GameBalance(totals=calculate_totals(players), imbalance_threshold=to_money(imbalance_threshold))


def compute_settlements(players: Sequence[Player], imbalance_threshold: Number) -> list[Transfer]:
    """Compute who pays whom so that every player's net position is cleared.

    An imbalance (total cash-outs minus total buy-ins) larger than
    ``imbalance_threshold`` makes the ledger unsettlable and yields an empty
    list; callers tell that apart from "nothing to pay" with
    :func:`check_balance`. A tolerated imbalance is spread evenly over all
    cash-outs before balances are derived.

    Balances are matched greedily, largest magnitude first, so every step
    clears at least one player and at most ``len(players) - 1`` transfers are
    produced. Equal magnitudes keep the order of ``players``.
    """
    balance = check_balance(players, imbalance_threshold)
    if not balance.is_within_threshold:
        logger.info(
            "imbalance %s exceeds threshold %s, refusing to settle",
            balance.difference,
            balance.imbalance_threshold,
        )
        return []

    balances = _initial_balances(players, balance.difference)
    transfers: list[Transfer] = []
    while len(balances) > 1:
        balances.sort(key=lambda item: (-abs(item.amount), item.position))
        pair = _pick_pair(balances)
        if pair is None:
            logger.debug("residual balances share one sign, stopping: %s", balances)
            break
        debtor, creditor = pair

        amount = round_money(min(-debtor.amount, creditor.amount))
        if amount > 0:
            transfers.append(Transfer(payer_id=debtor.player_id, payee_id=creditor.player_id, amount=amount))

        debtor.amount = round_money(debtor.amount + amount)
        creditor.amount = round_money(creditor.amount - amount)
        balances = [item for item in balances if abs(item.amount) > SETTLED_TOLERANCE]

    logger.debug("settled %d players with %d transfers", len(players), len(transfers))
    return transfers


def _initial_balances(players: Sequence[Player], imbalance: Decimal) -> list[_Balance]:
    adjustment = imbalance / len(players) if imbalance and players else Decimal("0")
    balances = []
    for position, player in enumerate(players):
        cash_out = round_money(player.cash_out - adjustment) if adjustment else player.cash_out
        amount = round_money(cash_out - player.buy_in)
        if abs(amount) > SETTLED_TOLERANCE:
            balances.append(_Balance(player_id=player.id, name=player.name, amount=amount, position=position))
    return balances


def _pick_pair(balances: list[_Balance]) -> tuple[_Balance, _Balance] | None:
    """Return ``(debtor, creditor)`` built around the largest balance."""
    first, second = balances[0], balances[1]
    if first.amount < 0 < second.amount:
        return first, second
    if second.amount < 0 < first.amount:
        return second, first

    # Top two share a sign: pair the largest with the largest opposite entry.
    opposite = next((item for item in balances[2:] if (item.amount < 0) != (first.amount < 0)), None)
    if opposite is None:
        return None
    return (first, opposite) if first.amount < 0 else (opposite, first)
