"""Ledger state for a single poker table.

The state is an immutable snapshot; every command returns a new one. Any
change to the player list drops previously calculated settlements, so a
displayed transfer list never describes a ledger that no longer exists.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from decimal import Decimal
from uuid import uuid4

from pokersettle.config import DEFAULT_IMBALANCE_THRESHOLD

from .player import DomainValidationError, Number, Player, PlayerNotFoundError, normalize_name, to_money
from .report import generate_report
from .settlement import GameBalance, Transfer, check_balance, compute_settlements


def _default_threshold() -> Decimal:
    return to_money(DEFAULT_IMBALANCE_THRESHOLD)


@dataclass(frozen=True)
class LedgerState:
    players: tuple[Player, ...] = field(default_factory=tuple)
    imbalance_threshold: Decimal = field(default_factory=_default_threshold)
    settlements: tuple[Transfer, ...] = field(default_factory=tuple)


def validate_amount(value: Number, label: str) -> Decimal:
    amount = to_money(value)
    if amount < 0:
        raise DomainValidationError(f"{label} must be non-negative")
    return amount


def find_player(state: LedgerState, player_id: str) -> Player:
    for player in state.players:
        if player.id == player_id:
            return player
    raise PlayerNotFoundError(f"unknown player: {player_id}")


def add_player(state: LedgerState, name: str, *, player_id: str | None = None) -> LedgerState:
    player_id = player_id or uuid4().hex
    if any(player.id == player_id for player in state.players):
        raise DomainValidationError(f"duplicate player id: {player_id}")
    player = Player(id=player_id, name=normalize_name(name))
    return replace(state, players=state.players + (player,), settlements=())


def remove_player(state: LedgerState, player_id: str) -> LedgerState:
    find_player(state, player_id)
    players = tuple(player for player in state.players if player.id != player_id)
    return replace(state, players=players, settlements=())


def update_player(
    state: LedgerState,
    player_id: str,
    *,
    name: str | None = None,
    buy_in: Number | None = None,
    cash_out: Number | None = None,
) -> LedgerState:
    current = find_player(state, player_id)
    updated = replace(
        current,
        name=current.name if name is None else normalize_name(name),
        buy_in=current.buy_in if buy_in is None else validate_amount(buy_in, "buy_in"),
        cash_out=current.cash_out if cash_out is None else validate_amount(cash_out, "cash_out"),
    )
    players = tuple(updated if player.id == player_id else player for player in state.players)
    return replace(state, players=players, settlements=())


def set_imbalance_threshold(state: LedgerState, value: Number) -> LedgerState:
    return replace(state, imbalance_threshold=validate_amount(value, "imbalance_threshold"))


def calculate_settlements(state: LedgerState) -> LedgerState:
    transfers = compute_settlements(state.players, state.imbalance_threshold)
    return replace(state, settlements=tuple(transfers))


def game_balance(state: LedgerState) -> GameBalance:
    return check_balance(state.players, state.imbalance_threshold)


def ledger_report(state: LedgerState) -> str:
    return generate_report(state.players, state.imbalance_threshold)


def has_game_state(state: LedgerState) -> bool:
    return bool(state.players) or state.imbalance_threshold != _default_threshold()


def reset_ledger() -> LedgerState:
    return LedgerState()
