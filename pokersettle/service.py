from __future__ import annotations

import logging
from threading import Lock

from pokersettle.domain import (
    GameBalance,
    LedgerState,
    Number,
    Player,
    add_player,
    calculate_settlements,
    game_balance,
    has_game_state,
    ledger_report,
    remove_player,
    reset_ledger,
    set_imbalance_threshold,
    update_player,
)

logger = logging.getLogger("pokersettle.service")


class LedgerService:
    def __init__(self, state: LedgerState | None = None) -> None:
        self.state = state or LedgerState()
        self._lock = Lock()

    def snapshot(self) -> LedgerState:
        return self.state

    def add_player(self, name: str) -> Player:
        with self._lock:
            self.state = add_player(self.state, name)
            player = self.state.players[-1]
        logger.info("added player %s (%s)", player.name, player.id)
        return player

    def update_player(
        self,
        player_id: str,
        *,
        name: str | None = None,
        buy_in: Number | None = None,
        cash_out: Number | None = None,
    ) -> Player:
        with self._lock:
            self.state = update_player(self.state, player_id, name=name, buy_in=buy_in, cash_out=cash_out)
            player = next(player for player in self.state.players if player.id == player_id)
        logger.info("updated player %s (%s)", player.name, player.id)
        return player

    def remove_player(self, player_id: str) -> None:
        with self._lock:
            self.state = remove_player(self.state, player_id)
        logger.info("removed player %s", player_id)

    def set_imbalance_threshold(self, value: Number) -> LedgerState:
        with self._lock:
            self.state = set_imbalance_threshold(self.state, value)
            return self.state

    def calculate_settlements(self) -> LedgerState:
        with self._lock:
            self.state = calculate_settlements(self.state)
            state = self.state
        balance = game_balance(state)
        if not state.settlements and not balance.is_within_threshold:
            logger.warning(
                "ledger cannot be settled: difference %s exceeds threshold %s",
                balance.difference,
                balance.imbalance_threshold,
            )
        return state

    def game_balance(self) -> GameBalance:
        return game_balance(self.state)

    def report(self) -> str:
        return ledger_report(self.state)

    def has_game_state(self) -> bool:
        return has_game_state(self.state)

    def reset(self) -> LedgerState:
        with self._lock:
            self.state = reset_ledger()
            return self.state
