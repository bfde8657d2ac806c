from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

from pokersettle.domain import GameBalance, LedgerState, Player, Transfer, game_balance, has_game_state, player_name


class PlayerIn(BaseModel):
    id: str = Field(..., min_length=1, examples=["alice"])
    name: str = Field(..., examples=["Alice"])
    buy_in: float = Field(0, ge=0, allow_inf_nan=False, description="Amount paid into the pot")
    cash_out: float = Field(0, ge=0, allow_inf_nan=False, description="Amount taken from the table")

    def to_domain(self) -> Player:
        return Player(id=self.id, name=self.name, buy_in=self.buy_in, cash_out=self.cash_out)


class SettleRequest(BaseModel):
    players: list[PlayerIn] = Field(default_factory=list)
    imbalance_threshold: float = Field(1, ge=0, allow_inf_nan=False)

    @model_validator(mode="after")
    def validate_players(self) -> "SettleRequest":
        ids = [player.id for player in self.players]
        if len(set(ids)) != len(ids):
            raise ValueError("player ids must be unique")
        return self

    def domain_players(self) -> list[Player]:
        return [player.to_domain() for player in self.players]

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "players": [
                        {"id": "a", "name": "A", "buy_in": 100, "cash_out": 150},
                        {"id": "b", "name": "B", "buy_in": 100, "cash_out": 50},
                    ],
                    "imbalance_threshold": 1,
                }
            ]
        }
    }


class TransferOut(BaseModel):
    model_config = {"populate_by_name": True}

    payer_id: str = Field(..., alias="from")
    payee_id: str = Field(..., alias="to")
    payer_name: str
    payee_name: str
    amount: float

    @classmethod
    def from_domain(cls, transfer: Transfer, players: list[Player] | tuple[Player, ...]) -> "TransferOut":
        return cls(
            payer_id=transfer.payer_id,
            payee_id=transfer.payee_id,
            payer_name=player_name(players, transfer.payer_id),
            payee_name=player_name(players, transfer.payee_id),
            amount=float(transfer.amount),
        )


class BalanceOut(BaseModel):
    total_buy_ins: float
    total_cash_outs: float
    difference: float
    is_balanced: bool
    is_within_threshold: bool

    @classmethod
    def from_domain(cls, balance: GameBalance) -> "BalanceOut":
        return cls(
            total_buy_ins=float(balance.totals.total_buy_ins),
            total_cash_outs=float(balance.totals.total_cash_outs),
            difference=float(balance.difference),
            is_balanced=balance.is_balanced,
            is_within_threshold=balance.is_within_threshold,
        )


class SettleResponse(BaseModel):
    transfers: list[TransferOut]
    balance: BalanceOut
    settled: bool


class PlayerOut(BaseModel):
    id: str
    name: str
    buy_in: float
    cash_out: float
    net: float

    @classmethod
    def from_domain(cls, player: Player) -> "PlayerOut":
        return cls(
            id=player.id,
            name=player.name,
            buy_in=float(player.buy_in),
            cash_out=float(player.cash_out),
            net=float(player.net),
        )


class AddPlayerRequest(BaseModel):
    name: str = Field(..., examples=["Alice"])


class UpdatePlayerRequest(BaseModel):
    name: str | None = None
    buy_in: float | None = Field(None, ge=0, allow_inf_nan=False)
    cash_out: float | None = Field(None, ge=0, allow_inf_nan=False)


class ThresholdRequest(BaseModel):
    imbalance_threshold: float = Field(..., ge=0, allow_inf_nan=False, examples=[1])


class LedgerResponse(BaseModel):
    players: list[PlayerOut]
    imbalance_threshold: float
    settlements: list[TransferOut]
    balance: BalanceOut
    has_game_state: bool

    @classmethod
    def from_state(cls, state: LedgerState) -> "LedgerResponse":
        return cls(
            players=[PlayerOut.from_domain(player) for player in state.players],
            imbalance_threshold=float(state.imbalance_threshold),
            settlements=[TransferOut.from_domain(transfer, state.players) for transfer in state.settlements],
            balance=BalanceOut.from_domain(game_balance(state)),
            has_game_state=has_game_state(state),
        )
