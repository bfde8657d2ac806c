from __future__ import annotations

from fastapi import APIRouter, Response, status
from fastapi.responses import PlainTextResponse

from pokersettle.api.errors import ledger_error
from pokersettle.api.schemas import (
    AddPlayerRequest,
    LedgerResponse,
    PlayerOut,
    ThresholdRequest,
    TransferOut,
    UpdatePlayerRequest,
)
from pokersettle.domain import DomainValidationError, LedgerState
from pokersettle.runtime import ledger_service

router = APIRouter(prefix="/ledger", tags=["ledger"])


def _ledger_response(state: LedgerState | None = None) -> LedgerResponse:
    return LedgerResponse.from_state(state or ledger_service.snapshot())


@router.get("", response_model=LedgerResponse, summary="Current ledger state")
def get_ledger() -> LedgerResponse:
    return _ledger_response()


@router.post(
    "/players",
    response_model=PlayerOut,
    status_code=status.HTTP_201_CREATED,
    summary="Add a player with zero buy-in and cash-out",
)
def create_player(payload: AddPlayerRequest) -> PlayerOut:
    try:
        player = ledger_service.add_player(payload.name)
    except DomainValidationError as exc:
        raise ledger_error(exc, name=payload.name) from exc
    return PlayerOut.from_domain(player)


@router.patch("/players/{player_id}", response_model=PlayerOut, summary="Edit a player")
def edit_player(player_id: str, payload: UpdatePlayerRequest) -> PlayerOut:
    try:
        player = ledger_service.update_player(
            player_id,
            name=payload.name,
            buy_in=payload.buy_in,
            cash_out=payload.cash_out,
        )
    except DomainValidationError as exc:
        raise ledger_error(exc, player_id=player_id) from exc
    return PlayerOut.from_domain(player)


@router.delete(
    "/players/{player_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove a player",
)
def delete_player(player_id: str) -> Response:
    try:
        ledger_service.remove_player(player_id)
    except DomainValidationError as exc:
        raise ledger_error(exc, player_id=player_id) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/threshold", response_model=LedgerResponse, summary="Set the tolerated imbalance")
def put_threshold(payload: ThresholdRequest) -> LedgerResponse:
    try:
        state = ledger_service.set_imbalance_threshold(payload.imbalance_threshold)
    except DomainValidationError as exc:
        raise ledger_error(exc) from exc
    return _ledger_response(state)


@router.post(
    "/settlements",
    response_model=list[TransferOut],
    summary="Calculate and store settlements for the current ledger",
)
def post_settlements() -> list[TransferOut]:
    state = ledger_service.calculate_settlements()
    return [TransferOut.from_domain(transfer, state.players) for transfer in state.settlements]


@router.get(
    "/settlements",
    response_model=list[TransferOut],
    summary="Settlements calculated since the last ledger change",
)
def get_settlements() -> list[TransferOut]:
    state = ledger_service.snapshot()
    return [TransferOut.from_domain(transfer, state.players) for transfer in state.settlements]


@router.get("/report", response_class=PlainTextResponse, summary="Markdown settlement report")
def get_report() -> PlainTextResponse:
    return PlainTextResponse(ledger_service.report(), media_type="text/markdown")


@router.post("/reset", response_model=LedgerResponse, summary="Remove all players and settings")
def reset_ledger() -> LedgerResponse:
    return _ledger_response(ledger_service.reset())
