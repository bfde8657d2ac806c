from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from pokersettle.api.errors import api_error
from pokersettle.api.schemas import BalanceOut, SettleRequest, SettleResponse, TransferOut
from pokersettle.domain import DomainValidationError, check_balance, compute_settlements, generate_report

router = APIRouter(prefix="/settle", tags=["settle"])


@router.post(
    "",
    response_model=SettleResponse,
    summary="Calculate transfers for a ledger snapshot",
)
def settle(payload: SettleRequest) -> SettleResponse:
    try:
        players = payload.domain_players()
        balance = check_balance(players, payload.imbalance_threshold)
        transfers = compute_settlements(players, payload.imbalance_threshold)
    except DomainValidationError as exc:
        raise api_error(code="invalid_ledger", message=str(exc)) from exc

    return SettleResponse(
        transfers=[TransferOut.from_domain(transfer, players) for transfer in transfers],
        balance=BalanceOut.from_domain(balance),
        settled=balance.is_within_threshold,
    )


@router.post(
    "/report",
    response_class=PlainTextResponse,
    summary="Render the settlement report as Markdown",
)
def settle_report(payload: SettleRequest) -> PlainTextResponse:
    try:
        report = generate_report(payload.domain_players(), payload.imbalance_threshold)
    except DomainValidationError as exc:
        raise api_error(code="invalid_ledger", message=str(exc)) from exc
    return PlainTextResponse(report, media_type="text/markdown")
