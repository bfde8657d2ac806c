from __future__ import annotations

from collections.abc import Sequence

from pokersettle.config import CURRENCY_SYMBOL

from .player import Number, Player, round_money
from .settlement import check_balance, compute_settlements


def format_currency(amount: Number, symbol: str = CURRENCY_SYMBOL) -> str:
    value = round_money(amount)
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.2f}"


def player_name(players: Sequence[Player], player_id: str) -> str:
    """Resolve an id to a display name, empty when the player is unknown."""
    return next((player.name for player in players if player.id == player_id), "")


def generate_report(players: Sequence[Player], imbalance_threshold: Number) -> str:
    """Render the ledger and its settlements as a Markdown report."""
    balance = check_balance(players, imbalance_threshold)
    transfers = compute_settlements(players, imbalance_threshold)

    imbalance_messages: list[str] = []
    if not balance.is_balanced:
        difference = balance.difference
        if balance.is_within_threshold:
            imbalance_messages.append(
                f"Small imbalance of {format_currency(abs(difference))} detected (within threshold)"
            )
        elif difference > 0:
            imbalance_messages.append(f"Cash-outs exceed buy-ins by {format_currency(difference)}")
        else:
            imbalance_messages.append(f"Buy-ins exceed cash-outs by {format_currency(abs(difference))}")

    player_rows = "\n".join(
        f"| {player.name} | {format_currency(player.buy_in)} | "
        f"{format_currency(player.cash_out)} | {format_currency(player.net)} |"
        for player in players
    )
    settlement_rows = "\n".join(
        f"- {player_name(players, transfer.payer_id)} pays "
        f"{player_name(players, transfer.payee_id)}: {format_currency(transfer.amount)}"
        for transfer in transfers
    )

    report = (
        "# Poker Game Settlement Report\n"
        "\n"
        "## Player Results\n"
        "\n"
        "| Player | Buy-in | Cash-out | Net |\n"
        "|--------|---------|-----------|-----|\n"
        f"{player_rows}\n"
        "\n"
        f"**Total Buy-ins:** {format_currency(balance.totals.total_buy_ins)}\n"
        f"**Total Cash-outs:** {format_currency(balance.totals.total_cash_outs)}"
    )
    if imbalance_messages:
        report += "\n\n## Game Imbalance\n"
        report += "\n".join(f"- {message}" for message in imbalance_messages)

    report += "\n\n## Settlements Required\n\n"
    report += settlement_rows
    return report
