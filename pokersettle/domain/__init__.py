from .ledger import (
    LedgerState,
    add_player,
    calculate_settlements,
    find_player,
    game_balance,
    has_game_state,
    ledger_report,
    remove_player,
    reset_ledger,
    set_imbalance_threshold,
    update_player,
    validate_amount,
)
from .player import (
    CENT,
    SETTLED_TOLERANCE,
    DomainValidationError,
    Number,
    Player,
    PlayerNotFoundError,
    normalize_name,
    round_money,
    to_money,
)
from .report import format_currency, generate_report, player_name
from .settlement import (
    GameBalance,
    Totals,
    Transfer,
    calculate_totals,
    check_balance,
    compute_settlements,
)

__all__ = [
    "CENT",
    "SETTLED_TOLERANCE",
    "DomainValidationError",
    "GameBalance",
    "LedgerState",
    "Number",
    "Player",
    "PlayerNotFoundError",
    "Totals",
    "Transfer",
    "add_player",
    "calculate_settlements",
    "calculate_totals",
    "check_balance",
    "compute_settlements",
    "find_player",
    "format_currency",
    "game_balance",
    "generate_report",
    "has_game_state",
    "ledger_report",
    "normalize_name",
    "player_name",
    "remove_player",
    "reset_ledger",
    "round_money",
    "set_imbalance_threshold",
    "to_money",
    "update_player",
    "validate_amount",
]
