from __future__ import annotations

from pokersettle.service import LedgerService

ledger_service = LedgerService()
