from __future__ import annotations

import logging

from fastapi import FastAPI

from pokersettle.api.ledger import router as ledger_router
from pokersettle.api.settle import router as settle_router
from pokersettle.config import LOG_LEVEL

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Poker Settle API")
app.include_router(settle_router)
app.include_router(ledger_router)


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
