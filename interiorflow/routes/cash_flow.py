# INTERIORFLOW/backend/interiorflow/routes/cash_flow.py

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import Optional
from datetime import datetime, timezone
from interiorflow.database import get_db
from interiorflow.auth import get_current_identity
from interiorflow.schemas.schemas import Identity
from interiorflow.services.cash_flow_service import CashFlowService

router = APIRouter(prefix="/cash-flow", tags=["cash-flow"])


def _naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Les dates sont stockées en UTC sans fuseau"""
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


@router.get("")
def get_cash_flow(
    date_from: Optional[datetime] = Query(None, alias="dateFrom", description="Date de début (ISO 8601)"),
    date_to: Optional[datetime] = Query(None, alias="dateTo", description="Date de fin (ISO 8601)"),
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity)
):
    """Mouvements de trésorerie avec solde cumulé, du plus récent au plus ancien"""
    date_from, date_to = _naive_utc(date_from), _naive_utc(date_to)
    if date_from and date_to and date_from > date_to:
        raise HTTPException(status_code=400, detail="dateFrom must be before dateTo")

    cash_flow = CashFlowService(db).get_cash_flow(date_from, date_to)
    return {"success": True, **cash_flow}
