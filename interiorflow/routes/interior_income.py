# INTERIORFLOW/backend/interiorflow/routes/interior_income.py

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import Optional
from datetime import datetime
from interiorflow.models import models as db_models
from interiorflow.schemas import schemas
from interiorflow.database import get_db
from interiorflow.auth import get_current_identity
from interiorflow import constants
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/interior-income", tags=["interior-income"])


@router.post("")
def create_income(
    payload: schemas.InteriorIncomeIn,
    db: Session = Depends(get_db),
    identity: schemas.Identity = Depends(get_current_identity)
):
    """Enregistrer un encaissement attendu (statut "pending")"""
    if not payload.client_id or payload.amount is None:
        raise HTTPException(status_code=400, detail="Missing required fields: clientId and amount are required")
    if payload.amount <= 0:
        raise HTTPException(status_code=400, detail="Amount must be greater than 0")

    now = datetime.utcnow()
    income = db_models.InteriorIncome(
        user_id=identity.user_id,
        client_id=payload.client_id,
        amount=payload.amount,
        status=constants.INCOME_PENDING,
        method=None,
        date=payload.date or now
    )
    db.add(income)
    db.commit()
    db.refresh(income)
    return {
        "success": True,
        "incomeId": income.id,
        "income": schemas.InteriorIncomeOut.model_validate(income),
        "message": "Interior income created successfully"
    }


@router.get("")
def get_incomes(
    client_id: Optional[str] = Query(None, alias="clientId"),
    db: Session = Depends(get_db),
    identity: schemas.Identity = Depends(get_current_identity)
):
    query = db.query(db_models.InteriorIncome)
    if client_id:
        query = query.filter(db_models.InteriorIncome.client_id == client_id)
    incomes = query.order_by(db_models.InteriorIncome.date.desc()).all()
    return {"success": True, "incomes": [schemas.InteriorIncomeOut.model_validate(i) for i in incomes]}


@router.patch("/{income_id}")
def update_income(
    income_id: str,
    payload: schemas.InteriorIncomeUpdate,
    db: Session = Depends(get_db),
    identity: schemas.Identity = Depends(get_current_identity)
):
    """
    Encaissement d'un paiement : statut, mode (cash/bank), encaissé par, montant.
    Seul le créateur de l'enregistrement ou un administrateur peut le modifier.
    """
    if payload.status is None and payload.amount is None:
        raise HTTPException(status_code=400, detail="Status or amount is required")
    if payload.status is not None and payload.status not in constants.INCOME_STATUSES:
        raise HTTPException(status_code=400, detail="Invalid status")
    if payload.method is not None and payload.method not in constants.PAYMENT_METHODS:
        raise HTTPException(status_code=400, detail="Invalid payment method")
    if payload.amount is not None and payload.amount <= 0:
        raise HTTPException(status_code=400, detail="Amount must be greater than 0")

    income = db.query(db_models.InteriorIncome).filter(db_models.InteriorIncome.id == income_id).first()
    if not income:
        raise HTTPException(status_code=404, detail="Income record not found")
    if income.user_id != identity.user_id and identity.role != constants.ROLE_ADMIN:
        raise HTTPException(status_code=403, detail="You are not allowed to update this income record")

    if payload.status is not None:
        income.status = payload.status
    if payload.amount is not None:
        income.amount = payload.amount
    # Le mode n'a de sens que pour un paiement reçu
    if payload.method is not None or payload.status == constants.INCOME_PENDING:
        income.method = payload.method
    if payload.marked_by is not None:
        income.marked_by = payload.marked_by.strip()
    income.updated_at = datetime.utcnow()
    db.commit()
    db.refresh(income)

    logger.info(f"💰 Encaissement {income_id} mis à jour: {income.status} ({income.method})")
    return {
        "success": True,
        "message": "Income updated successfully",
        "income": schemas.InteriorIncomeOut.model_validate(income)
    }
