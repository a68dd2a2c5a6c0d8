# INTERIORFLOW/backend/interiorflow/routes/expenses.py

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import Optional
from interiorflow.models import models as db_models
from interiorflow.schemas import schemas
from interiorflow.database import get_db
from interiorflow.auth import get_current_identity
from interiorflow.services.accounts import display_name

router = APIRouter(prefix="/expenses", tags=["expenses"])


@router.post("")
def create_expense(
    payload: schemas.ExpenseIn,
    db: Session = Depends(get_db),
    identity: schemas.Identity = Depends(get_current_identity)
):
    """Dépense rattachée au projet d'un client"""
    if not payload.client_id or not payload.category or not payload.amount or not payload.date:
        raise HTTPException(status_code=400, detail="Missing required fields")
    if payload.amount <= 0:
        raise HTTPException(status_code=400, detail="Amount must be greater than 0")

    expense = db_models.Expense(
        user_id=identity.user_id,
        client_id=payload.client_id,
        category=payload.category.strip(),
        notes=payload.notes or "",
        amount=payload.amount,
        date=payload.date,
        added_by=display_name(db, identity.user_id, identity.email)
    )
    db.add(expense)
    db.commit()
    db.refresh(expense)
    return {
        "success": True,
        "expense": schemas.ExpenseOut.model_validate(expense),
        "message": "Expense created successfully"
    }


@router.get("")
def get_expenses(
    client_id: Optional[str] = Query(None, alias="clientId"),
    db: Session = Depends(get_db),
    identity: schemas.Identity = Depends(get_current_identity)
):
    """Dépenses projet, filtrables par client, de la plus récente à la plus ancienne"""
    query = db.query(db_models.Expense)
    if client_id:
        query = query.filter(db_models.Expense.client_id == client_id)
    expenses = query.order_by(db_models.Expense.date.desc()).all()
    return {"success": True, "expenses": [schemas.ExpenseOut.model_validate(e) for e in expenses]}
