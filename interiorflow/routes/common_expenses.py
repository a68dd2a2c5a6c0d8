# INTERIORFLOW/backend/interiorflow/routes/common_expenses.py

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from interiorflow.models import models as db_models
from interiorflow.schemas import schemas
from interiorflow.database import get_db
from interiorflow.auth import get_current_identity
from interiorflow.services.accounts import display_name
from interiorflow import constants

router = APIRouter(prefix="/common-expenses", tags=["expenses"])


@router.post("")
def create_common_expense(
    payload: schemas.CommonExpenseIn,
    db: Session = Depends(get_db),
    identity: schemas.Identity = Depends(get_current_identity)
):
    """Frais généraux (loyer, électricité, salaires...), sans client"""
    if not payload.category or not payload.amount or not payload.date:
        raise HTTPException(status_code=400, detail="Missing required fields: category, amount, date")
    if payload.category not in constants.COMMON_EXPENSE_CATEGORIES:
        raise HTTPException(status_code=400, detail="Invalid category")
    if payload.amount <= 0:
        raise HTTPException(status_code=400, detail="Amount must be greater than 0")

    expense = db_models.CommonExpense(
        user_id=identity.user_id,
        category=payload.category,
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
        "expense": schemas.CommonExpenseOut.model_validate(expense),
        "message": "Common expense created successfully"
    }


@router.get("")
def get_common_expenses(
    db: Session = Depends(get_db),
    identity: schemas.Identity = Depends(get_current_identity)
):
    expenses = db.query(db_models.CommonExpense).order_by(db_models.CommonExpense.date.desc()).all()
    return {"success": True, "expenses": [schemas.CommonExpenseOut.model_validate(e) for e in expenses]}
