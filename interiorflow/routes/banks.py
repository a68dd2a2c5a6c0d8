# INTERIORFLOW/backend/interiorflow/routes/banks.py

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from interiorflow.models import models as db_models
from interiorflow.schemas import schemas
from interiorflow.database import get_db

router = APIRouter(prefix="/banks", tags=["banks"])


def _bank_fields(payload: schemas.BankIn) -> dict:
    fields = {
        "bank_name": payload.bank_name,
        "account_name": payload.account_name,
        "account_number": payload.account_number,
        "account_type": payload.account_type,
        "ifsc_code": payload.ifsc_code,
        "upi_id": payload.upi_id,
    }
    if not all(value and value.strip() for value in fields.values()):
        raise HTTPException(status_code=400, detail="All fields are required")
    fields = {key: value.strip() for key, value in fields.items()}
    fields["ifsc_code"] = fields["ifsc_code"].upper()
    return fields


@router.get("")
def get_banks(db: Session = Depends(get_db)):
    banks = db.query(db_models.Bank).order_by(db_models.Bank.created_at.desc()).all()
    return {"success": True, "banks": [schemas.BankOut.model_validate(b) for b in banks]}


@router.post("")
def create_bank(payload: schemas.BankIn, db: Session = Depends(get_db)):
    bank = db_models.Bank(**_bank_fields(payload))
    db.add(bank)
    db.commit()
    db.refresh(bank)
    return {
        "success": True,
        "message": "Bank details added successfully",
        "bank": schemas.BankOut.model_validate(bank)
    }


@router.put("/{bank_id}")
def update_bank(bank_id: str, payload: schemas.BankIn, db: Session = Depends(get_db)):
    fields = _bank_fields(payload)
    bank = db.query(db_models.Bank).filter(db_models.Bank.id == bank_id).first()
    if not bank:
        raise HTTPException(status_code=404, detail="Bank not found")
    for key, value in fields.items():
        setattr(bank, key, value)
    db.commit()
    db.refresh(bank)
    return {
        "success": True,
        "message": "Bank details updated successfully",
        "bank": schemas.BankOut.model_validate(bank)
    }


@router.delete("/{bank_id}")
def delete_bank(bank_id: str, db: Session = Depends(get_db)):
    bank = db.query(db_models.Bank).filter(db_models.Bank.id == bank_id).first()
    if not bank:
        raise HTTPException(status_code=404, detail="Bank not found")
    db.delete(bank)
    db.commit()
    return {"success": True, "message": "Bank details deleted successfully"}
