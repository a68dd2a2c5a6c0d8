# INTERIORFLOW/backend/interiorflow/routes/quotes.py

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from interiorflow.models import models as db_models
from interiorflow.schemas import schemas
from interiorflow.database import get_db
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/quote", tags=["quotes"])


@router.post("", status_code=201)
def create_quote(payload: schemas.QuoteIn, db: Session = Depends(get_db)):
    """
    Demande de devis du site public.
    Aucun champ obligatoire : les champs absents prennent une valeur vide.
    """
    quote = db_models.Quote(
        name=payload.name or "",
        phone=payload.phone or "",
        request_call=bool(payload.request_call),
        service_interest=payload.service_interest or "",
        sq_feet=payload.sq_feet or 0,
        package=payload.package or "",
        additional_info=payload.additional_info or ""
    )
    db.add(quote)
    db.commit()
    db.refresh(quote)
    logger.info(f"📩 Nouvelle demande de devis: {quote.id}")
    return {
        "success": True,
        "message": "Quote enquiry submitted successfully",
        "quote": schemas.QuoteOut.model_validate(quote)
    }


@router.get("")
def get_quotes(db: Session = Depends(get_db)):
    quotes = db.query(db_models.Quote).order_by(db_models.Quote.created_at.desc()).all()
    return {"success": True, "quotes": [schemas.QuoteOut.model_validate(q) for q in quotes]}


@router.delete("/{quote_id}")
def delete_quote(quote_id: str, db: Session = Depends(get_db)):
    deleted = db.query(db_models.Quote).filter(
        db_models.Quote.id == quote_id
    ).delete(synchronize_session=False)
    if deleted == 0:
        raise HTTPException(status_code=404, detail="Quote enquiry not found")
    db.commit()
    return {"success": True, "message": "Quote enquiry deleted successfully"}
