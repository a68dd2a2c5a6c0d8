# INTERIORFLOW/backend/interiorflow/routes/general_estimates.py

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import Optional, List
from datetime import datetime
from interiorflow.models import models as db_models
from interiorflow.schemas import schemas
from interiorflow.database import get_db
from interiorflow.auth import get_current_identity
from interiorflow.services import pricing
from interiorflow import constants

router = APIRouter(prefix="/general-estimates", tags=["general-estimates"])


def _priced(items: List[schemas.GeneralEstimateItem], discount, discount_type):
    """Totaux par ligne (surface x prix au pied carré), sous-total puis total remisé"""
    if discount_type not in constants.DISCOUNT_TYPES:
        raise HTTPException(status_code=400, detail="Invalid discount type")
    priced = []
    for item in items:
        item = item.model_copy(update={
            "total_amount": pricing.general_item_total(item.sq_feet, item.amount_per_sq_ft)
        })
        priced.append(item.model_dump(by_alias=True))
    subtotal = pricing.subtotal(priced)
    return priced, subtotal, pricing.grand_total(subtotal, discount, discount_type)


def _get_or_404(db: Session, estimate_id: str) -> db_models.GeneralEstimate:
    estimate = db.query(db_models.GeneralEstimate).filter(
        db_models.GeneralEstimate.id == estimate_id
    ).first()
    if not estimate:
        raise HTTPException(status_code=404, detail="Estimate not found")
    return estimate


@router.post("")
def create_general_estimate(
    payload: schemas.GeneralEstimateIn,
    db: Session = Depends(get_db),
    identity: schemas.Identity = Depends(get_current_identity)
):
    """Créer un devis général (permis, construction, 3D, autre)"""
    if not payload.client_id or not payload.estimate_name or not payload.items:
        raise HTTPException(
            status_code=400,
            detail="Missing required fields: clientId, estimateName, and items are required"
        )
    if payload.estimate_type not in constants.GENERAL_ESTIMATE_TYPES:
        raise HTTPException(status_code=400, detail="Invalid estimate type")

    discount_type = payload.discount_type or constants.DISCOUNT_PERCENTAGE
    items, subtotal, total = _priced(payload.items, payload.discount, discount_type)

    estimate = db_models.GeneralEstimate(
        user_id=identity.user_id,
        client_id=payload.client_id,
        estimate_name=payload.estimate_name.strip(),
        estimate_type=payload.estimate_type,
        items=items,
        subtotal=subtotal,
        total_amount=total,
        discount=payload.discount or 0,
        discount_type=discount_type,
        status=constants.ESTIMATE_PENDING
    )
    db.add(estimate)
    db.commit()
    db.refresh(estimate)
    return {"success": True, "estimate": schemas.GeneralEstimateOut.model_validate(estimate)}


@router.get("")
def get_general_estimates(
    client_id: Optional[str] = Query(None, alias="clientId"),
    estimate_id: Optional[str] = Query(None, alias="estimateId"),
    db: Session = Depends(get_db),
    identity: schemas.Identity = Depends(get_current_identity)
):
    """Un devis (?estimateId), ceux d'un client (?clientId), sinon ceux de l'utilisateur"""
    if estimate_id:
        estimate = _get_or_404(db, estimate_id)
        return {"success": True, "estimate": schemas.GeneralEstimateOut.model_validate(estimate)}

    query = db.query(db_models.GeneralEstimate)
    if client_id:
        query = query.filter(db_models.GeneralEstimate.client_id == client_id)
    else:
        query = query.filter(db_models.GeneralEstimate.user_id == identity.user_id)
    estimates = query.order_by(db_models.GeneralEstimate.created_at.desc()).all()
    return {"success": True, "estimates": [schemas.GeneralEstimateOut.model_validate(e) for e in estimates]}


@router.get("/{estimate_id}")
def get_general_estimate(
    estimate_id: str,
    db: Session = Depends(get_db),
    identity: schemas.Identity = Depends(get_current_identity)
):
    estimate = _get_or_404(db, estimate_id)
    return {"success": True, "estimate": schemas.GeneralEstimateOut.model_validate(estimate)}


@router.put("/{estimate_id}")
def update_general_estimate(
    estimate_id: str,
    payload: schemas.GeneralEstimateUpdate,
    db: Session = Depends(get_db),
    identity: schemas.Identity = Depends(get_current_identity)
):
    estimate = _get_or_404(db, estimate_id)
    discount_type = payload.discount_type or constants.DISCOUNT_PERCENTAGE
    items, subtotal, total = _priced(payload.items, payload.discount, discount_type)

    estimate.items = items
    estimate.subtotal = subtotal
    estimate.total_amount = total
    estimate.discount = payload.discount or 0
    estimate.discount_type = discount_type
    estimate.updated_at = datetime.utcnow()
    db.commit()
    db.refresh(estimate)
    return {"success": True, "estimate": schemas.GeneralEstimateOut.model_validate(estimate)}
