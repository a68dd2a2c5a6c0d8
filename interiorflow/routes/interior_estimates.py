# INTERIORFLOW/backend/interiorflow/routes/interior_estimates.py

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from datetime import datetime
from interiorflow.models import models as db_models
from interiorflow.schemas import schemas
from interiorflow.database import get_db
from interiorflow.auth import get_current_identity
from interiorflow.services import pricing
from interiorflow.services.estimate_workflow import EstimateWorkflowService
from interiorflow.errors import EstimateNotFound, EstimateAlreadyApproved, InvalidStatusTransition
from interiorflow import constants
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/interior-estimates", tags=["interior-estimates"])


def _priced(items, discount, discount_type):
    """Articles valorisés et total remisé du devis"""
    if discount_type is not None and discount_type not in constants.DISCOUNT_TYPES:
        raise HTTPException(status_code=400, detail="Invalid discount type")
    items = pricing.price_interior_items(items)
    total = pricing.grand_total(pricing.subtotal(items), discount, discount_type)
    return items, total


def _get_or_404(db: Session, estimate_id: str) -> db_models.InteriorEstimate:
    estimate = db.query(db_models.InteriorEstimate).filter(
        db_models.InteriorEstimate.id == estimate_id
    ).first()
    if not estimate:
        raise HTTPException(status_code=404, detail="Estimate not found")
    return estimate


@router.get("")
def get_interior_estimates(
    db: Session = Depends(get_db),
    identity: schemas.Identity = Depends(get_current_identity)
):
    estimates = db.query(db_models.InteriorEstimate).order_by(
        db_models.InteriorEstimate.created_at.desc()
    ).all()
    return {"success": True, "estimates": [schemas.InteriorEstimateOut.model_validate(e) for e in estimates]}


@router.post("")
def create_interior_estimate(
    payload: schemas.InteriorEstimateIn,
    db: Session = Depends(get_db),
    identity: schemas.Identity = Depends(get_current_identity)
):
    """Créer un devis intérieur (statut "pending")"""
    if not payload.client_id or not payload.estimate_name or not payload.items:
        raise HTTPException(
            status_code=400,
            detail="Missing required fields: clientId, estimateName, and items are required"
        )

    discount_type = payload.discount_type or constants.DISCOUNT_PERCENTAGE
    items, total = _priced(payload.items, payload.discount, discount_type)

    estimate = db_models.InteriorEstimate(
        user_id=identity.user_id,
        client_id=payload.client_id,
        estimate_name=payload.estimate_name.strip(),
        items=items,
        total_amount=total,
        discount=payload.discount or 0,
        discount_type=discount_type,
        status=constants.ESTIMATE_PENDING
    )
    db.add(estimate)
    db.commit()
    db.refresh(estimate)
    return {
        "success": True,
        "estimateId": estimate.id,
        "estimate": schemas.InteriorEstimateOut.model_validate(estimate),
        "message": "Interior estimate created successfully"
    }


@router.get("/client/{client_id}")
def get_client_estimates(
    client_id: str,
    db: Session = Depends(get_db),
    identity: schemas.Identity = Depends(get_current_identity)
):
    """Devis d'un client, du plus récent au plus ancien"""
    estimates = db.query(db_models.InteriorEstimate).filter(
        db_models.InteriorEstimate.client_id == client_id
    ).order_by(db_models.InteriorEstimate.created_at.desc()).all()
    return {"success": True, "estimates": [schemas.InteriorEstimateOut.model_validate(e) for e in estimates]}


@router.get("/{estimate_id}")
def get_interior_estimate(
    estimate_id: str,
    db: Session = Depends(get_db),
    identity: schemas.Identity = Depends(get_current_identity)
):
    estimate = _get_or_404(db, estimate_id)
    return {"success": True, "estimate": schemas.InteriorEstimateOut.model_validate(estimate)}


@router.put("/{estimate_id}")
def update_interior_estimate(
    estimate_id: str,
    payload: schemas.InteriorEstimateUpdate,
    db: Session = Depends(get_db),
    identity: schemas.Identity = Depends(get_current_identity)
):
    if not payload.estimate_name or payload.items is None:
        raise HTTPException(status_code=400, detail="Missing required fields")

    estimate = _get_or_404(db, estimate_id)
    discount_type = payload.discount_type or constants.DISCOUNT_PERCENTAGE
    items, total = _priced(payload.items, payload.discount, discount_type)

    estimate.estimate_name = payload.estimate_name.strip()
    estimate.items = items
    estimate.total_amount = total
    estimate.discount = payload.discount or 0
    estimate.discount_type = discount_type
    estimate.updated_at = datetime.utcnow()
    db.commit()
    db.refresh(estimate)
    return {
        "success": True,
        "message": "Interior estimate updated successfully",
        "estimate": schemas.InteriorEstimateOut.model_validate(estimate)
    }


@router.delete("/{estimate_id}")
def delete_interior_estimate(
    estimate_id: str,
    db: Session = Depends(get_db),
    identity: schemas.Identity = Depends(get_current_identity)
):
    deleted = db.query(db_models.InteriorEstimate).filter(
        db_models.InteriorEstimate.id == estimate_id
    ).delete(synchronize_session=False)
    if deleted == 0:
        raise HTTPException(status_code=404, detail="Estimate not found")
    db.commit()
    logger.info(f"🗑️ Devis intérieur supprimé: {estimate_id}")
    return {"success": True, "message": "Interior estimate deleted successfully"}


@router.post("/{estimate_id}/approve")
def approve_interior_estimate(
    estimate_id: str,
    db: Session = Depends(get_db),
    identity: schemas.Identity = Depends(get_current_identity)
):
    """Approuver un devis : supprime les devis concurrents, crée l'étape et l'acompte"""
    try:
        service = EstimateWorkflowService(db, identity.user_id)
        result = service.approve(estimate_id)
    except EstimateNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except EstimateAlreadyApproved as e:
        raise HTTPException(status_code=409, detail=str(e))

    return {
        "success": True,
        "message": "Estimate approved successfully",
        "approvedEstimateId": result["approved_estimate_id"],
        "deletedEstimatesCount": result["deleted_estimates_count"],
        "stageCreated": True,
        "incomeCreated": True,
        "incomeAmount": result["income_amount"]
    }


@router.patch("/{estimate_id}/status")
def update_interior_estimate_status(
    estimate_id: str,
    payload: schemas.EstimateStatusUpdate,
    db: Session = Depends(get_db),
    identity: schemas.Identity = Depends(get_current_identity)
):
    """Clôturer un chantier : seul le passage approved -> completed est permis ici"""
    if payload.status != constants.ESTIMATE_COMPLETED:
        raise HTTPException(status_code=400, detail="Only the 'completed' status can be set here")
    try:
        service = EstimateWorkflowService(db, identity.user_id)
        estimate = service.complete(estimate_id)
    except EstimateNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidStatusTransition as e:
        raise HTTPException(status_code=409, detail=str(e))

    return {
        "success": True,
        "message": "Interior estimate marked as completed",
        "estimate": schemas.InteriorEstimateOut.model_validate(estimate)
    }


@router.get("/{estimate_id}/payments")
def get_interior_estimate_payments(
    estimate_id: str,
    db: Session = Depends(get_db),
    identity: schemas.Identity = Depends(get_current_identity)
):
    """Avancement des encaissements du projet"""
    try:
        summary = EstimateWorkflowService(db, identity.user_id).payment_summary(estimate_id)
    except EstimateNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))

    return {
        "success": True,
        "payments": {
            "estimateId": summary["estimate_id"],
            "clientId": summary["client_id"],
            "totalAmount": summary["total_amount"],
            "receivedAmount": summary["received_amount"],
            "receivedCount": summary["received_count"],
            "pendingAmount": summary["pending_amount"],
            "pendingCount": summary["pending_count"],
            "balanceAmount": summary["balance_amount"],
            "receivedPercentage": summary["received_percentage"],
            "receivedByMethod": summary["received_by_method"]
        }
    }
