# INTERIORFLOW/backend/interiorflow/routes/interior_presets.py

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from datetime import datetime
from interiorflow.models import models as db_models
from interiorflow.schemas import schemas
from interiorflow.database import get_db
from interiorflow.services import pricing

router = APIRouter(prefix="/interior-presets", tags=["interior-presets"])


def _validated(payload: schemas.InteriorPresetIn):
    name = (payload.name or "").strip()
    if not name or not isinstance(payload.items, list):
        raise HTTPException(status_code=400, detail="Invalid data provided")
    items = pricing.price_interior_items(payload.items)
    return name, items, pricing.subtotal(items)


def _get_or_404(db: Session, preset_id: str) -> db_models.InteriorPreset:
    preset = db.query(db_models.InteriorPreset).filter(db_models.InteriorPreset.id == preset_id).first()
    if not preset:
        raise HTTPException(status_code=404, detail="Preset not found")
    return preset


@router.get("")
def get_presets(db: Session = Depends(get_db)):
    presets = db.query(db_models.InteriorPreset).order_by(db_models.InteriorPreset.created_at.desc()).all()
    return {"success": True, "presets": [schemas.InteriorPresetOut.model_validate(p) for p in presets]}


@router.post("")
def create_preset(payload: schemas.InteriorPresetIn, db: Session = Depends(get_db)):
    """Enregistrer un modèle d'articles réutilisable (total recalculé)"""
    name, items, total = _validated(payload)
    preset = db_models.InteriorPreset(name=name, items=items, total_amount=total)
    db.add(preset)
    db.commit()
    db.refresh(preset)
    return {
        "success": True,
        "preset": schemas.InteriorPresetOut.model_validate(preset),
        "message": "Preset created successfully"
    }


@router.get("/{preset_id}")
def get_preset(preset_id: str, db: Session = Depends(get_db)):
    return {"success": True, "preset": schemas.InteriorPresetOut.model_validate(_get_or_404(db, preset_id))}


@router.put("/{preset_id}")
def update_preset(preset_id: str, payload: schemas.InteriorPresetIn, db: Session = Depends(get_db)):
    name, items, total = _validated(payload)
    preset = _get_or_404(db, preset_id)
    preset.name = name
    preset.items = items
    preset.total_amount = total
    preset.updated_at = datetime.utcnow()
    db.commit()
    db.refresh(preset)
    return {
        "success": True,
        "preset": schemas.InteriorPresetOut.model_validate(preset),
        "message": "Preset updated successfully"
    }


@router.delete("/{preset_id}")
def delete_preset(preset_id: str, db: Session = Depends(get_db)):
    deleted = db.query(db_models.InteriorPreset).filter(
        db_models.InteriorPreset.id == preset_id
    ).delete(synchronize_session=False)
    if deleted == 0:
        raise HTTPException(status_code=404, detail="Preset not found")
    db.commit()
    return {"success": True, "message": "Preset deleted successfully"}
