# INTERIORFLOW/backend/interiorflow/routes/stages.py

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import Optional
from datetime import datetime
from interiorflow.models import models as db_models
from interiorflow.schemas import schemas
from interiorflow.database import get_db
from interiorflow.auth import get_current_identity

router = APIRouter(prefix="/stages", tags=["stages"])


@router.post("")
def create_stage(
    payload: schemas.StageIn,
    db: Session = Depends(get_db),
    identity: schemas.Identity = Depends(get_current_identity)
):
    """Ajouter une étape à la chronologie d'un client"""
    stage_desc = (payload.stage_desc or "").strip()
    if not payload.client_id or not stage_desc:
        raise HTTPException(status_code=400, detail="Missing required fields: clientId and stageDesc are required")

    stage = db_models.Stage(
        user_id=identity.user_id,
        client_id=payload.client_id,
        stage_desc=stage_desc,
        date=payload.date or datetime.utcnow()
    )
    db.add(stage)
    db.commit()
    db.refresh(stage)
    return {
        "success": True,
        "stage": schemas.StageOut.model_validate(stage),
        "message": "Stage created successfully"
    }


@router.get("")
def get_stages(
    client_id: Optional[str] = Query(None, alias="clientId"),
    db: Session = Depends(get_db),
    identity: schemas.Identity = Depends(get_current_identity)
):
    query = db.query(db_models.Stage)
    if client_id:
        query = query.filter(db_models.Stage.client_id == client_id)
    stages = query.order_by(db_models.Stage.date.asc()).all()
    return {"success": True, "stages": [schemas.StageOut.model_validate(s) for s in stages]}
