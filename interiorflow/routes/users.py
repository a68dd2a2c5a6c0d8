# INTERIORFLOW/backend/interiorflow/routes/users.py

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from interiorflow.auth import get_current_identity, require_admin
from interiorflow.models import models as db_models
from interiorflow.schemas.schemas import UserOut, Identity
from interiorflow.database import get_db

router = APIRouter(prefix="/users", tags=["users"])


@router.get("")
def list_users(
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_admin)
):
    users = db.query(db_models.User).order_by(db_models.User.created_at.desc()).all()
    return {"success": True, "users": [UserOut.model_validate(u) for u in users]}


@router.get("/{user_id}")
def get_user(
    user_id: str,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity)
):
    """Fiche d'un utilisateur, sans le hash du mot de passe"""
    user = db.query(db_models.User).filter(db_models.User.id == user_id).first()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return {"success": True, "user": UserOut.model_validate(user)}
