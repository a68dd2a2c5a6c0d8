# INTERIORFLOW/backend/interiorflow/routes/auth.py

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session
from interiorflow import auth
from interiorflow.models import models as db_models
from interiorflow.schemas.schemas import LoginRequest, RegisterRequest, UserOut, Identity
from interiorflow.services import accounts
from interiorflow.database import get_db
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login")
def login(payload: LoginRequest, response: Response, db: Session = Depends(get_db)):
    """Connexion : renvoie le token et le pose aussi en cookie HTTP-only"""
    if not payload.email or not payload.password:
        raise HTTPException(status_code=400, detail="Email and password are required")

    user = accounts.find_user_by_email(db, payload.email)
    if not user or not auth.verify_password(payload.password, user.password_hash):
        raise HTTPException(status_code=401, detail="Invalid credentials")

    token = auth.create_access_token(Identity(user_id=user.id, email=user.email, role=user.role))
    auth.set_token_cookie(response, token)
    logger.info(f"🔑 Connexion de {user.email}")
    return {
        "success": True,
        "user": UserOut.model_validate(user),
        "token": token
    }


@router.post("/logout")
def logout(response: Response):
    auth.clear_token_cookie(response)
    return {"success": True, "message": "Logged out successfully"}


@router.post("/register")
def register(payload: RegisterRequest, db: Session = Depends(get_db)):
    """Inscription d'un utilisateur (rôle "user" par défaut)"""
    if not payload.email or not payload.password:
        raise HTTPException(status_code=400, detail="Email and password are required")

    if accounts.find_user_by_email(db, payload.email):
        raise HTTPException(status_code=409, detail="User with this email already exists")

    user = accounts.create_user(db, payload.email, payload.password, name=payload.name or "")
    logger.info(f"👤 Nouvel utilisateur: {user.email}")
    return {
        "success": True,
        "user": UserOut.model_validate(user),
        "message": "User created successfully"
    }


@router.get("/verify")
def verify(
    db: Session = Depends(get_db),
    identity: Identity = Depends(auth.get_current_identity)
):
    """Vérifie le token et renvoie l'utilisateur à jour depuis la base"""
    user = db.query(db_models.User).filter(db_models.User.id == identity.user_id).first()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return {"success": True, "user": UserOut.model_validate(user)}


@router.get("/me")
def me(identity: Identity = Depends(auth.get_current_identity)):
    """Identité courante, telle qu'embarquée dans le token"""
    return {
        "success": True,
        "user": {
            "id": identity.user_id,
            "name": identity.email.split("@")[0],
            "email": identity.email,
            "role": identity.role
        }
    }
