# INTERIORFLOW/backend/interiorflow/services/accounts.py

from sqlalchemy.orm import Session
from typing import Optional
from interiorflow.models import models
from interiorflow.auth import hash_password
from interiorflow import constants
import logging

logger = logging.getLogger(__name__)


def find_user_by_email(db: Session, email: str) -> Optional[models.User]:
    return db.query(models.User).filter(models.User.email == email.strip().lower()).first()


def create_user(db: Session, email: str, password: str, name: str = "", role: str = constants.ROLE_USER) -> models.User:
    user = models.User(
        email=email.strip().lower(),
        password_hash=hash_password(password),
        name=name or "",
        role=role
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def ensure_admin(db: Session, email: str, password: str, name: str = "Admin") -> models.User:
    """Crée le compte administrateur s'il n'existe pas encore (idempotent)"""
    user = find_user_by_email(db, email)
    if user:
        if user.role != constants.ROLE_ADMIN:
            user.role = constants.ROLE_ADMIN
            db.commit()
        return user
    user = create_user(db, email, password, name=name, role=constants.ROLE_ADMIN)
    logger.info(f"👤 Administrateur créé: {user.email}")
    return user


def display_name(db: Session, user_id: str, email: str) -> str:
    """Nom affiché pour "addedBy" : nom du compte, sinon partie locale de l'email"""
    user = db.query(models.User).filter(models.User.id == user_id).first()
    if user and user.name:
        return user.name
    return email.split("@")[0]
