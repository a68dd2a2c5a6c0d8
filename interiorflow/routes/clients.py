# INTERIORFLOW/backend/interiorflow/routes/clients.py

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from interiorflow.models import models as db_models
from interiorflow.schemas import schemas
from interiorflow.database import get_db
from interiorflow import constants
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/clients", tags=["clients"])


def _validate(payload: schemas.ClientIn):
    if not payload.name or not payload.email or not payload.phone or not payload.location:
        raise HTTPException(
            status_code=400,
            detail="Missing required fields: name, email, phone, location"
        )


def _clients_with_estimate_status(db: Session, status: str):
    """Clients ayant au moins un devis intérieur dans ce statut"""
    client_ids = {
        row[0] for row in db.query(db_models.InteriorEstimate.client_id).filter(
            db_models.InteriorEstimate.status == status
        ).all()
    }
    if not client_ids:
        return []
    return db.query(db_models.Client).filter(
        db_models.Client.id.in_(client_ids)
    ).order_by(db_models.Client.created_at.desc()).all()


@router.post("", status_code=201)
def create_client(payload: schemas.ClientIn, db: Session = Depends(get_db)):
    """Créer une fiche client (email unique, insensible à la casse)"""
    _validate(payload)
    email = payload.email.strip().lower()

    existing = db.query(db_models.Client).filter(db_models.Client.email == email).first()
    if existing:
        raise HTTPException(status_code=409, detail="Client with this email already exists")

    client = db_models.Client(
        name=payload.name.strip(),
        email=email,
        phone=payload.phone.strip(),
        location=payload.location.strip()
    )
    db.add(client)
    db.commit()
    db.refresh(client)
    return {
        "success": True,
        "message": "Client created successfully",
        "client": schemas.ClientOut.model_validate(client)
    }


@router.get("")
def get_clients(db: Session = Depends(get_db)):
    clients = db.query(db_models.Client).order_by(db_models.Client.created_at.desc()).all()
    return {"success": True, "clients": [schemas.ClientOut.model_validate(c) for c in clients]}


@router.get("/approved")
def get_clients_with_approved_projects(db: Session = Depends(get_db)):
    clients = _clients_with_estimate_status(db, constants.ESTIMATE_APPROVED)
    return {
        "success": True,
        "clients": [schemas.ClientOut.model_validate(c) for c in clients],
        "count": len(clients)
    }


@router.get("/completed")
def get_clients_with_completed_projects(db: Session = Depends(get_db)):
    clients = _clients_with_estimate_status(db, constants.ESTIMATE_COMPLETED)
    return {
        "success": True,
        "clients": [schemas.ClientOut.model_validate(c) for c in clients],
        "count": len(clients)
    }


@router.get("/{client_id}")
def get_client(client_id: str, db: Session = Depends(get_db)):
    client = db.query(db_models.Client).filter(db_models.Client.id == client_id).first()
    if not client:
        raise HTTPException(status_code=404, detail="Client not found")
    return {"success": True, "client": schemas.ClientOut.model_validate(client)}


@router.put("/{client_id}")
def update_client(client_id: str, payload: schemas.ClientIn, db: Session = Depends(get_db)):
    _validate(payload)
    client = db.query(db_models.Client).filter(db_models.Client.id == client_id).first()
    if not client:
        raise HTTPException(status_code=404, detail="Client not found")

    email = payload.email.strip().lower()
    if email != client.email:
        taken = db.query(db_models.Client).filter(
            db_models.Client.email == email,
            db_models.Client.id != client_id
        ).first()
        if taken:
            raise HTTPException(status_code=409, detail="Client with this email already exists")

    client.name = payload.name.strip()
    client.email = email
    client.phone = payload.phone.strip()
    client.location = payload.location.strip()
    db.commit()
    db.refresh(client)
    return {
        "success": True,
        "message": "Client updated successfully",
        "client": schemas.ClientOut.model_validate(client)
    }


@router.delete("/{client_id}")
def delete_client(client_id: str, db: Session = Depends(get_db)):
    client = db.query(db_models.Client).filter(db_models.Client.id == client_id).first()
    if not client:
        raise HTTPException(status_code=404, detail="Client not found")
    db.delete(client)
    db.commit()
    logger.info(f"🗑️ Client supprimé: {client_id}")
    return {"success": True, "message": "Client deleted successfully"}
