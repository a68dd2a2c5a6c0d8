# INTERIORFLOW/backend/interiorflow/routes/sections.py

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from interiorflow.models import models as db_models
from interiorflow.schemas import schemas
from interiorflow.database import get_db
from interiorflow import constants

router = APIRouter(prefix="/sections", tags=["catalog"])


def _validated_fields(payload: schemas.SectionIn) -> dict:
    if not payload.category_id:
        raise HTTPException(status_code=400, detail="Category ID is required")
    if not payload.sub_category_id:
        raise HTTPException(status_code=400, detail="Sub category ID is required")
    if not payload.material or not payload.material.strip():
        raise HTTPException(status_code=400, detail="Material is required")
    if not payload.description or not payload.description.strip():
        raise HTTPException(status_code=400, detail="Description is required")
    if not payload.amount or payload.amount <= 0:
        raise HTTPException(status_code=400, detail="Valid amount is required")
    if payload.type not in constants.SECTION_TYPES:
        raise HTTPException(status_code=400, detail="Valid type is required")
    return {
        "category_id": payload.category_id,
        "sub_category_id": payload.sub_category_id,
        "material": payload.material.strip(),
        "description": payload.description.strip(),
        "amount": payload.amount,
        "type": payload.type,
    }


def _with_names(db: Session, sections) -> list:
    categories = {c.id: c.name for c in db.query(db_models.Category).all()}
    subcategories = {s.id: s.name for s in db.query(db_models.SubCategory).all()}
    result = []
    for section in sections:
        out = schemas.SectionOut.model_validate(section)
        out.category_name = categories.get(section.category_id)
        out.sub_category_name = subcategories.get(section.sub_category_id)
        result.append(out)
    return result


@router.get("")
def get_sections(db: Session = Depends(get_db)):
    sections = db.query(db_models.Section).order_by(db_models.Section.created_at.desc()).all()
    return {"success": True, "sections": _with_names(db, sections)}


@router.post("")
def create_section(payload: schemas.SectionIn, db: Session = Depends(get_db)):
    fields = _validated_fields(payload)
    sub = db.query(db_models.SubCategory).filter(
        db_models.SubCategory.id == fields["sub_category_id"],
        db_models.SubCategory.category_id == fields["category_id"]
    ).first()
    if not sub:
        raise HTTPException(status_code=404, detail="Sub category not found in this category")

    section = db_models.Section(**fields)
    db.add(section)
    db.commit()
    db.refresh(section)
    return {
        "success": True,
        "section": _with_names(db, [section])[0],
        "message": "Section created successfully"
    }


@router.put("/{section_id}")
def update_section(section_id: str, payload: schemas.SectionIn, db: Session = Depends(get_db)):
    fields = _validated_fields(payload)
    section = db.query(db_models.Section).filter(db_models.Section.id == section_id).first()
    if not section:
        raise HTTPException(status_code=404, detail="Section not found")
    for key, value in fields.items():
        setattr(section, key, value)
    db.commit()
    db.refresh(section)
    return {"success": True, "section": _with_names(db, [section])[0]}


@router.delete("/{section_id}")
def delete_section(section_id: str, db: Session = Depends(get_db)):
    deleted = db.query(db_models.Section).filter(
        db_models.Section.id == section_id
    ).delete(synchronize_session=False)
    if deleted == 0:
        raise HTTPException(status_code=404, detail="Section not found")
    db.commit()
    return {"success": True}
