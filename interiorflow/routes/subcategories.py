# INTERIORFLOW/backend/interiorflow/routes/subcategories.py

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import Optional
from interiorflow.models import models as db_models
from interiorflow.schemas import schemas
from interiorflow.database import get_db
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/subcategories", tags=["catalog"])


def _to_out(sub: db_models.SubCategory, category_names: dict) -> schemas.SubCategoryOut:
    out = schemas.SubCategoryOut.model_validate(sub)
    out.category_name = category_names.get(sub.category_id)
    return out


def _category_names(db: Session) -> dict:
    return {c.id: c.name for c in db.query(db_models.Category).all()}


@router.get("")
def get_subcategories(
    category_id: Optional[str] = Query(None, alias="categoryId"),
    db: Session = Depends(get_db)
):
    """Toutes les sous-catégories, ou celles d'une catégorie"""
    query = db.query(db_models.SubCategory)
    if category_id:
        query = query.filter(db_models.SubCategory.category_id == category_id)
    subcategories = query.order_by(db_models.SubCategory.created_at.desc()).all()
    names = _category_names(db)
    return {"success": True, "subCategories": [_to_out(s, names) for s in subcategories]}


@router.post("")
def create_subcategory(payload: schemas.SubCategoryIn, db: Session = Depends(get_db)):
    name = (payload.name or "").strip()
    if not name:
        raise HTTPException(status_code=400, detail="Sub category name is required")
    if not payload.category_id:
        raise HTTPException(status_code=400, detail="Category ID is required")

    category = db.query(db_models.Category).filter(db_models.Category.id == payload.category_id).first()
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")

    existing = db.query(db_models.SubCategory).filter(
        db_models.SubCategory.name == name,
        db_models.SubCategory.category_id == payload.category_id
    ).first()
    if existing:
        raise HTTPException(
            status_code=409,
            detail="Sub category with this name already exists in this category"
        )

    sub = db_models.SubCategory(name=name, category_id=payload.category_id)
    db.add(sub)
    db.commit()
    db.refresh(sub)
    return {
        "success": True,
        "subCategory": _to_out(sub, {category.id: category.name}),
        "message": "Sub category created successfully"
    }


@router.put("/{subcategory_id}")
def update_subcategory(subcategory_id: str, payload: schemas.SubCategoryIn, db: Session = Depends(get_db)):
    name = (payload.name or "").strip()
    if not name or not payload.category_id:
        raise HTTPException(status_code=400, detail="Sub category name and category ID are required")

    sub = db.query(db_models.SubCategory).filter(db_models.SubCategory.id == subcategory_id).first()
    if not sub:
        raise HTTPException(status_code=404, detail="Sub category not found")

    category = db.query(db_models.Category).filter(db_models.Category.id == payload.category_id).first()
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")

    sub.name = name
    sub.category_id = payload.category_id
    db.commit()
    db.refresh(sub)
    return {"success": True, "subCategory": _to_out(sub, _category_names(db))}


@router.delete("/{subcategory_id}")
def delete_subcategory(subcategory_id: str, db: Session = Depends(get_db)):
    """Supprimer une sous-catégorie (refusé tant qu'elle a des sections)"""
    children = db.query(db_models.Section).filter(
        db_models.Section.sub_category_id == subcategory_id
    ).count()
    if children > 0:
        raise HTTPException(status_code=400, detail="Cannot delete subcategory with existing sections")

    deleted = db.query(db_models.SubCategory).filter(
        db_models.SubCategory.id == subcategory_id
    ).delete(synchronize_session=False)
    if deleted == 0:
        raise HTTPException(status_code=404, detail="Sub category not found")
    db.commit()
    logger.info(f"🗑️ Sous-catégorie supprimée: {subcategory_id}")
    return {"success": True}
