# INTERIORFLOW/backend/interiorflow/routes/categories.py

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from interiorflow.models import models as db_models
from interiorflow.schemas import schemas
from interiorflow.database import get_db
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/categories", tags=["catalog"])


@router.get("")
def get_categories(db: Session = Depends(get_db)):
    categories = db.query(db_models.Category).order_by(db_models.Category.created_at.desc()).all()
    return {"success": True, "categories": [schemas.CategoryOut.model_validate(c) for c in categories]}


@router.post("")
def create_category(payload: schemas.CategoryIn, db: Session = Depends(get_db)):
    name = (payload.name or "").strip()
    if not name:
        raise HTTPException(status_code=400, detail="Category name is required")

    if db.query(db_models.Category).filter(db_models.Category.name == name).first():
        raise HTTPException(status_code=409, detail="Category with this name already exists")

    category = db_models.Category(name=name)
    db.add(category)
    db.commit()
    db.refresh(category)
    return {
        "success": True,
        "category": schemas.CategoryOut.model_validate(category),
        "message": "Category created successfully"
    }


@router.put("/{category_id}")
def update_category(category_id: str, payload: schemas.CategoryIn, db: Session = Depends(get_db)):
    name = (payload.name or "").strip()
    if not name:
        raise HTTPException(status_code=400, detail="Category name is required")

    category = db.query(db_models.Category).filter(db_models.Category.id == category_id).first()
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")

    taken = db.query(db_models.Category).filter(
        db_models.Category.name == name,
        db_models.Category.id != category_id
    ).first()
    if taken:
        raise HTTPException(status_code=409, detail="Category with this name already exists")

    category.name = name
    db.commit()
    db.refresh(category)
    return {"success": True, "category": schemas.CategoryOut.model_validate(category)}


@router.delete("/{category_id}")
def delete_category(category_id: str, db: Session = Depends(get_db)):
    """Supprimer une catégorie (refusé tant qu'elle a des sous-catégories)"""
    children = db.query(db_models.SubCategory).filter(
        db_models.SubCategory.category_id == category_id
    ).count()
    if children > 0:
        raise HTTPException(status_code=400, detail="Cannot delete category with existing subcategories")

    deleted = db.query(db_models.Category).filter(
        db_models.Category.id == category_id
    ).delete(synchronize_session=False)
    if deleted == 0:
        raise HTTPException(status_code=404, detail="Category not found")
    db.commit()
    logger.info(f"🗑️ Catégorie supprimée: {category_id}")
    return {"success": True}
