# INTERIORFLOW/backend/interiorflow/routes/dashboard.py

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from datetime import datetime, timedelta
from interiorflow.database import get_db
from interiorflow.auth import require_admin
from interiorflow.models import models as db_models
from interiorflow.schemas.schemas import Identity
from interiorflow import constants

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("")
def dashboard_summary(
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_admin)
):
    """Tableau de bord administrateur"""
    since = datetime.utcnow() - timedelta(days=constants.ACTIVE_USER_WINDOW_DAYS)

    total_users = db.query(db_models.User).count()
    active_users = db.query(db_models.User).filter(db_models.User.created_at >= since).count()

    # Projets = devis intérieurs approuvés / terminés
    active_projects = db.query(db_models.InteriorEstimate).filter(
        db_models.InteriorEstimate.status == constants.ESTIMATE_APPROVED
    ).count()
    completed_projects = db.query(db_models.InteriorEstimate).filter(
        db_models.InteriorEstimate.status == constants.ESTIMATE_COMPLETED
    ).count()

    return {
        "success": True,
        "user": identity,
        "dashboard": {
            "message": "Welcome to the Management System Dashboard",
            "stats": {
                "totalUsers": total_users,
                "activeUsers": active_users,
                "totalClients": db.query(db_models.Client).count(),
                "activeProjects": active_projects,
                "completedProjects": completed_projects,
                "enquiries": db.query(db_models.Quote).count()
            }
        }
    }
