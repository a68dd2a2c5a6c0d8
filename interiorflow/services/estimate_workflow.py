# INTERIORFLOW/backend/interiorflow/services/estimate_workflow.py : cycle de vie des devis intérieurs

from sqlalchemy.orm import Session
from datetime import datetime
from typing import Dict, Any
from interiorflow.models import models
from interiorflow import constants
from interiorflow.errors import EstimateNotFound, EstimateAlreadyApproved, InvalidStatusTransition
import logging

logger = logging.getLogger(__name__)


class EstimateWorkflowService:
    """Transitions de statut d'un devis intérieur et leurs effets de bord"""

    def __init__(self, db: Session, user_id: str):
        self.db = db
        self.user_id = user_id

    def _get_estimate(self, estimate_id: str) -> models.InteriorEstimate:
        estimate = self.db.query(models.InteriorEstimate).filter(
            models.InteriorEstimate.id == estimate_id
        ).first()
        if not estimate:
            raise EstimateNotFound(estimate_id)
        return estimate

    def approve(self, estimate_id: str) -> Dict[str, Any]:
        """
        Approuve un devis :
        1. passe le devis en "approved"
        2. supprime les autres devis non terminés du même client
        3. ajoute une étape "approved" à la chronologie du client
        4. crée un encaissement en attente de 50% du total

        Tout est écrit dans une seule transaction. Un devis déjà approuvé
        (ou terminé) est refusé pour ne pas dupliquer étape et encaissement.
        """
        estimate = self._get_estimate(estimate_id)
        if estimate.status in (constants.ESTIMATE_APPROVED, constants.ESTIMATE_COMPLETED):
            raise EstimateAlreadyApproved(estimate_id, estimate.status)

        client_id = estimate.client_id
        total_amount = estimate.total_amount or 0
        now = datetime.utcnow()

        try:
            # Mise à jour conditionnelle : deux approbations concurrentes ne passent pas toutes les deux
            updated = self.db.query(models.InteriorEstimate).filter(
                models.InteriorEstimate.id == estimate_id,
                models.InteriorEstimate.status.notin_(
                    [constants.ESTIMATE_APPROVED, constants.ESTIMATE_COMPLETED]
                )
            ).update(
                {"status": constants.ESTIMATE_APPROVED, "updated_at": now},
                synchronize_session=False
            )
            if updated == 0:
                self.db.rollback()
                current = self.db.query(models.InteriorEstimate).filter(
                    models.InteriorEstimate.id == estimate_id
                ).first()
                if current is None:
                    raise EstimateNotFound(estimate_id)
                raise EstimateAlreadyApproved(estimate_id, current.status)

            # Exclusion par id : le devis approuvé ne peut pas être supprimé ici
            deleted_count = self.db.query(models.InteriorEstimate).filter(
                models.InteriorEstimate.client_id == client_id,
                models.InteriorEstimate.id != estimate_id,
                models.InteriorEstimate.status != constants.ESTIMATE_COMPLETED
            ).delete(synchronize_session=False)

            self.db.add(models.Stage(
                user_id=self.user_id,
                client_id=client_id,
                date=now,
                stage_desc=constants.STAGE_APPROVED,
                created_at=now,
                updated_at=now
            ))

            income_amount = total_amount * constants.APPROVAL_INCOME_SHARE
            self.db.add(models.InteriorIncome(
                user_id=self.user_id,
                client_id=client_id,
                amount=income_amount,
                status=constants.INCOME_PENDING,
                method=None,
                date=now,
                created_at=now,
                updated_at=now
            ))

            self.db.commit()
        except (EstimateNotFound, EstimateAlreadyApproved):
            raise
        except Exception:
            self.db.rollback()
            raise

        logger.info(
            f"✅ Devis {estimate_id} approuvé (client {client_id}) : "
            f"{deleted_count} devis supprimé(s), acompte de {income_amount}"
        )
        return {
            "approved_estimate_id": estimate_id,
            "deleted_estimates_count": deleted_count,
            "income_amount": income_amount
        }

    def complete(self, estimate_id: str) -> models.InteriorEstimate:
        """Marque un devis approuvé comme terminé"""
        estimate = self._get_estimate(estimate_id)
        if estimate.status != constants.ESTIMATE_APPROVED:
            raise InvalidStatusTransition(estimate.status, constants.ESTIMATE_COMPLETED)
        estimate.status = constants.ESTIMATE_COMPLETED
        estimate.updated_at = datetime.utcnow()
        self.db.commit()
        self.db.refresh(estimate)
        logger.info(f"🏁 Devis {estimate_id} terminé")
        return estimate

    def payment_summary(self, estimate_id: str) -> Dict[str, Any]:
        """Avancement des paiements du projet rattaché au devis"""
        estimate = self._get_estimate(estimate_id)
        incomes = self.db.query(models.InteriorIncome).filter(
            models.InteriorIncome.client_id == estimate.client_id
        ).all()

        total = estimate.total_amount or 0
        received = [i for i in incomes if i.status in constants.RECEIVED_INCOME_STATUSES]
        pending = [i for i in incomes if i.status == constants.INCOME_PENDING]
        received_total = sum(i.amount for i in received)

        by_method = {method: 0.0 for method in constants.PAYMENT_METHODS}
        for income in received:
            if income.method in by_method:
                by_method[income.method] += income.amount

        return {
            "estimate_id": estimate.id,
            "client_id": estimate.client_id,
            "total_amount": total,
            "received_amount": received_total,
            "received_count": len(received),
            "pending_amount": sum(i.amount for i in pending),
            "pending_count": len(pending),
            "balance_amount": total - received_total,
            "received_percentage": round(received_total / total * 100, 2) if total > 0 else 0,
            "received_by_method": by_method
        }
