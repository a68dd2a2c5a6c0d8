# INTERIORFLOW/backend/interiorflow/services/cash_flow_service.py : trésorerie (vue calculée)

from sqlalchemy.orm import Session
from datetime import datetime
from typing import List, Dict, Any, Optional
from interiorflow.models import models
from interiorflow import constants


def with_running_balance(entries: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Ajoute le solde cumulé à des mouvements triés du plus récent au plus ancien.
    Le cumul se fait du plus ancien au plus récent (+ encaissement, - dépense),
    puis l'ordre d'affichage est rétabli.
    """
    balance = 0.0
    result = []
    for entry in reversed(entries):
        if entry["type"] == "income":
            balance += entry["amount"]
        else:
            balance -= entry["amount"]
        result.append({**entry, "balance": balance})
    result.reverse()
    return result


def _in_range(value: datetime, date_from: Optional[datetime], date_to: Optional[datetime]) -> bool:
    if date_from and value < date_from:
        return False
    if date_to and value > date_to:
        return False
    return True


class CashFlowService:
    """Combine encaissements reçus, dépenses projet et frais généraux"""

    def __init__(self, db: Session):
        self.db = db

    def _client_names(self) -> Dict[str, str]:
        return {c.id: c.name for c in self.db.query(models.Client).all()}

    def get_entries(
        self,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None
    ) -> List[Dict[str, Any]]:
        client_names = self._client_names()

        incomes = self.db.query(models.InteriorIncome).filter(
            models.InteriorIncome.status.in_(constants.RECEIVED_INCOME_STATUSES)
        ).all()
        expenses = self.db.query(models.Expense).all()
        common_expenses = self.db.query(models.CommonExpense).all()

        entries = [
            {
                "id": inc.id,
                "type": "income",
                "clientId": inc.client_id,
                "clientName": client_names.get(inc.client_id, "Unknown"),
                "amount": inc.amount,
                "date": inc.date,
                "status": inc.status,
                "method": inc.method,
                "markedBy": inc.marked_by
            }
            for inc in incomes if _in_range(inc.date, date_from, date_to)
        ]
        entries += [
            {
                "id": exp.id,
                "type": "expense",
                "expenseType": "project",
                "clientId": exp.client_id,
                "clientName": client_names.get(exp.client_id, "Unknown"),
                "category": exp.category,
                "notes": exp.notes,
                "amount": exp.amount,
                "date": exp.date,
                "addedBy": exp.added_by
            }
            for exp in expenses if _in_range(exp.date, date_from, date_to)
        ]
        entries += [
            {
                "id": exp.id,
                "type": "expense",
                "expenseType": "common",
                "category": exp.category,
                "notes": exp.notes,
                "amount": exp.amount,
                "date": exp.date,
                "addedBy": exp.added_by
            }
            for exp in common_expenses if _in_range(exp.date, date_from, date_to)
        ]

        # Du plus récent au plus ancien (tri stable)
        entries.sort(key=lambda e: e["date"], reverse=True)
        return entries

    def get_cash_flow(
        self,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None
    ) -> Dict[str, Any]:
        entries = with_running_balance(self.get_entries(date_from, date_to))
        total_income = sum(e["amount"] for e in entries if e["type"] == "income")
        total_expenses = sum(e["amount"] for e in entries if e["type"] == "expense")
        return {
            "transactions": entries,
            "totals": {
                "income": total_income,
                "expenses": total_expenses,
                "balance": total_income - total_expenses
            },
            "count": len(entries)
        }
