# INTERIORFLOW/backend/scripts/seed_data.py : script pour générer des données de démo

#!/usr/bin/env python
"""Script pour générer des données de démo réalistes"""

import random
import sys
import os
from datetime import datetime, timedelta
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from interiorflow import config, constants
from interiorflow.database import Database
from interiorflow.models import models
from interiorflow.services import pricing
from interiorflow.services.accounts import ensure_admin, create_user, find_user_by_email


def generate_test_data():
    """Génère un admin, des clients, un catalogue, des devis et des mouvements"""
    database = Database(config.DATABASE_URL)
    database.create_tables()
    db = database.SessionLocal()

    try:
        admin = ensure_admin(
            db,
            config.ADMIN_EMAIL or "admin@interiorflow.com",
            config.ADMIN_PASSWORD or "admin123",
            name=config.ADMIN_NAME
        )
        demo_user = find_user_by_email(db, "demo@interiorflow.com") or create_user(
            db, "demo@interiorflow.com", "demo123", name="Demo"
        )

        if db.query(models.Client).count() > 0:
            print("ℹ️ Données déjà présentes, rien à faire")
            return

        # Catalogue
        catalog = {
            "Kitchen": ["Cabinets", "Countertops"],
            "Bedroom": ["Wardrobes", "False ceiling"],
        }
        for category_name, sub_names in catalog.items():
            category = models.Category(name=category_name)
            db.add(category)
            db.flush()
            for sub_name in sub_names:
                sub = models.SubCategory(name=sub_name, category_id=category.id)
                db.add(sub)
                db.flush()
                db.add(models.Section(
                    category_id=category.id,
                    sub_category_id=sub.id,
                    material="Plywood",
                    description=f"{sub_name} standard",
                    amount=random.choice([850, 1200, 1500]),
                    type=random.choice(constants.SECTION_TYPES)
                ))
        db.commit()

        # Clients et devis
        for i in range(5):
            client = models.Client(
                name=f"Client {i+1}",
                email=f"client{i+1}@example.com",
                phone=f"98765432{i:02d}",
                location=random.choice(["Kochi", "Calicut", "Trivandrum"])
            )
            db.add(client)
            db.flush()

            items = pricing.price_interior_items([
                {"type": "area", "length": 300, "breadth": 240, "amountPerSqFt": 1200},
                {"type": "pieces", "pieces": random.randint(1, 4), "amountPerSqFt": 5000},
            ])
            db.add(models.InteriorEstimate(
                user_id=demo_user.id,
                client_id=client.id,
                estimate_name=f"Interior estimate {i+1}",
                items=items,
                total_amount=pricing.grand_total(pricing.subtotal(items), 5, constants.DISCOUNT_PERCENTAGE),
                discount=5,
                discount_type=constants.DISCOUNT_PERCENTAGE,
                status=constants.ESTIMATE_PENDING
            ))

            date = datetime.utcnow() - timedelta(days=random.randint(1, 60))
            db.add(models.InteriorIncome(
                user_id=admin.id,
                client_id=client.id,
                amount=random.randint(20000, 80000),
                status=random.choice(constants.RECEIVED_INCOME_STATUSES),
                method=random.choice(list(constants.PAYMENT_METHODS)),
                marked_by=admin.name,
                date=date
            ))
            db.add(models.Expense(
                user_id=admin.id,
                client_id=client.id,
                category="Material",
                notes="Plywood",
                amount=random.randint(5000, 20000),
                date=date + timedelta(days=2),
                added_by=admin.name
            ))

        for category in constants.COMMON_EXPENSE_CATEGORIES[:3]:
            db.add(models.CommonExpense(
                user_id=admin.id,
                category=category,
                amount=random.randint(2000, 15000),
                date=datetime.utcnow() - timedelta(days=random.randint(1, 30)),
                added_by=admin.name
            ))

        db.commit()
    finally:
        db.close()
        database.dispose()

    print("✅ Données de démo générées avec succès!")
    print("👤 Utilisateur de démo: demo@interiorflow.com / demo123")


if __name__ == "__main__":
    generate_test_data()
