# INTERIORFLOW/backend/interiorflow/main.py

from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI
from interiorflow import config
from interiorflow.database import Database
from interiorflow.cors import SplitCORSMiddleware
from interiorflow.errors import register_exception_handlers
from interiorflow.services.accounts import ensure_admin
from interiorflow.routes import (
    auth, users, clients, banks, categories, subcategories, sections,
    interior_estimates, interior_presets, interior_income, stages,
    general_estimates, expenses, common_expenses, cash_flow, quotes, dashboard
)
import logging
import datetime

# Configuration du logging
logging.basicConfig(level=config.LOG_LEVEL)
logger = logging.getLogger(__name__)

ROUTERS = [
    auth, users, clients, banks, categories, subcategories, sections,
    interior_estimates, interior_presets, interior_income, stages,
    general_estimates, expenses, common_expenses, cash_flow, quotes, dashboard
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    # --- STARTUP ---
    logger.info("🚀 Démarrage de l'API InteriorFlow...")
    database: Database = app.state.database

    if database.check_connection():
        logger.info("✅ Connexion à la base de données établie")
        # Pas de système de migrations : les tables manquantes sont créées
        database.create_tables()

        if config.ADMIN_EMAIL and config.ADMIN_PASSWORD:
            db = database.SessionLocal()
            try:
                ensure_admin(db, config.ADMIN_EMAIL, config.ADMIN_PASSWORD, name=config.ADMIN_NAME)
            finally:
                db.close()
    else:
        logger.error("❌ Impossible de se connecter à la base de données")

    yield

    # --- SHUTDOWN ---
    database.dispose()
    logger.info("👋 Arrêt de l'API InteriorFlow")


def create_app(database_url: Optional[str] = None) -> FastAPI:
    """Construit l'application ; la connexion à la base est créée une seule fois ici"""
    app = FastAPI(
        title="InteriorFlow API",
        description="API de gestion pour bureau d'études en aménagement intérieur",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "auth", "description": "Connexion, inscription et identité courante"},
            {"name": "users", "description": "Comptes utilisateurs"},
            {"name": "clients", "description": "Fiches clients"},
            {"name": "banks", "description": "Coordonnées bancaires de l'entreprise"},
            {"name": "catalog", "description": "Catégories, sous-catégories et sections"},
            {"name": "interior-estimates", "description": "Devis intérieurs et approbation"},
            {"name": "interior-presets", "description": "Modèles de devis réutilisables"},
            {"name": "interior-income", "description": "Encaissements clients"},
            {"name": "stages", "description": "Chronologie des projets"},
            {"name": "general-estimates", "description": "Devis généraux (permis, construction, 3D)"},
            {"name": "expenses", "description": "Dépenses projet et frais généraux"},
            {"name": "cash-flow", "description": "Trésorerie avec solde cumulé"},
            {"name": "quotes", "description": "Demandes de devis du site public"},
            {"name": "dashboard", "description": "Tableau de bord administrateur"}
        ]
    )
    app.state.database = Database(database_url or config.DATABASE_URL, echo=config.DEBUG)

    # Configuration CORS : origines explicites pour le tableau de bord (cookie du token),
    # formulaire de devis public ouvert à tous
    app.add_middleware(SplitCORSMiddleware, allow_origins=config.ALLOWED_ORIGINS)

    register_exception_handlers(app)

    # Inclusion des routeurs
    for module in ROUTERS:
        app.include_router(module.router)

    @app.get("/")
    def root():
        """
        Racine de l'API - Informations générales
        """
        return {
            "success": True,
            "message": "InteriorFlow backend opérationnel 🚀",
            "version": app.version,
            "environment": config.ENVIRONMENT,
            "documentation": {
                "swagger": "/docs",
                "redoc": "/redoc"
            },
            "health_check": "/health"
        }

    @app.get("/health")
    def health_check():
        """
        Endpoint de santé pour le monitoring
        """
        db_status = app.state.database.check_connection()
        return {
            "status": "healthy" if db_status else "unhealthy",
            "database": "connected" if db_status else "disconnected",
            "version": app.version,
            "timestamp": datetime.datetime.now().isoformat()
        }

    return app


app = create_app()
