# INTERIORFLOW/backend/interiorflow/database.py

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.orm import declarative_base, sessionmaker
import logging

logger = logging.getLogger(__name__)

# Base pour créer les modèles (tables)
Base = declarative_base()


class Database:
    """
    Connexion à la base de données, créée une seule fois au démarrage
    de l'application puis partagée par toutes les requêtes.
    """

    def __init__(self, url: str, echo: bool = False):
        if url.startswith("sqlite"):
            engine_options = {"connect_args": {"check_same_thread": False}}
        else:
            engine_options = {
                "pool_size": 5,  # Nombre de connexions permanentes
                "max_overflow": 10,  # Connexions supplémentaires temporaires
                "pool_pre_ping": True,  # Vérifie que la connexion est vivante avant utilisation
            }
        self.engine = create_engine(url, echo=echo, **engine_options)
        self.SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=self.engine
        )

    def create_tables(self):
        """Crée toutes les tables définies dans les modèles"""
        # Les modèles doivent être importés pour être enregistrés sur Base
        from interiorflow.models import models  # noqa: F401
        Base.metadata.create_all(bind=self.engine)
        logger.info("✅ Tables créées/vérifiées avec succès")

    def check_connection(self):
        """Vérifie que la connexion à la base fonctionne"""
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"❌ Erreur de connexion: {e}")
            return False

    def dispose(self):
        self.engine.dispose()


# Dependency pour FastAPI
def get_db(request: Request):
    """
    Dépendance FastAPI pour obtenir une session de base de données.
    À utiliser dans les routes avec: db: Session = Depends(get_db)
    """
    db = request.app.state.database.SessionLocal()
    try:
        yield db
    finally:
        db.close()
