# INTERIORFLOW/backend/interiorflow/cors.py

from starlette.datastructures import Headers
from starlette.middleware.cors import CORSMiddleware
from starlette.types import ASGIApp, Receive, Scope, Send

# Formulaire public du site vitrine : ouvert à toutes les origines, sans cookie
PUBLIC_PATHS = {"/quote"}
PUBLIC_METHODS = ["POST", "OPTIONS"]


class SplitCORSMiddleware:
    """
    CORS à deux régimes :
    - POST/OPTIONS sur les chemins publics : toute origine, sans credentials
    - tout le reste : origines du tableau de bord uniquement, avec le cookie du token
    """

    def __init__(self, app: ASGIApp, allow_origins, public_paths=PUBLIC_PATHS):
        self.public_paths = {path.rstrip("/") for path in public_paths}
        self.public = CORSMiddleware(
            app,
            allow_origins=["*"],
            allow_credentials=False,
            allow_methods=PUBLIC_METHODS,
            allow_headers=["Content-Type"],
        )
        self.private = CORSMiddleware(
            app,
            allow_origins=allow_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    def _is_public(self, scope: Scope) -> bool:
        if scope["path"].rstrip("/") not in self.public_paths:
            return False
        method = scope["method"]
        if method == "OPTIONS":
            # Pré-vol : le régime dépend de la méthode annoncée (GET /quote reste au tableau de bord)
            headers = Headers(scope=scope)
            method = headers.get("access-control-request-method", "").upper()
        return method in PUBLIC_METHODS

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http" and self._is_public(scope):
            await self.public(scope, receive, send)
        else:
            await self.private(scope, receive, send)
