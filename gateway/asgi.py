"""
ASGI entrypoint: expose `app` pour les process managers / déploiements.

- En production, un process manager (ex: gunicorn + uvicorn workers) ou un hébergeur ASGI serverless
  importe `gateway.asgi:app`.
- Toute la configuration FastAPI (routes, middlewares, static, etc.) est centralisée
  dans gateway.app_setup.factory, ce fichier ne fait qu'exposer l'instance `app`.
"""

from gateway.app import app

if __name__ == "__main__":
    # Exécution directe utile en développement local (uvicorn standalone).
    import uvicorn
    from gateway.config import PORT
    uvicorn.run(
        "gateway.asgi:app",
        host="0.0.0.0",
        port=PORT,
        reload=True,
    )
