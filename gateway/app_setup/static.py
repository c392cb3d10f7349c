"""
Service du bundle front (mode production uniquement).
Expose:
- /static -> assets du build (js, css, media)
- toute autre route GET non gérée par l'API -> fichier du build s'il existe, sinon build/index.html (routing SPA)
"""
from pathlib import Path

from fastapi import FastAPI, HTTPException
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles


def mount_static_files(app: FastAPI, build_dir: Path) -> None:
    """
    Monte le build et enregistre la route de repli SPA.
    - Doit être appelé après l'enregistrement des routers pour ne pas masquer l'API.
    """
    build_dir = Path(build_dir).resolve()
    static_dir = build_dir / "static"
    if static_dir.is_dir():
        app.mount("/static", StaticFiles(directory=str(static_dir)), name="static")

    @app.get("/{full_path:path}", include_in_schema=False)
    async def spa_fallback(full_path: str):
        candidate = (build_dir / full_path).resolve()
        # Reste confiné au répertoire du build (pas de ../)
        if full_path and candidate.is_file() and build_dir in candidate.parents:
            return FileResponse(str(candidate))
        index_path = build_dir / "index.html"
        if not index_path.is_file():
            raise HTTPException(status_code=404, detail="Front-end build introuvable")
        return FileResponse(str(index_path))
