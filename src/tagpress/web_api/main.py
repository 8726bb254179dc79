"""
FastAPI Application
==================
Preview server for a tagpress site.

Run with:
    uvicorn tagpress.web_api.main:app --reload
    python -m tagpress serve my-blog
"""
from pathlib import Path
from typing import Optional, Union

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tagpress import __version__
from tagpress.web_api.config import settings
from tagpress.web_api.routers import health, pages, posts, tags


def create_app(root: Optional[Union[str, Path]] = None) -> FastAPI:
    """Build a preview app serving the site at *root* (default: settings.SITE_ROOT)."""
    app = FastAPI(
        title="tagpress preview",
        description="Live preview and JSON listing of a tagpress site",
        version=__version__,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
    )
    app.state.site_root = Path(root).resolve() if root is not None else settings.site_root

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers; pages last, its catch-all must not shadow /api.
    app.include_router(health.router, tags=["Health"])
    app.include_router(posts.router, prefix="/api/posts", tags=["Posts"])
    app.include_router(tags.router, prefix="/api/tags", tags=["Tags"])
    app.include_router(pages.router, tags=["Pages"])
    return app


app = create_app()


# For running directly: python -m tagpress.web_api.main
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
