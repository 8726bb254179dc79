"""
tagpress preview API
====================
FastAPI app that serves a site straight from its sources, re-reading the
content on every request.

Quick Start:
    uvicorn tagpress.web_api.main:app --reload
    TAGPRESS_SITE_ROOT=my-blog uvicorn tagpress.web_api.main:app
"""
from .main import app, create_app

__all__ = ["app", "create_app"]
