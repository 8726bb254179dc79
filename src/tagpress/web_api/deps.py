"""
Dependencies
============
Per-request site loading, so edits show up without restarting the server.
"""
from fastapi import HTTPException, Request

from tagpress.core.loader import load_site
from tagpress.errors import TagpressError
from tagpress.model.site import Site


def get_site(request: Request) -> Site:
    """Load the site configured on the app; content errors become HTTP 500."""
    root = request.app.state.site_root
    try:
        return load_site(root)
    except FileNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except TagpressError as e:
        raise HTTPException(status_code=500, detail=str(e))
