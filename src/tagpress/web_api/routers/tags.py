"""
Tags Router
===========
JSON listing of tags and their posts.
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from tagpress.model.site import Site
from tagpress.web_api.deps import get_site
from tagpress.web_api.schemas.posts import TagDetail, TagSummary

router = APIRouter()


@router.get("/", response_model=List[TagSummary])
async def list_tags(site: Site = Depends(get_site)):
    """List tags sorted by name, with post counts."""
    return [TagSummary.from_group(g) for g in site.tags]


@router.get("/{slug}", response_model=TagDetail)
async def get_tag(slug: str, site: Site = Depends(get_site)):
    """Fetch one tag and its posts, newest first."""
    group = site.tag_by_slug(slug)
    if group is None:
        raise HTTPException(status_code=404, detail=f"Tag not found: {slug}")
    return TagDetail.from_group(group)
