"""
Posts Router
============
JSON listing of the post collection.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException

from tagpress.core.tags import slugify
from tagpress.model.site import Site
from tagpress.web_api.deps import get_site
from tagpress.web_api.schemas.posts import PostDetail, PostSummary

router = APIRouter()


@router.get("/", response_model=List[PostSummary])
async def list_posts(tag: Optional[str] = None, site: Site = Depends(get_site)):
    """
    List posts, newest first.

    - **tag**: only posts carrying this tag (label or slug)
    """
    posts = site.posts
    if tag is not None:
        wanted = slugify(tag)
        posts = [p for p in posts if any(slugify(t) == wanted for t in p.tags)]
    return [PostSummary.from_post(p) for p in posts]


@router.get("/{slug}", response_model=PostDetail)
async def get_post(slug: str, site: Site = Depends(get_site)):
    """Fetch one post, including its rendered HTML."""
    post = site.post_by_slug(slug)
    if post is None:
        raise HTTPException(status_code=404, detail=f"Post not found: {slug}")
    return PostDetail.from_post(post)
