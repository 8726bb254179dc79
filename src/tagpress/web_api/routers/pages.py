"""
Pages Router
============
Renders the site's HTML pages on demand, at the URLs a build would write.
Included last: its catch-all route resolves post and page permalinks.
"""
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import HTMLResponse, RedirectResponse, Response

from tagpress.model import ContentKind
from tagpress.model.site import Site
from tagpress.render.templates import SiteRenderer
from tagpress.web_api.deps import get_site

router = APIRouter()


@router.get("/", response_class=HTMLResponse)
async def index(site: Site = Depends(get_site)):
    renderer = SiteRenderer(site)
    return renderer.render_index(renderer.index_pages()[0])


@router.get("/page/{number}/", response_class=HTMLResponse)
async def index_page(number: int, site: Site = Depends(get_site)):
    renderer = SiteRenderer(site)
    pages = renderer.index_pages()
    if number < 1 or number > len(pages):
        raise HTTPException(status_code=404, detail=f"No page {number}")
    return renderer.render_index(pages[number - 1])


@router.get("/tags/", response_class=HTMLResponse)
async def tags_index(site: Site = Depends(get_site)):
    return SiteRenderer(site).render_tags_index()


@router.get("/tags/{slug}/", response_class=HTMLResponse)
async def tag_page(slug: str, site: Site = Depends(get_site)):
    group = site.tag_by_slug(slug)
    if group is None:
        raise HTTPException(status_code=404, detail=f"Tag not found: {slug}")
    return SiteRenderer(site).render_tag(group)


@router.get("/archive/", response_class=HTMLResponse)
async def archive(site: Site = Depends(get_site)):
    return SiteRenderer(site).render_archive()


@router.get("/feed.xml")
async def feed(site: Site = Depends(get_site)):
    if not site.config.feed:
        raise HTTPException(status_code=404, detail="Feed disabled")
    return Response(
        content=SiteRenderer(site).render_feed(),
        media_type="application/atom+xml",
    )


def _listing_urls(site: Site, renderer: SiteRenderer) -> set[str]:
    urls = {"/tags/", "/archive/"}
    urls.update(f"/tags/{g.slug}/" for g in site.tags)
    urls.update(p.url for p in renderer.index_pages())
    return urls


@router.get("/{path:path}", response_class=HTMLResponse)
async def document(path: str, site: Site = Depends(get_site)):
    """Serve a post or page by its permalink.

    A listing URL requested without its trailing slash is redirected.
    """
    renderer = SiteRenderer(site)
    doc = site.find_by_url("/" + path)
    if doc is None:
        slashed = f"/{path}/"
        if not path.endswith("/") and slashed in _listing_urls(site, renderer):
            return RedirectResponse(url=slashed, status_code=307)
        raise HTTPException(status_code=404, detail=f"Not found: /{path}")
    if doc.kind is ContentKind.PAGE:
        return renderer.render_page(doc)
    return renderer.render_post(doc)
