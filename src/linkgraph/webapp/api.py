"""REST API for the blog link graph.

Serves the graph dataset consumed by the client-side force layout and the
backlink lists shown on post pages.
"""

from fastapi import Depends, FastAPI, HTTPException, Request
from pydantic import BaseModel

from ..backlinks import BacklinkCache
from ..config import get_content_root
from ..content import load_posts
from ..graph import build_graph
from ..models import GraphData, PostSummary


class ReindexResponse(BaseModel):
    """Result of rebuilding the backlink cache."""
    posts: int
    targets: int


def _default_cache() -> BacklinkCache:
    # Content root is resolved on first build, not at import time
    return BacklinkCache(lambda: load_posts(get_content_root()))


def get_cache(request: Request) -> BacklinkCache:
    """Dependency returning the app's backlink cache."""
    return request.app.state.cache


def create_app(cache: BacklinkCache | None = None) -> FastAPI:
    """Create the API application.

    Args:
        cache: Backlink cache to serve from. Defaults to one loading posts
            from the configured content root.
    """
    app = FastAPI(
        title="linkgraph",
        description="Backlinks and link graph for a markdown blog",
    )
    app.state.cache = cache or _default_cache()

    @app.get(
        "/graph.json",
        response_model=GraphData,
        response_model_exclude_none=True,
    )
    def get_graph(cache: BacklinkCache = Depends(get_cache)) -> GraphData:
        """Nodes (posts, tags) and links (tags, references) for the graph view."""
        return build_graph(cache.posts)

    @app.get("/api/backlinks/{post_id:path}", response_model=list[PostSummary])
    def get_backlinks(post_id: str, cache: BacklinkCache = Depends(get_cache)) -> list[PostSummary]:
        """Posts that link to post_id."""
        if cache.get_post(post_id) is None:
            raise HTTPException(status_code=404, detail=f"Post not found: {post_id}")
        return [PostSummary.from_post(post) for post in cache.backlinks_for(post_id)]

    @app.post("/api/reindex", response_model=ReindexResponse)
    def reindex(cache: BacklinkCache = Depends(get_cache)) -> ReindexResponse:
        """Drop the cached index and rebuild it from the content root."""
        cache.reset()
        index = cache.ensure()
        return ReindexResponse(posts=len(cache.posts), targets=len(index))

    return app


app = create_app()
