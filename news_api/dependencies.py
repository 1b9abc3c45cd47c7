from typing import Annotated

from fastapi import Path, Query

from news_api.config import settings


class ListQueryParams:
    """
    Reusable FastAPI dependency collecting the sorting / pagination query
    parameters shared by every list endpoint.

    Usage in a router::

        @router.get("")
        async def list_articles(params: ListQueryParams = Depends()):
            ...

    The values are kept as raw strings on purpose: ``limit`` accepts the
    ``infinity`` / ``none`` sentinels and every token is validated by the
    service layer (``resolve_order``, ``resolve_sort_column`` and
    ``resolve_page``), which reports failures in the API error envelope.

    Attributes
    ----------
    sort_by:
        Column name to sort by, checked against the entity's whitelist.
    order:
        ``"asc"`` or ``"desc"``, case-insensitive.
    limit:
        Page size, or ``0`` / ``infinity`` / ``none`` for every row.
    p:
        1-based page number; zero, negative or past-the-end pages are empty.
    """

    def __init__(
        self,
        sort_by: str = Query("created_at", description="Column name to sort results by."),
        order: str = Query("desc", description="Sort direction: 'asc' or 'desc'."),
        limit: str = Query(
            str(settings.DEFAULT_LIMIT),
            description="Rows per page; '0', 'infinity' or 'none' return every row.",
        ),
        p: str = Query(str(settings.DEFAULT_PAGE), description="Page number (1-based)."),
    ) -> None:
        self.sort_by = sort_by
        self.order = order
        self.limit = limit
        self.p = p


# Primary keys are 32-bit INTEGER columns; ids outside that range fail
# request validation instead of reaching the driver.
MIN_ID = -(2**31)
MAX_ID = 2**31 - 1

ArticleId = Annotated[int, Path(ge=MIN_ID, le=MAX_ID, description="Article id.")]
CommentId = Annotated[int, Path(ge=MIN_ID, le=MAX_ID, description="Comment id.")]
