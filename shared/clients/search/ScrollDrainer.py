import math
from typing import Awaitable, Callable

from shared.clients.search.errors import ScrollExhaustedError
from shared.clients.search.models.Search import AccumulatedResult, SearchResultPage
from shared.helper.HelperConfig import HelperConfig

NextPageFn = Callable[[str], Awaitable[SearchResultPage]]


class ScrollDrainer:
    """Collects every hit of a scrolled query by following its cursor page by page.

    The total of the first page is authoritative for the whole drain. Later
    pages reporting a different total are logged and otherwise ignored, hits
    beyond the authoritative total are dropped, and a cursor that runs dry
    early raises ScrollExhaustedError.
    """

    def __init__(self, helper_config: HelperConfig):
        self.logging = helper_config.get_logger()

    async def drain(self, initial_page: SearchResultPage, next_page: NextPageFn) -> AccumulatedResult:
        """Drain a scroll cursor until the reported total has been collected.

        Args:
            initial_page (SearchResultPage): Page 1, already fetched by the caller with a scroll lifetime.
            next_page (NextPageFn): Fetches the page following the given scroll id. Each id is passed at most once.

        Returns:
            AccumulatedResult: Exactly ``initial_page.total`` hits in page-arrival order.

        Raises:
            ScrollExhaustedError: If the cursor is missing or returns no hits before the total is reached.
            Exception: Whatever ``next_page`` raises, unchanged. No partial result is returned.
        """
        total = max(initial_page.total, 0)
        page_size = len(initial_page.hits)
        total_pages = math.ceil(total / page_size) if page_size else 1
        result = AccumulatedResult(hits=[], total=total)
        current_page = initial_page
        page = 1

        while True:
            self._append_hits(result, current_page.hits)
            self.logging.info(
                "Fetched scroll page %d of %d, total hits so far: %d of %d",
                page, total_pages, len(result.hits), total,
            )
            if len(result.hits) >= total:
                return result

            if not current_page.hits:
                raise ScrollExhaustedError(
                    f"Scroll returned an empty page after {len(result.hits)} of {total} hits."
                )
            if not current_page.scroll_id:
                raise ScrollExhaustedError(
                    f"No scroll id to continue from after {len(result.hits)} of {total} hits."
                )

            current_page = await next_page(current_page.scroll_id)
            page += 1
            if current_page.total != total:
                self.logging.warning(
                    "Scroll page %d reports total %d, keeping initial total %d.",
                    page, current_page.total, total,
                )

    def _append_hits(self, result: AccumulatedResult, hits: list[dict]) -> None:
        room = max(result.total - len(result.hits), 0)
        if len(hits) > room:
            self.logging.warning(
                "Dropping %d hit(s) beyond the reported total of %d.", len(hits) - room, result.total,
            )
            hits = hits[:room]
        result.hits.extend(hits)
