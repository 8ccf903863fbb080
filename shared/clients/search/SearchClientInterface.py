from abc import abstractmethod
import json

import httpx

from shared.clients.ClientInterface import ClientInterface
from shared.clients.search.ScrollDrainer import ScrollDrainer
from shared.clients.search.errors import ScrollCursorExpiredError, SearchRetrievalError
from shared.clients.search.models.Search import AccumulatedResult, SearchRequest, SearchResultPage, SuggestionResult
from shared.helper.HelperConfig import HelperConfig


class SearchClientInterface(ClientInterface):
    def __init__(self, helper_config: HelperConfig):
        super().__init__(helper_config=helper_config)
        self._drainer = ScrollDrainer(helper_config=helper_config)

    ##########################################
    ################ GETTER ##################
    ##########################################

    ################ GENERAL ##################
    def _get_client_type(self) -> str:
        return "search"

    ################ ENDPOINTS ##################
    @abstractmethod
    def _get_endpoint_search(self, index: str) -> str:
        """
        Returns the endpoint path for search requests against one index (e.g. "/members/_search").
        """
        pass

    @abstractmethod
    def _get_endpoint_scroll(self) -> str:
        """
        Returns the endpoint path for scroll continuation and scroll clearing requests (e.g. "/_search/scroll").
        """
        pass

    ##########################################
    ########### PAYLOAD BUILDER ##############
    ##########################################

    @abstractmethod
    def get_search_payload(self, request: SearchRequest) -> dict:
        """
        Translates a generic SearchRequest into the backend's query DSL body.

        Args:
            request (SearchRequest): The request to translate.

        Returns:
            dict: The JSON body of the search request.
        """
        pass

    @abstractmethod
    def get_search_params(self, request: SearchRequest) -> dict:
        """
        Returns the URL query parameters of a search request (e.g. the scroll lifetime).
        """
        pass

    @abstractmethod
    def get_scroll_payload(self, scroll_id: str, lifetime: str) -> dict:
        """
        Returns the body of a scroll continuation request.

        Args:
            scroll_id (str): Cursor returned by the previous page.
            lifetime (str): How long the backend keeps the cursor alive for the next call.
        """
        pass

    @abstractmethod
    def get_clear_scroll_payload(self, scroll_id: str) -> dict:
        pass

    ##########################################
    ########### RESPONSE PARSER ##############
    ##########################################

    @abstractmethod
    def extract_hits(self, raw_response: dict) -> list[dict]:
        pass

    @abstractmethod
    def extract_total(self, raw_response: dict) -> int:
        pass

    @abstractmethod
    def extract_scroll_id(self, raw_response: dict) -> str | None:
        """
        Returns the cursor of the next scroll page, or None if the response carries none.
        """
        pass

    @abstractmethod
    def extract_suggestions(self, raw_response: dict, name: str) -> list[dict]:
        """
        Returns the completion candidates filed under ``name``, in backend order.
        """
        pass

    @abstractmethod
    def is_cursor_expired(self, response: httpx.Response) -> bool:
        """
        Tells whether a failed scroll response means the cursor no longer exists.
        """
        pass

    def _parse_page(self, raw_response: dict) -> SearchResultPage:
        return SearchResultPage(
            hits=self.extract_hits(raw_response),
            total=self.extract_total(raw_response),
            scroll_id=self.extract_scroll_id(raw_response),
            took=raw_response.get("took", 0) or 0,
        )

    def _decode(self, response: httpx.Response, action: str) -> dict:
        """Checks the status of a backend response and decodes its JSON body.

        Raises:
            ScrollCursorExpiredError: If a scroll call failed because the cursor is gone.
            SearchRetrievalError: On any other non-2xx status or a body that is not a JSON object.
        """
        if response.status_code >= 300:
            self.logging.error(
                "%s request to %s failed with status %d: %s",
                action, response.request.url, response.status_code, response.text,
            )
            if action == "scroll" and self.is_cursor_expired(response):
                raise ScrollCursorExpiredError(
                    f"Scroll cursor expired (status {response.status_code}).", status_code=response.status_code
                )
            raise SearchRetrievalError(
                f"{action.capitalize()} request failed with status {response.status_code}.", status_code=response.status_code
            )
        try:
            body = response.json()
        except ValueError as e:
            raise SearchRetrievalError(f"{action.capitalize()} response is not valid JSON: {e}", status_code=response.status_code) from e
        if not isinstance(body, dict):
            raise SearchRetrievalError(f"{action.capitalize()} response is not a JSON object.", status_code=response.status_code)
        return body

    ##########################################
    ############### REQUESTS #################
    ##########################################

    async def do_search(self, request: SearchRequest) -> SearchResultPage:
        """Run one search request and return its first page.

        Args:
            request (SearchRequest): The request to run. Set ``scroll`` to get a cursor back.

        Returns:
            SearchResultPage: The hits of the requested page and the total of the whole query.
        """
        resp = await self.do_request(
            method="POST",
            content=json.dumps(self.get_search_payload(request)),
            params=self.get_search_params(request),
            endpoint=self._get_endpoint_search(request.index),
            additional_headers={"Content-Type": "application/json"},
        )
        return self._parse_page(self._decode(resp, "search"))

    async def do_scroll(self, scroll_id: str, lifetime: str) -> SearchResultPage:
        """Fetch the page following ``scroll_id``. The id must not be used again afterwards.

        Raises:
            ScrollCursorExpiredError: If the cursor lifetime elapsed.
            SearchRetrievalError: If the request failed otherwise.
        """
        resp = await self.do_request(
            method="POST",
            content=json.dumps(self.get_scroll_payload(scroll_id, lifetime)),
            endpoint=self._get_endpoint_scroll(),
            additional_headers={"Content-Type": "application/json"},
        )
        return self._parse_page(self._decode(resp, "scroll"))

    async def do_clear_scroll(self, scroll_id: str) -> None:
        """Release a scroll cursor on the backend.

        A refused or unreachable release is only logged, the backend expires the cursor on its own.
        """
        try:
            resp = await self.do_request(
                method="DELETE",
                content=json.dumps(self.get_clear_scroll_payload(scroll_id)),
                endpoint=self._get_endpoint_scroll(),
                additional_headers={"Content-Type": "application/json"},
            )
        except httpx.HTTPError as e:
            self.logging.warning("Clearing scroll cursor failed: %s", e)
            return
        if resp.status_code >= 300:
            self.logging.warning("Clearing scroll cursor failed with status %d: %s", resp.status_code, resp.text)

    async def do_scroll_all(self, request: SearchRequest) -> AccumulatedResult:
        """Run a scrolled search and collect every matching hit.

        The last cursor is released whether the drain finished or failed, unless it already expired.

        Args:
            request (SearchRequest): The request to run; ``scroll`` must be set.

        Returns:
            AccumulatedResult: All hits in page-arrival order and the total reported by the first page.

        Raises:
            ValueError: If the request has no scroll lifetime.
            SearchRetrievalError: If the search or any scroll continuation fails.
        """
        if not request.scroll:
            raise ValueError(f"Search request against '{request.index}' has no scroll lifetime.")

        initial_page = await self.do_search(request)
        last_scroll_id = initial_page.scroll_id

        async def next_page(scroll_id: str) -> SearchResultPage:
            nonlocal last_scroll_id
            page = await self.do_scroll(scroll_id, request.scroll)
            last_scroll_id = page.scroll_id or last_scroll_id
            return page

        try:
            result = await self._drainer.drain(initial_page, next_page)
        except ScrollCursorExpiredError:
            last_scroll_id = None
            raise
        finally:
            if last_scroll_id:
                await self.do_clear_scroll(last_scroll_id)
        self.logging.info(
            "Drained %d hit(s) from index %r on %s.", len(result.hits), request.index, self.get_engine_name(),
        )
        return result

    async def do_suggest(self, request: SearchRequest) -> SuggestionResult:
        """Run a typeahead lookup. Completion results are bounded, so there is nothing to drain.

        Raises:
            ValueError: If the request carries no suggester.
        """
        if request.suggest is None:
            raise ValueError(f"Search request against '{request.index}' has no suggester.")
        resp = await self.do_request(
            method="POST",
            content=json.dumps(self.get_search_payload(request)),
            params=self.get_search_params(request),
            endpoint=self._get_endpoint_search(request.index),
            additional_headers={"Content-Type": "application/json"},
        )
        raw_response = self._decode(resp, "suggest")
        return SuggestionResult(
            term=request.suggest.text,
            candidates=self.extract_suggestions(raw_response, request.suggest.name),
        )
