import base64

import httpx

from shared.clients.search.SearchClientInterface import SearchClientInterface
from shared.clients.search.models.FilterClause import Conjunction, Disjunction, FilterClause, Negation, PhraseMatch, TermsMatch
from shared.clients.search.models.Search import SearchRequest
from shared.helper.HelperConfig import HelperConfig
from shared.helper.HelperSearch import get_total
from shared.models.config import EnvConfig


class SearchClientOpensearch(SearchClientInterface):
    def __init__(self, helper_config: HelperConfig):
        super().__init__(helper_config=helper_config)
        self._base_url = self.get_config_val("BASE_URL", default=None, val_type="string")
        self._username = self.get_config_val("USERNAME", default="", val_type="string")
        self._password = self.get_config_val("PASSWORD", default="", val_type="string")
        self._api_key = self.get_config_val("API_KEY", default="", val_type="string")

    ##########################################
    ################ GETTER ##################
    ##########################################

    ################ GENERAL ##################
    def _get_engine_name(self) -> str:
        return "Opensearch"

    ################ CONFIG ##################
    def _get_required_config(self) -> list[EnvConfig]:
        return [
            EnvConfig(env_key="BASE_URL", val_type="string", default=None),
            EnvConfig(env_key="USERNAME", val_type="string", default=""),
            EnvConfig(env_key="PASSWORD", val_type="string", default=""),
            EnvConfig(env_key="API_KEY", val_type="string", default=""),
        ]

    ################ AUTH ##################
    def _get_auth_header(self) -> dict:
        if self._api_key:
            return {"Authorization": f"ApiKey {self._api_key}"}
        if self._username:
            token = base64.b64encode(f"{self._username}:{self._password}".encode()).decode()
            return {"Authorization": f"Basic {token}"}
        return {}

    ################ ENDPOINTS ##################
    def _get_base_url(self) -> str:
        return self._base_url

    def _get_endpoint_healthcheck(self) -> str:
        return "/"

    def _get_endpoint_search(self, index: str) -> str:
        return f"/{index}/_search"

    def _get_endpoint_scroll(self) -> str:
        return "/_search/scroll"

    ##########################################
    ########### PAYLOAD BUILDER ##############
    ##########################################

    def get_search_payload(self, request: SearchRequest) -> dict:
        payload: dict = {"size": request.size}
        # from is rejected in a scroll context
        if not request.scroll:
            payload["from"] = request.offset
        if request.sort:
            payload["sort"] = [{sort.field: {"order": sort.order}} for sort in request.sort]
        if request.filter is not None:
            payload["query"] = {"bool": {"filter": [self.translate_clause(request.filter)]}}
        if request.source_fields is not None:
            payload["_source"] = request.source_fields
        if request.suggest is not None:
            payload["suggest"] = {
                request.suggest.name: {
                    "text": request.suggest.text,
                    "completion": {
                        "field": request.suggest.field,
                        "size": request.suggest.size,
                    },
                }
            }
        return payload

    def get_search_params(self, request: SearchRequest) -> dict:
        return {"scroll": request.scroll} if request.scroll else {}

    def get_scroll_payload(self, scroll_id: str, lifetime: str) -> dict:
        return {"scroll": lifetime, "scroll_id": scroll_id}

    def get_clear_scroll_payload(self, scroll_id: str) -> dict:
        return {"scroll_id": scroll_id}

    def translate_clause(self, clause: FilterClause) -> dict:
        """
        Translates a filter tree into the OpenSearch query DSL.

        Raises:
            TypeError: If the clause is of an unknown kind.
        """
        if isinstance(clause, PhraseMatch):
            return {"match_phrase": {clause.field: clause.value}}
        if isinstance(clause, TermsMatch):
            return {"terms": {clause.field: list(clause.values)}}
        if isinstance(clause, Conjunction):
            return {"bool": {"filter": [self.translate_clause(c) for c in clause.clauses]}}
        if isinstance(clause, Disjunction):
            return {"bool": {"should": [self.translate_clause(c) for c in clause.clauses], "minimum_should_match": 1}}
        if isinstance(clause, Negation):
            return {"bool": {"must_not": [self.translate_clause(c) for c in clause.clauses]}}
        raise TypeError(f"Unsupported filter clause: {clause!r}")

    ##########################################
    ########### RESPONSE PARSER ##############
    ##########################################

    def extract_hits(self, raw_response: dict) -> list[dict]:
        return (raw_response.get("hits") or {}).get("hits") or []

    def extract_total(self, raw_response: dict) -> int:
        return get_total(raw_response)

    def extract_scroll_id(self, raw_response: dict) -> str | None:
        return raw_response.get("_scroll_id")

    def extract_suggestions(self, raw_response: dict, name: str) -> list[dict]:
        candidates: list[dict] = []
        for entry in (raw_response.get("suggest") or {}).get(name) or []:
            candidates.extend(entry.get("options") or [])
        return candidates

    def is_cursor_expired(self, response: httpx.Response) -> bool:
        if response.status_code == 404:
            return True
        return "search_context_missing_exception" in response.text
