"""FastAPI application entry point for member_search_bridge."""

import os
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shared.logging.logging_setup import setup_logging
from shared.helper.HelperConfig import HelperConfig
from shared.models.config import SearchIndexConfig
from shared.clients.search.MemberQueryBuilder import MemberQueryBuilder
from shared.clients.search.SearchClientInterface import SearchClientInterface
from shared.clients.search.SearchClientManager import SearchClientManager
from shared.clients.search.errors import InvalidSearchQueryError, ScrollCursorExpiredError, SearchRetrievalError
from server.core.MemberSearchService import MemberSearchService
from server.routers.MemberRouter import router as member_router

logging = setup_logging()
app_version = os.getenv("APP_VERSION", "unknown")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # when the app starts
    app.state.logging = logging
    app.state.helper_config = HelperConfig(logger=logging)

    index_config = SearchIndexConfig.from_helper_config(app.state.helper_config)
    query_builder = MemberQueryBuilder(index_config=index_config)
    search_client = SearchClientManager(helper_config=app.state.helper_config).get_client()

    logging.info("Booting search client...")
    await search_client.boot()
    await check_connection(search_client)

    app.state.search_client = search_client
    app.state.member_search_service = MemberSearchService(
        helper_config=app.state.helper_config,
        search_client=search_client,
        query_builder=query_builder,
    )
    logging.info("member_search_bridge ready.", color="green")

    # while the app is running...
    yield

    logging.info("Shutting down — closing search client...")
    await search_client.close()
    logging.info("Search client closed.")


app = FastAPI(
    title="member_search_bridge",
    description=(
        "Query layer between the talent-search frontend and the member indices of an "
        "OpenSearch cluster: member profiles, skills, stats, traits and handle typeahead."
    ),
    version=app_version,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(member_router)


@app.exception_handler(InvalidSearchQueryError)
async def handle_invalid_query(request: Request, exc: InvalidSearchQueryError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(ScrollCursorExpiredError)
async def handle_cursor_expired(request: Request, exc: ScrollCursorExpiredError) -> JSONResponse:
    logging.warning("Scroll cursor expired while serving %s", request.url.path)
    return JSONResponse(status_code=504, content={"detail": str(exc)})


@app.exception_handler(SearchRetrievalError)
async def handle_retrieval_error(request: Request, exc: SearchRetrievalError) -> JSONResponse:
    logging.error("Search backend failed while serving %s: %s", request.url.path, exc)
    return JSONResponse(status_code=502, content={"detail": str(exc)})


async def check_connection(search_client: SearchClientInterface) -> None:
    """Check connectivity to the search backend on startup.

    Raises:
        Exception: If the backend is not reachable; no query can be served without it.
    """
    result = await search_client.do_healthcheck()
    if not result.is_success:
        raise Exception(
            f"Search client '{search_client.__class__.__name__}' is not reachable "
            f"(status {result.status_code}). Cannot serve queries."
        )


if __name__ == "__main__":
    import uvicorn

    logging.info(
        "Starting member_search_bridge API Server v%s from root dir: %s on port 8000...",
        app_version,
        os.environ.get("ROOT_DIR", "unknown"),
    )
    uvicorn.run(app, host="0.0.0.0", port=8000)
