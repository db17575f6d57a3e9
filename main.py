import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import APIRouter, Depends, FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse
from pydantic import ValidationError

import config
from models.database import Database
from models.errors import DatabaseConnectionError, StatsRetrievalError
from models.stats_service import StatsService
from models.user_stat import UserStat

logging.basicConfig(level=config.LOGLEVEL)
logger = logging.getLogger(__name__)


# noinspection PyShadowingNames
@asynccontextmanager
async def lifespan(app: FastAPI):
    # startup code
    database = Database.from_config()
    try:
        stats_service = StatsService(
            database=database, table_prefix=config.TABLE_PREFIX
        )
    except ValidationError:
        logger.critical("Invalid DB_TABLE_PREFIX %r", config.TABLE_PREFIX, exc_info=True)
        raise
    try:
        database.ping()
    except DatabaseConnectionError:
        logger.critical("Failed to connect to database", exc_info=True)
        raise
    logger.info("Database connection established")
    app.state.stats_service = stats_service
    yield
    # shutdown code: connections are per request, nothing to tear down


app = FastAPI(title="wp-userstats-backend", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["GET"],
    allow_headers=["*"],
)
api_router = APIRouter(prefix="/api")


def get_stats_service(request: Request) -> StatsService:
    return request.app.state.stats_service


@api_router.get("/userinfo", response_model=list[UserStat])
def get_userinfo(
    user: str = Query(
        default="",
        description="Login name to report on. Leave empty to list every user.",
    ),
    stats_service: StatsService = Depends(get_stats_service),
):
    """
    Report publishing statistics per WordPress user.

    For every user the response holds the number of published posts
    (status "publish", type "post") and the title of the most recent one.
    Users without posts are included with a count of 0 and an empty title.

    Args:
        user (str, optional): Restrict the report to this login name.
            An empty value reports on all users.

    Returns:
        list[UserStat]: Ordered by post_count descending. Empty if the
            requested user does not exist.

    Example:
        GET /api/userinfo?user=alice -> 200 [{"username": "alice", "post_count": 3, "last_post_title": "Hello World"}]
        GET /api/userinfo?user=carol -> 200 []
        POST /api/userinfo -> 405
    """
    try:
        return stats_service.get_user_stats(username=user)
    except StatsRetrievalError as e:
        # Keep driver messages and SQL out of the response
        logger.exception("Error getting user stats for %r", user)
        raise HTTPException(status_code=500, detail=e.detail) from e


@app.get("/", include_in_schema=False)  # root redirect remains at /
def root_redirect():
    return RedirectResponse(url="/docs")


app.include_router(api_router)


if __name__ == "__main__":
    logger.info("Starting server on port %s", config.PORT)
    uvicorn.run(app, host="0.0.0.0", port=config.PORT)
