import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import Body, FastAPI, Request, status
from fastapi.exception_handlers import http_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core import config, db
from core.log import configure_logging
from users import router as users_router

configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # One pool per process; repositories borrow it through a dependency.
    app.state.pool = await db.create_pool()
    try:
        yield
    finally:
        await db.close_pool(app.state.pool)
        app.state.pool = None


app = FastAPI(lifespan=lifespan)

# Allow the local frontend dev server to call this API from the browser.
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins(),
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(users_router.router, tags=["users"])


@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
    # Body errors only; path ids are parsed by the service.
    if any(error.get("type") == "json_invalid" for error in exc.errors()):
        detail = "Invalid JSON"
    else:
        detail = "Bad Request"
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": detail})


# FastAPI's own message when a body cannot even be decoded (e.g. non UTF-8 bytes).
BODY_PARSE_ERROR_DETAIL = "There was an error parsing the body"


@app.exception_handler(StarletteHTTPException)
async def handle_http_error(request: Request, exc: StarletteHTTPException):
    if exc.status_code == status.HTTP_400_BAD_REQUEST and exc.detail == BODY_PARSE_ERROR_DETAIL:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": "Invalid JSON"})
    return await http_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error("unhandled_error path=%s error=%s", request.url.path, exc, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal Server Error"},
    )


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.get("/", response_class=PlainTextResponse)
def root() -> str:
    return "hello world"


@app.post("/")
def echo(payload: Any = Body(default_factory=dict)) -> Any:
    return payload


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=config.host(), port=config.port(), log_level=config.log_level().lower())
