from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse

from .config import leaderboard, server
from .core.events import startup_event, shutdown_event
from .logger import get_logger
from .routes import health, leaderboard as leaderboard_routes, score

logger = get_logger()

@asynccontextmanager
async def lifespan(app: FastAPI):
    await startup_event()
    yield
    await shutdown_event()

app = FastAPI(
    default_response_class=ORJSONResponse,
    title="Leaderboard Service",
    description="Top-N score leaderboard with pluggable persistence",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=leaderboard.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report malformed submissions as a plain 400"""
    errors = "; ".join(
        f"{'.'.join(str(part) for part in err.get('loc', ()) if part != 'body')}: {err.get('msg')}"
        for err in exc.errors()
    )
    logger.warning(f"Invalid request to {request.url.path}: {errors}")
    return ORJSONResponse(
        status_code=400,
        content={"error": "Invalid score data", "detail": errors}
    )

app.include_router(score.router)
app.include_router(leaderboard_routes.router)
app.include_router(health.router)

if __name__ == "__main__":
    import uvicorn

    # The ranking lives in one process; a single worker keeps it the only writer
    uvicorn.run(
        "app.main:app",
        host=server.HOST,
        port=server.PORT,
        workers=1,
        loop="uvloop",
        http="httptools",
        log_level=server.LOG_LEVEL.lower()
    )
