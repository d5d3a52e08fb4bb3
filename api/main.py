from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response

from api.deps import get_asset_cache, get_shell_fetch, install_shell
from api.routes.forge import router as forge_router
from api.routes.shell import router as shell_router
from infrastructure.metrics import get_metrics_response


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    """Install the offline shell into the asset cache on startup."""
    install_shell(get_asset_cache(), get_shell_fetch())
    yield


app = FastAPI(title="BlockForge", lifespan=lifespan)

# CORS — allow the studio pages (static dev server) to call the API
# Include both localhost and 127.0.0.1 variants — browsers treat them as different origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:8080",
        "http://127.0.0.1:8080",
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(forge_router)
app.include_router(shell_router)


@app.get("/health")
def health() -> dict[str, str]:
    """Return a simple liveness check."""
    return {"status": "ok"}


@app.get("/metrics")
def metrics() -> Response:
    """Prometheus metrics endpoint.

    Returns metrics in Prometheus text exposition format.
    """
    body, content_type = get_metrics_response()
    return Response(content=body, media_type=content_type)
