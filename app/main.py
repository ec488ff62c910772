import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

from app.errors import unhandled_exception_handler, validation_exception_handler
from app.routes.matches import router as matches_router
from app.routes.poisson import router as poisson_router
from config.settings import settings
from data.cache import MemoryCache

# Logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger("poisson")

app = FastAPI(
    title="Poisson Predictor",
    description="API de probabilidades de partido (1X2, Over/Under) con modelo Poisson",
    version="1.0.0",
)

# Una sola cache por proceso; las rutas la reciben vía app.deps.get_cache
app.state.cache = MemoryCache()

app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

app.include_router(matches_router, prefix="/api", tags=["matches"])
app.include_router(poisson_router, prefix="/api", tags=["poisson"])


@app.get("/health")
def health():
    return {"ok": True, "debug": settings.debug, "cache_entries": len(app.state.cache)}
