import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt

from app.deps import get_cache
from app.errors import error_response
from config.settings import HISTORY_WINDOW_MAX, HISTORY_WINDOW_MIN, settings
from core.lambdas import InsufficientDataError
from data.cache import MemoryCache
from data.providers.errors import ProviderError
from services.prediction import FixtureNotFoundError, predict_fixture

logger = logging.getLogger(__name__)

router = APIRouter()


class PoissonRequest(BaseModel):
    """Acepta snake_case o camelCase (fixtureId, useHomeAwaySplit)."""

    model_config = ConfigDict(populate_by_name=True)

    fixture_id: StrictInt = Field(alias="fixtureId", gt=0)
    window: StrictInt = Field(ge=HISTORY_WINDOW_MIN, le=HISTORY_WINDOW_MAX)
    use_home_away_split: StrictBool = Field(alias="useHomeAwaySplit")


@router.post("/poisson")
def post_poisson(body: PoissonRequest, cache: MemoryCache = Depends(get_cache)):
    if not settings.has_apisports_key():
        return error_response(500, "MISSING_API_KEY", "API-Sports API key is not configured", "CONFIGURATION_ERROR")

    try:
        data = predict_fixture(
            body.fixture_id,
            body.window,
            body.use_home_away_split,
            cache=cache,
            max_goals=settings.max_goals_poisson,
        )
    except FixtureNotFoundError as e:
        return error_response(404, "FIXTURE_NOT_FOUND", str(e), "NOT_FOUND")
    except InsufficientDataError as e:
        # nunca inventar un λ por defecto: sin evidencia no hay predicción
        return error_response(400, "INSUFFICIENT_DATA", str(e), "INSUFFICIENT_DATA")
    except ProviderError as e:
        logger.warning("API-Sports falló para fixture %s: %s", body.fixture_id, e)
        return error_response(500, "APISPORTS_ERROR", str(e), "API_ERROR")

    return {"ok": True, "data": data}
