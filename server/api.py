"""FastAPI server exposing the outfit planner."""

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from logic.validation import (
    PlannedOutfitView,
    SuggestOutfitsRequest,
    SuggestOutfitsResponse,
    validation_failure,
)
from planner_app.app import OutfitPlannerApp
from planner_app.logging_config import configure_logging
from tools.errors import ProviderUnavailableError
from tools.wardrobe_store import InMemoryWardrobeStore


def create_app(planner_app: OutfitPlannerApp | None = None) -> FastAPI:
    """Build the ASGI app; the planner app is created from the environment when omitted."""

    configure_logging()
    concierge = planner_app or OutfitPlannerApp()
    app = FastAPI(title="Event Outfit Planner", version="0.1.0")
    app.state.planner_app = concierge

    @app.exception_handler(ProviderUnavailableError)
    async def provider_unavailable(_: Request, exc: ProviderUnavailableError) -> JSONResponse:
        return JSONResponse(
            status_code=503,
            content={"status": "error", "provider": exc.provider, "message": str(exc)},
        )

    @app.exception_handler(RequestValidationError)
    async def invalid_request(_: Request, exc: RequestValidationError) -> JSONResponse:
        details = [
            {"loc": [str(part) for part in error["loc"]], "msg": error["msg"], "type": error["type"]}
            for error in exc.errors()
        ]
        return JSONResponse(
            status_code=422,
            content={"status": "needs_review", "message": "invalid request payload", "details": details},
        )

    def get_planner_app() -> OutfitPlannerApp:
        return app.state.planner_app

    @app.get("/healthz")
    async def healthcheck(concierge: OutfitPlannerApp = Depends(get_planner_app)) -> dict:
        """Lightweight readiness probe."""

        return {
            "status": "ok",
            "service": "event-outfit-planner",
            "environment": concierge.config.environment or "local",
        }

    @app.post("/outfits/suggest", response_model=SuggestOutfitsResponse)
    async def suggest_outfits(
        request: SuggestOutfitsRequest, concierge: OutfitPlannerApp = Depends(get_planner_app)
    ) -> SuggestOutfitsResponse:
        """Rank outfits for one event, returning ``count`` diversified suggestions."""

        try:
            event = request.event.to_event()
            wardrobe = (
                InMemoryWardrobeStore([payload.to_item() for payload in request.wardrobe])
                if request.wardrobe is not None
                else None
            )
            weather = request.weather.to_forecast() if request.weather else None
        except (ValueError, ValidationError) as exc:
            if isinstance(exc, ValidationError):
                raise HTTPException(status_code=422, detail=validation_failure("invalid payload", exc)) from exc
            raise HTTPException(status_code=422, detail=str(exc)) from exc

        planner = concierge.build_planner(wardrobe)
        if weather is None and request.use_forecast:
            weather = await planner.forecast_for(event)
        outfits = await planner.suggest_outfits(event, weather, count=request.count)
        status = "needs_more_items" if all(outfit.is_fallback for outfit in outfits) else "ok"
        return SuggestOutfitsResponse(
            status=status,
            event={
                "event_id": event.event_id,
                "event_type": event.event_type.value,
                "dress_code": event.dress_code.value,
                "importance": event.importance.value,
                "is_video_call": event.is_video_call,
            },
            outfits=[PlannedOutfitView.from_outfit(outfit) for outfit in outfits],
        )

    return app


def get_app() -> FastAPI:
    """Expose a FastAPI instance for ASGI servers."""

    return create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("server.api:get_app", factory=True, host="0.0.0.0", port=8080, reload=False)
