"""FastAPI application factory for the reference portions backend."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from portion_tracker.app_logging import configure_logging
from portion_tracker.domain.errors import AdjustmentRejected
from portion_tracker.domain.portions import PortionsOfNutrients
from portion_tracker.services.ledger import PortionLedger


def create_app(ledger: PortionLedger | None = None) -> FastAPI:
    """Create a FastAPI app serving counters from an event ledger."""
    configure_logging()
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.ledger = ledger or PortionLedger()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(AdjustmentRejected)
    async def adjustment_rejected(
        request: Request, exc: AdjustmentRejected
    ) -> PlainTextResponse:
        logger.info("Rejected %s %s: %s", request.method, request.url.path, exc)
        return PlainTextResponse(
            f"Something went wrong: invalid request: {exc}",
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/days/{date}/portions")
    async def get_portions(date: str, request: Request) -> PortionsOfNutrients:
        """Return consumed portions for a day."""
        return request.app.state.ledger.portions_for(date)

    @app.get("/goals")
    async def get_goals(request: Request) -> PortionsOfNutrients:
        """Return daily goals."""
        return request.app.state.ledger.goals()

    @app.post("/days/{date}/portions/{nutrient}/consume")
    async def consume_portion(date: str, nutrient: str, request: Request) -> str:
        request.app.state.ledger.record_portion(date, nutrient, "consume")
        return "success"

    @app.post("/days/{date}/portions/{nutrient}/unconsume")
    async def unconsume_portion(date: str, nutrient: str, request: Request) -> str:
        request.app.state.ledger.record_portion(date, nutrient, "unconsume")
        return "success"

    @app.post("/goals/portions/{nutrient}/inc")
    async def inc_goal(nutrient: str, request: Request) -> str:
        request.app.state.ledger.record_goal(nutrient, "inc")
        return "success"

    @app.post("/goals/portions/{nutrient}/dec")
    async def dec_goal(nutrient: str, request: Request) -> str:
        request.app.state.ledger.record_goal(nutrient, "dec")
        return "success"

    return app
