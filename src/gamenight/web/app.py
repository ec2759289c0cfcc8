import datetime
import logging
from typing import Any, Callable

import sentry_sdk
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from gamenight import config, games
from gamenight.common import GameNightError, Store, StoreError, ValidationError

from .schemas import Created, GameCreate, GameList, Health, OwnerChange, Success

logger = logging.getLogger(__name__)

STATUS_CODES = {
    "invalid_input": status.HTTP_400_BAD_REQUEST,
    "conflict": status.HTTP_409_CONFLICT,
    "not_found": status.HTTP_404_NOT_FOUND,
    "internal": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


async def handle_error(request: Request, exc: GameNightError) -> JSONResponse:
    if isinstance(exc, StoreError):
        logger.error(
            "%s %s failed: %s", request.method, request.url.path, exc.message,
            exc_info=exc.cause,
        )
        message = "Something went wrong!"
    else:
        message = exc.message
    return JSONResponse(
        status_code=STATUS_CODES[exc.category],
        content={"error": message},
    )


def traces_sampler(rate: float) -> Callable[[dict[str, Any]], float]:
    """
    Health checks are never sampled. A trace started upstream keeps the
    caller's decision, anything else is sampled at `rate`.
    """

    def sample(ctx: dict[str, Any]) -> float:
        path = ctx.get("asgi_scope", {}).get("path") or ""
        if path.startswith("/api/health"):
            return 0.0
        parent_sampled = ctx.get("parent_sampled")
        if parent_sampled is not None:
            return 1.0 if parent_sampled else 0.0
        return rate

    return sample


def build_app(store: Store, cors_origins: list[str] | None = None) -> FastAPI:
    app = FastAPI()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins if cors_origins is not None else ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(GameNightError, handle_error)

    @app.get("/api/health")
    async def check_health() -> Health:
        return Health(
            status="OK",
            timestamp=datetime.datetime.now(datetime.timezone.utc).isoformat(),
        )

    @app.get("/api/games/all")
    async def list_games() -> GameList:
        return GameList(items=await games.list_all(store))

    @app.get("/api/games/playable")
    async def list_playable_games(players: str | None = None) -> GameList:
        if not players:
            raise ValidationError("Players parameter is required.")
        return GameList(items=await games.list_playable(store, players))

    @app.post("/api/games/all")
    async def create_game(new_game: GameCreate) -> Created:
        game_id = await games.create_game(
            store, new_game.name, new_game.players, new_game.owners
        )
        return Created(id=game_id)

    @app.delete("/api/games/game/{game_id}")
    async def delete_game(game_id: int) -> Success:
        await games.delete_game(store, game_id)
        return Success()

    @app.post("/api/games/game/{game_id}/gamers")
    async def add_gamer(game_id: int, change: OwnerChange) -> Created:
        owner_id = await games.add_owner(store, game_id, change.gamer_name)
        return Created(id=owner_id)

    @app.delete("/api/games/game/{game_id}/gamers")
    async def remove_gamer(game_id: int, change: OwnerChange) -> Success:
        await games.remove_owner(store, game_id, change.gamer_name)
        return Success()

    return app


def create_app() -> FastAPI:
    """
    App for serving, configured from the environment.
    Run with `uvicorn --factory gamenight.web.app:create_app`.
    """
    logging.basicConfig(level=logging.INFO)
    store = Store(config.database_url())
    app = build_app(store, config.cors_origins())

    @app.on_event("startup")
    async def startup() -> None:
        await store.connect()
        await store.create_schema()
        sentry = config.sentry_options()
        if sentry is not None:
            sentry_sdk.init(
                dsn=sentry["dsn"],
                environment=sentry["environment"],
                profiles_sample_rate=1.0,
                traces_sampler=traces_sampler(sentry["traces_sample_rate"]),
            )
            logger.info("Sentry enabled for %s.", sentry["environment"])
        logger.info("Connected to %s.", store.database.url.obscure_password)

    @app.on_event("shutdown")
    async def shutdown() -> None:
        await store.disconnect()
        logger.info("Store disconnected.")

    return app
