from typing import Any, Sequence

import sqlalchemy
from sentry_sdk.tracing import trace

from gamenight.common import Store

from .schemas import Game
from .tables import game_owners, games


def _games_with_owners(rows: Sequence[Any]) -> list[Game]:
    """
    Folds (game, owner) rows into games. Rows must already be sorted by game
    so each game's rows are adjacent.
    """
    result: list[Game] = []
    for row in rows:
        if not result or result[-1].id != row["id"]:
            result.append(
                Game(
                    id=row["id"],
                    name=row["name"],
                    players=row["players"],
                    owners=[],
                )
            )
        if row["gamer_name"] is not None:
            result[-1].owners.append(row["gamer_name"])
    return result


def _select_games_with_owners() -> sqlalchemy.Select[Any]:
    return (
        sqlalchemy.select(
            games.c.id,
            games.c.name,
            games.c.players,
            game_owners.c.gamer_name,
        )
        .select_from(
            games.outerjoin(game_owners, games.c.id == game_owners.c.game_id)
        )
        .order_by(games.c.name, games.c.id, game_owners.c.id)
    )


@trace
async def list_games(store: Store) -> list[Game]:
    rows = await store.fetch_all(query=_select_games_with_owners())
    return _games_with_owners(rows)


@trace
async def list_games_for_group(store: Store, names: list[str]) -> list[Game]:
    """
    Games that at least one of `names` owns and that don't need more players
    than there are names.
    """
    owned_by_group = sqlalchemy.select(game_owners.c.game_id).where(
        game_owners.c.gamer_name.in_(names)
    )
    query = (
        _select_games_with_owners()
        .where(games.c.players <= len(names))
        .where(games.c.id.in_(owned_by_group))
    )
    rows = await store.fetch_all(query=query)
    return _games_with_owners(rows)


@trace
async def game_exists(store: Store, game_id: int) -> bool:
    found = await store.fetch_val(
        query=sqlalchemy.select(games.c.id).where(games.c.id == game_id)
    )
    return found is not None


@trace
async def insert_game(store: Store, name: str, players: int) -> int:
    game_id: int = await store.execute(
        query=games.insert().values(name=name, players=players)
    )
    return game_id


@trace
async def insert_owner(store: Store, game_id: int, gamer_name: str) -> int:
    owner_id: int = await store.execute(
        query=game_owners.insert().values(game_id=game_id, gamer_name=gamer_name)
    )
    return owner_id


@trace
async def insert_owner_if_game_exists(
    store: Store, game_id: int, gamer_name: str
) -> int | None:
    """
    Adds the owner in one statement that only inserts while the game row
    exists.
    Returns None if the game doesn't exist.
    """
    inserted = await store.fetch_all(
        query=game_owners.insert()
        .from_select(
            ["game_id", "gamer_name"],
            sqlalchemy.select(
                games.c.id, sqlalchemy.literal(gamer_name, sqlalchemy.String)
            ).where(games.c.id == game_id),
        )
        .returning(game_owners.c.id)
    )
    if not inserted:
        return None
    return int(inserted[0]["id"])


@trace
async def owner_exists(store: Store, game_id: int, gamer_name: str) -> bool:
    found = await store.fetch_val(
        query=sqlalchemy.select(game_owners.c.id).where(
            (game_owners.c.game_id == game_id)
            & (game_owners.c.gamer_name == gamer_name)
        )
    )
    return found is not None


# Deletes use RETURNING so we can count what was removed on every backend.


@trace
async def delete_owners_for_game(store: Store, game_id: int) -> int:
    deleted = await store.fetch_all(
        query=game_owners.delete()
        .where(game_owners.c.game_id == game_id)
        .returning(game_owners.c.id)
    )
    return len(deleted)


@trace
async def delete_game(store: Store, game_id: int) -> int:
    deleted = await store.fetch_all(
        query=games.delete().where(games.c.id == game_id).returning(games.c.id)
    )
    return len(deleted)


@trace
async def delete_owner(store: Store, game_id: int, gamer_name: str) -> int:
    deleted = await store.fetch_all(
        query=game_owners.delete()
        .where(
            (game_owners.c.game_id == game_id)
            & (game_owners.c.gamer_name == gamer_name)
        )
        .returning(game_owners.c.id)
    )
    return len(deleted)


