import logging
from typing import Iterable

from gamenight.common import (
    ConflictError,
    ConstraintViolation,
    NotFound,
    Store,
    ValidationError,
)

from . import repo
from .schemas import Game

logger = logging.getLogger(__name__)


def clean_names(names: Iterable[str] | str | None) -> list[str]:
    """
    Trims names, drops blanks and duplicates, keeps the first-seen order.
    A single string is treated as a comma separated list of names.
    Matching stays case-sensitive.
    """
    if names is None:
        return []
    if isinstance(names, str):
        names = names.split(",")
    cleaned: list[str] = []
    for name in names:
        if not isinstance(name, str):
            raise ValidationError("Names must be strings.")
        name = name.strip()
        if name and name not in cleaned:
            cleaned.append(name)
    return cleaned


def _clean_name(name: str | None, what: str) -> str:
    if not isinstance(name, str) or not name.strip():
        raise ValidationError(f"{what} is required.")
    return name.strip()


def _check_players(players: int) -> int:
    # bool is an int, but not a party size
    if isinstance(players, bool) or not isinstance(players, int) or players < 1:
        raise ValidationError("Players must be a positive integer.")
    return players


async def list_all(store: Store) -> list[Game]:
    return await repo.list_games(store)


async def list_playable(
    store: Store, candidate_names: Iterable[str] | str
) -> list[Game]:
    group = clean_names(candidate_names)
    if not group:
        raise ValidationError("At least one player name is required.")

    games = await repo.list_games_for_group(store, group)
    members = set(group)
    for game in games:
        game.owners_in_group = [owner for owner in game.owners if owner in members]
    return games


async def create_game(
    store: Store,
    name: str,
    players: int,
    owner_names: Iterable[str] | str | None = None,
) -> int:
    """
    Creates a game and its initial owners in one transaction.
    If any owner can't be added the game isn't created either.
    """
    name = _clean_name(name, "Game name")
    players = _check_players(players)
    owners = clean_names(owner_names)

    try:
        async with store.transaction():
            game_id = await repo.insert_game(store, name, players)
            for owner in owners:
                await repo.insert_owner(store, game_id, owner)
    except ConstraintViolation as e:
        logger.warning("Rolled back create of game %r: %s", name, e.cause)
        raise ConflictError("Game has a duplicate owner.") from e
    except Exception:
        logger.warning("Rolled back create of game %r.", name)
        raise

    logger.info("Created game %s %r with %d owners.", game_id, name, len(owners))
    return game_id


async def delete_game(store: Store, game_id: int) -> None:
    async with store.transaction():
        # explicit so we don't depend on the store enforcing the cascade
        removed_owners = await repo.delete_owners_for_game(store, game_id)
        deleted = await repo.delete_game(store, game_id)
        if deleted == 0:
            raise NotFound("Game not found.")
    logger.info("Deleted game %s and %d owners.", game_id, removed_owners)


async def add_owner(store: Store, game_id: int, gamer_name: str) -> int:
    gamer_name = _clean_name(gamer_name, "Gamer name")

    if await repo.owner_exists(store, game_id, gamer_name):
        raise ConflictError(f"{gamer_name} already owns this game.")

    try:
        owner_id = await repo.insert_owner_if_game_exists(store, game_id, gamer_name)
    except ConstraintViolation as e:
        # the game went away underneath us, or another add of this owner won
        if not await repo.game_exists(store, game_id):
            raise NotFound("Game not found.") from e
        raise ConflictError(f"{gamer_name} already owns this game.") from e
    if owner_id is None:
        raise NotFound("Game not found.")

    logger.info("Added owner %r to game %s.", gamer_name, game_id)
    return owner_id


async def remove_owner(store: Store, game_id: int, gamer_name: str) -> None:
    gamer_name = _clean_name(gamer_name, "Gamer name")

    deleted = await repo.delete_owner(store, game_id, gamer_name)
    if deleted == 0:
        raise NotFound("Gamer not found for this game.")
    logger.info("Removed owner %r from game %s.", gamer_name, game_id)
