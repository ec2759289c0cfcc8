from . import tables
from .schemas import Game
from .service import (
    add_owner,
    clean_names,
    create_game,
    delete_game,
    list_all,
    list_playable,
    remove_owner,
)

__all__ = [
    "tables",
    "Game",
    "add_owner",
    "clean_names",
    "create_game",
    "delete_game",
    "list_all",
    "list_playable",
    "remove_owner",
]
