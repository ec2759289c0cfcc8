from pydantic import BaseModel

from gamenight.games import Game


class GameCreate(BaseModel):
    name: str
    players: int
    # a list, or names separated by commas
    owners: list[str] | str | None = None


class OwnerChange(BaseModel):
    gamer_name: str


class GameList(BaseModel):
    items: list[Game]


class Created(BaseModel):
    success: bool = True
    id: int


class Success(BaseModel):
    success: bool = True


class Health(BaseModel):
    status: str
    timestamp: str
