from pydantic import BaseModel


class Game(BaseModel):
    id: int
    name: str
    players: int
    owners: list[str]
    # only set when the game was matched against a group
    owners_in_group: list[str] | None = None
