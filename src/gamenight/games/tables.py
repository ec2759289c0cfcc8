import sqlalchemy

from gamenight.common.tables import id_type, metadata

games = sqlalchemy.Table(
    "games",
    metadata,
    sqlalchemy.Column("id", id_type, primary_key=True, autoincrement=True),
    sqlalchemy.Column("name", sqlalchemy.String, nullable=False),
    sqlalchemy.Column("players", sqlalchemy.Integer, nullable=False),
    sqlalchemy.CheckConstraint("players > 0", name="games_players_positive"),
    sqlite_autoincrement=True,
)

game_owners = sqlalchemy.Table(
    "game_owners",
    metadata,
    sqlalchemy.Column("id", id_type, primary_key=True, autoincrement=True),
    sqlalchemy.Column(
        "game_id",
        id_type,
        sqlalchemy.ForeignKey("games.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
    sqlalchemy.Column("gamer_name", sqlalchemy.String, nullable=False, index=True),
    sqlalchemy.UniqueConstraint("game_id", "gamer_name"),
    sqlite_autoincrement=True,
)
