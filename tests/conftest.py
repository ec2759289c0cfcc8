import asyncio
import threading
from pathlib import Path
from typing import AsyncIterator

import pytest

from gamenight import games
from gamenight.common import Store


@pytest.fixture(autouse=True)
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def database_url(tmp_path: Path) -> str:
    return f"sqlite:///{tmp_path / 'games.db'}"


@pytest.fixture
async def store(database_url: str) -> AsyncIterator[Store]:
    store = Store(database_url)
    await store.connect()
    assert store.is_connected
    await store.create_schema()
    yield store
    await store.disconnect()
    assert not store.is_connected
    return


@pytest.fixture
async def catalog(store: Store) -> dict[str, int]:
    """
    Catan needs 3 and is owned by Alice and Bob, Chess needs 2 and is owned by
    Carol, Go needs 2 and nobody owns it.
    """
    return {
        "Catan": await games.create_game(store, "Catan", 3, ["Alice", "Bob"]),
        "Chess": await games.create_game(store, "Chess", 2, ["Carol"]),
        "Go": await games.create_game(store, "Go", 2, []),
    }


@pytest.fixture
async def settled_threads() -> AsyncIterator[None]:
    """
    Waits for driver threads started by the test to stop while the event loop
    is still running. A failed sqlite open hands its worker's shutdown back to
    the loop.
    """
    before = set(threading.enumerate())
    yield
    for _ in range(200):
        leftover = [
            thread
            for thread in threading.enumerate()
            if thread not in before and thread.is_alive()
        ]
        if not leftover:
            return
        await asyncio.sleep(0.01)
    assert leftover == []
