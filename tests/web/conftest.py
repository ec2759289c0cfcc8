from typing import AsyncIterator

import pytest
from httpx import ASGITransport, AsyncClient

from gamenight.common import Store
from gamenight.web.app import build_app


@pytest.fixture
async def api(store: Store) -> AsyncIterator[AsyncClient]:
    app = build_app(store)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as api:
        yield api
    return
