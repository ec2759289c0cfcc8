import asyncio
import logging
import sys

from gamenight import config
from gamenight.common import Store, StoreError


async def async_main(database_url: str) -> bool:
    store = Store(database_url)
    try:
        await store.connect()
        logging.info("Connected to %s.", store.database.url.obscure_password)
        message = await store.fetch_val(query="SELECT 'It works!' AS message")
        logging.info("Query result: %s", message)
        return True
    except StoreError as e:
        logging.error("Connection failed: %s", e.message, exc_info=e.cause)
        return False
    finally:
        if store.is_connected:
            await store.disconnect()
            logging.info("Connection closed.")


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    ok = asyncio.run(async_main(config.database_url()))
    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
