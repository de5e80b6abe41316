# examples/chat_bot.py
from __future__ import annotations

import sys

import anyio

from batepapo.client import ChatClient
from batepapo.shared._httpx_utils import create_batepapo_http_client


async def main(base_url: str, name: str) -> None:
    async with create_batepapo_http_client(base_url) as http:
        bot = ChatClient(http, name)
        await bot.join()
        async with anyio.create_task_group() as tg:
            # stay present while greeting whoever arrives
            tg.start_soon(bot.keep_alive)
            greeted: set[str] = {name}
            while True:
                for p in await bot.participants():
                    if p.name not in greeted:
                        await bot.whisper(p.name, f"Welcome, {p.name}!")
                        greeted.add(p.name)
                await anyio.sleep(3)


if __name__ == "__main__":
    url = sys.argv[1] if len(sys.argv) > 1 else "http://127.0.0.1:5000"
    anyio.run(main, url, "greeter")
