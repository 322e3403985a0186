"""Telegram front-end entrypoint.

Every message (text, caption, or anything else) is routed to a single handler so that each one
gets exactly one reply.
"""

from __future__ import annotations

import asyncio
import logging

from aiogram import Bot, Dispatcher, Router
from aiogram.client.default import DefaultBotProperties

from src.app import create_app
from src.bot.handlers import handle_message
from src.config.logging import configure_logging
from src.config.settings import load_settings

logger = logging.getLogger(__name__)


def build_router() -> Router:
    router = Router(name="generator")
    router.message.register(handle_message)
    return router


async def main() -> None:
    """Run the bot polling loop with the shared application container."""

    settings = load_settings()
    configure_logging()
    if not settings.telegram_bot_token:
        raise RuntimeError("TELEGRAM_BOT_TOKEN is required to run the bot")

    app = create_app(settings)
    await app.open()

    bot = Bot(token=settings.telegram_bot_token, default=DefaultBotProperties(parse_mode=None))
    dp = Dispatcher()
    dp.include_router(build_router())

    try:
        await dp.start_polling(bot, app=app)
    finally:
        logger.info("shutting down")
        await app.close()
        await bot.session.close()


if __name__ == "__main__":
    asyncio.run(main())
