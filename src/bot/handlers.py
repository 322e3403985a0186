"""aiogram message handlers.

Hard contract: every incoming message produces exactly one reply. Text messages get the generated
script and explanation; empty messages and commands get a prompt; internal errors get a generic
failure line and are logged internally.
"""

from __future__ import annotations

import logging
from time import monotonic

from aiogram.types import Message

from src.app import App

logger = logging.getLogger(__name__)

EMPTY_REPLY = "Please enter a request."
FAILURE_REPLY = "Error generating script. Try again later."


def _is_command_text(text: str) -> bool:
    return text.lstrip().startswith("/")


def format_reply(script: str, explanation: str) -> str:
    return f"Script: {script}\nExplanation: {explanation}"


def _username(message: Message) -> str | None:
    user = getattr(message, "from_user", None)
    if user is None:
        return None
    return getattr(user, "username", None) or None


async def handle_message(message: Message, app: App) -> None:
    """Handle any incoming Telegram message and reply exactly once."""

    started = monotonic()
    reply = FAILURE_REPLY

    # noinspection PyBroadException
    try:
        raw_text = (message.text or message.caption or "")
        if not raw_text.strip() or _is_command_text(raw_text):
            await message.answer(EMPTY_REPLY)
            return

        result = await app.generate(raw_text, user=_username(message))
        reply = format_reply(result.script, result.explanation)

        latency_ms = int((monotonic() - started) * 1000)
        logger.info("handled matched=%s latency_ms=%d", result.matched, latency_ms)
    except Exception:
        # Handler boundary: internal errors must not leak details to the chat.
        logger.exception("handler failed")

    await message.answer(reply)
