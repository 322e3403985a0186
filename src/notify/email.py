"""Simulated e-mail notification for generated scripts.

No mail is sent: the message is written to the `notify` logger so that reviewers tailing the
service log see every new request. Delivery is best effort and never affects the response.
"""

from __future__ import annotations

import logging
from datetime import date

logger = logging.getLogger("notify")


def format_email(
        *,
        to: str,
        script: str,
        explanation: str,
        request: str,
        today: date | None = None,
) -> str:
    """Render the simulated message."""

    day = (today or date.today()).isoformat()
    return "\n".join(
        [
            "Simulated Email:",
            f"To: {to}",
            f"Subject: New SQL Request - {day}",
            "Body:",
            f"Request: {request}",
            f"Script: {script}",
            f"Explanation: {explanation}",
        ]
    )


class EmailNotifier:
    """Notification sink that logs a simulated e-mail per generated script."""

    def __init__(self, to: str, *, enabled: bool = True) -> None:
        self.to = to
        self.enabled = enabled

    def send(self, script: str, explanation: str, request: str) -> bool:
        """Emit the notification; return whether it was delivered."""

        if not self.enabled:
            return False

        # noinspection PyBroadException
        try:
            logger.info(
                "%s",
                format_email(to=self.to, script=script, explanation=explanation, request=request),
            )
        except Exception:
            logger.exception("notification failed to=%s", self.to)
            return False
        return True
