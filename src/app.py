"""Application composition root.

This module wires together configuration, the template library, and the side-effect sinks
(audit log, notifications) shared by the HTTP and bot surfaces.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from src.config.settings import Settings
from src.db.audit import AuditLog, LogEntry
from src.db.pool import create_pool
from src.intent.schema import GenerationResult
from src.notify.email import EmailNotifier
from src.pipeline import generate_script
from src.sql.library import TemplateLibrary

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class App:
    """Shared application dependencies for request handlers."""

    settings: Settings
    library: TemplateLibrary
    audit: AuditLog
    notifier: EmailNotifier

    async def open(self) -> None:
        await self.audit.open()

    async def close(self) -> None:
        await self.audit.close()

    async def generate(self, request: str, *, user: str | None = None) -> GenerationResult:
        """Run the pipeline for one request, then notify and schedule the audit write.

        The audit write runs in the background, so a slow or unreachable database never delays
        the result.

        Raises:
            TemplateLibraryError: If the template library cannot be read.
        """

        templates = await asyncio.to_thread(self.library.templates)
        result = generate_script(
            request,
            templates,
            word_boundaries=self.settings.strict_keywords,
        )

        self.notifier.send(result.script, result.explanation, request)
        self.audit.submit(
            LogEntry.now(user=user or self.settings.audit_user, request=request, script=result.script)
        )
        return result


def create_app(settings: Settings) -> App:
    """Create the application container.

    Note:
        The audit DB pool (if `DATABASE_URL` is set) is not opened. Call `await app.open()` at
        startup; it connects in the background.
    """

    pool = create_pool(settings.database_url, max_size=5) if settings.database_url else None
    if pool is None:
        logger.info("DATABASE_URL not set; audit log disabled")

    return App(
        settings=settings,
        library=TemplateLibrary(settings.library_dir, cache=settings.library_cache),
        audit=AuditLog(pool),
        notifier=EmailNotifier(settings.notify_email_to, enabled=settings.notify_enabled),
    )
