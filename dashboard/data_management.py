"""
Data Management
===============

Fetches what the dashboard shows. The three list calls run in parallel and
the page only renders once all of them have settled.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional

import httpx

from analytics.metrics import calculate_dashboard_stats
from api.resources import ApiClients
from core.config import Settings
from models.quiz_models import DashboardStats, Record

logger = logging.getLogger(__name__)


@dataclass
class DashboardData:
    students: List[Record] = field(default_factory=list)
    quizzes: List[Record] = field(default_factory=list)
    bookmarks: List[Record] = field(default_factory=list)

    @property
    def stats(self) -> DashboardStats:
        return calculate_dashboard_stats(self.students, self.quizzes, self.bookmarks)


async def fetch_dashboard_data(clients: ApiClients) -> DashboardData:
    """
    Fetches students, quizzes and bookmarks concurrently.
    Waits for all three, then raises the first failure if there was one.
    """
    results = await asyncio.gather(
        clients.students.get_all(),
        clients.quizzes.get_all(),
        clients.bookmarks.get_all(),
        return_exceptions=True,
    )

    for result in results:
        if isinstance(result, BaseException):
            raise result

    students, quizzes, bookmarks = results
    logger.debug("dashboard fetch: %d students, %d quizzes, %d bookmarks",
                 len(students), len(quizzes), len(bookmarks))
    return DashboardData(students=students, quizzes=quizzes, bookmarks=bookmarks)


async def run_with_clients(settings: Settings, action,
                           transport: Optional[httpx.AsyncBaseTransport] = None) -> Any:
    clients = ApiClients.from_settings(settings, transport=transport)
    try:
        return await action(clients)
    finally:
        await clients.close()


def load_dashboard_data(settings: Settings,
                        transport: Optional[httpx.AsyncBaseTransport] = None) -> DashboardData:
    return asyncio.run(run_with_clients(settings, fetch_dashboard_data, transport))


def load_quiz_results(settings: Settings, quiz_id: str, live: bool = False,
                      transport: Optional[httpx.AsyncBaseTransport] = None) -> Any:
    return asyncio.run(run_with_clients(
        settings, lambda clients: clients.quizzes.get_results(quiz_id, live=live), transport))


def load_results_file(settings: Settings, quiz_id: str, detailed: bool = False,
                      transport: Optional[httpx.AsyncBaseTransport] = None) -> bytes:
    return asyncio.run(run_with_clients(
        settings, lambda clients: clients.quizzes.download_results(quiz_id, detailed=detailed),
        transport))
