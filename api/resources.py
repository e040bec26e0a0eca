"""
Resource Clients
================

One client per backend resource (quizzes, students, folders, bookmarks,
auth). Every client shares the same ``TransportClient`` and keeps no state
of its own: each call is a single request/response round trip.

List operations (``get_all``) always return a list, whatever envelope the
backend used. Other operations return the response body as sent.
"""

import logging
from typing import Any, List, Optional, Sequence
from urllib.parse import quote

import httpx

from api.normalize import normalize_list, unwrap_single
from api.transport import TransportClient, TransportConfig, TransportError
from core.config import Settings
from models.quiz_models import Record

logger = logging.getLogger(__name__)


def as_payload(data: Any) -> Any:
    """Dataclass payloads are serialized, anything else is sent unchanged."""
    if hasattr(data, "as_payload"):
        return data.as_payload()
    return data


def resource_path(prefix: str, resource_id: str, suffix: str = "") -> str:
    if not isinstance(resource_id, str) or not resource_id:
        raise ValueError("resource id must be a non-empty string")
    return f"{prefix}/{quote(resource_id, safe='')}{suffix}"


class ResourceClient:
    def __init__(self, transport: TransportClient):
        self.transport = transport


class QuizClient(ResourceClient):
    async def get_all(self) -> List[Record]:
        res = await self.transport.get("/quiz/all")
        return normalize_list(res.body, "quizzes")

    async def save(self, quiz: Any) -> Any:
        res = await self.transport.post("/quiz/save", json=as_payload(quiz))
        return res.body

    async def update(self, quiz_id: str, quiz: Any) -> Any:
        res = await self.transport.put(resource_path("/quiz", quiz_id), json=as_payload(quiz))
        return res.body

    async def delete(self, quiz_id: str) -> Any:
        res = await self.transport.delete(resource_path("/quiz", quiz_id))
        return res.body

    async def share(self, share: Any) -> Any:
        res = await self.transport.post("/quiz/share", json=as_payload(share))
        return res.body

    async def get_results(self, quiz_id: str, live: bool = False) -> Any:
        """Finalized results, or on-the-fly scoring including attempts in progress when ``live``."""
        params = {"live": "true"} if live else None
        res = await self.transport.get(resource_path("/quiz", quiz_id, "/results"), params=params)
        return res.body

    async def get_all_with_stats(self) -> Any:
        res = await self.transport.get("/quiz/results/all")
        return res.body if res.body not in (None, "") else []

    async def download_results(self, quiz_id: str, detailed: bool = False) -> bytes:
        """Raw results file as sent by the backend, for the caller to persist."""
        params = {"detailed": "true"} if detailed else None
        res = await self.transport.get(resource_path("/quiz", quiz_id, "/results/download"),
                                       params=params, binary=True)
        return res.body


class StudentClient(ResourceClient):
    async def get_all(self) -> List[Record]:
        res = await self.transport.get("/students/all")
        return normalize_list(res.body, "students")

    async def upload(self, students: Sequence[Any]) -> Any:
        res = await self.transport.post("/students/upload", json={"students": list(students)})
        return res.body

    async def delete(self, student_id: str) -> Any:
        res = await self.transport.delete(resource_path("/students", student_id))
        return res.body


class FolderClient(ResourceClient):
    async def get_all(self) -> List[Record]:
        res = await self.transport.get("/folders")
        return normalize_list(res.body, "folders")

    async def create(self, folder: Any) -> Any:
        res = await self.transport.post("/folders", json=as_payload(folder))
        return unwrap_single(res.body, "folder")

    async def update(self, folder_id: str, folder: Any) -> Any:
        res = await self.transport.put(resource_path("/folders", folder_id), json=as_payload(folder))
        return unwrap_single(res.body, "folder")

    async def delete(self, folder_id: str) -> Any:
        res = await self.transport.delete(resource_path("/folders", folder_id))
        return res.body


class BookmarkClient(ResourceClient):
    async def get_all(self) -> List[Record]:
        """Bookmarks are optional on the dashboard: a failed fetch yields no bookmarks."""
        try:
            res = await self.transport.get("/bookmarks")
        except TransportError as e:
            logger.error("Get bookmarks error (returning empty list): %s", e)
            return []
        return normalize_list(res.body, "bookmarks")

    async def create(self, bookmark: Any) -> Any:
        res = await self.transport.post("/bookmarks", json=as_payload(bookmark))
        return unwrap_single(res.body, "bookmark")

    async def delete(self, bookmark_id: str) -> Any:
        res = await self.transport.delete(resource_path("/bookmarks", bookmark_id))
        return res.body


class AuthClient(ResourceClient):
    # The session cookie set by login is kept by the shared transport

    async def register(self, credentials: Any) -> Any:
        res = await self.transport.post("/auth/register", json=as_payload(credentials))
        return res.body

    async def login(self, credentials: Any) -> Any:
        res = await self.transport.post("/auth/login", json=as_payload(credentials))
        return res.body

    async def me(self) -> Any:
        res = await self.transport.get("/auth/me")
        return res.body

    async def logout(self) -> Any:
        res = await self.transport.post("/auth/logout")
        return res.body


class ApiClients:
    """Every resource client, built over one shared transport."""

    def __init__(self, transport: TransportClient):
        self.transport = transport
        self.quizzes = QuizClient(transport)
        self.students = StudentClient(transport)
        self.folders = FolderClient(transport)
        self.bookmarks = BookmarkClient(transport)
        self.auth = AuthClient(transport)

    @classmethod
    def from_settings(cls, settings: Settings,
                      transport: Optional[httpx.AsyncBaseTransport] = None) -> "ApiClients":
        config = TransportConfig.from_settings(settings)
        return cls(TransportClient(config, transport=transport))

    async def close(self):
        await self.transport.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.close()
