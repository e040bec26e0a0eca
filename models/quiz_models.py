"""
Data Models for the Quiz Dashboard
==================================

Records coming back from the backend (quizzes, students, folders, bookmarks)
are passed through untouched as plain dicts. This module only defines the
request payloads the clients send and the statistics the dashboard derives.
All models are implemented as dataclasses.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

Record = Dict[str, Any]


def _drop_unset(payload: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in payload.items() if value is not None}


@dataclass
class ShareRequest:
    quiz_id: str
    # Either a list of e-mails or a comma-joined string, sent as given
    recipients: Union[List[str], str]
    message: Optional[str] = None
    expires_in_hours: Optional[int] = None

    def as_payload(self) -> Dict[str, Any]:
        return _drop_unset({
            "quizId": self.quiz_id,
            "recipients": self.recipients,
            "message": self.message,
            "expiresInHours": self.expires_in_hours,
        })


@dataclass
class FolderData:
    name: Optional[str] = None
    description: Optional[str] = None
    color: Optional[str] = None

    def as_payload(self) -> Dict[str, Any]:
        return _drop_unset({
            "name": self.name,
            "description": self.description,
            "color": self.color,
        })


@dataclass
class Credentials:
    email: str
    password: str
    name: Optional[str] = None

    def as_payload(self) -> Dict[str, Any]:
        return _drop_unset({
            "email": self.email,
            "password": self.password,
            "name": self.name,
        })


@dataclass
class DashboardStats:
    students: int = 0
    quizzes: int = 0
    bookmarks: int = 0
    total_questions: int = 0

    def as_cards(self) -> List[Dict[str, Any]]:
        return [
            {"title": "Total Students", "value": self.students,
             "description": "Uploaded student records"},
            {"title": "Quizzes Created", "value": self.quizzes,
             "description": "AI-generated quizzes"},
            {"title": "Bookmarked Questions", "value": self.bookmarks,
             "description": "Saved for later use"},
            {"title": "Total Questions", "value": self.total_questions,
             "description": "Questions generated"},
        ]
