"""
Envelope Normalization
======================

The backend does not answer list requests with one consistent shape: some
deployments send a bare array, some ``{"<resource>": [...]}`` and some
``{"data": [...]}``. These helpers turn any of them into a plain list.
"""

import logging
from collections.abc import Mapping
from typing import Any, List

logger = logging.getLogger(__name__)


def normalize_list(body: Any, resource: str) -> List[Any]:
    """
    Returns the records held by a list response, checked in this order:
    1. the body itself is a list
    2. ``body[resource]`` is a list
    3. ``body["data"]`` is a list
    Anything else yields an empty list.
    """
    if isinstance(body, list):
        return body

    if isinstance(body, Mapping):
        named = body.get(resource)
        if isinstance(named, list):
            return named

        data = body.get("data")
        if isinstance(data, list):
            return data

    logger.debug("No %s list found in response of type %s", resource, type(body).__name__)
    return []


def unwrap_single(body: Any, field: str) -> Any:
    """``body[field]`` when the backend wrapped the record, else the body as-is."""
    if isinstance(body, Mapping) and body.get(field) is not None:
        return body[field]
    return body
