"""HTTP verbs and the client interface used to talk to the Graph API."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from enum import Enum
from typing import Any
from urllib.parse import urlencode

JsonClassFactory = Callable[[str], Any]
"""Builds an object from the JSON text of a response."""


class HttpMethod(Enum):
    GET = "GET"
    POST = "POST"
    DELETE = "DELETE"


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class HttpClient(ABC):
    """A client that sends requests and returns the response body as text.

    Subclasses implement :meth:`send`; the verb helpers delegate to it.
    """

    @abstractmethod
    def send(
        self, method: HttpMethod, path: str, parameters: Mapping[str, Any]
    ) -> str:
        """Send a request and return the response body."""

    def get(self, path: str, parameters: Mapping[str, Any]) -> str:
        return self.send(HttpMethod.GET, path, parameters)

    def post(self, path: str, parameters: Mapping[str, Any]) -> str:
        return self.send(HttpMethod.POST, path, parameters)

    def delete(self, path: str, parameters: Mapping[str, Any]) -> str:
        return self.send(HttpMethod.DELETE, path, parameters)

    def parameters_to_query_string(self, parameters: Mapping[str, Any]) -> str:
        """Encode parameters as a URL query string, skipping ``None`` values."""
        return urlencode(
            [
                (key, _format_value(value))
                for key, value in parameters.items()
                if value is not None
            ]
        )