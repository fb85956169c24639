"""A small builder for HTTP requests."""

from __future__ import annotations

import urllib.error
import urllib.request
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class RequestMethod(Enum):
    GET = "GET"
    POST = "POST"


@dataclass
class RequestBuilder:
    """Holds the pieces of an HTTP request until it is built or sent."""

    method: RequestMethod = RequestMethod.GET
    host: str = ""
    endpoint: str = ""
    body: bytes = b""
    headers: list[tuple[str, str]] = field(default_factory=list)

    @classmethod
    def new_get(cls, host: str = "", endpoint: str = "") -> RequestBuilder:
        return cls(RequestMethod.GET, host, endpoint)

    @classmethod
    def new_form_post(
        cls, host: str, endpoint: str, boundary: str, body: bytes = b""
    ) -> RequestBuilder:
        builder = cls(RequestMethod.POST, host, endpoint, body)
        return builder.add_header("Content-Type", f"multipart/form-data; boundary={boundary}")

    @classmethod
    def new_json_post(cls, host: str, endpoint: str, body: bytes = b"") -> RequestBuilder:
        builder = cls(RequestMethod.POST, host, endpoint, body)
        return builder.add_header("Content-Type", "application/json")

    def add_header(self, name: str, value: str) -> RequestBuilder:
        """Append a header and return the builder for chaining."""
        self.headers.append((name, value))
        return self

    def url(self) -> str:
        """The host, with one trailing slash dropped, followed by the endpoint."""
        host = self.host[:-1] if self.host.endswith("/") else self.host
        return host + self.endpoint

    def build(self) -> urllib.request.Request:
        data = self.body if self.method is RequestMethod.POST else None
        request = urllib.request.Request(self.url(), data=data, method=self.method.value)
        for name, value in self.headers:
            request.add_header(name, value)
        return request

    def execute(self, opener: Any = None) -> tuple[int, bytes]:
        """Send the request and return ``(status, body)``.

        HTTP error statuses are returned like any other; failures to reach the
        server raise ``urllib.error.URLError``.
        """
        opener = opener if opener is not None else urllib.request.build_opener()
        request = self.build()
        try:
            with opener.open(request) as response:
                return response.status, response.read()
        except urllib.error.HTTPError as err:
            try:
                return err.code, err.read()
            finally:
                err.close()