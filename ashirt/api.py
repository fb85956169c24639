"""Talking to the ASHIRT API server and the release feed."""

from __future__ import annotations

import base64
import hashlib
import hmac
import logging
import string
import urllib.error
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from .dtos import CheckConnection, GithubRelease, Operation, Tag
from .http_status import HttpStatus
from .models import Evidence
from .multipart import MultipartParser
from .request_builder import RequestBuilder

log = logging.getLogger(__name__)

_GITHUB_API = "https://api.github.com"
_DAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
_BASE64_CHARS = frozenset(string.ascii_letters + string.digits + "+/")


class ApiError(Exception):
    """A request failed or the server answered with an unexpected status."""

    def __init__(self, status: int | None, message: str = "", body: bytes = b"") -> None:
        super().__init__(message or f"request failed with status {status}")
        self.status = status
        self.body = body


class TestResult(Enum):
    IN_PROGRESS = "in_progress"
    SUCCESS = "success"
    FAILURE = "failure"


def http_date(moment: datetime | None = None) -> str:
    """Format ``moment`` (default: now) as an HTTP date in GMT; naive times are UTC."""
    if moment is None:
        moment = datetime.now(timezone.utc)
    elif moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return (
        f"{_DAYS[moment.weekday()]}, {moment.day:02d} {_MONTHS[moment.month - 1]} "
        f"{moment.year:04d} {moment.hour:02d}:{moment.minute:02d}:{moment.second:02d} GMT"
    )


def _lenient_b64decode(text: str) -> bytes:
    cleaned = "".join(ch for ch in text if ch in _BASE64_CHARS)
    if len(cleaned) % 4 == 1:
        cleaned = cleaned[:-1]
    cleaned += "=" * (-len(cleaned) % 4)
    return base64.b64decode(cleaned)


def generate_hash(method: str, path: str, date: str, body: bytes = b"", secret_key: str = "") -> str:
    """Return the base64 HMAC-SHA256 signature the server expects for a request."""
    message = f"{method}\n{path}\n{date}\n".encode("latin-1", errors="replace")
    code = hmac.new(_lenient_b64decode(secret_key), digestmod=hashlib.sha256)
    code.update(message)
    code.update(hashlib.sha256(body).digest())
    return base64.b64encode(code.digest()).decode("ascii")


def add_ashirt_auth(
    builder: RequestBuilder, api_key: str, secret_key: str, moment: datetime | None = None
) -> RequestBuilder:
    """Add the Date and Authorization headers the server requires."""
    now = http_date(moment)
    builder.add_header("Date", now)
    code = generate_hash(builder.method.value, builder.endpoint, now, builder.body, secret_key)
    builder.add_header("Authorization", f"{api_key}:{code}")
    return builder


def evaluate_connection_test(status: int | None, body: bytes = b"") -> tuple[TestResult, str]:
    """Interpret a connection-check reply; ``status`` is None when no server answered."""
    if status is None:
        return TestResult.FAILURE, "Server not Found, Check the Url"
    if status == HttpStatus.OK:
        check = CheckConnection.parse_json(body)
        if check.parsed_correctly and check.ok:
            return TestResult.SUCCESS, "Successfully Connected"
        return TestResult.FAILURE, "Server Error Report to Admin"
    if status == HttpStatus.UNAUTHORIZED:
        return TestResult.FAILURE, "Authorization Failure, Check Api Keys"
    return TestResult.FAILURE, f"Code {status}"


def extract_response(status: int | None, body: bytes) -> bytes:
    """Return ``body`` for a 200 or 201 reply; raise ApiError otherwise."""
    if status in (HttpStatus.OK, HttpStatus.CREATED):
        return body
    raise ApiError(status, body=body)


def sort_operations(operations: list[Operation]) -> list[Operation]:
    """Return the operations ordered by name."""
    return sorted(operations, key=lambda op: op.name)


def _send(builder: RequestBuilder, opener: Any) -> bytes:
    try:
        status, body = builder.execute(opener)
    except (urllib.error.URLError, OSError) as exc:
        raise ApiError(None, f"unable to reach server: {exc}") from exc
    return extract_response(status, body)


def get_github_releases(owner: str, repo: str, opener: Any = None) -> list[GithubRelease]:
    """Fetch the recent releases of ``owner/repo``; empty when either is unset."""
    if not owner or not repo:
        log.info("Skipping release check: no owner or repo set.")
        return []
    builder = RequestBuilder.new_get(_GITHUB_API, f"/repos/{owner}/{repo}/releases")
    return GithubRelease.parse_data_as_list(_send(builder, opener))


class AshirtClient:
    """An authenticated connection to one ASHIRT API server."""

    def __init__(self, host: str, access_key: str, secret_key: str, opener: Any = None) -> None:
        self.host = host
        self.access_key = access_key
        self.secret_key = secret_key
        self.opener = opener

    def _signed(self, builder: RequestBuilder) -> bytes:
        add_ashirt_auth(builder, self.access_key, self.secret_key)
        return _send(builder, self.opener)

    def test_connection(self) -> tuple[TestResult, str]:
        """Check the host and keys; returns the result and a message for the user."""
        builder = RequestBuilder.new_get(self.host, "/api/checkconnection")
        add_ashirt_auth(builder, self.access_key, self.secret_key)
        try:
            status, body = builder.execute(self.opener)
        except (urllib.error.URLError, OSError):
            return evaluate_connection_test(None)
        return evaluate_connection_test(status, body)

    def get_all_operations(self) -> list[Operation]:
        """Return the operations visible to the user, ordered by name."""
        data = self._signed(RequestBuilder.new_get(self.host, "/api/operations"))
        return sort_operations(Operation.parse_data_as_list(data))

    def get_operation_tags(self, operation_slug: str) -> list[Tag]:
        endpoint = f"/api/operations/{operation_slug}/tags"
        return Tag.parse_data_as_list(self._signed(RequestBuilder.new_get(self.host, endpoint)))

    def create_tag(self, tag: Tag, operation_slug: str) -> Tag:
        endpoint = f"/api/operations/{operation_slug}/tags"
        builder = RequestBuilder.new_json_post(self.host, endpoint, tag.to_json())
        return Tag.parse_data(self._signed(builder))

    def create_operation(self, name: str, slug: str) -> Operation:
        body = Operation.create_operation_json(name, slug)
        builder = RequestBuilder.new_json_post(self.host, "/api/operations", body)
        return Operation.parse_data(self._signed(builder))

    def upload_evidence(self, evidence: Evidence) -> bytes:
        """Upload the evidence file and its metadata; returns the server's reply."""
        parser = MultipartParser()
        parser.add_parameter("notes", evidence.description)
        parser.add_parameter("contentType", evidence.content_type)
        parser.add_parameter("tagIds", evidence.tag_ids_field())
        parser.add_file("file", evidence.path)
        endpoint = f"/api/operations/{evidence.operation_slug}/evidence"
        builder = RequestBuilder.new_form_post(
            self.host, endpoint, parser.boundary, parser.generate_body()
        )
        return self._signed(builder)