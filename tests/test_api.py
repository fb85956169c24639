import base64
import io
import json
import urllib.error
from datetime import datetime, timedelta, timezone

import pytest

from ashirt.api import (
    ApiError,
    AshirtClient,
    TestResult,
    add_ashirt_auth,
    evaluate_connection_test,
    extract_response,
    generate_hash,
    get_github_releases,
    http_date,
    sort_operations,
)
from ashirt.dtos import Operation, Tag
from ashirt.models import Evidence
from ashirt.models import Tag as ModelTag
from ashirt.request_builder import RequestBuilder


class FakeResponse:
    def __init__(self, status, body):
        self.status = status
        self._body = body

    def read(self):
        return self._body

    def close(self):
        pass

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


class FakeOpener:
    def __init__(self, status=200, body=b"", error=None):
        self.status = status
        self.body = body
        self.error = error
        self.requests = []

    def open(self, request):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return FakeResponse(self.status, self.body)


MOMENT = datetime(2006, 1, 2, 15, 4, 5, tzinfo=timezone.utc)


def make_client(opener):
    return AshirtClient("http://ashirt.example.com/", "placeholder", "secret", opener)


def test_http_date_format():
    assert http_date(MOMENT) == "Mon, 02 Jan 2006 15:04:05 GMT"


def test_http_date_naive_is_utc_and_aware_is_converted():
    shifted = MOMENT.astimezone(timezone(timedelta(hours=5)))
    assert http_date(MOMENT.replace(tzinfo=None)) == http_date(MOMENT)
    assert http_date(shifted) == http_date(MOMENT)


def test_generate_hash_is_sha256_sized_and_deterministic():
    first = generate_hash("GET", "/api/x", "date", b"", "secret")
    assert first == generate_hash("GET", "/api/x", "date", b"", "secret")
    assert len(base64.b64decode(first)) == 32


@pytest.mark.parametrize(
    "changed",
    [
        ("POST", "/api/x", "date", b"", "secret"),
        ("GET", "/api/y", "date", b"", "secret"),
        ("GET", "/api/x", "other", b"", "secret"),
        ("GET", "/api/x", "date", b"body", "secret"),
        ("GET", "/api/x", "date", b"", "token"),
    ],
)
def test_generate_hash_depends_on_every_input(changed):
    base = generate_hash("GET", "/api/x", "date", b"", "secret")
    assert generate_hash(*changed) != base


def test_add_ashirt_auth_headers():
    builder = RequestBuilder.new_json_post("http://h.example.com", "/api/ops", b"{}")
    add_ashirt_auth(builder, "placeholder", "secret", MOMENT)
    headers = dict(builder.headers)
    assert headers["Date"] == http_date(MOMENT)
    expected = generate_hash("POST", "/api/ops", http_date(MOMENT), b"{}", "secret")
    assert headers["Authorization"] == f"placeholder:{expected}"


@pytest.mark.parametrize(
    "status, body, result, message",
    [
        (None, b"", TestResult.FAILURE, "Server not Found, Check the Url"),
        (200, b'{"ok": true}', TestResult.SUCCESS, "Successfully Connected"),
        (200, b'{"ok": false}', TestResult.FAILURE, "Server Error Report to Admin"),
        (200, b"not json", TestResult.FAILURE, "Server Error Report to Admin"),
        (401, b"", TestResult.FAILURE, "Authorization Failure, Check Api Keys"),
        (503, b"", TestResult.FAILURE, "Code 503"),
    ],
)
def test_evaluate_connection_test(status, body, result, message):
    assert evaluate_connection_test(status, body) == (result, message)


@pytest.mark.parametrize("status", [200, 201])
def test_extract_response_accepts_success(status):
    assert extract_response(status, b"data") == b"data"


@pytest.mark.parametrize("status", [None, 204, 404, 500])
def test_extract_response_rejects_others(status):
    with pytest.raises(ApiError) as info:
        extract_response(status, b"err")
    assert info.value.status == status
    assert info.value.body == b"err"


def test_sort_operations_by_name():
    ops = [Operation(name="b"), Operation(name="a"), Operation(name="c")]
    assert [op.name for op in sort_operations(ops)] == ["a", "b", "c"]


def test_get_all_operations_sorted_and_signed():
    body = json.dumps([{"name": "zeta", "slug": "z"}, {"name": "alpha", "slug": "a"}]).encode()
    opener = FakeOpener(200, body)
    ops = make_client(opener).get_all_operations()
    assert [op.slug for op in ops] == ["a", "z"]
    request = opener.requests[0]
    assert request.full_url == "http://ashirt.example.com/api/operations"
    assert request.get_header("Authorization").startswith("placeholder:")
    assert request.get_header("Date").endswith(" GMT")


def test_get_all_operations_error_status_raises():
    with pytest.raises(ApiError) as info:
        make_client(FakeOpener(500, b"")).get_all_operations()
    assert info.value.status == 500


def test_network_failure_raises_api_error():
    opener = FakeOpener(error=urllib.error.URLError("refused"))
    with pytest.raises(ApiError) as info:
        make_client(opener).get_operation_tags("op")
    assert info.value.status is None


def test_test_connection_unreachable():
    opener = FakeOpener(error=urllib.error.URLError("refused"))
    assert make_client(opener).test_connection() == (
        TestResult.FAILURE,
        "Server not Found, Check the Url",
    )


def test_test_connection_unauthorized():
    error = urllib.error.HTTPError("u", 401, "no", None, io.BytesIO(b""))
    result, message = make_client(FakeOpener(error=error)).test_connection()
    assert result is TestResult.FAILURE
    assert message == "Authorization Failure, Check Api Keys"


def test_test_connection_success_url():
    opener = FakeOpener(200, b'{"ok": true}')
    assert make_client(opener).test_connection()[0] is TestResult.SUCCESS
    assert opener.requests[0].full_url == "http://ashirt.example.com/api/checkconnection"


def test_create_tag_posts_json_and_parses_reply():
    opener = FakeOpener(201, b'{"id": 7, "name": "web", "colorName": "blue"}')
    created = make_client(opener).create_tag(Tag(name="web", color_name="blue"), "op1")
    assert created == Tag(name="web", color_name="blue", id=7)
    request = opener.requests[0]
    assert request.full_url == "http://ashirt.example.com/api/operations/op1/tags"
    assert json.loads(request.data) == {"colorName": "blue", "name": "web"}


def test_create_operation_round_trip():
    opener = FakeOpener(201, b'{"name": "Op", "slug": "op"}')
    created = make_client(opener).create_operation("Op", "op")
    assert (created.name, created.slug) == ("Op", "op")
    assert json.loads(opener.requests[0].data) == {"slug": "op", "name": "Op"}


def test_upload_evidence_builds_multipart(tmp_path):
    path = tmp_path / "shot.png"
    path.write_bytes(b"PNGDATA")
    evidence = Evidence(
        path=str(path),
        operation_slug="op",
        description="desc",
        content_type="image",
        tags=[ModelTag(server_tag_id=1), ModelTag(server_tag_id=2)],
    )
    opener = FakeOpener(201, b"ok")
    assert make_client(opener).upload_evidence(evidence) == b"ok"
    request = opener.requests[0]
    assert request.full_url == "http://ashirt.example.com/api/operations/op/evidence"
    assert request.get_header("Content-type").startswith("multipart/form-data; boundary=")
    assert b"[1,2]" in request.data
    assert b"PNGDATA" in request.data
    assert b"desc" in request.data


def test_get_github_releases_skips_without_owner():
    opener = FakeOpener(200, b"[]")
    assert get_github_releases("", "repo", opener) == []
    assert opener.requests == []


def test_get_github_releases_parses_list():
    opener = FakeOpener(200, b'[{"id": 5, "tag_name": "v1.2.3"}]')
    releases = get_github_releases("owner", "repo", opener)
    assert [(r.id, r.tag_name) for r in releases] == [(5, "v1.2.3")]
    assert opener.requests[0].full_url == "https://api.github.com/repos/owner/repo/releases"