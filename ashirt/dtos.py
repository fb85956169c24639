"""Data objects exchanged with the ASHIRT server and the release feed."""

from __future__ import annotations

import json
import logging
import math
import re
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

from . import models
from .jsonhelpers import JsonObject, parse_json_item, parse_json_list

log = logging.getLogger(__name__)

_INTEGER_TEXT = re.compile(r"\s*[+-]?\d+\s*")
_SEMVER = re.compile(r"^[vV]?(\d+)\.(\d+)\.(\d+)(.*)")


def _to_string(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _to_bool(value: Any) -> bool:
    return value if isinstance(value, bool) else False


def _to_int(value: Any) -> int:
    """Integral JSON numbers within 32 bits; anything else is 0."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    if isinstance(value, float) and not value.is_integer():
        return 0
    number = int(value)
    return number if -(2**31) <= number < 2**31 else 0


def _to_long_long(value: Any) -> int:
    """Lenient 64-bit conversion: numbers round, numeric strings parse."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return math.floor(value + 0.5) if math.isfinite(value) else 0
    if isinstance(value, str) and _INTEGER_TEXT.fullmatch(value):
        return int(value)
    return 0


def _dump(obj: JsonObject) -> bytes:
    text = json.dumps(obj, indent=4, sort_keys=True, ensure_ascii=False)
    return (text + "\n").encode("utf-8")


@dataclass
class AShirtError:
    """An error body returned by the server."""

    error: str = ""

    @classmethod
    def parse_data(cls, data: bytes | str) -> AShirtError:
        return parse_json_item(data, lambda obj: cls(_to_string(obj.get("error"))), cls)


@dataclass
class CheckConnection:
    """The result of the server's connection-check endpoint."""

    ok: bool = False
    parsed_correctly: bool = False

    @classmethod
    def parse_json(cls, data: bytes | str) -> CheckConnection:
        def from_json(obj: JsonObject) -> CheckConnection:
            if "ok" not in obj:
                return cls()
            return cls(ok=_to_bool(obj["ok"]), parsed_correctly=True)

        return parse_json_item(data, from_json, cls)


class OperationStatus(IntEnum):
    PLANNING = 0
    ACTIVE = 1
    COMPLETE = 2


@dataclass
class Operation:
    """An operation visible to the user."""

    name: str = ""
    slug: str = ""
    num_users: int = 0
    status: int = OperationStatus.PLANNING

    @classmethod
    def from_json(cls, obj: JsonObject) -> Operation:
        raw_status = _to_int(obj.get("status"))
        try:
            status: int = OperationStatus(raw_status)
        except ValueError:
            status = raw_status
        return cls(
            name=_to_string(obj.get("name")),
            slug=_to_string(obj.get("slug")),
            num_users=_to_int(obj.get("numUsers")),
            status=status,
        )

    @classmethod
    def parse_data(cls, data: bytes | str) -> Operation:
        return parse_json_item(data, cls.from_json, cls)

    @classmethod
    def parse_data_as_list(cls, data: bytes | str) -> list[Operation]:
        return parse_json_list(data, cls.from_json)

    @classmethod
    def create_operation_json(cls, name: str, slug: str) -> bytes:
        """Return the request body for creating an operation."""
        return _dump({"slug": slug, "name": name})


@dataclass
class Tag:
    """A tag as known to the server."""

    name: str = ""
    color_name: str = ""
    id: int = 0

    @classmethod
    def from_json(cls, obj: JsonObject) -> Tag:
        return cls(
            name=_to_string(obj.get("name")),
            color_name=_to_string(obj.get("colorName")),
            id=_to_long_long(obj.get("id")),
        )

    @classmethod
    def parse_data(cls, data: bytes | str) -> Tag:
        return parse_json_item(data, cls.from_json, cls)

    @classmethod
    def parse_data_as_list(cls, data: bytes | str) -> list[Tag]:
        return parse_json_list(data, cls.from_json)

    def to_json(self) -> bytes:
        """Return the request body for creating this tag."""
        return _dump({"colorName": self.color_name, "name": self.name})

    @classmethod
    def from_model_tag(cls, tag: models.Tag, color_name: str) -> Tag:
        return cls(name=tag.tag_name, color_name=color_name)


@dataclass(frozen=True)
class SemVer:
    """A semantic version: numeric major, minor and patch, with the rest kept in ``extra``."""

    major: int = 0
    minor: int = 0
    patch: int = 0
    extra: str = ""

    @classmethod
    def parse(cls, tag: str) -> SemVer:
        """Parse ``tag``; a tag that does not look like a version gives ``SemVer()``."""
        match = _SEMVER.match(tag)
        if match is None:
            return cls()
        major, minor, patch, extra = match.groups()
        return cls(int(major), int(minor), int(patch), extra)

    def __str__(self) -> str:
        return f"v{self.major}.{self.minor}.{self.patch}{self.extra}"

    @staticmethod
    def is_upgrade(cur: SemVer, nxt: SemVer) -> bool:
        return (
            SemVer.is_major_upgrade(cur, nxt)
            or SemVer.is_minor_upgrade(cur, nxt)
            or SemVer.is_patch_upgrade(cur, nxt)
        )

    @staticmethod
    def is_major_upgrade(cur: SemVer, nxt: SemVer) -> bool:
        return nxt.major > cur.major

    @staticmethod
    def is_minor_upgrade(cur: SemVer, nxt: SemVer) -> bool:
        return nxt.major == cur.major and nxt.minor > cur.minor

    @staticmethod
    def is_patch_upgrade(cur: SemVer, nxt: SemVer) -> bool:
        return nxt.major == cur.major and nxt.minor == cur.minor and nxt.patch > cur.patch


@dataclass
class GithubRelease:
    """A release entry from the release feed."""

    url: str = ""
    html_url: str = ""
    assets_url: str = ""
    upload_url: str = ""
    tarball_url: str = ""
    zipball_url: str = ""
    tag_name: str = ""
    release_name: str = ""
    body: str = ""
    prerelease: bool = False
    draft: bool = False
    published_at: str = ""
    id: int = 0

    @classmethod
    def from_json(cls, obj: JsonObject) -> GithubRelease:
        return cls(
            url=_to_string(obj.get("url")),
            html_url=_to_string(obj.get("html_url")),
            assets_url=_to_string(obj.get("assets_url")),
            upload_url=_to_string(obj.get("upload_url")),
            tarball_url=_to_string(obj.get("tarball_url")),
            zipball_url=_to_string(obj.get("zipball_url")),
            tag_name=_to_string(obj.get("tag_name")),
            release_name=_to_string(obj.get("name")),
            body=_to_string(obj.get("body")),
            prerelease=_to_bool(obj.get("prerelease")),
            draft=_to_bool(obj.get("draft")),
            published_at=_to_string(obj.get("published_at")),
            id=_to_long_long(obj.get("id")),
        )

    @classmethod
    def parse_data(cls, data: bytes | str) -> GithubRelease:
        return parse_json_item(data, cls.from_json, cls)

    @classmethod
    def parse_data_as_list(cls, data: bytes | str) -> list[GithubRelease]:
        return parse_json_list(data, cls.from_json)

    def is_legitimate(self) -> bool:
        return self.id != 0


@dataclass
class ReleaseDigest:
    """The newest available major, minor and patch upgrades."""

    major_release: GithubRelease = field(default_factory=GithubRelease)
    minor_release: GithubRelease = field(default_factory=GithubRelease)
    patch_release: GithubRelease = field(default_factory=GithubRelease)

    @classmethod
    def from_releases(cls, current_version: str, releases: list[GithubRelease]) -> ReleaseDigest:
        if "v0.0.0" in current_version:
            log.info("skipping unversioned/development release check")
            return cls()

        current = SemVer.parse(current_version)
        best_major = best_minor = best_patch = current
        digest = cls()

        for release in releases:
            version = SemVer.parse(release.tag_name)
            if not SemVer.is_upgrade(current, version):
                continue
            if SemVer.is_major_upgrade(current, version) and SemVer.is_upgrade(best_major, version):
                best_major = version
                digest.major_release = release
            elif SemVer.is_minor_upgrade(current, version) and SemVer.is_upgrade(best_minor, version):
                best_minor = version
                digest.minor_release = release
            elif SemVer.is_patch_upgrade(current, version) and SemVer.is_upgrade(best_patch, version):
                best_patch = version
                digest.patch_release = release

        return digest

    def has_upgrade(self) -> bool:
        return (
            self.major_release.is_legitimate()
            or self.minor_release.is_legitimate()
            or self.patch_release.is_legitimate()
        )