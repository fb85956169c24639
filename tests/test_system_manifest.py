import json

from ashirt.evidence_manifest import EvidenceManifest
from ashirt.models import Evidence
from ashirt.system_manifest import (
    CopyError,
    SystemManifest,
    content_sensitive_extension,
    content_sensitive_filename,
)


def test_extensions():
    assert content_sensitive_extension("codeblock") == "json"
    assert content_sensitive_extension("image") == "png"
    assert content_sensitive_extension("other") == ".bin"


def test_filenames():
    assert content_sensitive_filename("codeblock").startswith("ashirt_codeblock_")
    assert content_sensitive_filename("image").endswith(".png")
    name = content_sensitive_filename("mystery")
    assert name.startswith("ashirt_unknown_type_")
    assert name.endswith(".bin")


def test_serialize_keys():
    manifest = SystemManifest("Linux", "db.sqlite", "config.json", "", "evidence.json")
    assert manifest.serialize() == {
        "operatingSystem": "Linux",
        "databasePath": "db.sqlite",
        "configPath": "config.json",
        "serversPath": "",
        "evidenceManifestPath": "evidence.json",
    }


def test_serialize_round_trip():
    manifest = SystemManifest("darwin", "db.sqlite", "config.json", "servers.json", "evidence.json")
    assert SystemManifest.deserialize(manifest.serialize()) == manifest


def test_read_manifest_sets_base(tmp_path):
    manifest = SystemManifest("Linux", "db.sqlite", "config.json", "", "evidence.json")
    path = tmp_path / "system.json"
    path.write_text(json.dumps(manifest.serialize()))
    loaded = SystemManifest.read_manifest(str(path))
    assert loaded == manifest
    assert loaded.path_to_file("db.sqlite") == f"{tmp_path}/db.sqlite"


def test_read_manifest_malformed(tmp_path):
    path = tmp_path / "system.json"
    path.write_text("{oops")
    loaded = SystemManifest.read_manifest(str(path))
    assert loaded == SystemManifest()
    assert loaded.path_to_manifest == str(tmp_path)


def test_write_then_read(tmp_path):
    manifest = SystemManifest("Linux", "db.sqlite", "config.json", "", "evidence.json")
    path = manifest.write(tmp_path / "out")
    assert SystemManifest.read_manifest(path) == manifest
    assert manifest.path_to_manifest == str(tmp_path / "out")


def test_copy_evidence(tmp_path):
    source = tmp_path / "shot.png"
    source.write_bytes(b"image-bytes")
    missing = tmp_path / "missing.json"
    events = []
    manifest = SystemManifest().copy_evidence(
        tmp_path / "export",
        [
            Evidence(id=1, path=str(source), content_type="image"),
            Evidence(id=2, path=str(missing), content_type="codeblock"),
        ],
        lambda count, error: events.append((count, error)),
    )
    assert [entry.evidence_id for entry in manifest.entries] == [1]
    entry = manifest.entries[0]
    assert entry.export_path.startswith("evidence/ashirt_evidence_")
    assert entry.export_path.endswith(".png")
    assert (tmp_path / "export" / entry.export_path).read_bytes() == b"image-bytes"
    assert [count for count, _ in events] == [1, 2]
    assert events[0][1] is None
    assert isinstance(events[1][1], CopyError)
    assert events[1][1].src == str(missing)


def test_copied_manifest_round_trip(tmp_path):
    source = tmp_path / "code.json"
    source.write_text("{}")
    manifest = SystemManifest().copy_evidence(
        tmp_path / "export", [Evidence(id=5, path=str(source), content_type="codeblock")]
    )
    path = tmp_path / "export" / "evidence.json"
    path.write_text(json.dumps(manifest.serialize()))
    assert EvidenceManifest.deserialize(path) == manifest