# ashirt

Building blocks for recording evidence and sending it to an ASHIRT server.
The package uses only the standard library.

## Install

    pip install .

## Modules

- `ashirt.api`: `AshirtClient(host, access_key, secret_key, opener=None)`
  signs each request with HMAC-SHA256 (`generate_hash`, `add_ashirt_auth`) and
  calls the server API: `test_connection`, `get_all_operations` (sorted by
  name), `get_operation_tags`, `create_tag`, `create_operation` and
  `upload_evidence`. A reply other than 200 or 201, or a server that cannot be
  reached, raises `ApiError`; `test_connection` instead returns a
  `(TestResult, message)` pair. `get_github_releases(owner, repo)` fetches a
  repository's release list from the GitHub API.
- `ashirt.dtos`: server data types `Operation`, `Tag`, `AShirtError`,
  `CheckConnection`, `GithubRelease`, plus `SemVer` and `ReleaseDigest`.
  `ReleaseDigest.from_releases` picks the newest major, minor and patch
  upgrade over a current version; `has_upgrade` reports whether any exists.
  Malformed JSON decodes to empty values rather than raising.
- `ashirt.models`: the local records `Evidence` and `Tag`.
- `ashirt.codeblock`: `Codeblock` text evidence, encoded as a JSON file
  (`new`, `encode`, `decode`, `save`, `read`).
- `ashirt.screenshot`: `make_name()` gives a random screenshot file name.
- `ashirt.multipart`: `MultipartParser` builds `multipart/form-data` bodies.
- `ashirt.request_builder`: `RequestBuilder` assembles and sends HTTP
  requests with `urllib`.
- `ashirt.keysequence`: `KeySequence.from_string("Ctrl+Shift+F1")` parses
  hotkey strings into `Key` values; unknown names raise `ValueError`.
- `ashirt.evidence_manifest`, `ashirt.system_manifest` and
  `ashirt.porting_options`: the manifests of an export.
  `SystemManifest.copy_evidence` copies evidence files under
  `evidence/` with fresh names and reports each file through a callback;
  `SystemManifest.write` writes `system.json`; `read_manifest` reads it back.
- `ashirt.strings`, `ashirt.files`, `ashirt.jsonhelpers`,
  `ashirt.http_status`: small helpers.

## Example

```python
from ashirt.api import AshirtClient
from ashirt.dtos import GithubRelease, ReleaseDigest

client = AshirtClient("https://ashirt.example.com", access_key="placeholder", secret_key="secret")
for op in client.get_all_operations():
    print(op.slug, op.name)

releases = [GithubRelease(tag_name="v1.3.0", id=7)]
print(ReleaseDigest.from_releases("v1.2.0", releases).has_upgrade())  # True
```

## What it does not do

This is a library only; it has no command and no window. It does not take
screenshots or read the clipboard, does not register global hotkeys, keeps
no settings and has no evidence database: records are plain `Evidence`
objects that the caller stores. Exporting the configuration or database and
merging an import back into a running system are left to the caller; the
package covers the manifests and the copying of evidence files.

## Tests

    pip install .[test]
    pytest