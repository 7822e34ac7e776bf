"""HTTP access to remote templates, Dockerfiles and release metadata."""

from __future__ import annotations

import json
import os
from pathlib import Path
from urllib.error import HTTPError, URLError
from urllib.parse import urlsplit
from urllib.request import Request, urlopen

from .errors import DownloadError, MissingFileError
from .logging import get_logger
from .models import RepoId

LATEST_TAG_ENV_VAR = "VERSIONDOCS_LATEST_TAG"
GITHUB_API_URL = "https://api.github.com"
DEFAULT_TIMEOUT = 30.0

_LOGGER = get_logger("remote")


def download(url: str, *, timeout: float = DEFAULT_TIMEOUT) -> bytes:
    """Fetch ``url`` with a plain GET and return the response body."""
    try:
        request = Request(url, method="GET")
        with urlopen(request, timeout=timeout) as response:  # type: ignore[arg-type]
            status = getattr(response, "status", 200)
            body = response.read()
    except HTTPError as exc:
        detail = exc.read().decode("utf-8", errors="ignore") if hasattr(exc, "read") else ""
        raise DownloadError(url, str(exc.reason), status=exc.code, body=detail) from exc
    except URLError as exc:
        raise DownloadError(url, str(exc.reason)) from exc
    except ValueError as exc:
        raise DownloadError(url, str(exc)) from exc

    if status >= 400:
        raise DownloadError(
            url, "unexpected status", status=status, body=body.decode("utf-8", errors="ignore")
        )
    return body


def read_location(location: str) -> bytes:
    """Return the content of ``location``, a local file path or a URL."""
    path = Path(location).expanduser()
    if path.is_file():
        return path.read_bytes()
    if not urlsplit(location).scheme:
        raise MissingFileError(f"no such file: {path}", path)
    return download(location)


def get_latest_release_tag(repo_id: RepoId, *, timeout: float = DEFAULT_TIMEOUT) -> str:
    """Return the tag of the latest published release.

    ``VERSIONDOCS_LATEST_TAG`` short-circuits the lookup entirely.
    """
    override = os.environ.get(LATEST_TAG_ENV_VAR, "").strip()
    if override:
        _LOGGER.debug("Latest tag taken from %s", LATEST_TAG_ENV_VAR)
        return override

    url = f"{GITHUB_API_URL}/repos/{repo_id.owner}/{repo_id.repository_name}/releases/latest"
    request = Request(url, headers={"Accept": "application/vnd.github+json"}, method="GET")
    try:
        with urlopen(request, timeout=timeout) as response:  # type: ignore[arg-type]
            raw = response.read()
    except HTTPError as exc:
        detail = exc.read().decode("utf-8", errors="ignore") if hasattr(exc, "read") else ""
        _LOGGER.error("Body: %s", detail or "(empty)")
        raise DownloadError(
            url, "failed to get latest release tag name", status=exc.code, body=detail
        ) from exc
    except URLError as exc:
        raise DownloadError(url, f"failed to get latest release tag name: {exc.reason}") from exc

    try:
        payload = json.loads(raw.decode("utf-8"))
    except json.JSONDecodeError as exc:
        raise DownloadError(url, "release lookup returned invalid JSON") from exc

    tag = payload.get("tag_name") if isinstance(payload, dict) else None
    if not isinstance(tag, str) or not tag:
        raise DownloadError(url, "release lookup returned no tag_name")
    return tag


__all__ = [
    "GITHUB_API_URL",
    "LATEST_TAG_ENV_VAR",
    "download",
    "get_latest_release_tag",
    "read_location",
]
