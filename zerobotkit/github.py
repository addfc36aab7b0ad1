"""GitHub repository search: build the query and format the best match."""

from __future__ import annotations

import json
import re
import urllib.error
import urllib.parse
import urllib.request
from typing import Any, Callable, Mapping

API = "https://api.github.com/search/repositories"
PREVIEW = "https://opengraph.githubassets.com/0/"
HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/88.0.4324.182 Safari/537.36"
    )
}

_COMMAND_RE = re.compile(r">github[ \t\n\f\r](-.{1,10}? )?(.*)")


def not_null(text: str) -> str:
    """Return "None" for an empty string, else the text."""
    return text if text else "None"


def parse_command(text: str) -> tuple[str, str] | None:
    """Split ">github [-x ]query" into (flag, query); flag is "" when absent."""
    m = _COMMAND_RE.fullmatch(text)
    if m is None:
        return None
    return m.group(1) or "", m.group(2)


def search_url(query: str) -> str:
    """The search API URL for ``query``."""
    return API + "?" + urllib.parse.urlencode({"q": query})


def preview_url(full_name: str) -> str:
    """The social preview picture of a repository."""
    return PREVIEW + full_name


def net_get(url: str, headers: Mapping[str, str] | None = None) -> bytes:
    """GET ``url``; raise RuntimeError("code N") unless the status is 200."""
    request = urllib.request.Request(url, headers=dict(headers or {}))
    try:
        with urllib.request.urlopen(request, timeout=30) as response:
            body = response.read()
            code = response.status
    except urllib.error.HTTPError as exc:
        exc.read()
        code = exc.code
    if code != 200:
        raise RuntimeError(f"code {code}")
    return body


def _get(data: Any, path: str) -> Any:
    for key in path.split("."):
        if isinstance(data, dict):
            data = data.get(key)
        elif isinstance(data, list) and key.isdigit() and int(key) < len(data):
            data = data[int(key)]
        else:
            return None
    return data


def _str(data: Any, path: str) -> str:
    value = _get(data, path)
    return value if isinstance(value, str) else ""


def _int(data: Any, path: str) -> int:
    value = _get(data, path)
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return int(value)
    if isinstance(value, str):
        try:
            return int(float(value))
        except ValueError:
            return 0
    return 0


def format_repo(repo: Mapping[str, Any]) -> str:
    """The text description of a repository."""
    return (
        _str(repo, "full_name") + "\n"
        + "Description: " + _str(repo, "description") + "\n"
        + "Star/Fork/Issue: "
        + f"{_int(repo, 'watchers')}/{_int(repo, 'forks')}/{_int(repo, 'open_issues')}\n"
        + "Language: " + not_null(_str(repo, "language")) + "\n"
        + "License: " + not_null(_str(repo, "license.key").upper()) + "\n"
        + "Last pushed: " + _str(repo, "pushed_at") + "\n"
        + "Jump: " + _str(repo, "html_url") + "\n"
    )


def search_repository(
    query: str,
    fetch: Callable[[str, Mapping[str, str]], bytes] | None = None,
) -> dict:
    """Return the first matching repository; raise LookupError when none is found."""
    body = (fetch or net_get)(search_url(query), HEADERS)
    info = json.loads(body) if body else {}
    if _int(info, "total_count") == 0:
        raise LookupError("没有找到这样的仓库")
    repo = _get(info, "items.0")
    if not isinstance(repo, dict):
        raise LookupError("没有找到这样的仓库")
    return repo