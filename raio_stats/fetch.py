from __future__ import annotations

import logging
from pathlib import Path

import requests

from .config import DATA_ROOT, FETCH_TIMEOUT
from .errors import SourceUnavailable

logger = logging.getLogger(__name__)


def _is_url(root: str) -> bool:
    return root.startswith(("http://", "https://"))


def fetch_csv(path: str, *, data_root: str | None = None, timeout: float = FETCH_TIMEOUT) -> str:
    """Return the raw text of ``path`` under the data root.

    The root is either a base URL (fetched with ``requests``) or a local
    directory. There are no retries: a single failure raises
    :class:`SourceUnavailable` and the caller decides whether to fall back.
    """
    root = data_root if data_root is not None else DATA_ROOT
    name = path.lstrip("/")

    if _is_url(root):
        url = f"{root.rstrip('/')}/{name}"
        try:
            resp = requests.get(url, timeout=timeout)
            resp.raise_for_status()
        except requests.RequestException as exc:
            logger.warning("Fetch of %s failed: %s", url, exc)
            raise SourceUnavailable(name, str(exc)) from exc
        resp.encoding = "utf-8"
        return resp.text

    file_path = Path(root) / name
    try:
        return file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Read of %s failed: %s", file_path, exc)
        raise SourceUnavailable(name, str(exc)) from exc
