"""HTTP helpers for fetching package archives.

Encapsulates request/timeout error handling so callers only deal with
DownloadError.
"""
from __future__ import annotations

import logging
import os
import posixpath
import urllib.parse

import requests

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer

logger = logging.getLogger(__name__)


class DownloadError(RuntimeError):
    """Raised when an archive cannot be fetched."""


def is_remote(source: str) -> bool:
    """Return True if ``source`` is an http(s) URL rather than a local path."""
    return urllib.parse.urlsplit(source).scheme in ("http", "https")


def _target_name(url: str) -> str:
    name = posixpath.basename(urllib.parse.urlsplit(url).path)
    return name or "download.deb"


def download_file(url: str, dest_dir: str) -> str:
    """Stream ``url`` into ``dest_dir`` and return the written path.

    Args:
        url: http(s) URL of the file.
        dest_dir: Existing directory to write into.

    Returns:
        str: Path of the downloaded file.

    Raises:
        DownloadError: On timeouts, connection failures or non-200 responses.
    """
    safe_target = safe_url(url)
    dest = os.path.join(dest_dir, _target_name(url))

    with Timer() as t:
        if is_debug_enabled(logger):
            logger.debug(
                "HTTP request",
                extra=extra_context(
                    event="http_request",
                    component="http_client",
                    action="GET",
                    target=safe_target,
                )
            )
        try:
            res = requests.get(url, timeout=Constants.REQUEST_TIMEOUT, stream=True)
        except requests.Timeout as exc:
            logger.error(
                "Download of %s timed out after %s seconds",
                safe_target,
                Constants.REQUEST_TIMEOUT,
            )
            raise DownloadError(f"Timed out fetching {safe_target}") from exc
        except requests.RequestException as exc:  # includes ConnectionError
            logger.error("Download of %s failed: %s", safe_target, exc)
            raise DownloadError(f"Failed to fetch {safe_target}: {exc}") from exc

        try:
            if res.status_code != 200:
                logger.error("Download of %s returned HTTP %s", safe_target, res.status_code)
                raise DownloadError(f"HTTP {res.status_code} fetching {safe_target}")
            with open(dest, "wb") as fh:
                for chunk in res.iter_content(chunk_size=Constants.DOWNLOAD_CHUNK_SIZE):
                    if chunk:
                        fh.write(chunk)
        except requests.RequestException as exc:
            logger.error("Download of %s interrupted: %s", safe_target, exc)
            raise DownloadError(f"Failed to fetch {safe_target}: {exc}") from exc
        finally:
            res.close()

    if is_debug_enabled(logger):
        logger.debug(
            "HTTP response ok",
            extra=extra_context(
                event="http_response",
                component="http_client",
                action="GET",
                outcome="success",
                status_code=res.status_code,
                duration_ms=t.duration_ms(),
                target=safe_target,
            )
        )
    logger.info("Downloaded %s to %s", safe_target, dest)
    return dest
