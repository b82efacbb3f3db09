"""Utilities Module

Helper functions for the export pipeline.
"""
import os
from pathlib import Path
from urllib.parse import urlparse

from .exceptions import InvalidContentUrlError


REMOTE_SCHEMES = ("http", "https")


def resolve_content_url(content_url: str) -> str:
    """
    Validate the content location and turn local paths into file:// URLs.

    Args:
        content_url: http(s)/file URL or a path to a local HTML file

    Returns:
        URL the browser can navigate to

    Raises:
        InvalidContentUrlError: If the URL is empty, has an unsupported scheme,
            or points at a local file that does not exist
    """
    if not content_url or not content_url.strip():
        raise InvalidContentUrlError("Content URL cannot be empty")

    content_url = content_url.strip()
    scheme = urlparse(content_url).scheme.lower()

    if scheme in REMOTE_SCHEMES:
        if not urlparse(content_url).netloc:
            raise InvalidContentUrlError(f"Content URL has no host: {content_url}")
        return content_url

    if scheme == "file":
        return content_url

    # Windows drive letters parse as a one-letter scheme
    if scheme and len(scheme) > 1:
        raise InvalidContentUrlError(f"Unsupported content URL scheme '{scheme}': {content_url}")

    path = Path(content_url).expanduser()
    if not path.exists():
        raise InvalidContentUrlError(f"File does not exist: {content_url}")

    return path.resolve().as_uri()


def is_remote_source(src: str) -> bool:
    """
    Check whether an image source is served from a remote origin.

    Args:
        src: Image source attribute (URL, data URI, relative path)

    Returns:
        True for http(s) URLs
    """
    if not src:
        return False
    return urlparse(src).scheme.lower() in REMOTE_SCHEMES


def format_file_size(size_bytes: int) -> str:
    """
    Format file size in human-readable format.

    Args:
        size_bytes: Size in bytes

    Returns:
        Formatted string (e.g., "45.3 MB")
    """
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f} KB"
    elif size_bytes < 1024 * 1024 * 1024:
        return f"{size_bytes / (1024 * 1024):.1f} MB"
    else:
        return f"{size_bytes / (1024 * 1024 * 1024):.1f} GB"


def write_file_atomically(path: str, data: bytes) -> None:
    """
    Write bytes to path so that readers never observe a partial file.

    The data goes to a temporary sibling first and is moved into place with
    os.replace. The temporary file is removed if anything fails.

    Args:
        path: Destination file path (parent directories are created)
        data: Complete file contents
    """
    directory = os.path.dirname(os.path.abspath(path))
    os.makedirs(directory, exist_ok=True)

    tmp_path = os.path.join(directory, f".{os.path.basename(path)}.{os.getpid()}.tmp")
    try:
        with open(tmp_path, "wb") as f:
            f.write(data)
        os.replace(tmp_path, path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise
