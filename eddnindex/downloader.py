"""Download archive files into a local directory, several at a time."""

from __future__ import annotations

import sys
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import requests

DEFAULT_DOWNLOADS_DIR = "downloads"
REQUEST_TIMEOUT = 30


class DownloadError(Exception):
    """Raised when a file cannot be fetched."""


def download_file(url: str, file_name: str, downloads_dir: str | Path = DEFAULT_DOWNLOADS_DIR) -> bool:
    """Fetch ``url`` into ``downloads_dir/file_name``.

    Files already present in the downloads directory or its ``processed``
    sub-directory are left alone. Returns True if the file was written.
    """
    try:
        response = requests.get(url, timeout=REQUEST_TIMEOUT)
    except requests.RequestException as exc:
        raise DownloadError(f"Request failed: {exc}") from exc

    directory = Path(downloads_dir)
    directory.mkdir(parents=True, exist_ok=True)

    target = directory / file_name
    processed = directory / "processed" / file_name
    if target.exists() or processed.exists():
        print(f"Skipping existing file: {file_name}")
        return False

    print(f"Downloading file: {url}")
    try:
        content = response.content
    except requests.RequestException as exc:
        raise DownloadError(f"Error when writing content to file: {exc}") from exc
    target.write_bytes(content)
    return True


def download_files_in_parallel(
    urls: Iterable[str],
    file_names: Iterable[str],
    num_workers: int,
    downloads_dir: str | Path = DEFAULT_DOWNLOADS_DIR,
) -> list[str]:
    """Download each URL to its paired file name using a pool of workers.

    Failures are reported on stderr and do not stop the other downloads.
    Returns the URLs that failed, in input order.
    """
    failures: list[str] = []
    with ThreadPoolExecutor(max_workers=num_workers if num_workers > 0 else None) as pool:
        jobs = [
            (url, pool.submit(download_file, url, name, downloads_dir))
            for url, name in zip(urls, file_names)
        ]
        for url, future in jobs:
            try:
                future.result()
            except (DownloadError, OSError) as err:
                print(f"Error downloading {url}: {err}", file=sys.stderr)
                failures.append(url)
    return failures