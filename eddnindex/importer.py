"""Load newline-delimited JSON archives and insert them into a collection."""

from __future__ import annotations

import bz2
import json
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import IO, Any

DATABASE_NAME = "FSSSignalDiscovered"
COLLECTION_NAME = "rust_test"
DEFAULT_DOWNLOADS_DIR = "downloads"


class DocumentLoadError(ValueError):
    """Raised when a line of an archive is not a JSON object."""


def open_reader(file_name: str | Path) -> IO[bytes]:
    """Open a file for binary reading, decompressing it if it ends in ``bz2``."""
    if str(file_name).endswith("bz2"):
        return bz2.open(file_name, "rb")
    return open(file_name, "rb")


def load_documents(file_path: str | Path) -> list[dict[str, Any]]:
    """Read every line of an archive as a JSON object."""
    with open_reader(file_path) as reader:
        text = reader.read().decode("utf-8")
    documents = []
    for line in text.strip().split("\n"):
        try:
            blob = json.loads(line)
        except json.JSONDecodeError as exc:
            raise DocumentLoadError(f"Error loading json data from: {file_path}") from exc
        if not isinstance(blob, dict):
            raise DocumentLoadError("Error converting json blob to a document")
        documents.append(blob)
    return documents


def import_file(
    collection: Any,
    file_path: str | Path,
    downloads_dir: str | Path = DEFAULT_DOWNLOADS_DIR,
) -> Path:
    """Insert an archive's documents and move it into the processed directory.

    Returns the file's new path.
    """
    print(f"Importing file: {file_path}")
    documents = load_documents(file_path)
    collection.insert_many(documents)

    processed_dir = Path(downloads_dir) / "processed"
    processed_dir.mkdir(parents=True, exist_ok=True)
    destination = processed_dir / Path(file_path).name
    Path(file_path).rename(destination)
    return destination


def import_files(
    collection: Any,
    file_paths: Iterable[str | Path],
    num_workers: int,
    downloads_dir: str | Path = DEFAULT_DOWNLOADS_DIR,
) -> list[Path]:
    """Import several archives concurrently.

    Files that cannot be read are reported and skipped; malformed content
    raises. Returns the new paths of the imported files, in input order.
    """
    imported: list[Path] = []
    with ThreadPoolExecutor(max_workers=num_workers if num_workers > 0 else None) as pool:
        jobs = [
            (path, pool.submit(import_file, collection, path, downloads_dir))
            for path in file_paths
        ]
        for _path, future in jobs:
            try:
                imported.append(future.result())
            except OSError as err:
                print(f"Error when importing file: {err}")
    return imported