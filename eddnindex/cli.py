"""Interactive command: index, download, import and summarise signal archives."""

from __future__ import annotations

import argparse
import json
import os
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path
from typing import Any

from pymongo import MongoClient

from eddnindex.crawler import BASE_URL, crawl_directory
from eddnindex.downloader import download_files_in_parallel
from eddnindex.helpers import bytes_value_to_size_string, get_input
from eddnindex.importer import COLLECTION_NAME, DATABASE_NAME, import_files
from eddnindex.installations import generate_installations_dump

DEFAULT_MONGO_URI = "mongodb://localhost:27017"
DEFAULT_DOWNLOADS_DIR = "downloads"
FILES_JSON = "files.json"
INSTALLATIONS_JSON = "installations.json"


def filter_signal_files(files: Iterable[Mapping[str, Any]]) -> list[Mapping[str, Any]]:
    """Keep the signal-discovery archives, dropping test archives."""
    return [
        f
        for f in files
        if "FSSSignalDiscovered" in str(f["name"]) and "Test" not in str(f["name"])
    ]


def total_size(files: Iterable[Mapping[str, Any]]) -> float:
    """Sum the byte sizes of file records."""
    return sum((float(f["size"]) for f in files), 0.0)


def list_downloaded_files(downloads_dir: str | Path = DEFAULT_DOWNLOADS_DIR) -> list[str]:
    """Return the paths of regular files directly inside ``downloads_dir``, sorted."""
    return sorted(str(path) for path in Path(downloads_dir).iterdir() if path.is_file())


def _ask(message: str) -> bool | None:
    """Ask a yes/no question; None means the answer was not understood."""
    answer = get_input(message).strip()
    if answer in ("Y", "y"):
        return True
    if answer in ("N", "n"):
        return False
    print("Invalid input. Please enter Y or N.")
    return None


def _collection(mongo_uri: str) -> Any:
    client = MongoClient(mongo_uri)
    return client[DATABASE_NAME][COLLECTION_NAME]


def _cpu_count() -> int:
    return os.cpu_count() or 1


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Index, download and import signal discovery archives."
    )
    parser.add_argument("--base-url", default=BASE_URL, help="listing to start crawling from")
    parser.add_argument("--mongo-uri", default=DEFAULT_MONGO_URI, help="database to import into")
    parser.add_argument(
        "--downloads-dir", default=DEFAULT_DOWNLOADS_DIR, help="where archives are stored"
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the interactive workflow."""
    args = _parse_args(argv)
    files = crawl_directory(args.base_url)

    save = _ask(
        "Files have been indexed. Would you like to save their details to a json file? (Y/N): "
    )
    if save:
        print("Saving files to JSON...")
        try:
            with open(FILES_JSON, "w", encoding="utf-8") as handle:
                json.dump({"files": files}, handle, indent=2, sort_keys=True)
        except (OSError, TypeError, ValueError) as err:
            print(f"Error writing file blobs to disk:\n {err}")
        else:
            print(f"Dumped {len(files)} file blobs to disk.")
    elif save is False:
        print("Not saving files to JSON...")

    print("Filtering files to only gather relevant ones")
    signal_files = filter_signal_files(files)
    size = bytes_value_to_size_string(total_size(signal_files))

    download = _ask(
        f"Filtered {len(signal_files)} files totalling {size} in size. "
        "Would you like to download them? (Y/N): "
    )
    if download:
        num_workers = _cpu_count() - 1
        print(f"Downloading files to disk with {num_workers} threads...")
        urls = [str(f["url"]) for f in signal_files]
        names = [str(f["name"]) for f in signal_files]
        download_files_in_parallel(urls, names, num_workers, args.downloads_dir)
        print(f"Successfully downloaded {len(urls)} files!")
    elif download is False:
        print("Not saving files to Disk...")

    do_import = _ask(
        "Do you want to import any downloaded files? "
        "THIS IS A CONSIDERABLE TIME INVESTMENT! (Y/N): "
    )
    if do_import:
        num_workers = _cpu_count() // 2
        collection = _collection(args.mongo_uri)
        paths = list_downloaded_files(args.downloads_dir)
        print(f"Importing {len(paths)} files...")
        import_files(collection, paths, num_workers, args.downloads_dir)
    elif do_import is False:
        print("Not importing files to DB...")

    dump = _ask("Would you like to generate an installations dump? (Y/N): ")
    if dump:
        print("Connecting to database...")
        generate_installations_dump(_collection(args.mongo_uri), INSTALLATIONS_JSON)
    elif dump is False:
        print("Not generating an installations dump...")

    return 0