"""Crawl an HTML directory listing and index the files it links to."""

from __future__ import annotations

import datetime
from typing import Any

import requests
from bs4 import BeautifulSoup, Tag

from eddnindex.helpers import date_is_after, string_to_bytes_value

BASE_URL = "https://edgalaxydata.space/EDDN/"
UPDATE_17 = datetime.date(2023, 10, 15)
MODIFIED_FORMAT = "%Y-%b-%d %H:%M:%S"
REQUEST_TIMEOUT = 30

_CELLS = (("n", "name"), ("t", "type"), ("s", "size"), ("m", "modified"))


def parse_url(td: Tag, base_url: str) -> str | None:
    """Return the absolute URL of the link inside a listing cell, if any."""
    if td.get_text() == "None":
        return None
    anchor = td.find("a")
    if anchor is None:
        raise ValueError("Link element was not found in listing cell")
    if anchor.get_text() == "None":
        return None
    href = anchor.get("href")
    if href is None:
        raise ValueError("Link element has no href attribute")
    if href == "None":
        return None
    return f"{base_url}{href}"


def _cell(row: Tag, css_class: str, label: str) -> Tag:
    found = row.find(class_=css_class)
    if found is None:
        raise ValueError(f"File {label} attribute was not found")
    return found


def parse_listing(html: str, url: str) -> tuple[list[dict[str, Any]], list[str]]:
    """Split a listing page into file records and sub-directory URLs.

    Only entries modified strictly after the Update 17 release date are kept.
    """
    soup = BeautifulSoup(html, "html.parser")
    files: list[dict[str, Any]] = []
    directories: list[str] = []

    for row in soup.find_all("tr"):
        name, kind, size, modified = (_cell(row, cls, label) for cls, label in _CELLS)
        name_text = name.get_text()
        if name_text in ("Name", "../"):
            continue

        modified_text = modified.get_text()
        file_date = datetime.datetime.strptime(modified_text, MODIFIED_FORMAT).date()
        if not date_is_after(file_date, UPDATE_17):
            continue

        link = parse_url(name, url)
        if link is None:
            continue

        kind_text = kind.get_text()
        if kind_text == "Directory":
            directories.append(link)
        else:
            files.append(
                {
                    "name": name_text,
                    "type": kind_text,
                    "size": string_to_bytes_value(size.get_text()),
                    "modified": modified_text,
                    "url": link,
                }
            )
    return files, directories


def find_files(
    url: str, session: requests.Session | None = None
) -> tuple[list[dict[str, Any]], list[str]]:
    """Fetch one listing page and return its files and sub-directories."""
    http = session if session is not None else requests
    response = http.get(url, timeout=REQUEST_TIMEOUT)
    return parse_listing(response.text, url)


def crawl_directory(
    base_url: str, session: requests.Session | None = None
) -> list[dict[str, Any]]:
    """Recursively collect every file record below ``base_url``."""
    if session is None:
        with requests.Session() as own_session:
            return crawl_directory(base_url, own_session)

    print(f"Crawling URL: {base_url}")
    files, directories = find_files(base_url, session)
    for directory in directories:
        files.extend(crawl_directory(directory, session))
    print(f"Indexed {len(files)} files")
    return files