# eddnindex

An interactive tool that indexes an EDDN data archive and collects the
`FSSSignalDiscovered` files in it.

It first crawls the archive, then asks a Y/N question before each of the
later steps:

1. **Crawl** the archive's HTML directory listings recursively. The crawl
   always runs. Only entries modified strictly after 15 October 2023 are kept.
   You are then asked whether to save the index to `files.json` in the current
   directory.
2. **Filter** the index down to files whose name contains
   `FSSSignalDiscovered` and not `Test`, and report their total size.
3. **Download** those files into the downloads directory, using one fewer
   worker thread than the machine has CPUs. A file that already exists in the
   downloads directory or in its `processed/` sub-directory is skipped.
   Failed downloads are reported on stderr and do not stop the others.
4. **Import** every regular file in the downloads directory into the MongoDB
   collection `rust_test` of the database `FSSSignalDiscovered`. A file may be
   plain or, if its name ends in `bz2`, bzip2 compressed, with one JSON object
   per line. After its documents are inserted, each file is moved to
   `processed/` inside the downloads directory. A file that cannot be opened
   is reported and skipped. A line that is not a JSON object stops the import
   with an error.
5. **Dump installations**. The tool queries every message that has a signal
   of type `Installation`. It keeps the system details and only the
   installation signals, and keeps one record per star system. A later record
   replaces the stored one only if the date of its first signal's timestamp
   is later. The result is keyed and sorted by star system name and written
   to `installations.json` in the current directory.

Any answer other than `Y`/`y` or `N`/`n` prints a notice and skips that step.

## Installation

```
pip install .
```

The import and dump steps need a running MongoDB server.

## Usage

```
eddnindex [--base-url URL] [--mongo-uri URI] [--downloads-dir DIR]
```

- `--base-url`: the listing to start crawling from. Defaults to
  `https://edgalaxydata.space/EDDN/`.
- `--mongo-uri`: the MongoDB server to use. Defaults to
  `mongodb://localhost:27017`.
- `--downloads-dir`: where archives are stored. Defaults to `downloads`.

## Library use

The modules can also be used on their own:

- `eddnindex.crawler.crawl_directory(base_url, session=None)` returns a list
  of file records. Each record has the keys `name`, `type`, `size` (in bytes),
  `modified` and `url`. `parse_listing(html, url)` splits one listing page
  into file records and sub-directory URLs.
- `eddnindex.downloader.download_files_in_parallel(urls, file_names, num_workers, downloads_dir="downloads")`
  downloads files into a directory and returns the URLs that failed.
- `eddnindex.importer.import_files(collection, file_paths, num_workers, downloads_dir="downloads")`
  inserts JSON-lines files into a collection and returns the files' new paths.
  `load_documents(file_path)` reads one file as a list of documents.
- `eddnindex.installations.select_unique_signals(documents)` keeps the newest
  installation record per star system. `generate_installations_dump(collection, output_path="installations.json")`
  queries a collection and writes the result to a file.
- `eddnindex.helpers` converts between listing size strings and byte counts:
  `string_to_bytes_value("1.5M")` and `bytes_value_to_size_string(n)`.

## Running the tests

```
pip install .[test]
pytest
```