[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "eddnindex"
version = "0.1.0"
description = "Crawl an EDDN data archive, download FSS signal files, import them into MongoDB and dump installation signals."
requires-python = ">=3.10"
keywords = ["eddn", "elite-dangerous", "crawler", "mongodb", "index"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: Indexing/Search",
]
dependencies = [
    "requests>=2.28",
    "beautifulsoup4>=4.11",
    "pymongo>=4.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
    "pytest-mock>=3.10",
    "responses>=0.23",
]

[project.scripts]
eddnindex = "eddnindex.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["eddnindex"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
