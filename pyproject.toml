[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "comicsearch"
version = "0.1.0"
description = "Keyword search over xkcd comics: fetcher, stemmed keyword extraction, inverted index and search"
requires-python = ">=3.10"
keywords = ["xkcd", "search", "index", "stemming", "snowball", "comics"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: Indexing/Search",
    "Topic :: Text Processing :: Indexing",
]
dependencies = [
    "pyyaml>=6.0",
    "pyjwt>=2.8",
    "requests>=2.31",
    "werkzeug>=3.0",
    "pymysql>=1.1",
]

[project.optional-dependencies]
test = [
    "pytest>=7.4",
    "responses>=0.24",
]

[project.scripts]
comicsearch = "comicsearch.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["comicsearch"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
ignore_missing_imports = true
