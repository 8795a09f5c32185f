[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "aftershock"
version = "0.2.2"
description = "A small blog engine: SQLite content store with a JSON API, a Markdown publishing CLI and a server-rendered site."
requires-python = ">=3.11"
keywords = ["blog", "markdown", "sqlite", "flask", "cms"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Environment :: Web Environment",
    "Framework :: Flask",
    "Intended Audience :: End Users/Desktop",
    "Natural Language :: Chinese (Simplified)",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: Dynamic Content :: News/Diary",
]
dependencies = [
    "flask>=3.0",
    "requests>=2.31",
    "markdown-it-py>=3.0",
    "pygments>=2.17",
    "python-dotenv>=1.0",
    "markupsafe>=2.1",
]

[project.optional-dependencies]
test = [
    "pytest>=8.0",
    "responses>=0.25",
]

[project.scripts]
aftershock-storage = "aftershock.server:main"
aftershock-cli = "aftershock.cli:main"
aftershock-site = "aftershock.site:main"

[tool.hatch.build.targets.wheel]
packages = ["aftershock"]

[tool.hatch.build.targets.sdist]
include = ["aftershock", "tests", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
