[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "walletsvc"
version = "0.1.0"
description = "Digital wallet service: clients, accounts, transfers, balance projections and event publishing"
requires-python = ">=3.10"
keywords = ["wallet", "accounting", "transactions", "balance", "events", "unit-of-work", "flask", "sqlite"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Framework :: Flask",
    "Topic :: Office/Business :: Financial :: Accounting",
]
dependencies = [
    "flask",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
walletsvc = "walletsvc.app:main"

[tool.hatch.build.targets.wheel]
packages = ["walletsvc"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
