[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "assurdesk"
version = "0.1.0"
description = "Back-office records for an insurance agency: clients, accident reports, partners and employees, with statistics, PDF reports and a chat assistant"
requires-python = ">=3.10"
dependencies = [
    "matplotlib",
]
keywords = ["insurance", "back-office", "sqlite", "crm", "reports", "pdf", "statistics"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Natural Language :: French",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business",
    "Topic :: Database :: Front-Ends",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
assurdesk = "assurdesk.cli:main"
assurdesk-legacy = "assurdesk.legacy_cli:main"

[tool.hatch.build.targets.wheel]
packages = ["assurdesk"]

[tool.pytest.ini_options]
addopts = "-ra"
