[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fbsdkstate"
version = "0.14.0"
description = "Application-state helpers for SDK clients: relay commands, navigation state events, frame session state and a compact binary serializer."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "session-state",
    "suspension",
    "navigation",
    "serialization",
    "commands",
    "sdk",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Application Frameworks",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["fbsdkstate"]

[tool.hatch.build.targets.sdist]
include = ["fbsdkstate", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"
