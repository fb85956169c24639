[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ashirt"
version = "1.2.0"
description = "Evidence records, manifests and an API client for ASHIRT servers"
requires-python = ">=3.10"
dependencies = []
keywords = ["ashirt", "evidence", "security", "hmac", "multipart"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Information Technology",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["ashirt"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
