[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "authservice"
version = "0.1.0"
description = "Building blocks for an OIDC authentication service: URL and form encoding, URI parsing, an HTTPS client, session strings, trigger rules and configuration loading."
requires-python = ">=3.10"
dependencies = []
keywords = ["oidc", "oauth2", "authentication", "session", "http", "cookies"]
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
    "Topic :: Internet :: WWW/HTTP :: Session",
    "Topic :: Security",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["authservice"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
