[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tpzero"
version = "0.1.0"
description = "A minimal TCP client and server exchanging length-prefixed messages and packages"
requires-python = ">=3.10"
dependencies = []
keywords = ["sockets", "tcp", "client", "server", "serialization", "framing"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
tpzero-client = "tpzero.client:main"
tpzero-server = "tpzero.server:main"

[tool.hatch.build.targets.wheel]
packages = ["tpzero"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
