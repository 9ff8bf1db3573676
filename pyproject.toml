[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tokensim"
version = "0.1.0"
description = "Threaded simulation of a token ring LAN that passes packets byte by byte between nodes"
requires-python = ">=3.10"
dependencies = []
keywords = ["token ring", "network", "simulation", "threads", "lan"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest", "pytest-timeout"]

[project.scripts]
tokensim = "tokensim.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["tokensim"]

[tool.pytest.ini_options]
addopts = "-ra"
