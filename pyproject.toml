[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "untangle"
version = "0.1.0"
description = "Model, run and store node-based HTTP API test orchestrations"
requires-python = ">=3.10"
dependencies = []
keywords = ["http", "api", "testing", "workflow", "orchestration", "nodes", "sqlite"]
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
    "Topic :: Software Development :: Testing",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["untangle"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
