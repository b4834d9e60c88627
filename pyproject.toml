[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "contestcore"
version = "0.1.0"
description = "Core data model for a test-orchestration service: jobs, events, queries, comparison expressions and job descriptor parsing"
requires-python = ">=3.10"
dependencies = [
    "pyyaml",
]
keywords = ["testing", "orchestration", "jobs", "events", "test-steps", "reporting"]
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
    "Typing :: Typed",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["contestcore"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
