[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "wrrsched"
version = "0.1.0"
description = "Task scheduler with a real-time queue, weighted round-robin queues, deadline, iterative and ordered tasks, and a WebSocket front end"
requires-python = ">=3.11"
keywords = [
    "scheduler",
    "weighted round robin",
    "real-time",
    "tasks",
    "deadline",
    "websocket",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System",
]
dependencies = [
    "websockets",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[project.scripts]
wrrsched = "wrrsched.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["wrrsched"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]
