[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "merchlib"
version = "0.1.0"
description = "Server-side helpers: fixed-point decimals, UUIDs, AES, signing, key locks, queues and worker pools, caching, HTTP wrappers, logging and Markdown rendering."
requires-python = ">=3.10"
keywords = ["decimal", "uuid", "aes", "signing", "keylock", "queue", "markdown", "utilities"]
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
    "Topic :: Software Development :: Libraries",
    "Typing :: Typed",
]
dependencies = [
    "cryptography",
    "psutil",
    "requests",
    "markdown-it-py",
    "pygments",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[tool.hatch.build.targets.wheel]
packages = ["merchlib"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
ignore_missing_imports = true
