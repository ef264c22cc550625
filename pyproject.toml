[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "postboard"
version = "0.1.0"
description = "A small JSON web service for users, posts and comments backed by SQLite"
requires-python = ">=3.10"
keywords = ["flask", "rest", "sqlite", "posts", "comments", "web service"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Web Environment",
    "Framework :: Flask",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: Dynamic Content",
    "Topic :: Database",
]
dependencies = [
    "flask>=2.2",
    "python-dotenv>=1.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
]

[project.scripts]
postboard = "postboard.app:main"
postboard-migrate = "postboard.schema:main"

[tool.hatch.build.targets.wheel]
packages = ["postboard"]

[tool.hatch.build.targets.sdist]
include = ["postboard", "tests"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
check_untyped_defs = true
