[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "courseportal"
version = "0.1.0"
description = "A small multi-user course registration server with file-backed student, faculty and course records"
requires-python = ">=3.10"
dependencies = []
keywords = ["course registration", "education", "tcp server", "records", "enrollment"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
courseportal-server = "courseportal.server:main"

[tool.hatch.build.targets.wheel]
packages = ["courseportal"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
