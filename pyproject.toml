[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tinyrt"
version = "0.1.0"
description = "C-style string and number helpers, a compact printf-style formatter and a small threading demo"
requires-python = ">=3.10"
dependencies = []
keywords = ["printf", "formatting", "strtof", "atoi", "strcmp", "threading"]
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
    "Topic :: Text Processing :: General",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
tinyrt-demo = "tinyrt.demo:main"

[tool.hatch.build.targets.wheel]
packages = ["tinyrt"]

[tool.pytest.ini_options]
addopts = "-ra"
