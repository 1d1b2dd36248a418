[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gobuildtools"
version = "0.1.0"
description = "Build helpers for Go multi-module repositories: semantic convention code generation, semver utilities and module change detection"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "go",
    "semver",
    "semantic-conventions",
    "code-generation",
    "build-tools",
    "git",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Build Tools",
    "Topic :: Software Development :: Code Generators",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
semconvgen = "gobuildtools.generator:main"

[tool.hatch.build.targets.wheel]
packages = ["gobuildtools"]

[tool.pytest.ini_options]
addopts = "-ra"
