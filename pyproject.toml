[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "licensekit"
version = "0.1.0"
description = "Read and verify INI software licenses and build hardware identifiers"
requires-python = ">=3.10"
dependencies = []
keywords = ["license", "licensing", "hardware-id", "activation", "verification"]
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
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["licensekit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
