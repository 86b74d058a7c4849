[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ppmhuff"
version = "1.0.0"
description = "Text compressor combining PPM context modelling with adaptive Huffman codes"
requires-python = ">=3.10"
dependencies = []
keywords = ["compression", "ppm", "huffman", "text", "context-modelling"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Archiving :: Compression",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
ppmhuff = "ppmhuff.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["ppmhuff"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
