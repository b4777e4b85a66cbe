[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "crunchbox"
version = "0.1.0"
description = "Run-length and Huffman compression for text files and BMP images"
requires-python = ">=3.10"
dependencies = []
keywords = ["compression", "huffman", "rle", "run-length", "bmp"]
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
test = ["pytest", "hypothesis"]

[project.scripts]
crunchbox = "crunchbox.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["crunchbox"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true
