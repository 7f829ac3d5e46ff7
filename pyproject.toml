[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "xlsxcore"
version = "0.1.0"
description = "Core helpers for XLSX workbooks: cell coordinates, shared formulas, rich text, shared strings, workbook relationships and sheet truncation"
requires-python = ">=3.10"
dependencies = []
keywords = ["xlsx", "excel", "spreadsheet", "ooxml", "shared-strings", "formula", "rich-text"]
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
    "Topic :: Office/Business :: Financial :: Spreadsheet",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["xlsxcore"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
