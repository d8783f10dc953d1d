[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "saedori"
version = "0.1.0"
description = "Dashboard API server for daily keywords, music charts, news and realtime search trends"
requires-python = ">=3.11"
keywords = ["dashboard", "api", "flask", "mongodb", "crawler", "keywords", "trends"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Web Environment",
    "Framework :: Flask",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]
dependencies = [
    "flask>=2.3",
    "pymongo>=4.2",
    "requests>=2.28",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
]

[project.scripts]
saedori = "saedori.app:main"

[tool.hatch.build.targets.wheel]
packages = ["saedori"]

[tool.hatch.build.targets.sdist]
include = ["saedori", "tests", "README.md"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.ruff.lint]
select = ["E", "F", "I", "B", "UP"]

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
ignore_missing_imports = true
