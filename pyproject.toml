[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "go101"
version = "1.0.0"
description = "Local web server that serves the Go 101 book pages and can render them to static files"
requires-python = ">=3.10"
keywords = ["go", "book", "web server", "wsgi", "static site"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Web Environment",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
    "Topic :: Internet :: WWW/HTTP :: WSGI :: Application",
    "Topic :: Documentation",
]
dependencies = [
    "jinja2",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
go101 = "go101.main:main"

[tool.hatch.build.targets.wheel]
packages = ["go101"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
