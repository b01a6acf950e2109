"""A web server for the Go 101 book pages, with a static site generator."""

__version__ = "1.0.0"