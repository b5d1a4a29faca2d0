"""ghacheck: audit GitHub Actions workflows for reliability and security hygiene."""

__version__ = "0.1.0"
