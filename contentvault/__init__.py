"""Content Vault: extract original article content from raw HTML."""

__version__ = "1.0.0"
