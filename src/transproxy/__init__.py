"""Serverless proxy for the Azure Translator text API."""

from .version import __version__

__all__ = ["__version__"]
