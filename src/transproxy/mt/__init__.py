"""Machine-translation provider clients."""

from .azure import AzureTranslator

__all__ = ["AzureTranslator"]
