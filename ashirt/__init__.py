"""Evidence records, export manifests and an API client for ASHIRT servers."""

__version__ = "1.2.0"