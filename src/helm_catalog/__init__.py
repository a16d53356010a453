"""Helm Catalog - browse and deploy charts from remote chart repositories."""

__version__ = "0.1.0"
