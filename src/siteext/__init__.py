"""siteext: site customization layer for a hot-reloading host platform."""

__version__ = "0.3.0"
