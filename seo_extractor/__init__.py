"""seo-extractor: SEO content extraction service."""

SERVICE_NAME = "seo-extractor"
__version__ = "0.1.0"
