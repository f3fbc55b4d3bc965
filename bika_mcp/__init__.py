"""MCP server exposing the Bika.ai OpenAPI as tools and resources."""

__version__ = "0.1.0"
