"""Bus Finder - directional bus search over a route catalog, served over MCP."""

__version__ = "0.1.0"
