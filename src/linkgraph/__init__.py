"""linkgraph: backlinks and link graph for a markdown blog."""

__version__ = "0.1.0"
