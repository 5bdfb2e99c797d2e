"""Data model for visual graph editors: geometry, attributes, nodes, ports, polyline edges, undo and transforms."""

__version__ = "0.1.0"