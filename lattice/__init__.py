"""Render tree, layout style properties, hit testing, pointer dispatch and a development-server client."""

__version__ = "0.1.0"