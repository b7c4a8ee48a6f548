"""iconsmith: structure-preserving icon container files and color variants."""

__version__ = "0.1.0"
