"""Building blocks for OCI registry content: descriptors, stores, caching, graphs, trees and tracing."""

__version__ = "1.2.0b1"