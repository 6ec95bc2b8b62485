"""Stockroom: audited product catalog service.

Every mutation of the catalog is paired with an append-only audit record,
and the bundled client keeps a local mirror of both in sync with the server.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
