"""
Blockfrost datasource package.

Higher-level services should import the client from this package rather than
from individual submodules.
"""

from .client import AUTH_HEADER, BlockfrostClient

__all__ = ["AUTH_HEADER", "BlockfrostClient"]
