"""
XONIGHT storefront client core.

Cart, order and wishlist stores kept in step with the commerce API,
with device storage as backup.
"""

from .context import StorefrontContext

__all__ = ["StorefrontContext"]
