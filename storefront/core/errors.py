"""Storefront client exceptions"""

from typing import Optional


class StorefrontError(Exception):
    """Base exception for storefront client errors"""
    pass


class StorageError(StorefrontError):
    """Device key-value store errors"""
    pass


class OrderCreationError(StorefrontError):
    """The order API refused to create an order"""
    pass


class CheckoutError(StorefrontError):
    """A checkout precondition was not met"""
    pass


class AddressValidationError(CheckoutError):
    """Delivery address failed client-side validation"""

    def __init__(self, errors: dict[str, str], message: Optional[str] = None):
        super().__init__(message or "Please fill all required fields")
        self.errors = errors
