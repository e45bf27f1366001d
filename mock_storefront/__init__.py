"""In-memory commerce API for developing and testing the storefront client."""
