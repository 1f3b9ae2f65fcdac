"""Capability token domain models."""

from .models import AccessGrant, IssuedToken, TokenRecord

__all__ = ["AccessGrant", "IssuedToken", "TokenRecord"]
