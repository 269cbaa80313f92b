"""Credentials and access tokens for the PDF Services API."""

from .credentials import (
    Credentials,
    ServiceAccountCredentials,
    ServicePrincipalCredentials,
    credentials_from_file,
    load_credentials,
)
from .token_manager import TokenManager

__all__ = [
    "Credentials",
    "ServiceAccountCredentials",
    "ServicePrincipalCredentials",
    "TokenManager",
    "credentials_from_file",
    "load_credentials",
]
