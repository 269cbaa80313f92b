"""
Credential models for the PDF Services API.

Two kinds are supported:
- ServicePrincipalCredentials: OAuth server-to-server client id/secret.
- ServiceAccountCredentials: legacy JWT service account with a private key.

Credentials are built once per run from the environment or from the JSON file
downloaded from the developer console. They are never persisted.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Union

from pydantic import Field

from pdfservices_core.config import Settings
from pdfservices_core.runtime.errors import AuthError, ErrorCode, ValidationError
from pdfservices_core.validation import ValidatedModel


class ServicePrincipalCredentials(ValidatedModel):
    """OAuth server-to-server credentials.

    Attributes:
        client_id: API key issued for the project.
        client_secret: Secret paired with the client id.
        organization_id: Optional organization id, informational only.
    """

    client_id: str = Field(min_length=1)
    client_secret: str = Field(min_length=1, repr=False)
    organization_id: str | None = None


class ServiceAccountCredentials(ValidatedModel):
    """JWT service account credentials.

    Attributes:
        client_id: API key issued for the project.
        client_secret: Secret paired with the client id.
        technical_account_id: Technical account the JWT is issued for.
        organization_id: Organization the account belongs to.
        private_key: PEM encoded RSA private key used to sign the JWT.
    """

    client_id: str = Field(min_length=1)
    client_secret: str = Field(min_length=1, repr=False)
    technical_account_id: str = Field(min_length=1)
    organization_id: str = Field(min_length=1)
    private_key: str = Field(min_length=1, repr=False)


Credentials = Union[ServicePrincipalCredentials, ServiceAccountCredentials]


def _credentials_from_json(data: dict[str, Any], base_dir: Path) -> Credentials:
    client = data.get("client_credentials") or {}
    client_id = client.get("client_id", "")
    client_secret = client.get("client_secret", "")

    account = data.get("service_account_credentials")
    if account:
        key_file = account.get("private_key_file")
        if not key_file:
            raise ValidationError.missing("private_key_file", "ServiceAccountCredentials")
        key_path = Path(key_file)
        if not key_path.is_absolute():
            key_path = base_dir / key_path
        try:
            private_key = key_path.read_text()
        except OSError as e:
            raise AuthError(
                message_safe=f"Cannot read private key file {key_path.name}",
                code=ErrorCode.MISSING_CREDENTIALS,
                message_debug=str(e),
                cause=e,
            ) from e
        return ServiceAccountCredentials(
            client_id=client_id,
            client_secret=client_secret,
            technical_account_id=account.get("account_id", ""),
            organization_id=account.get("organization_id", ""),
            private_key=private_key,
        )

    principal = data.get("service_principal_credentials") or {}
    return ServicePrincipalCredentials(
        client_id=client_id,
        client_secret=client_secret,
        organization_id=principal.get("organization_id"),
    )


def credentials_from_file(path: str | Path) -> Credentials:
    """Load credentials from a pdfservices-api-credentials.json file.

    The private key path of a service account file is resolved relative to
    the JSON file.

    Args:
        path: Path to the credentials JSON file.

    Returns:
        The parsed credentials.

    Raises:
        AuthError: If the file cannot be read or is not valid JSON.
        ValidationError: If required fields are missing.
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text())
    except (OSError, json.JSONDecodeError) as e:
        raise AuthError(
            message_safe=f"Cannot load credentials file {path.name}",
            code=ErrorCode.MISSING_CREDENTIALS,
            message_debug=str(e),
            cause=e,
        ) from e
    if not isinstance(data, dict):
        raise AuthError(
            message_safe=f"Credentials file {path.name} must contain a JSON object",
            code=ErrorCode.MISSING_CREDENTIALS,
        )
    return _credentials_from_json(data, path.parent)


def load_credentials(source: Settings) -> Credentials:
    """Build credentials from settings.

    A configured credentials file wins over the client id/secret variables.

    Raises:
        AuthError: If no credentials are configured.
    """
    if source.PDF_SERVICES_CREDENTIALS_FILE:
        return credentials_from_file(source.PDF_SERVICES_CREDENTIALS_FILE)

    if not source.PDF_SERVICES_CLIENT_ID or not source.PDF_SERVICES_CLIENT_SECRET:
        raise AuthError(
            message_safe=(
                "PDF_SERVICES_CLIENT_ID and PDF_SERVICES_CLIENT_SECRET must be set"
            ),
            code=ErrorCode.MISSING_CREDENTIALS,
        )

    return ServicePrincipalCredentials(
        client_id=source.PDF_SERVICES_CLIENT_ID,
        client_secret=source.PDF_SERVICES_CLIENT_SECRET,
    )
