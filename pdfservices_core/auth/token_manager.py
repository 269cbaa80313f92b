"""
Access token acquisition and caching.

Service principal credentials use the OAuth client-credentials grant on the
IMS token endpoint. Service account credentials sign a short-lived RS256 JWT
and exchange it for an access token. Tokens are cached until shortly before
they expire.
"""

from __future__ import annotations

import asyncio
import time
from typing import Callable

import httpx
import jwt
from loguru import logger

from pdfservices_core.auth.credentials import Credentials, ServiceAccountCredentials
from pdfservices_core.config import IMS_JWT_EXCHANGE_ENDPOINT, IMS_TOKEN_ENDPOINT
from pdfservices_core.runtime.context import RunContext
from pdfservices_core.runtime.errors import AuthError, ErrorCode, ServiceError
from pdfservices_core.runtime.http_client import ServiceHttpClient

OAUTH_SCOPE = "openid,AdobeID,DCAPI"
JWT_METASCOPE = "ent_documentcloud_sdk"
JWT_LIFETIME_SECONDS = 300


def _ims_base(endpoint: str) -> str:
    url = httpx.URL(endpoint)
    return f"{url.scheme}://{url.netloc.decode()}"


class TokenManager:
    """Fetches and caches bearer tokens for one set of credentials.

    Tokens are refreshed ``expiry_buffer`` seconds before they expire so a
    long job never starts with a token about to lapse.
    """

    def __init__(
        self,
        credentials: Credentials,
        http: ServiceHttpClient,
        ims_endpoint: str = IMS_TOKEN_ENDPOINT,
        jwt_exchange_endpoint: str = IMS_JWT_EXCHANGE_ENDPOINT,
        expiry_buffer: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize the token manager.

        Args:
            credentials: Service principal or service account credentials.
            http: HTTP client used for the token calls.
            ims_endpoint: OAuth token endpoint.
            jwt_exchange_endpoint: JWT exchange endpoint for service accounts.
            expiry_buffer: Seconds before expiry at which a token is renewed.
            clock: Monotonic clock, injectable for tests.
        """
        self.credentials = credentials
        self.http = http
        self.ims_endpoint = ims_endpoint
        self.jwt_exchange_endpoint = jwt_exchange_endpoint
        self.expiry_buffer = expiry_buffer
        self._clock = clock

        self._access_token: str | None = None
        self._expires_at: float = 0.0
        self._lock = asyncio.Lock()

    @property
    def client_id(self) -> str:
        return self.credentials.client_id

    def _is_fresh(self) -> bool:
        if self._access_token is None:
            return False
        return self._expires_at - self._clock() > self.expiry_buffer

    def invalidate(self) -> None:
        """Drop the cached token; the next call fetches a new one."""
        self._access_token = None
        self._expires_at = 0.0

    async def get_token(self, context: RunContext) -> str:
        """Return a valid access token, fetching one if needed.

        Raises:
            AuthError: If the token endpoint rejects the credentials.
            TransportError: If the token endpoint cannot be reached.
        """
        async with self._lock:
            if self._is_fresh():
                return self._access_token  # type: ignore[return-value]

            if isinstance(self.credentials, ServiceAccountCredentials):
                token, expires_in = await self._exchange_jwt(self.credentials, context)
            else:
                token, expires_in = await self._client_credentials(context)

            self._access_token = token
            self._expires_at = self._clock() + expires_in
            logger.debug(f"{context.log_prefix} Access token acquired (expires in {expires_in:.0f}s)")
            return token

    async def _client_credentials(self, context: RunContext) -> tuple[str, float]:
        data = {
            "grant_type": "client_credentials",
            "client_id": self.credentials.client_id,
            "client_secret": self.credentials.client_secret,
            "scope": OAUTH_SCOPE,
        }
        body = await self._post_token_request(self.ims_endpoint, data, context)
        # expires_in is in seconds for the v3 token endpoint
        return self._read_token(body), float(body.get("expires_in", 3600))

    def build_jwt(self, credentials: ServiceAccountCredentials, now: float | None = None) -> str:
        """Sign the JWT a service account exchanges for an access token."""
        issued = int(now if now is not None else time.time())
        ims = _ims_base(self.jwt_exchange_endpoint)
        claims = {
            "exp": issued + JWT_LIFETIME_SECONDS,
            "iss": credentials.organization_id,
            "sub": credentials.technical_account_id,
            "aud": f"{ims}/c/{credentials.client_id}",
            f"{ims}/s/{JWT_METASCOPE}": True,
        }
        try:
            return jwt.encode(claims, credentials.private_key, algorithm="RS256")
        except (ValueError, TypeError, jwt.PyJWTError) as e:
            raise AuthError(
                message_safe="Service account private key is not a valid RSA key",
                code=ErrorCode.MISSING_CREDENTIALS,
                message_debug=str(e),
                cause=e,
            ) from e

    async def _exchange_jwt(
        self, credentials: ServiceAccountCredentials, context: RunContext
    ) -> tuple[str, float]:
        data = {
            "client_id": credentials.client_id,
            "client_secret": credentials.client_secret,
            "jwt_token": self.build_jwt(credentials),
        }
        body = await self._post_token_request(self.jwt_exchange_endpoint, data, context)
        # The exchange endpoint reports expires_in in milliseconds
        return self._read_token(body), float(body.get("expires_in", 86_400_000)) / 1000.0

    async def _post_token_request(
        self, endpoint: str, data: dict[str, str], context: RunContext
    ) -> dict:
        try:
            response = await self.http.post(endpoint, context, data=data)
        except ServiceError as e:
            if e.retryable:
                raise
            # IMS answers bad credentials with 400 invalid_client
            raise AuthError(
                message_safe=f"Token request rejected: {e.message_safe}",
                code=ErrorCode.UNAUTHORIZED,
                message_debug=e.message_debug,
                cause=e,
            ) from e

        try:
            body = response.json()
        except ValueError as e:
            raise AuthError(
                message_safe="Token endpoint returned a malformed response",
                message_debug=response.text[:500],
                cause=e,
            ) from e
        if not isinstance(body, dict):
            raise AuthError(message_safe="Token endpoint returned a malformed response")
        return body

    @staticmethod
    def _read_token(body: dict) -> str:
        token = body.get("access_token")
        if not token:
            raise AuthError(message_safe="Token endpoint response has no access_token")
        return token
