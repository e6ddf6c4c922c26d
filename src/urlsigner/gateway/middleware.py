"""ASGI middleware that rejects requests without a valid signed-URL token."""

from __future__ import annotations

from typing import Iterable

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from urlsigner.common.errors import ErrorCode, error_response
from urlsigner.common.logging import get_logger
from urlsigner.common.settings import Settings, get_settings
from urlsigner.gateway.verifier import VerificationOutcome, Verifier
from urlsigner.signer.clock import Clock

logger = get_logger(__name__)

_REJECTIONS = {
    VerificationOutcome.MISSING: (ErrorCode.MISSING_TOKEN, "Signed URL token required"),
    VerificationOutcome.MALFORMED: (ErrorCode.MALFORMED_TOKEN, "Malformed signed URL token"),
    VerificationOutcome.EXPIRED: (ErrorCode.EXPIRED, "Signed URL expired"),
    VerificationOutcome.BAD_SIGNATURE: (ErrorCode.INVALID_SIGNATURE, "Invalid signed URL token"),
}


class SignedUrlMiddleware(BaseHTTPMiddleware):
    """Verify the token query parameter on every non-exempt request."""

    def __init__(
        self,
        app: ASGIApp,
        verifier: Verifier,
        exempt_paths: Iterable[str] = (),
    ) -> None:
        super().__init__(app)
        self._verifier = verifier
        self._exempt_paths = set(exempt_paths)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.url.path in self._exempt_paths:
            return await call_next(request)

        raw_query = request.scope.get("query_string", b"").decode("latin-1")
        result = self._verifier.verify_request(request.url.path, raw_query)

        if not result.accepted:
            code, message = _REJECTIONS[result.outcome]
            logger.info(
                "Signed URL rejected",
                path=request.url.path,
                outcome=result.outcome.value,
            )
            return error_response(code, message, status_code=403)

        request.state.signed_timestamp = result.timestamp
        return await call_next(request)


def create_signed_url_middleware(
    settings: Settings | None = None,
    clock: Clock | None = None,
) -> type[SignedUrlMiddleware]:
    """
    Factory function to create signed URL middleware from settings.

    Args:
        settings: Application settings (defaults to the cached settings)
        clock: Clock used for the freshness check

    Returns:
        Configured middleware class

    Raises:
        SignerConfigError: If no secret is configured
    """
    settings = settings or get_settings()
    verifier = Verifier.from_config(
        settings.signer_config(),
        max_skew_seconds=settings.max_skew_seconds,
        clock=clock,
    )
    exempt_paths = settings.gateway_exempt_paths

    class ConfiguredSignedUrlMiddleware(SignedUrlMiddleware):
        def __init__(self, app: ASGIApp) -> None:
            super().__init__(app, verifier=verifier, exempt_paths=exempt_paths)

    return ConfiguredSignedUrlMiddleware
