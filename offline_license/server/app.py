"""HTTP issuing service."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from ..config import IssuerConfig
from ..issuer import DEFAULT_EXPIRES_IN_DAYS, DEFAULT_PLAN, LicenseIssuer
from ..token.signer import LicenseSigner
from ..token.verifier import LicenseVerifier

logger = logging.getLogger(__name__)

ENDPOINTS = (
    "POST /generate-license",
    "POST /verify-license",
    "POST /gumroad-webhook",
    "GET  /health",
)


class GenerateLicenseRequest(BaseModel):
    email: str
    plan: str = DEFAULT_PLAN
    expires_days: int = DEFAULT_EXPIRES_IN_DAYS


class VerifyLicenseRequest(BaseModel):
    token: str


class PurchaseWebhook(BaseModel):
    email: str
    sale_id: Optional[str] = None


def create_app(config: IssuerConfig, *, issuer: Optional[LicenseIssuer] = None) -> FastAPI:
    """Build the service. Raises ``KeyConfigurationError`` on a bad signing key."""
    if issuer is None:
        issuer = LicenseIssuer(LicenseSigner.from_base64(config.private_key), product_id=config.product_id)
    verifier = LicenseVerifier(issuer.signer.public_key)

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        logger.info("License server for product %s running on %s:%s", config.product_id, config.host, config.port)
        for endpoint in ENDPOINTS:
            logger.info("  %s", endpoint)
        yield

    app = FastAPI(title="Offline License Server", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health() -> Dict[str, Any]:
        return {"status": "ok", "product": issuer.product_id}

    @app.post("/generate-license")
    async def generate_license(request: GenerateLicenseRequest) -> Dict[str, Any]:
        issued = issuer.issue(request.email, plan=request.plan, expires_in_days=request.expires_days)
        return {"success": True, "token": issued.token, "payload": issued.payload.to_dict()}

    @app.post("/verify-license")
    async def verify_license(request: VerifyLicenseRequest) -> Dict[str, Any]:
        return verifier.verify(request.token).to_dict()

    @app.post("/gumroad-webhook")
    async def gumroad_webhook(webhook: PurchaseWebhook) -> Dict[str, Any]:
        issued = issuer.issue_for_purchase(webhook.email, sale_id=webhook.sale_id)
        return {"success": True, "token": issued.token}

    return app
