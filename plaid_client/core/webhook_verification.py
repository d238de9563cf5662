"""Verification of the signed ``Plaid-Verification`` header sent with webhooks."""
import hashlib
import hmac
import json
import logging
import time
from typing import TYPE_CHECKING, Any, Dict, Union

import jwt

from .errors import WebhookVerificationError

if TYPE_CHECKING:
    from .client import PlaidClient

logger = logging.getLogger(__name__)

WEBHOOK_JWT_ALG = "ES256"
DEFAULT_MAX_AGE_SECONDS = 5 * 60


async def verify_webhook(
    client: "PlaidClient",
    body: Union[bytes, str],
    signed_jwt: str,
    max_age: int = DEFAULT_MAX_AGE_SECONDS,
) -> Dict[str, Any]:
    """
    Check that a webhook body was sent by Plaid and is recent.

    ``client`` is used to fetch the verification key named by the
    JWT's ``kid``. Returns the decoded claims; raises WebhookVerificationError on
    any failed check. Errors from the key lookup itself propagate unchanged.
    """
    try:
        header = jwt.get_unverified_header(signed_jwt)
    except jwt.PyJWTError as exc:
        raise WebhookVerificationError(f"Malformed webhook JWT: {exc}") from exc

    alg = header.get("alg")
    if alg != WEBHOOK_JWT_ALG:
        raise WebhookVerificationError(f"Unexpected webhook JWT algorithm {alg!r}")
    kid = header.get("kid")
    if not kid:
        raise WebhookVerificationError("Webhook JWT header is missing 'kid'.")

    key_response = await client.get_webhook_verification_key(kid)
    key = key_response.key
    if key.expired_at is not None:
        raise WebhookVerificationError(f"Verification key {kid} expired at {key.expired_at}")

    try:
        public_key = jwt.algorithms.ECAlgorithm.from_jwk(json.dumps(key.model_dump(include={"kty", "crv", "x", "y"})))
    except (jwt.PyJWTError, ValueError) as exc:
        logger.warning("Verification key %s is unusable: %s", kid, exc)
        raise WebhookVerificationError(f"Unusable verification key {kid}: {exc}") from exc

    try:
        claims = jwt.decode(
            signed_jwt,
            public_key,
            algorithms=[WEBHOOK_JWT_ALG],
            options={"require": ["iat"]},
        )
    except jwt.PyJWTError as exc:
        logger.warning("Webhook JWT signature check failed (kid=%s): %s", kid, exc)
        raise WebhookVerificationError(f"Invalid webhook signature: {exc}") from exc

    if time.time() - claims["iat"] > max_age:
        raise WebhookVerificationError("Webhook JWT is older than %d seconds" % max_age)

    if isinstance(body, str):
        body = body.encode("utf-8")
    body_hash = hashlib.sha256(body).hexdigest()
    if not hmac.compare_digest(body_hash, str(claims.get("request_body_sha256", ""))):
        raise WebhookVerificationError("Webhook body does not match the signed hash.")

    logger.info("Verified webhook signed with key %s", kid)
    return claims
