from fastapi import Depends

from app.core.config import settings
from app.services.eightk_digest import EightKDigestService
from app.services.sec_client import SECClient


def get_sec_client() -> SECClient:
    """
    Build a fresh SEC client for each request

    Nothing is shared between requests, including the rate-limit clock.
    """
    return SECClient.from_settings(settings)


def get_digest_service(
    client: SECClient = Depends(get_sec_client)
) -> EightKDigestService:
    return EightKDigestService(client)
