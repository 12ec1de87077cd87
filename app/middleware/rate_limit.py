"""
Rate limiting por endpoint usando slowapi
"""
import logging
from fastapi import Request, HTTPException
from limits import parse
from slowapi.util import get_remote_address

logger = logging.getLogger(__name__)

def apply_rate_limit(request: Request, limit: str) -> None:
    """
    Aplica el límite indicado (p. ej. "10/minute") a la IP del cliente,
    contando por endpoint.

    Si el limiter no está configurado (por ejemplo, en tests), no hace nada.
    """
    limiter = getattr(request.app.state, "limiter", None)
    if limiter is None:
        return

    key = get_remote_address(request)
    # limiter.limiter es la estrategia de `limits` que usa slowapi por debajo
    if not limiter.limiter.hit(parse(limit), request.url.path, key):
        logger.warning("Rate limit %s superado por %s en %s", limit, key, request.url.path)
        raise HTTPException(
            status_code=429,
            detail=f"Demasiadas solicitudes. Límite: {limit}. Intenta más tarde."
        )
