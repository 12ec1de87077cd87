# app/utils.py
import asyncio
from typing import Any, Awaitable, Dict, Optional, TypeVar
from bson import ObjectId
from datetime import datetime
from enum import Enum

T = TypeVar("T")

def to_id(doc: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Convierte _id -> id (str) y todos los ObjectIds a strings.
    También convierte datetime a ISO format strings y enums a su valor.
    Si doc es None, devuelve {}.
    """
    if doc is None:
        return {}
    d = dict(doc)

    if "_id" in d:
        d["id"] = str(d.pop("_id"))

    for key, value in d.items():
        if isinstance(value, ObjectId):
            d[key] = str(value)
        elif isinstance(value, datetime):
            d[key] = value.isoformat()
        elif isinstance(value, Enum):
            d[key] = value.value
        elif isinstance(value, dict):
            d[key] = to_id(value)
        elif isinstance(value, list):
            d[key] = [
                str(item) if isinstance(item, ObjectId)
                else item.isoformat() if isinstance(item, datetime)
                else to_id(item) if isinstance(item, dict)
                else item
                for item in value
            ]

    return d

def parse_object_id(value: Any) -> Optional[ObjectId]:
    """Devuelve el ObjectId o None si el valor no es un id válido."""
    if not isinstance(value, str) or not ObjectId.is_valid(value):
        return None
    return ObjectId(value)

# ==================== Plazos de servicio ====================

class ServiceTimeout(Exception):
    """El servicio no respondió dentro del plazo configurado."""

async def run_with_deadline(coro: Awaitable[T], timeout: Optional[float]) -> T:
    """
    Espera ``coro`` como mucho ``timeout`` segundos (None = sin límite).

    Solo el vencimiento del plazo se traduce en ``ServiceTimeout``; cualquier
    excepción del propio servicio (incluido un ``TimeoutError`` interno) se
    propaga tal cual.
    """
    task = asyncio.ensure_future(coro)
    try:
        done, _ = await asyncio.wait({task}, timeout=timeout)
    except asyncio.CancelledError:
        task.cancel()
        raise
    if not done:
        task.cancel()
        raise ServiceTimeout(timeout)
    return task.result()
