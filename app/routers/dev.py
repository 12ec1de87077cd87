# app/routers/dev.py
# Endpoint de desarrollo para crear datos de prueba
from fastapi import APIRouter, Depends
from datetime import datetime, timezone

from ..repositories.animals import AnimalRepository
from ..schemas.animal import AnimalStatus
from ..security import create_access_token
from .animals import get_animal_repository

router = APIRouter()

DEV_OWNER_ID = "dev-owner"

SAMPLE_ANIMALS = [
    {"name": "Paçoca", "type": "DOG", "gender": "FEMALE", "race": "SRD",
     "description": "Muy lista y juguetona. Le encanta correr detrás de pelotas."},
    {"name": "Miau", "type": "CAT", "gender": "MALE", "race": "Siamés",
     "description": "Tranquilo, ideal para piso."},
    {"name": "Kiwi", "type": "BIRD", "gender": "MALE", "race": "Periquito"},
]

@router.post("/seed-data")
async def seed_data(repository: AnimalRepository = Depends(get_animal_repository)):
    """
    Crea animales de prueba a nombre de un usuario de desarrollo y devuelve
    un token para actuar como él. Solo para desarrollo.
    """
    created = []
    for sample in SAMPLE_ANIMALS:
        now = datetime.now(timezone.utc)
        doc = {
            "description": None,
            **sample,
            "owner_user_id": DEV_OWNER_ID,
            "pictures": [],
            "status": AnimalStatus.AVAILABLE.value,
            "created_at": now,
            "updated_at": now,
        }
        created.append(await repository.insert(doc))
    return {
        "animals": created,
        "owner_user_id": DEV_OWNER_ID,
        "access_token": create_access_token(DEV_OWNER_ID),
    }
