# app/routers/animals.py
from fastapi import APIRouter, Depends, HTTPException, Request, status
from typing import List, Optional
from motor.motor_asyncio import AsyncIOMotorDatabase

from ..db import get_db
from ..config import get_settings
from ..security import get_acting_user_id
from ..middleware.rate_limit import apply_rate_limit
from ..repositories.animals import AnimalRepository
from ..storage import PictureStorage
from ..schemas.animal import AnimalOut, AnimalStatus, AnimalType, AnimalGender
from ..services.animal.create_animal import CreateAnimalService
from ..services.animal.update_animal_status import UpdateAnimalStatusService
from ..controllers.animal.create_animal import CreateAnimalController
from ..controllers.animal.update_animal_status import UpdateAnimalStatusController

router = APIRouter()

# ---------- Dependencias ----------

async def get_animal_repository(db: AsyncIOMotorDatabase = Depends(get_db)) -> AnimalRepository:
    return AnimalRepository(db)

async def get_create_animal_service(
    repository: AnimalRepository = Depends(get_animal_repository),
) -> CreateAnimalService:
    settings = get_settings()
    return CreateAnimalService(repository, PictureStorage(settings.media_dir), settings.max_pictures)

async def get_update_animal_status_service(
    repository: AnimalRepository = Depends(get_animal_repository),
) -> UpdateAnimalStatusService:
    return UpdateAnimalStatusService(repository)

# ---------- Endpoints ----------

@router.get("", response_model=List[AnimalOut])
async def list_available_animals(
    name: Optional[str] = None,
    type: Optional[AnimalType] = None,
    gender: Optional[AnimalGender] = None,
    repository: AnimalRepository = Depends(get_animal_repository),
):
    return await repository.list(
        status=AnimalStatus.AVAILABLE.value,
        name=name,
        type=type.value if type else None,
        gender=gender.value if gender else None,
    )

@router.get("/my", response_model=List[AnimalOut])
async def my_animals(
    user_id: str = Depends(get_acting_user_id),
    repository: AnimalRepository = Depends(get_animal_repository),
):
    if not user_id:
        return []
    return await repository.list(owner_user_id=user_id)

@router.get("/{animal_id}", response_model=AnimalOut)
async def get_animal(
    animal_id: str,
    repository: AnimalRepository = Depends(get_animal_repository),
):
    animal = await repository.find_by_id(animal_id)
    if not animal:
        raise HTTPException(status_code=404, detail="Animal no encontrado")
    return animal

@router.post("", status_code=status.HTTP_201_CREATED)
async def create_animal(
    request: Request,
    user_id: str = Depends(get_acting_user_id),
    service: CreateAnimalService = Depends(get_create_animal_service),
):
    """
    Alta de un animal (multipart/form-data): campos de texto
    ``name``, ``type``, ``gender``, ``race``, ``description`` y ficheros ``pictures``.
    """
    # Rate limiting: máximo 10 altas por minuto por IP
    apply_rate_limit(request, "10/minute")
    controller = CreateAnimalController(service, timeout=get_settings().service_timeout_seconds)
    return await controller.handle(request, user_id)

@router.patch("/{animal_id}/status")
async def update_animal_status(
    animal_id: str,
    request: Request,
    user_id: str = Depends(get_acting_user_id),
    service: UpdateAnimalStatusService = Depends(get_update_animal_status_service),
):
    """Cuerpo JSON ``{"status": "..."}``; el valor lo valida el servicio."""
    controller = UpdateAnimalStatusController(service, timeout=get_settings().service_timeout_seconds)
    return await controller.handle(request, user_id)
