# app/services/animal/create_animal.py
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
import logging

from ...repositories.animals import AnimalRepository
from ...result import Failure, Result, Success
from ...schemas.animal import AnimalGender, AnimalStatus, AnimalType
from ...storage import PictureStorage

logger = logging.getLogger(__name__)


@dataclass
class CreateAnimalInput:
    name: str
    type: AnimalType
    gender: AnimalGender
    race: str
    user_id: str
    description: Optional[str] = None
    pictures: List[bytes] = field(default_factory=list)


class CreateAnimalService:
    """
    Da de alta un animal en adopción.

    Fallos esperados (se devuelven como ``Failure``):
    - no hay usuario que actúe
    - demasiadas fotos o alguna foto vacía
    """

    def __init__(self, repository: AnimalRepository, storage: PictureStorage, max_pictures: int = 5):
        self.repository = repository
        self.storage = storage
        self.max_pictures = max_pictures

    async def execute(self, data: CreateAnimalInput) -> Result[Dict[str, Any], Dict[str, str]]:
        if not data.user_id:
            return Failure({"message": "Usuario no autenticado."})
        if len(data.pictures) > self.max_pictures:
            return Failure({"message": f"Máximo {self.max_pictures} fotos por animal."})
        if any(not content for content in data.pictures):
            return Failure({"message": "Las fotos no pueden estar vacías."})

        urls: List[str] = []
        try:
            # secuencial para conservar el orden de subida
            for content in data.pictures:
                urls.append(await self.storage.save(content))
            created = await self.repository.insert(self._build_doc(data, urls))
        except Exception:
            # sin listado no deben quedar fotos huérfanas en disco
            self.storage.delete_all(urls)
            raise

        logger.info("Animal %s creado por %s con %d fotos", created.get("id"), data.user_id, len(urls))
        return Success(created)

    def _build_doc(self, data: CreateAnimalInput, urls: List[str]) -> Dict[str, Any]:
        now = datetime.now(timezone.utc)
        return {
            "name": data.name,
            "description": data.description,
            "type": AnimalType(data.type).value,
            "gender": AnimalGender(data.gender).value,
            "race": data.race,
            "owner_user_id": data.user_id,  # lo pone el backend
            "pictures": urls,
            "status": AnimalStatus.AVAILABLE.value,
            "created_at": now,
            "updated_at": now,
        }
