# app/services/animal/update_animal_status.py
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict
import logging

from ...repositories.animals import AnimalRepository
from ...result import Failure, Result, Success
from ...schemas.animal import AnimalStatus

logger = logging.getLogger(__name__)


@dataclass
class UpdateAnimalStatusInput:
    id: str
    status: Any
    user_id: str


class UpdateAnimalStatusService:
    """
    Cambia el estado de un animal. Solo el propietario puede hacerlo.

    No hay tabla de transiciones: cualquier estado válido puede seguir a otro.
    """

    def __init__(self, repository: AnimalRepository):
        self.repository = repository

    async def execute(self, data: UpdateAnimalStatusInput) -> Result[Dict[str, Any], Dict[str, str]]:
        if not data.user_id:
            return Failure({"message": "Usuario no autenticado."})
        try:
            new = AnimalStatus(data.status)
        except (ValueError, TypeError):
            allowed = ", ".join(s.value for s in AnimalStatus)
            return Failure({"message": f"Estado inválido. Valores permitidos: {allowed}."})

        animal = await self.repository.find_by_id(data.id)
        if not animal:
            return Failure({"message": "Animal no encontrado."})
        if str(animal.get("owner_user_id")) != data.user_id:
            return Failure({"message": "No eres el propietario de este animal."})

        if animal.get("status") == new.value:
            return Success(animal)

        updated = await self.repository.update_status(data.id, new.value, datetime.now(timezone.utc))
        if not updated:
            return Failure({"message": "Animal no encontrado."})
        logger.info("Animal %s: %s -> %s", data.id, animal.get("status"), new.value)
        return Success(updated)
