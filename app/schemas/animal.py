from pydantic import BaseModel, Field, ValidationError
from typing import Any, Dict, List, Optional
from enum import Enum
from datetime import datetime

from ..result import Failure, Result, Success

class AnimalType(str, Enum):
    DOG = "DOG"
    CAT = "CAT"
    BIRD = "BIRD"
    OTHER = "OTHER"

class AnimalGender(str, Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"

class AnimalStatus(str, Enum):
    AVAILABLE = "AVAILABLE"
    UNAVAILABLE = "UNAVAILABLE"
    ADOPTED = "ADOPTED"

class AnimalCreate(BaseModel):
    name: str = Field(..., min_length=2)
    description: Optional[str] = None
    type: AnimalType
    gender: AnimalGender
    race: str = Field(..., min_length=1)

class AnimalOut(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    type: AnimalType
    gender: AnimalGender
    race: str
    owner_user_id: str
    pictures: List[str] = []
    status: AnimalStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

FieldErrors = Dict[str, List[str]]

def validate_animal_create(data: Any) -> Result[AnimalCreate, FieldErrors]:
    """
    Valida el cuerpo de creación de un animal.

    Nunca lanza por datos mal formados: devuelve ``Success`` con el modelo
    normalizado o ``Failure`` con los errores agrupados por campo
    (``{"name": ["String should have at least 2 characters"]}``).

    ``_root`` no es un campo real: agrupa los errores que afectan a la
    entrada completa (p. ej. cuando no es un objeto).
    """
    if not isinstance(data, dict):
        return Failure({"_root": ["Expected an object"]})
    try:
        return Success(AnimalCreate.model_validate(data))
    except ValidationError as exc:
        errors: FieldErrors = {}
        for err in exc.errors():
            field = str(err["loc"][0]) if err["loc"] else "_root"
            errors.setdefault(field, []).append(err["msg"])
        return Failure(errors)
