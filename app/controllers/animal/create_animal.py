# app/controllers/animal/create_animal.py
import logging
from typing import Optional

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from starlette.datastructures import UploadFile

from ...schemas.animal import validate_animal_create
from ...services.animal.create_animal import CreateAnimalInput, CreateAnimalService
from ...utils import ServiceTimeout, run_with_deadline

logger = logging.getLogger(__name__)

PICTURES_FIELD = "pictures"


class CreateAnimalController:
    def __init__(self, create_animal: CreateAnimalService, timeout: Optional[float] = None):
        self.create_animal = create_animal
        self.timeout = timeout

    async def handle(self, request: Request, user_id: Optional[str]) -> JSONResponse:
        try:
            # request.form() devuelve el UploadFile de starlette, no el de fastapi
            async with request.form() as form:
                # Los ficheros solo se extraen; su tamaño/tipo es cosa de la capa de subida
                files = [f for f in form.getlist(PICTURES_FIELD) if isinstance(f, UploadFile)]
                body = {k: v for k, v in form.multi_items() if not isinstance(v, UploadFile)}
                pictures = [await f.read() for f in files]

            validation = validate_animal_create(body)
            if validation.is_failure():
                return JSONResponse(
                    status_code=400,
                    content={"message": "Invalid input data.", "errors": validation.value},
                )
            data = validation.value

            result = await run_with_deadline(
                self.create_animal.execute(CreateAnimalInput(
                    name=data.name,
                    type=data.type,
                    gender=data.gender,
                    race=data.race,
                    description=data.description,
                    user_id=user_id or "",
                    pictures=pictures,
                )),
                timeout=self.timeout,
            )

            status_code = 400 if result.is_failure() else 201
            return JSONResponse(status_code=status_code, content=jsonable_encoder(result.value))
        except ServiceTimeout:
            logger.warning("Timeout creating animal after %ss", self.timeout)
            return JSONResponse(status_code=504, content={"error": "Service timeout."})
        except Exception:
            logger.exception("Error creating animal")
            return JSONResponse(status_code=500, content={"error": "Internal server error."})
