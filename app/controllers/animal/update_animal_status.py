# app/controllers/animal/update_animal_status.py
import json
import logging
from typing import Any, Dict, Optional

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from ...services.animal.update_animal_status import UpdateAnimalStatusInput, UpdateAnimalStatusService
from ...utils import ServiceTimeout, run_with_deadline

logger = logging.getLogger(__name__)


async def _read_body(request: Request) -> Dict[str, Any]:
    raw = await request.body()
    if not raw:
        return {}
    try:
        body = json.loads(raw)
    except ValueError:
        logger.debug("Cuerpo no JSON en cambio de estado")
        return {}
    return body if isinstance(body, dict) else {}


class UpdateAnimalStatusController:
    def __init__(self, update_animal_status: UpdateAnimalStatusService, timeout: Optional[float] = None):
        self.update_animal_status = update_animal_status
        self.timeout = timeout

    async def handle(self, request: Request, user_id: Optional[str]) -> JSONResponse:
        try:
            animal_id = request.path_params.get("animal_id", "")
            body = await _read_body(request)

            # el estado no se valida aquí: lo decide el servicio
            result = await run_with_deadline(
                self.update_animal_status.execute(UpdateAnimalStatusInput(
                    id=animal_id,
                    status=body.get("status"),
                    user_id=user_id or "",
                )),
                timeout=self.timeout,
            )

            status_code = 400 if result.is_failure() else 200
            return JSONResponse(status_code=status_code, content=jsonable_encoder(result.value))
        except ServiceTimeout:
            logger.warning("Timeout updating animal status after %ss", self.timeout)
            return JSONResponse(status_code=504, content={"error": "Service timeout."})
        except Exception:
            logger.exception("Error updating animal")
            return JSONResponse(status_code=500, content={"error": "Internal Server Error"})
