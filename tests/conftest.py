"""
Configuración de pytest para tests

No hace falta MongoDB: los servicios y el repositorio se sustituyen por
dobles en memoria mediante ``app.dependency_overrides``.
"""
import asyncio

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from app.result import Success


# Deshabilitar rate limiting en la app antes de usarla
@pytest.fixture(scope="session", autouse=True)
def disable_rate_limiting():
    """Deshabilita rate limiting para todos los tests"""
    from app.main import app
    app.state.limiter = None


class InMemoryAnimalRepository:
    """Mismo contrato que AnimalRepository, guardando en un dict."""

    def __init__(self):
        self.docs = {}

    async def insert(self, doc):
        animal_id = str(ObjectId())
        self.docs[animal_id] = {"id": animal_id, **doc}
        return dict(self.docs[animal_id])

    async def find_by_id(self, animal_id):
        doc = self.docs.get(animal_id)
        return dict(doc) if doc else None

    async def update_status(self, animal_id, status, updated_at):
        if animal_id not in self.docs:
            return None
        self.docs[animal_id].update({"status": status, "updated_at": updated_at})
        return dict(self.docs[animal_id])

    async def list(self, *, status=None, type=None, gender=None, name=None, owner_user_id=None, limit=500):
        out = []
        for doc in self.docs.values():
            if status and doc["status"] != status:
                continue
            if type and doc["type"] != type:
                continue
            if gender and doc["gender"] != gender:
                continue
            if owner_user_id and doc["owner_user_id"] != owner_user_id:
                continue
            if name and name.lower() not in doc["name"].lower():
                continue
            out.append(dict(doc))
        return out[:limit]


class FakeService:
    """Servicio de ciclo de vida que devuelve un resultado fijo y anota las llamadas."""

    def __init__(self, result=None, error=None, delay=None):
        self.result = result if result is not None else Success({"id": "1"})
        self.error = error
        self.delay = delay
        self.calls = []

    async def execute(self, data):
        self.calls.append(data)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        return self.result


@pytest.fixture
def repository():
    return InMemoryAnimalRepository()


@pytest.fixture
def app_with_overrides(repository):
    from app.main import app
    from app.routers.animals import get_animal_repository
    app.state.limiter = None
    app.dependency_overrides[get_animal_repository] = lambda: repository
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app_with_overrides):
    """Fixture para cliente de test de FastAPI"""
    return TestClient(app_with_overrides)


@pytest.fixture
def use_create_service(app_with_overrides):
    """Instala un FakeService como servicio de creación y lo devuelve."""
    from app.routers.animals import get_create_animal_service

    def install(service):
        app_with_overrides.dependency_overrides[get_create_animal_service] = lambda: service
        return service
    return install


@pytest.fixture
def use_status_service(app_with_overrides):
    """Instala un FakeService como servicio de cambio de estado y lo devuelve."""
    from app.routers.animals import get_update_animal_status_service

    def install(service):
        app_with_overrides.dependency_overrides[get_update_animal_status_service] = lambda: service
        return service
    return install


@pytest.fixture
def auth_headers():
    from app.security import create_access_token
    return {"Authorization": f"Bearer {create_access_token('user-123')}"}


@pytest.fixture
def valid_animal_form():
    """Datos de alta válidos"""
    return {
        "name": "Paçoca",
        "type": "DOG",
        "gender": "FEMALE",
        "race": "SRD",
        "description": "Muy juguetona",
    }


@pytest.fixture
def fake_service():
    """Clase FakeService para construir dobles con distintos resultados."""
    return FakeService
