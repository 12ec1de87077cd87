"""
Tests de los servicios de ciclo de vida con repositorio en memoria
"""
import pytest

from app.schemas.animal import AnimalGender, AnimalType
from app.services.animal.create_animal import CreateAnimalInput, CreateAnimalService
from app.services.animal.update_animal_status import UpdateAnimalStatusInput, UpdateAnimalStatusService
from app.storage import PictureStorage


def _input(**overrides):
    data = dict(
        name="Paçoca", type=AnimalType.DOG, gender=AnimalGender.FEMALE,
        race="SRD", user_id="owner-1", pictures=[],
    )
    data.update(overrides)
    return CreateAnimalInput(**data)


@pytest.fixture
def create_service(repository, tmp_path):
    return CreateAnimalService(repository, PictureStorage(str(tmp_path)), max_pictures=3)


@pytest.mark.asyncio
async def test_create_stores_listing_as_available(create_service, repository):
    result = await create_service.execute(_input(description="Juguetona"))
    assert result.is_success()
    animal = result.value
    assert animal["status"] == "AVAILABLE"
    assert animal["owner_user_id"] == "owner-1"
    assert animal["type"] == "DOG" and animal["gender"] == "FEMALE"
    assert animal["pictures"] == []
    assert animal["id"] in repository.docs


@pytest.mark.asyncio
async def test_create_saves_pictures_in_order(create_service, tmp_path):
    pictures = [b"\x89PNG\r\n\x1a\nfirst", b"\xff\xd8\xffsecond", b"third"]
    result = await create_service.execute(_input(pictures=pictures))
    urls = result.value["pictures"]
    assert len(urls) == 3
    assert urls[0].endswith(".png") and urls[1].endswith(".jpg")
    stored = [(tmp_path / url.removeprefix("/media/")).read_bytes() for url in urls]
    assert stored == pictures


@pytest.mark.asyncio
async def test_create_requires_user(create_service, repository):
    result = await create_service.execute(_input(user_id=""))
    assert result.is_failure()
    assert "message" in result.value
    assert repository.docs == {}


@pytest.mark.asyncio
async def test_create_rejects_too_many_pictures(create_service, repository):
    result = await create_service.execute(_input(pictures=[b"x"] * 4))
    assert result.is_failure()
    assert repository.docs == {}


@pytest.mark.asyncio
async def test_create_rejects_empty_picture(create_service):
    result = await create_service.execute(_input(pictures=[b"x", b""]))
    assert result.is_failure()


@pytest.mark.asyncio
async def test_create_removes_pictures_when_insert_fails(create_service, repository, tmp_path, monkeypatch):
    async def broken_insert(doc):
        raise RuntimeError("insert failed")
    monkeypatch.setattr(repository, "insert", broken_insert)

    with pytest.raises(RuntimeError):
        await create_service.execute(_input(pictures=[b"\xff\xd8\xffa", b"\xff\xd8\xffb"]))

    assert list((tmp_path / "animals").glob("*")) == []


class FlakyStorage(PictureStorage):
    """Falla al guardar la segunda foto"""

    def __init__(self, media_dir):
        super().__init__(media_dir)
        self.saved = 0

    async def save(self, content):
        if self.saved == 1:
            raise OSError("disk full")
        self.saved += 1
        return await super().save(content)


@pytest.mark.asyncio
async def test_create_removes_pictures_when_a_save_fails(repository, tmp_path):
    service = CreateAnimalService(repository, FlakyStorage(str(tmp_path)), max_pictures=3)

    with pytest.raises(OSError):
        await service.execute(_input(pictures=[b"first", b"second"]))

    assert list((tmp_path / "animals").glob("*")) == []
    assert repository.docs == {}


@pytest.fixture
async def existing(create_service):
    result = await create_service.execute(_input())
    return result.value


@pytest.mark.asyncio
async def test_update_status_by_owner(repository, existing):
    service = UpdateAnimalStatusService(repository)
    result = await service.execute(UpdateAnimalStatusInput(existing["id"], "ADOPTED", "owner-1"))
    assert result.is_success()
    assert result.value["status"] == "ADOPTED"
    assert repository.docs[existing["id"]]["status"] == "ADOPTED"


@pytest.mark.asyncio
async def test_update_status_any_order_allowed(repository, existing):
    service = UpdateAnimalStatusService(repository)
    for new in ("ADOPTED", "UNAVAILABLE", "AVAILABLE"):
        result = await service.execute(UpdateAnimalStatusInput(existing["id"], new, "owner-1"))
        assert result.is_success() and result.value["status"] == new


@pytest.mark.asyncio
async def test_update_status_not_owner(repository, existing):
    service = UpdateAnimalStatusService(repository)
    result = await service.execute(UpdateAnimalStatusInput(existing["id"], "ADOPTED", "intruder"))
    assert result.is_failure()
    assert repository.docs[existing["id"]]["status"] == "AVAILABLE"


@pytest.mark.asyncio
async def test_update_status_empty_user(repository, existing):
    service = UpdateAnimalStatusService(repository)
    result = await service.execute(UpdateAnimalStatusInput(existing["id"], "ADOPTED", ""))
    assert result.is_failure()


@pytest.mark.asyncio
@pytest.mark.parametrize("value", ["SOLD", None, 3, {"a": 1}])
async def test_update_status_invalid_value(repository, existing, value):
    service = UpdateAnimalStatusService(repository)
    result = await service.execute(UpdateAnimalStatusInput(existing["id"], value, "owner-1"))
    assert result.is_failure()
    assert "AVAILABLE" in result.value["message"]


@pytest.mark.asyncio
async def test_update_status_unknown_animal(repository):
    service = UpdateAnimalStatusService(repository)
    result = await service.execute(UpdateAnimalStatusInput("missing", "ADOPTED", "owner-1"))
    assert result.is_failure()
    assert result.value == {"message": "Animal no encontrado."}


@pytest.mark.asyncio
async def test_update_status_same_value_is_noop(repository, existing):
    service = UpdateAnimalStatusService(repository)
    result = await service.execute(UpdateAnimalStatusInput(existing["id"], "AVAILABLE", "owner-1"))
    assert result.is_success()
    assert result.value["updated_at"] == existing["updated_at"]
