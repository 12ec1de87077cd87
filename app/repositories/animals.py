# app/repositories/animals.py
import re
from typing import Any, Dict, List, Optional
from motor.motor_asyncio import AsyncIOMotorDatabase

from ..utils import to_id, parse_object_id


class AnimalRepository:
    """Acceso a la colección ``animals`` de MongoDB."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.collection = db.animals

    async def insert(self, doc: Dict[str, Any]) -> Dict[str, Any]:
        res = await self.collection.insert_one(doc)
        created = await self.collection.find_one({"_id": res.inserted_id})
        return to_id(created)

    async def find_by_id(self, animal_id: str) -> Optional[Dict[str, Any]]:
        oid = parse_object_id(animal_id)
        if oid is None:
            return None
        doc = await self.collection.find_one({"_id": oid})
        return to_id(doc) if doc else None

    async def update_status(self, animal_id: str, status: str, updated_at) -> Optional[Dict[str, Any]]:
        oid = parse_object_id(animal_id)
        if oid is None:
            return None
        await self.collection.update_one(
            {"_id": oid}, {"$set": {"status": status, "updated_at": updated_at}}
        )
        doc = await self.collection.find_one({"_id": oid})
        return to_id(doc) if doc else None

    async def list(
        self,
        *,
        status: Optional[str] = None,
        type: Optional[str] = None,
        gender: Optional[str] = None,
        name: Optional[str] = None,
        owner_user_id: Optional[str] = None,
        limit: int = 500,
    ) -> List[Dict[str, Any]]:
        query: Dict[str, Any] = {}
        if status:
            query["status"] = status
        if type:
            query["type"] = type
        if gender:
            query["gender"] = gender
        if owner_user_id:
            query["owner_user_id"] = owner_user_id
        if name:
            query["name"] = {"$regex": re.escape(name), "$options": "i"}
        docs = await self.collection.find(query).sort("created_at", -1).to_list(limit)
        return [to_id(d) for d in docs]
