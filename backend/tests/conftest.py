"""Shared test configuration and an in-memory stand-in for the motor database."""

import asyncio
import os
import sys
from pathlib import Path
from types import SimpleNamespace

import pytest

# Tests never talk to a real MongoDB; the motor client is created lazily
os.environ.setdefault("MONGO_URL", "mongodb://localhost:27017")
os.environ.setdefault("DB_NAME", "dinero_wallet_test")

# Add the backend directory to Python path so tests can import its modules
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

from pymongo.errors import DuplicateKeyError, OperationFailure  # noqa: E402


def _matches(doc, query):
    return all(doc.get(key) == value for key, value in query.items())


def _project(doc, projection):
    if not projection:
        return dict(doc)
    included = [key for key, flag in projection.items() if flag and key != "_id"]
    if included:
        return {key: doc[key] for key in included if key in doc}
    return {key: value for key, value in doc.items() if projection.get(key, 1)}


class FakeCollection:
    """Async subset of the motor collection API used by the wallet code."""

    def __init__(self, unique=()):
        self.docs = []
        self.unique = list(unique)
        self.indexes = {"_id_": {"key": [("_id", 1)]}}

    def _check_unique(self, candidate, ignore=None):
        for field in self.unique:
            if field not in candidate:
                continue
            for doc in self.docs:
                if doc is not ignore and doc.get(field) == candidate[field]:
                    raise DuplicateKeyError(f"E11000 duplicate key error: {field}")

    def seed(self, doc):
        self._check_unique(doc)
        self.docs.append(dict(doc))

    async def find_one(self, query, projection=None):
        for doc in self.docs:
            if _matches(doc, query):
                return _project(doc, projection)
        return None

    async def insert_one(self, doc):
        self._check_unique(doc)
        self.docs.append(dict(doc))
        return SimpleNamespace(inserted_id=len(self.docs))

    async def update_one(self, query, update, upsert=False):
        for doc in self.docs:
            if _matches(doc, query):
                updated = dict(doc)
                updated.update(update.get("$set", {}))
                for key in update.get("$unset", {}):
                    updated.pop(key, None)
                modified = updated != doc
                self._check_unique(updated, ignore=doc)
                doc.clear()
                doc.update(updated)
                return SimpleNamespace(matched_count=1, modified_count=int(modified), upserted_id=None)

        if not upsert:
            return SimpleNamespace(matched_count=0, modified_count=0, upserted_id=None)

        # Yield between the miss and the insert so concurrent upserts interleave
        await asyncio.sleep(0)
        new_doc = dict(query)
        new_doc.update(update.get("$setOnInsert", {}))
        new_doc.update(update.get("$set", {}))
        await self.insert_one(new_doc)
        return SimpleNamespace(matched_count=0, modified_count=0, upserted_id=len(self.docs))

    async def create_index(self, keys, **options):
        if isinstance(keys, str):
            keys = [(keys, 1)]
        keys = list(keys)
        name = options.pop("name", None) or "_".join(f"{key}_{direction}" for key, direction in keys)
        spec = {"key": keys, **options}

        existing = self.indexes.get(name)
        if existing is not None:
            if existing != spec:
                raise OperationFailure(f"Index with name: {name} already exists with different options", code=86)
            return name
        for other_name, other in self.indexes.items():
            if other["key"] == keys:
                raise OperationFailure(
                    f"Index already exists with a different name: {other_name}", code=85
                )

        self.indexes[name] = spec
        return name


class FakeDatabase:
    """Dict-like database holding FakeCollections."""

    def __init__(self):
        self.collections = {
            "users": FakeCollection(unique=("id", "username")),
            "wallets": FakeCollection(unique=("userId",)),
        }
        self.pings = 0

    def __getitem__(self, name):
        if name not in self.collections:
            self.collections[name] = FakeCollection()
        return self.collections[name]

    def __getattr__(self, name):
        if name.startswith("_"):
            raise AttributeError(name)
        return self[name]

    async def command(self, name):
        self.pings += 1
        return {"ok": 1}


@pytest.fixture
def fake_db():
    return FakeDatabase()


@pytest.fixture
def add_user(fake_db):
    """Insert a user profile and return its id."""

    def _add_user(user_id, username, roles=None, **extra):
        doc = {"id": user_id, "username": username, **extra}
        if roles is not None:
            doc["roles"] = roles
        fake_db.users.seed(doc)
        return user_id

    return _add_user
