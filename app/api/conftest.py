"""
Shared fixtures for API tests

FakeSalesCollection stands in for the motor collection and evaluates the
query operators and pipeline stages the sales reports use.
"""

from datetime import datetime
import pytest
from decimal import Decimal
from bson import Decimal128, ObjectId
from fastapi.testclient import TestClient
from pymongo.errors import ServerSelectionTimeoutError

from app.api.main import app
from app.db.session import get_database, get_sales_collection


class FakeCursor:
    def __init__(self, documents):
        self.documents = documents

    async def to_list(self, length=None):
        return list(self.documents if length is None else self.documents[:length])


def _resolve(document, expression):
    if isinstance(expression, str) and expression.startswith("$"):
        return document.get(expression[1:])
    return expression


def _matches(document, query):
    for field, condition in query.items():
        value = document.get(field)
        if isinstance(condition, dict):
            if value is None:
                return False
            if "$gte" in condition and not value >= condition["$gte"]:
                return False
            if "$lte" in condition and not value <= condition["$lte"]:
                return False
        elif value != condition:
            return False
    return True


def _decimal(value):
    return value.to_decimal() if isinstance(value, Decimal128) else Decimal(str(value))


def _sum(total, amount):
    # $sum ignores missing and non-numeric values; Decimal128 wins over int and float
    if isinstance(amount, bool) or not isinstance(amount, (int, float, Decimal128)):
        return total
    if isinstance(amount, Decimal128) or isinstance(total, Decimal128):
        return Decimal128(_decimal(total) + _decimal(amount))
    return total + amount


def _group(documents, spec):
    groups = {}
    for document in documents:
        key = _resolve(document, spec["_id"])
        group = groups.setdefault(key, {"_id": key})
        for name, accumulator in spec.items():
            if name == "_id":
                continue
            amount = _resolve(document, accumulator["$sum"])
            group[name] = _sum(group.get(name, 0), amount)
    return list(groups.values())


def _project(documents, spec):
    projected = []
    for document in documents:
        result = {}
        if spec.get("_id", 1) and "_id" in document:
            result["_id"] = document["_id"]
        for name, expression in spec.items():
            if name == "_id":
                continue
            if expression == 1:
                result[name] = document.get(name)
            elif expression != 0:
                result[name] = _resolve(document, expression)
        projected.append(result)
    return projected


def _sort(documents, spec):
    for field, direction in reversed(list(spec.items())):
        documents = sorted(
            documents,
            key=lambda document: (document.get(field) is not None, document.get(field) or ""),
            reverse=direction == -1,
        )
    return documents


class FakeSalesCollection:
    """In-memory sales collection"""

    def __init__(self, documents=None):
        self.documents = [dict(document) for document in (documents or [])]
        self.pipelines = []
        self.queries = []

    async def distinct(self, field):
        values = []
        for document in self.documents:
            value = document.get(field)
            if value is not None and value not in values:
                values.append(value)
        return values

    def find(self, query=None):
        query = query or {}
        self.queries.append(query)
        return FakeCursor([dict(d) for d in self.documents if _matches(d, query)])

    def aggregate(self, pipeline):
        self.pipelines.append(pipeline)
        documents = [dict(d) for d in self.documents]
        for stage in pipeline:
            (operator, spec), = stage.items()
            if operator == "$match":
                documents = [d for d in documents if _matches(d, spec)]
            elif operator == "$group":
                documents = _group(documents, spec)
            elif operator == "$project":
                documents = _project(documents, spec)
            elif operator == "$sort":
                documents = _sort(documents, spec)
            else:
                raise NotImplementedError(operator)
        return FakeCursor(documents)


class UnreachableSalesCollection:
    """Collection whose every operation fails as if the server were down"""

    def _fail(self, *args, **kwargs):
        raise ServerSelectionTimeoutError("localhost:27017: connection refused")

    async def distinct(self, field):
        self._fail()

    find = _fail
    aggregate = _fail


class FakeDatabase:
    def __init__(self, reachable=True):
        self.reachable = reachable

    async def command(self, name):
        if not self.reachable:
            raise ServerSelectionTimeoutError("localhost:27017: connection refused")
        return {"ok": 1.0}


SALES_DOCUMENTS = [
    {"_id": ObjectId(), "region": "North", "salesperson": "John Doe", "product": "Laptop",
     "channel": "Online", "amount": 600, "date": datetime(2025, 1, 1)},
    {"_id": ObjectId(), "region": "North", "salesperson": "John Doe", "product": "Phone",
     "channel": "Retail", "amount": 400, "date": datetime(2025, 1, 15)},
    {"_id": ObjectId(), "region": "North", "salesperson": "Jane Smith", "product": "Tablet",
     "channel": "Online", "amount": 1500, "date": datetime(2025, 1, 31)},
    {"_id": ObjectId(), "region": "North", "salesperson": "Alice Brown", "product": "Monitor",
     "channel": "Retail", "amount": 250.5, "date": datetime(2025, 2, 1)},
    {"_id": ObjectId(), "region": "South", "salesperson": "Bob Lee", "product": "Laptop",
     "channel": "Online", "amount": 900, "date": datetime(2025, 1, 10)},
]


@pytest.fixture
def sales_documents():
    return [dict(document) for document in SALES_DOCUMENTS]


@pytest.fixture
def sales_collection(sales_documents):
    return FakeSalesCollection(sales_documents)


@pytest.fixture
def client():
    """Test client with the store dependencies left to each test"""
    test_client = TestClient(app, raise_server_exceptions=False)
    yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def use_collection(client):
    """Install a collection as the sales collection dependency"""
    def install(collection):
        app.dependency_overrides[get_sales_collection] = lambda: collection
        return collection
    return install


@pytest.fixture
def use_database(client):
    """Install a database as the database dependency"""
    def install(database):
        app.dependency_overrides[get_database] = lambda: database
        return database
    return install
