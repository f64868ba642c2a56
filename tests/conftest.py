import pytest
import pytest_asyncio
from pymongo import AsyncMongoClient
from pymongo.errors import ServerSelectionTimeoutError

from pykeyset import disable_tracing

MONGO_URI = "mongodb://localhost:27017"
MONGO_TEST_DB = "pykeyset_test"


@pytest.fixture(autouse=True)
def reset_tracing():
    """Reset observability state between tests."""
    yield
    disable_tracing()


@pytest_asyncio.fixture
async def mongo_db():
    """Connect to localhost MongoDB before the test, drop the test DB after."""
    client = AsyncMongoClient(MONGO_URI, serverSelectionTimeoutMS=2000)
    try:
        await client.admin.command("ping")
    except ServerSelectionTimeoutError:
        await client.close()
        pytest.skip(f"MongoDB is not reachable at {MONGO_URI}")
    db = client[MONGO_TEST_DB]
    yield db
    await client.drop_database(MONGO_TEST_DB)
    await client.close()
