import logging
from motor.motor_asyncio import AsyncIOMotorClient
from fastapi import Request

logger = logging.getLogger(__name__)

DB_NAME = "immigration_portal"


def connect_to_mongo(app, mongo_url:str):
    app.state.mongo_client = AsyncIOMotorClient(mongo_url)
    logger.info("MongoDB client created for database %s", getattr(app.state, "db_name", DB_NAME))


def close_mongo_connection(app):
    client = getattr(app.state, "mongo_client", None)
    if client:
        client.close()
        app.state.mongo_client = None


def get_db(request: Request):
    client = getattr(request.app.state, "mongo_client", None)
    if client is None:
        raise RuntimeError("MongoDB not connected")
    db_name = getattr(request.app.state, "db_name", DB_NAME)
    return client[db_name]
