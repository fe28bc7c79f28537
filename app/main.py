import os
import logging
from fastapi import FastAPI, Depends
from dotenv import load_dotenv
from fastapi.middleware.cors import CORSMiddleware
from app.db import connect_to_mongo, close_mongo_connection, DB_NAME
from app.auth.deps import get_current_user
from app.logging_config import setup_logging
from routes.crs import router as crs_router

load_dotenv()

setup_logging(
    log_level=os.getenv("LOG_LEVEL", "INFO"),
    json_logs=os.getenv("JSON_LOGS", "false").lower() == "true",
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Immigration Portal API",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json"
)

app.include_router(crs_router, prefix="/api")

app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in os.getenv("CORS_ORIGINS", "http://localhost:5173").split(",") if o.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.on_event("startup")
async def startup_event():
    mongo_url = os.getenv("MONGO_URL","mongodb://localhost:27017")
    app.state.db_name = os.getenv("DB_NAME", DB_NAME)
    connect_to_mongo(app, mongo_url)
    logger.info("Immigration Portal API started")

@app.on_event("shutdown")
async def shutdown_event():
    close_mongo_connection(app)

@app.get("/api/me")
async def me(user: dict = Depends(get_current_user)):
    return user

@app.get("/health")
async def health():
    return { "status": "ok"}
