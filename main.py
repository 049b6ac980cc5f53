from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.db.database import Base, engine
from api.utils.gemini_client import ProviderSettings
from api.utils.logging_config import setup_logging
from api.v1.models import kv_store  # noqa: F401  registers the table
from api.v1.routes import api_version_one


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    Base.metadata.create_all(bind=engine)
    app.state.provider_settings = ProviderSettings.from_env()
    yield


app = FastAPI(title="LearNio", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_version_one)


@app.get("/")
def root():
    return {"message": "LearNio question service is running"}
