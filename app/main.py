from fastapi import FastAPI

from app.api.routes import api_router
from app.api.v1 import v1_router
from app.config.settings import settings
from app.core.logging_config import setup_logging

app = FastAPI(title=settings.APP_NAME, debug=settings.DEBUG)


@app.on_event("startup")
async def startup():
    setup_logging(settings.LOG_LEVEL)


app.include_router(api_router)
app.include_router(v1_router)
