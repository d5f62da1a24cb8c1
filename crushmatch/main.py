import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from crushmatch.config import settings
from crushmatch.database import Database
from crushmatch.routers.auth import router as auth_router
from crushmatch.routers.crushes import router as crushes_router
from crushmatch.routers.matches import router as matches_router
from crushmatch.utils.exceptions import register_exception_handlers
from crushmatch.utils.response import success_response

SERVICE_NAME = "crush-match-api"
VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    database = Database(settings.database_url)
    await database.open()
    app.state.database = database
    try:
        yield
    finally:
        await database.close()


app = FastAPI(
    title="CrushMatch API",
    description="Record crushes and find out which ones are mutual",
    version=VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(auth_router, prefix="/api")
app.include_router(crushes_router, prefix="/api")
app.include_router(matches_router, prefix="/api")


@app.get("/health")
async def health_check():
    return success_response(data={"service": SERVICE_NAME, "version": VERSION})
