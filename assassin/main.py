import logging
import os

from fastapi import FastAPI

from assassin.api.routes import router

app = FastAPI(title="assassin", version="0.1.0")
app.include_router(router)
# Configure logging
logging.basicConfig(level=os.environ.get("ASSASSIN_LOG_LEVEL", "DEBUG").upper())
