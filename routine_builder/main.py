from fastapi import FastAPI

from routine_builder.api.relay import router as relay_router
from routine_builder.core.config import settings
from routine_builder.core.log_format import configure_logging


configure_logging(settings.LOG_LEVEL)

app = FastAPI(title="Routine Builder Chat Relay", version="1.0.0")

app.include_router(relay_router, tags=["relay"])


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
