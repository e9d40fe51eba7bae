import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api.v1.appointments import router as appointments_router
from app.api.v1.finance import router as finance_router
from app.core.config import settings
from app.wiring.dependencies import get_container

class ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        extras = []
        for key in ("appointment_id", "status", "kind", "service", "reason", "error"):
            value = getattr(record, key, None)
            if value not in (None, ""):
                extras.append(f"{key}={value}")
        base = super().format(record)
        if extras:
            return f"{base} | " + " ".join(extras)
        return base


handler = logging.StreamHandler()
handler.setFormatter(ContextFormatter("%(levelname)s:%(name)s:%(message)s"))

root = logging.getLogger()
root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
root.handlers.clear()
root.addHandler(handler)


@asynccontextmanager
async def lifespan(app: FastAPI):
    container = get_container()
    container.dispatcher.start()
    try:
        yield
    finally:
        container.dispatcher.stop()
        container.platform.close()


app = FastAPI(title="Barbershop Scheduling", version="1.0.0", lifespan=lifespan)

app.include_router(appointments_router, tags=["appointments"])
app.include_router(finance_router, tags=["finance"])


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
