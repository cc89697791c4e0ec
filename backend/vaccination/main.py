import logging

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.orm import Session

from .config import get_settings
from .database import get_db
from .errors import PreconditionError
from .routers import branches, catalog, schedules

logging.basicConfig(level=get_settings().log_level)

logger = logging.getLogger(__name__)

app = FastAPI(title="Vaccination Booking API")

app.include_router(branches.router)
app.include_router(catalog.router)
app.include_router(schedules.router)


@app.exception_handler(PreconditionError)
async def precondition_error_handler(request: Request, exc: PreconditionError):
    logger.debug(f"{request.method} {request.url.path} -> {exc.error_code.name}")
    return JSONResponse(
        status_code=exc.error_code.http_status,
        content={"code": exc.error_code.name, "detail": exc.detail},
    )


@app.get("/health")
def health(db: Session = Depends(get_db)):
    return {"database": db.execute(text("SELECT 1")).scalar() == 1}
