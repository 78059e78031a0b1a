from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, RedirectResponse
from sqlmodel import Session

from fiscaal.core.config import settings
from fiscaal.core.errors import FiscalError
from fiscaal.core.logger import logger
from fiscaal.db.session import engine
from fiscaal.db.base import init_db
from fiscaal.services.invoices_service import get_company

# =========================
# ROUTERS
# =========================
from fiscaal.routers.company import router as company_router
from fiscaal.routers.invoices import router as invoices_router
from fiscaal.routers.btw import router as btw_router
from fiscaal.routers.expenses import router as expenses_router
from fiscaal.routers.kilometers import router as kilometers_router
from fiscaal.routers.products import router as products_router


# ============================================================
# APP
# ============================================================
app = FastAPI(title=settings.PROJECT_NAME)


# ============================================================
# TYPED ERRORS → JSON
# ============================================================
@app.exception_handler(FiscalError)
async def fiscal_error_handler(request: Request, exc: FiscalError):
    if exc.status_code >= 409:
        logger.warning(f"{request.method} {request.url.path}: {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "error": type(exc).__name__},
    )


# ============================================================
# STARTUP
# ============================================================
@app.on_event("startup")
def on_startup():
    init_db()

    with Session(engine) as session:
        if not get_company(session):
            logger.warning("No company profile yet: set it with PUT /company before invoicing")

    logger.info(">>> System ready")


@app.get("/")
async def root():
    return RedirectResponse("/docs")


# ============================================================
# ROUTERS
# ============================================================
app.include_router(company_router)
app.include_router(invoices_router)
app.include_router(btw_router)
app.include_router(expenses_router)
app.include_router(kilometers_router)
app.include_router(products_router)
