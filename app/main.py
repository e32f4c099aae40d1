from fastapi import FastAPI
import logging
from app.core.config import settings
from app.core.logging_setup import setup_logging
from app.core.middleware import AccountContextMiddleware
from app.db.memory import SessionRegistry
from app.services.bar_api import BarApiClient
from app.services.pay_api import PayApiClient
from app.api import health

setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.PROJECT_NAME)
app.add_middleware(AccountContextMiddleware)

# One pay-fees store per account, handed to routes through app.api.deps
app.state.sessions = SessionRegistry(pay_api=PayApiClient(), bar_api=BarApiClient())

# Include routers
app.include_router(health.router)

from app.api import fees, payment, alerts, accounts, session
app.include_router(fees.router)
app.include_router(payment.router)
app.include_router(alerts.router)
app.include_router(accounts.router)
app.include_router(session.router)

@app.on_event("startup")
async def startup_event():
    logger.info(f"{settings.PROJECT_NAME} starting; pay API {settings.PAY_API_URL}, BAR API {settings.BAR_API_URL}")

@app.on_event("shutdown")
async def shutdown_event():
    app.state.sessions.clear()
    app.state.sessions.alerts.clear()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
