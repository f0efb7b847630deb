import logging
import os

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from loyalty_ledger.db import engine, Base, SessionLocal
from loyalty_ledger.errors import LoyaltyError
from loyalty_ledger.services.level_service import ensure_default_levels

from loyalty_ledger.models.loyalty_level import LoyaltyLevel
from loyalty_ledger.models.user import User
from loyalty_ledger.models.transaction import Transaction
from loyalty_ledger.models.reward import Reward
from loyalty_ledger.models.user_reward import UserReward
from loyalty_ledger.models.campaign import Campaign

from loyalty_ledger.routes.users import router as users_router
from loyalty_ledger.routes.transactions import router as transactions_router
from loyalty_ledger.routes.rewards import router as rewards_router
from loyalty_ledger.routes.campaigns import router as campaigns_router
from loyalty_ledger.routes.loyalty_levels import router as loyalty_levels_router


logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

CORS_ALLOW_ORIGINS = [o.strip() for o in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",") if o.strip()]

app = FastAPI(title="Loyalty Ledger")


# ─── Unexpected errors ────────────────────────────────────────────
# registered before CORS so CORS wraps it and 500s still carry the headers
@app.middleware("http")
async def catch_unexpected_errors(request: Request, call_next):
    try:
        return await call_next(request)
    except Exception as exc:
        logger.exception("unexpected failure on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": str(exc)})


# ─── CORS ─────────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-Client-Info", "Apikey"],
)


# ─── Errors ───────────────────────────────────────────────────────
@app.exception_handler(LoyaltyError)
def handle_loyalty_error(request: Request, exc: LoyaltyError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(StarletteHTTPException)
def handle_http_error(request: Request, exc: StarletteHTTPException):
    detail = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return JSONResponse(status_code=exc.status_code, content={"error": detail}, headers=exc.headers)


@app.exception_handler(RequestValidationError)
def handle_validation_error(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        loc = ".".join(str(part) for part in errors[0].get("loc", ()) if part != "body")
        message = f"Invalid request: {loc} {errors[0].get('msg', '')}".strip()
    return JSONResponse(status_code=400, content={"error": message})


@app.exception_handler(SQLAlchemyError)
def handle_store_error(request: Request, exc: SQLAlchemyError):
    logger.exception("store failure on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": str(exc)})


@app.on_event("startup")
def startup():
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        ensure_default_levels(db)
    finally:
        db.close()


app.include_router(users_router)
app.include_router(transactions_router)
app.include_router(rewards_router)
app.include_router(campaigns_router)
app.include_router(loyalty_levels_router)


@app.get("/")
def read_root():
    return {"message": "Loyalty Ledger is running"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="127.0.0.1", port=8001)
