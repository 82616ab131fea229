"""FastAPI web server for fintrack."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, Optional

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from fintrack.config import get_cors_config
from fintrack.db.database import Database
from fintrack.db.reset_token_repo import ResetTokenRepository
from fintrack.db.transaction_repo import TransactionRepository
from fintrack.db.user_repo import UserRepository
from fintrack.errors import NotFoundError, StoreError
from fintrack.utils.clock import utc_timestamp

logger = logging.getLogger(__name__)


# Request Models
#
# Fields are untyped and optional: values reach the store as sent, missing
# ones as NULL, and only the store's constraints reject them.
class UserCreate(BaseModel):
    username: Any = None
    password: Any = None
    email: Any = None


class ResetTokenAssign(BaseModel):
    userid: Any = None
    tokenid: Any = None


class PasswordUpdate(BaseModel):
    userid: Any = None
    password: Any = None


class ResetTokenCreate(BaseModel):
    token: Any = None
    expiresAt: Any = None


class TransactionCreate(BaseModel):
    userid: Any = None
    isExpense: Any = None
    amount: Any = None
    categoryid: Any = None
    description: Any = None


# Dependencies
def get_db(request: Request) -> Database:
    return request.app.state.db


def get_user_repo(db: Database = Depends(get_db)) -> UserRepository:
    return UserRepository(db)


def get_reset_token_repo(db: Database = Depends(get_db)) -> ResetTokenRepository:
    return ResetTokenRepository(db)


def get_transaction_repo(db: Database = Depends(get_db)) -> TransactionRepository:
    return TransactionRepository(db)


router = APIRouter()


@router.get("/health")
async def health(db: Database = Depends(get_db)):
    """Liveness check against the store."""
    if not db.ping():
        return JSONResponse(
            status_code=500,
            content={"status": "error", "message": "Database connection failed"},
        )
    return {"status": "healthy", "timestamp": utc_timestamp()}


# User routes
@router.get("/api/users")
async def list_users(repo: UserRepository = Depends(get_user_repo)):
    return [u.to_dict() for u in repo.list_all()]


@router.post("/api/users")
async def create_user(body: UserCreate, repo: UserRepository = Depends(get_user_repo)):
    user = repo.create(body.username, body.password, body.email)
    return user.to_public_dict()


@router.put("/api/users")
async def assign_reset_token(body: ResetTokenAssign, repo: UserRepository = Depends(get_user_repo)):
    userid, tokenid = repo.assign_reset_token(body.userid, body.tokenid)
    return {"userid": userid, "tokenid": tokenid}


@router.put("/api/password")
async def update_password(body: PasswordUpdate, repo: UserRepository = Depends(get_user_repo)):
    userid, password = repo.update_password(body.userid, body.password)
    return {"userid": userid, "password": password}


# Reset token routes
@router.get("/api/resettoken")
async def find_reset_tokens(
    token: Optional[str] = None,
    repo: ResetTokenRepository = Depends(get_reset_token_repo),
):
    return [t.to_dict() for t in repo.find_by_token(token)]


@router.post("/api/resettoken")
async def create_reset_token(
    body: ResetTokenCreate,
    repo: ResetTokenRepository = Depends(get_reset_token_repo),
):
    return repo.create(body.token, body.expiresAt).to_dict()


# Transaction routes
@router.post("/api/transactions")
async def create_transaction(
    body: TransactionCreate,
    repo: TransactionRepository = Depends(get_transaction_repo),
):
    txn = repo.create(
        userid=body.userid,
        is_expense=body.isExpense,
        amount=body.amount,
        categoryid=body.categoryid,
        description=body.description,
    )
    return {"userid": body.userid, **txn.to_dict()}


@router.get("/api/transactions/{userId}")
async def list_transactions(userId: str, repo: TransactionRepository = Depends(get_transaction_repo)):
    return [t.to_dict() for t in repo.list_for_user(userId)]


@router.delete("/api/transactions/{transactionid}")
async def delete_transaction(
    transactionid: str,
    repo: TransactionRepository = Depends(get_transaction_repo),
):
    return {"message": repo.delete(transactionid)}


# Error handlers
async def _store_error(request: Request, exc: StoreError) -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": str(exc)})


async def _not_found(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"error": str(exc)})


async def _invalid_request(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = "; ".join(
        f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg', '')}"
        for err in exc.errors()
    )
    return JSONResponse(status_code=500, content={"error": message})


async def _unhandled(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(status_code=500, content={"error": "Something broke!"})


def create_app(db_path: Optional[Path | str] = None) -> FastAPI:
    """Build the application; the store handle lives for the app's lifespan."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        db = Database(path=db_path)
        db.init()
        app.state.db = db
        logger.info(f"Server started - DB: {db.path}")
        try:
            yield
        finally:
            db.close()
            logger.info("Database connection closed")

    app = FastAPI(
        title="fintrack API",
        description="Personal-finance bookkeeping backend",
        version="1.0.0",
        lifespan=lifespan,
    )

    cors = get_cors_config()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors.origins,
        allow_methods=list(cors.methods),
        allow_headers=list(cors.headers),
    )

    app.add_exception_handler(StoreError, _store_error)
    app.add_exception_handler(NotFoundError, _not_found)
    app.add_exception_handler(RequestValidationError, _invalid_request)
    app.add_exception_handler(Exception, _unhandled)

    app.include_router(router)
    return app


app = create_app()
