"""
FastAPI REST API Module

Exposes a single in-memory bank account over HTTP: deposits, withdrawals,
balance and transaction history.
"""

from datetime import datetime, timezone
from typing import Optional
from fastapi import FastAPI, HTTPException, Depends, Request, status
from pydantic import BaseModel, Field
import uvicorn

from . import __version__
from .accounts import BankAccount
from .config import get_config
from .dates import SystemDateProvider
from .errors import InvalidArgumentError, InvalidOperationError
from .logging_config import setup_logging


class AmountRequest(BaseModel):
    amount: int = Field(..., description="Amount in integer units")


def create_app(account: Optional[BankAccount] = None) -> FastAPI:
    """
    Create the FastAPI application

    Args:
        account: Account to serve (a new account on the system clock if omitted)
    """
    app = FastAPI(
        title="Bank Account API",
        description="Single bank account with daily withdrawal limits",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc"
    )
    app.state.account = account or BankAccount(SystemDateProvider())

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}

    @app.get("/")
    async def get_api_info():
        """Get API information"""
        return {
            "name": "Bank Account API",
            "version": __version__,
            "endpoints": {
                "docs": "/docs",
                "health": "/health",
                "deposit": "/account/deposit",
                "withdraw": "/account/withdraw",
                "balance": "/account/balance",
                "transactions": "/account/transactions"
            }
        }

    @app.post("/account/deposit", status_code=status.HTTP_201_CREATED)
    async def deposit(request: AmountRequest, account: BankAccount = Depends(get_account)):
        """Deposit money"""
        try:
            transaction = account.deposit(request.amount)
        except InvalidArgumentError as e:
            raise HTTPException(status_code=400, detail=str(e))

        return {"balance": transaction.balance, "transaction": transaction.to_dict()}

    @app.post("/account/withdraw", status_code=status.HTTP_201_CREATED)
    async def withdraw(request: AmountRequest, account: BankAccount = Depends(get_account)):
        """Withdraw money"""
        try:
            transaction = account.withdraw(request.amount)
        except InvalidArgumentError as e:
            raise HTTPException(status_code=400, detail=str(e))
        except InvalidOperationError as e:
            raise HTTPException(status_code=409, detail=str(e))

        return {"balance": transaction.balance, "transaction": transaction.to_dict()}

    @app.get("/account/balance")
    async def get_balance(account: BankAccount = Depends(get_account)):
        """Get current balance"""
        return {"balance": account.get_balance()}

    @app.get("/account/transactions")
    async def get_transactions(account: BankAccount = Depends(get_account)):
        """Get transaction history (oldest entries aggregated)"""
        return {"transactions": [t.to_dict() for t in account.get_transactions()]}

    return app


def get_account(request: Request) -> BankAccount:
    return request.app.state.account


def run_server(host: Optional[str] = None, port: Optional[int] = None, debug: bool = False):
    """Run the API server with uvicorn"""
    settings = get_config()
    setup_logging(level="DEBUG" if debug else settings.log_level, log_format=settings.log_format)
    uvicorn.run(
        create_app(),
        host=host or settings.api_host,
        port=port or settings.api_port,
        log_level="debug" if debug else "info"
    )
