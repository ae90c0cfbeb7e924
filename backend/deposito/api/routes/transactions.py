from __future__ import annotations

from fastapi import APIRouter

from deposito.api.schemas.transactions import (
    CalculationResponse,
    TransactionCreateRequest,
    TransactionResponse,
    WithdrawResponse,
)
from deposito.domain.transaction import Transaction
from deposito.engine.interest import InterestCalculation
from deposito.services import transaction_service

router = APIRouter(prefix="/transactions", tags=["transactions"])


@router.post("/deposit", response_model=TransactionResponse, status_code=201)
def deposit(payload: TransactionCreateRequest) -> TransactionResponse:
    tx = transaction_service.deposit(
        account_id=payload.account_id,
        amount=payload.amount,
        date=payload.date,
    )
    return tx_to_response(tx)


@router.post("/withdraw", response_model=WithdrawResponse, status_code=201)
def withdraw(payload: TransactionCreateRequest) -> WithdrawResponse:
    result = transaction_service.withdraw(
        account_id=payload.account_id,
        amount=payload.amount,
        date=payload.date,
    )
    return WithdrawResponse(
        transaction=tx_to_response(result.transaction),
        calculation=_calc_to_response(result.calculation),
    )


def tx_to_response(tx: Transaction) -> TransactionResponse:
    return TransactionResponse(
        id=tx.id,
        type=tx.type,
        amount=str(tx.amount),
        date=tx.date,
        account_id=tx.account_id,
    )


def _calc_to_response(c: InterestCalculation) -> CalculationResponse:
    return CalculationResponse(
        starting_balance=f"{c.starting_balance:.2f}",
        months=c.months,
        yearly_return=f"{c.yearly_return:.6f}",
        monthly_return=str(c.monthly_return),
        ending_balance=str(c.ending_balance),
    )
