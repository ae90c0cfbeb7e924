from __future__ import annotations

import logging
from uuid import UUID

from fastapi import APIRouter, HTTPException, Response

from deposito.api.deps import get_account_repo, get_tx_repo
from deposito.api.routes.deposito_types import deposito_type_to_response
from deposito.api.routes.transactions import tx_to_response
from deposito.api.schemas.accounts import AccountCreateRequest, AccountResponse, AccountUpdateRequest
from deposito.api.schemas.customers import CustomerResponse
from deposito.api.schemas.transactions import TransactionResponse
from deposito.domain.account import Account, AccountDetails
from deposito.domain.money import Money
from deposito.errors import DepositoError
from deposito.services.transaction_service import list_transactions_for_account

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/accounts", tags=["accounts"])


@router.get("", response_model=list[AccountResponse])
def list_accounts() -> list[AccountResponse]:
    try:
        return [_details_to_response(d) for d in get_account_repo().list_accounts()]
    except DepositoError:
        raise
    except Exception as e:
        logger.exception("Failed to list accounts: %s", e)
        raise HTTPException(status_code=500, detail="Internal error")


@router.post("", status_code=201, response_model=AccountResponse)
def create_account(req: AccountCreateRequest) -> AccountResponse:
    repo = get_account_repo()

    account = Account.create(
        packet=req.packet,
        balance=Money.from_str(req.balance),
        customer_id=req.customer_id,
        deposito_type_id=req.deposito_type_id,
        created_at=req.created_at,
    )
    repo.add(account)

    return _details_to_response(repo.get_account_details(account.id))


@router.get("/{account_id}", response_model=AccountResponse)
def get_account(account_id: UUID) -> AccountResponse:
    return _details_to_response(get_account_repo().get_account_details(account_id))


@router.patch("/{account_id}", response_model=AccountResponse)
def update_account(account_id: UUID, req: AccountUpdateRequest) -> AccountResponse:
    repo = get_account_repo()
    repo.update(account_id=account_id, packet=req.packet, customer_id=req.customer_id)
    return _details_to_response(repo.get_account_details(account_id))


@router.delete("/{account_id}", status_code=204)
def delete_account(account_id: UUID) -> Response:
    get_account_repo().delete(account_id=account_id)
    return Response(status_code=204)


@router.get("/{account_id}/transactions", response_model=list[TransactionResponse])
def list_account_transactions(account_id: UUID) -> list[TransactionResponse]:
    txs = list_transactions_for_account(
        account_id,
        account_repo=get_account_repo(),
        tx_repo=get_tx_repo(),
    )
    return [tx_to_response(t) for t in txs]


def _details_to_response(d: AccountDetails) -> AccountResponse:
    acc = d.account
    return AccountResponse(
        id=acc.id,
        packet=acc.packet,
        balance=str(acc.balance),
        customer_id=acc.customer_id,
        deposito_type_id=acc.deposito_type_id,
        created_at=acc.created_at,
        customer=CustomerResponse(id=d.customer.id, name=d.customer.name) if d.customer else None,
        deposito_type=deposito_type_to_response(d.deposito_type) if d.deposito_type else None,
    )
