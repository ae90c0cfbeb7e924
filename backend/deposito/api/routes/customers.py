from __future__ import annotations

import logging
from uuid import UUID

from fastapi import APIRouter, HTTPException, Response

from deposito.api.deps import get_customer_repo
from deposito.api.schemas.customers import CustomerCreateRequest, CustomerResponse, CustomerUpdateRequest
from deposito.domain.customer import Customer
from deposito.errors import DepositoError

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/customers", tags=["customers"])


@router.get("", response_model=list[CustomerResponse])
def list_customers() -> list[CustomerResponse]:
    try:
        return [_customer_to_response(c) for c in get_customer_repo().list_customers()]
    except DepositoError:
        raise
    except Exception as e:
        logger.exception("Failed to list customers: %s", e)
        raise HTTPException(status_code=500, detail="Internal error")


@router.post("", status_code=201, response_model=CustomerResponse)
def create_customer(req: CustomerCreateRequest) -> CustomerResponse:
    customer = Customer.create(name=req.name)
    get_customer_repo().add(customer)
    return _customer_to_response(customer)


@router.get("/{customer_id}", response_model=CustomerResponse)
def get_customer(customer_id: UUID) -> CustomerResponse:
    return _customer_to_response(get_customer_repo().get_customer(customer_id))


@router.patch("/{customer_id}", response_model=CustomerResponse)
def update_customer(customer_id: UUID, req: CustomerUpdateRequest) -> CustomerResponse:
    updated = get_customer_repo().update(customer_id=customer_id, name=req.name)
    return _customer_to_response(updated)


@router.delete("/{customer_id}", status_code=204)
def delete_customer(customer_id: UUID) -> Response:
    get_customer_repo().delete(customer_id=customer_id)
    return Response(status_code=204)


def _customer_to_response(c: Customer) -> CustomerResponse:
    return CustomerResponse(id=c.id, name=c.name)
