from __future__ import annotations

import logging
from uuid import UUID

from fastapi import APIRouter, HTTPException, Response

from deposito.api.deps import get_deposito_type_repo
from deposito.api.schemas.deposito_types import (
    DepositoTypeCreateRequest,
    DepositoTypeResponse,
    DepositoTypeUpdateRequest,
)
from deposito.domain.deposito_type import DepositoType
from deposito.errors import DepositoError

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/deposito-types", tags=["deposito-types"])


@router.get("", response_model=list[DepositoTypeResponse])
def list_deposito_types() -> list[DepositoTypeResponse]:
    try:
        return [deposito_type_to_response(d) for d in get_deposito_type_repo().list_deposito_types()]
    except DepositoError:
        raise
    except Exception as e:
        logger.exception("Failed to list deposito types: %s", e)
        raise HTTPException(status_code=500, detail="Internal error")


@router.post("", status_code=201, response_model=DepositoTypeResponse)
def create_deposito_type(req: DepositoTypeCreateRequest) -> DepositoTypeResponse:
    dtype = DepositoType.create(name=req.name, yearly_return=req.yearly_return)
    get_deposito_type_repo().add(dtype)
    return deposito_type_to_response(dtype)


@router.get("/{deposito_type_id}", response_model=DepositoTypeResponse)
def get_deposito_type(deposito_type_id: UUID) -> DepositoTypeResponse:
    return deposito_type_to_response(get_deposito_type_repo().get_deposito_type(deposito_type_id))


@router.patch("/{deposito_type_id}", response_model=DepositoTypeResponse)
def update_deposito_type(deposito_type_id: UUID, req: DepositoTypeUpdateRequest) -> DepositoTypeResponse:
    updated = get_deposito_type_repo().update(
        deposito_type_id=deposito_type_id,
        name=req.name,
        yearly_return=req.yearly_return,
    )
    return deposito_type_to_response(updated)


@router.delete("/{deposito_type_id}", status_code=204)
def delete_deposito_type(deposito_type_id: UUID) -> Response:
    get_deposito_type_repo().delete(deposito_type_id=deposito_type_id)
    return Response(status_code=204)


def deposito_type_to_response(d: DepositoType) -> DepositoTypeResponse:
    return DepositoTypeResponse(id=d.id, name=d.name, yearly_return=f"{d.yearly_return:.6f}")
