"""Transaction write routes. Expense writes trigger threshold checks in the background."""
from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, status

from agribooks.container import Container
from agribooks.deps import CurrentUser
from agribooks.ledger import TransactionService
from agribooks.schemas import (TransactionCreate, TransactionRead,
                               TransactionUpdate)

router = APIRouter(prefix="/api/transactions", tags=["transactions"])


@router.post("", response_model=TransactionRead, status_code=status.HTTP_201_CREATED)
@inject
def create_transaction(
    payload: TransactionCreate,
    user: CurrentUser,
    service: TransactionService = Depends(Provide[Container.transaction_service]),
):
    return service.create(user.id, payload)


@router.put("/{transaction_id}", response_model=TransactionRead)
@inject
def update_transaction(
    transaction_id: str,
    payload: TransactionUpdate,
    user: CurrentUser,
    service: TransactionService = Depends(Provide[Container.transaction_service]),
):
    return service.update(transaction_id, user.id, payload)
