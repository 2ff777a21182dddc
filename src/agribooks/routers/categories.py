"""Category routes: just enough to reference categories from reminders and transactions."""
from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, status

from agribooks.container import Container
from agribooks.db.models import Category
from agribooks.deps import CurrentUser
from agribooks.ledger import LedgerStore
from agribooks.schemas import CategoryCreate, CategoryRead

router = APIRouter(prefix="/api/categories", tags=["categories"])


@router.get("", response_model=list[CategoryRead])
@inject
def list_categories(
    user: CurrentUser,
    ledger: LedgerStore = Depends(Provide[Container.ledger_store]),
):
    return ledger.list_categories(user.id)


@router.post("", response_model=CategoryRead, status_code=status.HTTP_201_CREATED)
@inject
def create_category(
    payload: CategoryCreate,
    user: CurrentUser,
    ledger: LedgerStore = Depends(Provide[Container.ledger_store]),
):
    return ledger.add_category(Category(user_id=user.id, name=payload.name, type=payload.type))
