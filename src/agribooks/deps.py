"""Request-scoped dependencies: resolve the calling user from the X-User-Id header.

Token issuance and verification live outside this service; by the time a
request arrives here the gateway has already put the user id in the header.
"""
import logging
from typing import Annotated

from dependency_injector.wiring import Provide, inject
from fastapi import Depends, Header, Request

from agribooks.container import Container
from agribooks.core.exceptions import ForbiddenError, UnauthorizedError
from agribooks.db.models import User
from agribooks.ledger import LedgerStore

logger = logging.getLogger(__name__)


@inject
def get_current_user(
    request: Request,
    x_user_id: Annotated[str | None, Header()] = None,
    ledger: LedgerStore = Depends(Provide[Container.ledger_store]),
) -> User:
    """Resolve the authenticated user. 401 without header, 404 for unknown ids."""
    if not x_user_id:
        logger.warning("Authentication failed: missing user id", extra={"path": request.url.path})
        raise UnauthorizedError("Authentication required. Please provide x-user-id header.")
    return ledger.get_user(x_user_id)


def require_admin(user: Annotated[User, Depends(get_current_user)]) -> User:
    if user.role != "admin":
        raise ForbiddenError("Admin access required")
    return user


# Type aliases for route injection
CurrentUser = Annotated[User, Depends(get_current_user)]
AdminUser = Annotated[User, Depends(require_admin)]
