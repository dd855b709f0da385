from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from educonnect.core.db import get_db
from educonnect.core.deps import require_operation
from educonnect.core.permissions import CallerContext, Operation
from educonnect.schemas.user import SearchResults
from educonnect.services.search_service import search_directory
from educonnect.services.user_service import to_user_public

router = APIRouter(tags=["search"])


@router.get("/search", response_model=SearchResults)
def search(
    query: str | None = None,
    role: str | None = None,
    db: Session = Depends(get_db),
    caller: CallerContext = Depends(require_operation(Operation.SEARCH_DIRECTORY)),
):
    users = search_directory(db, caller, query, requested_role=role)
    return SearchResults(results=[to_user_public(user) for user in users])
