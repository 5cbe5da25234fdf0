"""Authentication check route."""

from fastapi import APIRouter

from config import API_PREFIX
from core.auth import CurrentPrincipal
from schemas.user import ProtectedResponse

router = APIRouter(prefix=API_PREFIX, tags=["Auth"])


@router.get("/protected", response_model=ProtectedResponse, summary="Check authentication")
def protected(principal: CurrentPrincipal) -> ProtectedResponse:
    return ProtectedResponse(message="You are authenticated", user=principal)
