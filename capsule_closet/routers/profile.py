import logging
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from capsule_closet.auth.deps import get_current_user_id, get_user_id_optional
from capsule_closet.core.config import settings
from capsule_closet.core.db import get_session
from capsule_closet.models.models import User
from capsule_closet.routers.closet_helpers import CLOSET_PATH, _count_items
from capsule_closet.schemas.profile import HomeOut, ProfileIn, ProfileOut, Sizes
from capsule_closet.services.events import record_event

router = APIRouter(tags=["profile"])
logger = logging.getLogger("uvicorn.error")

ENTRY_PATH = "/"
ONBOARDING_PATH = "/onboarding"
CAPSULE_PATH = "/capsule"


def _onboarded(user: Optional[User]) -> bool:
    return bool(user and user.budget_band and user.vibes)


def _profile_out(user_id: str, user: Optional[User], redirect_to: Optional[str] = None) -> ProfileOut:
    if not user:
        return ProfileOut(id=user_id, redirect_to=redirect_to)
    return ProfileOut(
        id=user_id,
        sizes=Sizes(**(user.sizes or {})),
        budget_band=user.budget_band,
        vibes=list(user.vibes or []),
        climate=user.climate,
        brands=list(user.brands or []),
        onboarded=_onboarded(user),
        redirect_to=redirect_to,
    )


@router.get("/profile", response_model=ProfileOut)
async def read_profile(
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    user = await session.get(User, user_id)
    return _profile_out(user_id, user, None if _onboarded(user) else ONBOARDING_PATH)


@router.put("/profile", response_model=ProfileOut)
async def complete_onboarding(
    payload: ProfileIn,
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    """Store onboarding answers and move the user on to the closet upload."""
    user = await session.get(User, user_id)
    if user is None:
        user = User(id=user_id)
        session.add(user)
    user.sizes = payload.sizes.model_dump()
    user.budget_band = payload.budget_band
    user.vibes = payload.vibes
    user.climate = payload.climate
    user.brands = payload.brands
    await record_event(
        session,
        user_id,
        "complete_onboarding",
        {"budget_band": payload.budget_band, "vibes": payload.vibes, "climate": payload.climate},
    )
    await session.commit()
    logger.info("profile: onboarded user_id=%s budget=%s", user_id, payload.budget_band)
    return _profile_out(user_id, user, CLOSET_PATH)


@router.get("/home", response_model=HomeOut)
async def home(
    session: AsyncSession = Depends(get_session),
    user_id: Optional[str] = Depends(get_user_id_optional),
):
    """Where the client should go next."""
    if not user_id:
        return HomeOut(authenticated=False, redirect_to=ENTRY_PATH)
    user = await session.get(User, user_id)
    if not _onboarded(user):
        return HomeOut(authenticated=True, redirect_to=ONBOARDING_PATH)
    count = await _count_items(session, user_id)
    next_step = CLOSET_PATH if count < settings.CAPSULE_MIN_ITEMS else CAPSULE_PATH
    return HomeOut(authenticated=True, onboarded=True, closet_count=count, redirect_to=next_step)
