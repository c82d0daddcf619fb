from fastapi import APIRouter
from capsule_closet.core.taxonomy import get_taxonomy

router = APIRouter(prefix="/taxonomy", tags=["taxonomy"])


@router.get("")
async def read_taxonomy():
    # get_taxonomy is lru_cached
    return get_taxonomy()
