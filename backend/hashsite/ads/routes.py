"""Ad API route."""

from typing import Annotated, List

from fastapi import APIRouter, Depends

from hashsite.ads.models import AdDescriptor
from hashsite.ads.sampler import sample
from hashsite.assets.registry import AssetRegistry
from hashsite.config import Settings
from hashsite.dependencies import get_app_settings, get_registry

router = APIRouter(prefix="/api", tags=["ads"])


@router.get("/getAd", response_model=List[AdDescriptor])
async def get_ad(
    registry: Annotated[AssetRegistry, Depends(get_registry)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> List[AdDescriptor]:
    """Return up to ads_per_request distinct ads, picked at random."""
    return sample(registry.ads, settings.ads_per_request)
