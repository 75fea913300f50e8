"""Ad schemas: sidecar metadata and the descriptor returned by the API."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_AD_DESCRIPTION = "No description available."


class AdMeta(BaseModel):
    """One entry of ads.json, joined to an ad image by its original filename."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    file: str
    label: Optional[str] = None
    description: Optional[str] = None
    redirect_url: Optional[str] = Field(default=None, alias="redirectUrl")


class AdDescriptor(BaseModel):
    """Ad as returned by /api/getAd (camelCase on the wire)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    image_url: str = Field(alias="imageUrl")
    title: str
    description: str
    redirect_url: Optional[str] = Field(default=None, alias="redirectUrl")
