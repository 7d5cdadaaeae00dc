"""Runtime configuration API endpoint"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from explorer.config import Settings
from explorer.api.deps import get_settings

router = APIRouter()


class RuntimeConfigResponse(BaseModel):
    """Current runtime configuration"""

    environment: str = Field(..., description="Execution mode")
    network: str = Field(..., description="Cardano network served by Blockfrost")
    api_key_configured: bool = Field(..., description="Whether a Blockfrost API key is set")
    version: str = Field(..., description="API version")


@router.get("/config", response_model=RuntimeConfigResponse)
async def get_config(settings: Settings = Depends(get_settings)):
    """Return high-level runtime configuration. The API key itself is never exposed."""

    return RuntimeConfigResponse(
        environment=settings.environment,
        network=settings.blockfrost_network,
        api_key_configured=bool(settings.blockfrost_api_key),
        version=settings.api_version,
    )
