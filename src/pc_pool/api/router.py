"""pc_pool REST endpoint.

GET /pool-data?poolAddress=<base58>   — cached or freshly fetched pool state
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from config.settings import Settings
from src.pc_pool.api.dependencies import get_pool_service, get_settings
from src.pc_pool.application.service import PoolDataApplicationService

router = APIRouter(tags=["pools"])


@router.get("/pool-data")
async def get_pool_data(
    service: Annotated[PoolDataApplicationService, Depends(get_pool_service)],
    app_settings: Annotated[Settings, Depends(get_settings)],
    pool_address: str | None = Query(
        None, alias="poolAddress", description="Base-58 pool account address"
    ),
) -> JSONResponse:
    result = await service.get_pool_data(pool_address)
    return JSONResponse(
        content=result.entry.to_document(),
        headers={
            "Cache-Control": f"public, max-age={app_settings.CACHE_CONTROL_MAX_AGE}",
            "X-Cache-Status": result.cache_status.value,
            "X-Generated-At": result.entry.generated_at,
        },
    )
