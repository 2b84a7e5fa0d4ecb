# module backend.pricing.views

"""Endpoints de tarification des cadres.
Public:
- GET /api/v1/pricing/frame-size?frameSize=&category=: prix unitaire résolu + source
- GET /api/v1/pricing/lowest?category=: prix "à partir de" d'une catégorie
- GET /api/v1/pricing/all: grille de prix de toutes les catégories
Admin (require_admin):
- GET/POST /api/v1/admin/categories/{category_id}/frame-prices
- DELETE /api/v1/admin/categories/{category_id}/frame-prices/{price_id}
"""
from typing import Any, Dict, Optional
import logging

from fastapi import APIRouter, Request, Depends, HTTPException, Query
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field, ValidationError as PydanticValidationError, field_validator

from backend.utils.security import require_admin
from backend.pricing import service as pricing_service
from backend.pricing import repository as pricing_repository
from backend.pricing.sizes import FrameSize, parse_frame_size

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/pricing", tags=["Pricing API"])
admin_router = APIRouter(prefix="/api/v1/admin/categories", tags=["Admin Pricing"])


class FramePriceIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    frame_size: FrameSize = Field(alias="frameSize")
    price: float = Field(gt=0)

    @field_validator("frame_size", mode="before")
    @classmethod
    def _frame_size(cls, v: Any) -> FrameSize:
        if isinstance(v, FrameSize):
            return v
        return parse_frame_size(str(v or ""))


@router.get("/frame-size")
def get_frame_size_price(frameSize: str = Query(...), category: Optional[str] = Query(default=None)):
    try:
        size = parse_frame_size(frameSize)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    price, source = pricing_service.resolve_price_with_source(size, category)
    return {"price": price, "source": source}


@router.get("/lowest")
def get_lowest_price(category: Optional[str] = Query(default=None)):
    return {"price": pricing_service.lowest_price(category)}


@router.get("/all")
def get_all_prices():
    try:
        grid = pricing_service.all_category_prices()
    except Exception:
        logger.exception("pricing.all_failed")
        raise HTTPException(status_code=500, detail="Failed to fetch pricing data")
    return JSONResponse(grid)


def _require_category(category_id: str) -> dict:
    category = pricing_repository.get_category(category_id)
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")
    return category


@admin_router.get("/{category_id}/frame-prices")
def admin_list_frame_prices(category_id: str, user: dict = Depends(require_admin)):
    _require_category(category_id)
    return JSONResponse(pricing_service.list_frame_prices(category_id))


@admin_router.post("/{category_id}/frame-prices")
async def admin_save_frame_price(category_id: str, request: Request, user: dict = Depends(require_admin)):
    """Crée ou met à jour le prix d'un format (body {frameSize, price>0})."""
    try:
        body: Dict[str, Any] = await request.json()
        data = FramePriceIn.model_validate(body)
    except PydanticValidationError as e:
        raise HTTPException(status_code=400, detail=e.errors(include_url=False, include_context=False, include_input=False))
    except Exception:
        raise HTTPException(status_code=400, detail="Invalid request data")

    _require_category(category_id)
    row = pricing_service.save_frame_price(category_id, data.frame_size, data.price)
    if not row:
        raise HTTPException(status_code=500, detail="Failed to save frame price")
    logger.info(
        "pricing.frame_price_saved category_id=%s frame_size=%s price=%s by=%s",
        category_id, data.frame_size.value, data.price, user.get("email"),
    )
    return JSONResponse(row)


@admin_router.delete("/{category_id}/frame-prices/{price_id}")
def admin_delete_frame_price(category_id: str, price_id: str, user: dict = Depends(require_admin)):
    if not pricing_service.delete_frame_price(category_id, price_id):
        raise HTTPException(status_code=404, detail="Frame price not found")
    logger.info("pricing.frame_price_deleted category_id=%s price_id=%s by=%s", category_id, price_id, user.get("email"))
    return {"success": True}
