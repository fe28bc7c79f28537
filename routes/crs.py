"""
CRS score API.

GET/POST/PUT /api/crs read and write the score stored on the caller's active
immigration file. POST /api/crs/preview scores a form without saving it, so
the UI can show a live score from the same engine.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Request
from bson import ObjectId

from app.auth.deps import get_current_user
from app.db import get_db
from app.crs.engine import score as compute_crs
from app.crs.requirements import REQUIRED_FIELDS_MESSAGE, analyze_crs_requirements
from models.crs import (
    CRSCurrentResponse,
    CRSFormData,
    CRSPreviewResponse,
    CRSScoreResponse,
    crs_score_entity,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/crs", tags=["crs"])


async def _active_file(db, user_id: str) -> dict:
    immigration_file = await db.immigration_files.find_one({
        "user_id": ObjectId(user_id),
        "is_active": True,
    })
    if not immigration_file:
        raise HTTPException(status_code=404, detail="No active immigration file found")
    return immigration_file


async def _score_and_save(form: CRSFormData, request: Request, user: dict, message: str) -> CRSScoreResponse:
    form_data = form.model_dump(exclude_none=True)

    analysis = analyze_crs_requirements(form_data)
    if not analysis["can_calculate"]:
        logger.warning(f"CRS form rejected for user {user['id']}: missing {analysis['missing_required']}")
        raise HTTPException(status_code=400, detail=REQUIRED_FIELDS_MESSAGE)

    db = get_db(request)
    immigration_file = await _active_file(db, user["id"])

    result = compute_crs(form_data)
    breakdown = result.to_dict()

    await db.immigration_files.update_one(
        {"_id": immigration_file["_id"]},
        {"$set": {
            "crs_score": result.total,
            "crs_breakdown": breakdown,
            "crs_form_data": form_data,
            "updated_at": datetime.now(timezone.utc),
        }}
    )
    logger.info(f"CRS score {result.total} saved on file {immigration_file['_id']} for user {user['id']}")

    return CRSScoreResponse(
        score=result.total,
        breakdown=breakdown,
        factors=result.factors,
        message=message,
    )


@router.get("", response_model=CRSCurrentResponse)
async def get_current_crs_score(request: Request, user: dict = Depends(get_current_user)):
    """Get the last saved CRS score for the caller's active immigration file"""
    db = get_db(request)
    immigration_file = await _active_file(db, user["id"])
    return crs_score_entity(immigration_file)


@router.post("", response_model=CRSScoreResponse)
async def calculate_and_save_crs_score(
    form: CRSFormData,
    request: Request,
    user: dict = Depends(get_current_user),
):
    """Calculate the CRS score and save it on the active immigration file"""
    return await _score_and_save(form, request, user, "CRS score calculated and saved successfully")


@router.put("", response_model=CRSScoreResponse)
async def update_crs_score(
    form: CRSFormData,
    request: Request,
    user: dict = Depends(get_current_user),
):
    """Recalculate the CRS score and overwrite the saved one"""
    return await _score_and_save(form, request, user, "CRS score updated successfully")


@router.post("/preview", response_model=CRSPreviewResponse)
async def preview_crs_score(form: CRSFormData):
    """
    Score a (possibly partial) form without saving it.

    Never rejects an incomplete form; `missingRequired` lists what the save
    endpoints would still ask for.
    """
    form_data = form.model_dump(exclude_none=True)
    result = compute_crs(form_data)
    analysis = analyze_crs_requirements(form_data)
    return CRSPreviewResponse(
        score=result.total,
        breakdown=result.to_dict(),
        factors=result.factors,
        missingRequired=analysis["missing_required"],
    )
