# app/api/endpoints.py
from fastapi import APIRouter, HTTPException
import uuid

from app.models.schema import (
    NumberDiffRequest,
    NumberDiffResponse,
    FieldDiffRequest,
    FieldDiffResponse,
    TagDiffRequest,
    TagDiffResponse,
    SeparatorProfileInfo,
)
from app.packs.loader import load_pack
from app.services.classifier import diff_phone_numbers
from app.services.renderer import DiffRenderer
from app.utils.diff import merge_diffs
from app.utils.logger import logger

router = APIRouter()

# Service singletons
renderer = DiffRenderer()


def _internal_error(action: str) -> HTTPException:
    err_id = str(uuid.uuid4())
    logger.exception(f"{action} failed | error_id={err_id}")
    return HTTPException(
        status_code=500,
        detail=f"Diff could not be computed. Error id: {err_id}",
    )


@router.post("/diff/numbers", response_model=NumberDiffResponse)
async def diff_numbers(request: NumberDiffRequest):
    """
    Single number → merged runs for both sides.
    """
    try:
        original_diff, suggested_diff = diff_phone_numbers(request.original, request.suggested)
        return NumberDiffResponse(
            original_diff=merge_diffs(original_diff),
            suggested_diff=merge_diffs(suggested_diff),
        )
    except Exception:
        raise _internal_error("diff-numbers")


@router.post("/diff/field", response_model=FieldDiffResponse)
async def diff_field(request: FieldDiffRequest):
    """
    Whole field value (possibly several numbers) → runs and rendered HTML.
    """
    try:
        field, old_diff, new_diff = renderer.render_field(request.original, request.suggested)
    except Exception:
        raise _internal_error("diff-field")

    logger.info(
        f"diff-field ok | profile={field.profile} runs={len(field.original_diff)}/{len(field.suggested_diff)}"
    )
    return FieldDiffResponse(
        profile=field.profile,
        original_diff=field.original_diff,
        suggested_diff=field.suggested_diff,
        old_diff=old_diff,
        new_diff=new_diff,
    )


@router.post("/diff/tags", response_model=TagDiffResponse)
async def diff_tags(request: TagDiffRequest):
    old_tag_diff, new_tag_diff = renderer.get_diff_tags_html(request.old_key, request.new_key)
    return TagDiffResponse(old_tag_diff=old_tag_diff, new_tag_diff=new_tag_diff)


@router.get("/profiles/{name}", response_model=SeparatorProfileInfo)
async def get_profile(name: str):
    try:
        return load_pack(name).info()
    except FileNotFoundError:
        raise HTTPException(status_code=404, detail=f"Separator profile not found: {name}")
