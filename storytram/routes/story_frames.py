"""
Story Frame API Routes

Endpoints for listing story types and generating story frames.
Generation is seeded per request, so the same request always returns
the same document.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel, ConfigDict, Field

from storytram.storyteller import (
    ConfigurationError,
    StoryOptions,
    default_catalog,
    generate_story,
    list_story_types,
    seeded_source,
)
from storytram.utils.logging import api_logger, get_log_buffer


router = APIRouter(prefix="/api/story-frames", tags=["story-frames"])


# =============================================================================
# Request / Response Models
# =============================================================================

class StoryFrameRequest(BaseModel):
    """Request to generate a story frame. Accepts camelCase or snake_case keys."""
    model_config = ConfigDict(populate_by_name=True)

    story_type: Optional[str] = Field(default=None, alias="storyType")
    scene_count: Optional[int] = Field(default=None, alias="sceneCount")  # advisory, not honored
    location: Optional[str] = None
    weather: Optional[str] = None
    friends: Optional[List[str]] = None
    seed: int = Field(default=0, description="Seed for the randomness source")


class StoryFrameResponse(BaseModel):
    """Generated story frame."""
    title: str
    document: str
    scenes: List[str]
    scene_count: int
    story_type: str
    ending_mode: str
    attempts: int
    validated: bool
    contract: Optional[Dict[str, Any]] = None


# =============================================================================
# Routes
# =============================================================================

@router.get("/types")
async def get_story_types():
    """List the available story types and their scene ranges."""
    return {"story_types": list_story_types()}


@router.post("", response_model=StoryFrameResponse)
async def create_story_frame(request: StoryFrameRequest):
    """
    Generate a story frame.

    Configuration problems (unknown story type, no matching triad)
    return 400 and never a partial document.
    """
    options = StoryOptions(
        story_type=request.story_type,
        scene_count=request.scene_count,
        location=request.location,
        weather=request.weather,
        friends=request.friends,
    )

    try:
        result = generate_story(options, default_catalog(), seeded_source(request.seed))
    except ConfigurationError as e:
        api_logger.warning("Rejected story frame request", error=str(e))
        raise HTTPException(status_code=400, detail=str(e))

    data = result.to_dict()
    return StoryFrameResponse(
        title=data["title"],
        document=data["document"],
        scenes=data["scenes"],
        scene_count=data["scene_count"],
        story_type=data["story_type"],
        ending_mode=data["ending_mode"],
        attempts=data["attempts"],
        validated=data["validated"],
        contract=data["contract"],
    )


@router.get("/warnings")
async def get_recent_warnings(limit: int = Query(default=50, ge=1, le=500)):
    """Recent engine warnings, e.g. stories emitted after exhausting retries."""
    buffer = get_log_buffer()
    return {"warnings": buffer.get_warnings(limit=limit), "stats": buffer.get_stats()}
