"""AI writing assistant endpoints (admin area)."""

import logging
from dataclasses import asdict
from typing import Awaitable, List, Tuple, TypeVar

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_generator, require_admin
from app.core.exceptions import AIServiceException
from app.crud import crud_ai_usage, crud_category
from app.models.user import User
from app.schemas.ai import (
    GeneratedPostResponse,
    GenerateRequest,
    ImprovedContentResponse,
    ImproveRequest,
    TitlesRequest,
    TopicsRequest,
)
from app.schemas.common import AIUsageStats, ApiResponse
from app.services.content_generator import ContentGenerationError, ContentGenerator, UsageStats
from app.services.gemini_client import GenerationError
from app.services.prompt_builder import PostGenerationOptions

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/ai",
    tags=["AI"],
)

ResultT = TypeVar("ResultT")


def _usage_stats(usage: UsageStats) -> AIUsageStats:
    return AIUsageStats(
        prompt_tokens=usage.prompt_tokens,
        completion_tokens=usage.completion_tokens,
        total_tokens=usage.total_tokens,
        cost=usage.cost,
    )


async def _run_logged(
    db: Session,
    generator: ContentGenerator,
    purpose: str,
    call: Awaitable[Tuple[ResultT, UsageStats]],
) -> Tuple[ResultT, UsageStats]:
    """
    Await a generator call and record it in the usage ledger either way.

    Raises:
        AIServiceException: 500 with the upstream message on any failure
    """
    try:
        result, usage = await call
    except (GenerationError, ContentGenerationError) as e:
        usage = getattr(e, "usage", None) or UsageStats()
        crud_ai_usage.log(
            db,
            model=generator.model_name,
            purpose=purpose,
            prompt_tokens=usage.prompt_tokens,
            completion_tokens=usage.completion_tokens,
            cost=usage.cost,
            success=False,
            error=str(e),
        )
        logger.error(f"AI {purpose} failed: {str(e)}")
        raise AIServiceException(str(e))

    crud_ai_usage.log(db, model=generator.model_name, purpose=purpose, **asdict(usage))
    return result, usage


@router.post(
    "/generate",
    response_model=ApiResponse[GeneratedPostResponse],
    summary="Generate a blog post draft",
)
async def generate_post(
    request: GenerateRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
    generator: ContentGenerator = Depends(get_generator),
) -> ApiResponse[GeneratedPostResponse]:
    """
    Generate a complete, SEO-ready draft. Nothing is saved as a post.

    Raises:
        HTTPException 500: AI service failure or unusable output
    """
    # An unknown categoryId leaves the category out of the prompt
    category_name = None
    if request.category_id is not None:
        category_name = crud_category.get_name(db, category_id=request.category_id)

    options = PostGenerationOptions(
        topic=request.topic,
        keywords=request.keywords,
        tone=request.tone.value,
        word_count=request.word_count,
        language=request.language.value,
        category_name=category_name,
    )
    post, usage = await _run_logged(db, generator, "post_generation", generator.generate_blog_post(options))

    return ApiResponse(
        data=GeneratedPostResponse(**asdict(post)),
        usage=_usage_stats(usage),
        message="Blog post generated",
    )


@router.post(
    "/improve",
    response_model=ApiResponse[ImprovedContentResponse],
    summary="Improve existing content",
)
async def improve_content(
    request: ImproveRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
    generator: ContentGenerator = Depends(get_generator),
) -> ApiResponse[ImprovedContentResponse]:
    improved, usage = await _run_logged(
        db, generator, "content_improvement",
        generator.improve_content(request.content, request.instructions),
    )
    return ApiResponse(
        data=ImprovedContentResponse(improved_content=improved),
        usage=_usage_stats(usage),
    )


@router.post(
    "/titles",
    response_model=ApiResponse[List[str]],
    summary="Suggest post titles",
)
async def suggest_titles(
    request: TitlesRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
    generator: ContentGenerator = Depends(get_generator),
) -> ApiResponse[List[str]]:
    titles, usage = await _run_logged(
        db, generator, "title_suggestions",
        generator.suggest_titles(request.topic, request.count, request.language.value),
    )
    return ApiResponse(data=titles, usage=_usage_stats(usage))


@router.post(
    "/topics",
    response_model=ApiResponse[List[str]],
    summary="Suggest post topics for a category",
)
async def suggest_topics(
    request: TopicsRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
    generator: ContentGenerator = Depends(get_generator),
) -> ApiResponse[List[str]]:
    topics, usage = await _run_logged(
        db, generator, "topic_suggestions",
        generator.suggest_topics(request.category, request.count, request.language.value),
    )
    return ApiResponse(data=topics, usage=_usage_stats(usage))


__all__ = ["router"]
