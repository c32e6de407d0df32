"""
HTTP routes for the MindGains functions.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from content_pipeline.missions import analyze_mission, create_mission
from content_pipeline.ocr import process_image
from content_pipeline.pdf import process_pdf
from content_pipeline.youtube import extract_youtube, process_youtube
from providers.exceptions import ProviderError
from quiz import battle_content, india_challenge
from quiz.daily_quiz import generate_daily_quiz, submit_daily_quiz, validate_daily_quiz
from service.config import Settings, get_settings
from service.db import DbClient
from service.dependencies import get_db_client, get_user_id
from service.dispatch import ActionContext, dispatch
from service.errors import HandlerError, NotFoundError, UnauthorizedError
from service.schemas import (
    AnalyzeContentRequest,
    GenerateDailyQuizRequest,
    ImageOcrRequest,
    MissionCreateRequest,
    PdfRequest,
    SubmitDailyQuizRequest,
    ValidateDailyQuizRequest,
    YoutubeExtractRequest,
    YoutubeProcessRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _run_content(handler: Callable[..., dict], *args: Any):
    """
    Runs a content handler. Its errors are answered with `success: false`
    next to the message.
    """
    try:
        return handler(*args)
    except HandlerError as e:
        status_code, message = e.status_code, e.message
    except ProviderError as e:
        status_code, message = 500, str(e)
    if status_code >= 500:
        logger.error("%s failed: %s", handler.__name__, message)
    return JSONResponse(
        status_code=status_code, content={"success": False, "error": message}
    )


@router.post("/process-image-ocr")
def process_image_ocr(
    payload: ImageOcrRequest, settings: Settings = Depends(get_settings)
):
    return _run_content(process_image, payload.imageData, settings)


@router.post("/process-pdf")
def process_pdf_route(payload: PdfRequest, settings: Settings = Depends(get_settings)):
    return _run_content(
        process_pdf, payload.fileData, payload.fileName, payload.maxPages, settings
    )


@router.post("/process-youtube")
def process_youtube_route(
    payload: YoutubeProcessRequest, settings: Settings = Depends(get_settings)
):
    return _run_content(process_youtube, payload.url, payload.language, settings)


@router.post("/extract-youtube")
def extract_youtube_route(
    payload: YoutubeExtractRequest, settings: Settings = Depends(get_settings)
):
    return _run_content(extract_youtube, payload.videoId, payload.url, settings)


@router.post("/analyze-content")
def analyze_content_route(
    payload: AnalyzeContentRequest,
    db: DbClient = Depends(get_db_client),
    settings: Settings = Depends(get_settings),
):
    return _run_content(analyze_mission, db, payload.contentId, settings)


@router.post("/missions", status_code=201)
def create_mission_route(
    payload: MissionCreateRequest,
    db: DbClient = Depends(get_db_client),
    user_id: Optional[str] = Depends(get_user_id),
):
    mission = create_mission(
        db,
        user_id,
        title=payload.title,
        content_text=payload.contentText,
        description=payload.description,
        content_type=payload.contentType,
        subject_name=payload.subjectName,
        exam_focus=payload.examFocus,
        difficulty=payload.difficulty,
    )
    return mission.as_dict()


@router.get("/missions/{mission_id}")
def get_mission_route(mission_id: str, db: DbClient = Depends(get_db_client)):
    mission = db.get_mission(mission_id)
    if not mission:
        raise NotFoundError("Mission not found")
    return mission.as_dict()


@router.post("/generate-daily-quiz")
def generate_daily_quiz_route(
    payload: Optional[GenerateDailyQuizRequest] = None,
    db: DbClient = Depends(get_db_client),
    settings: Settings = Depends(get_settings),
):
    return generate_daily_quiz(db, settings, payload.date if payload else None)


@router.post("/submit-daily-quiz")
def submit_daily_quiz_route(
    payload: SubmitDailyQuizRequest,
    db: DbClient = Depends(get_db_client),
    settings: Settings = Depends(get_settings),
    user_id: Optional[str] = Depends(get_user_id),
):
    if not user_id:
        raise UnauthorizedError()
    return submit_daily_quiz(
        db, settings, user_id, payload.daily_quiz_id, payload.answers, payload.time_spent
    )


@router.post("/validate-daily-quiz")
def validate_daily_quiz_route(
    payload: Optional[ValidateDailyQuizRequest] = None,
    db: DbClient = Depends(get_db_client),
    settings: Settings = Depends(get_settings),
):
    return validate_daily_quiz(db, settings, payload.quiz_date if payload else None)


@router.post("/india-challenge")
def india_challenge_route(
    body: dict = Body(...),
    db: DbClient = Depends(get_db_client),
    settings: Settings = Depends(get_settings),
    user_id: Optional[str] = Depends(get_user_id),
):
    return dispatch(india_challenge.ACTIONS, body, ActionContext(db, settings, user_id))


@router.post("/ai-battle-content")
def ai_battle_content_route(
    body: dict = Body(...),
    db: DbClient = Depends(get_db_client),
    settings: Settings = Depends(get_settings),
    user_id: Optional[str] = Depends(get_user_id),
):
    return dispatch(battle_content.ACTIONS, body, ActionContext(db, settings, user_id))
