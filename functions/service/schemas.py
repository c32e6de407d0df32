"""
Pydantic request bodies for the functions service.

Fields stay optional so handlers can answer missing values with their own
400 messages instead of a generic validation error.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel


class ImageOcrRequest(BaseModel):
    imageData: Optional[str] = None
    imageType: Optional[str] = None


class PdfRequest(BaseModel):
    fileData: Optional[str] = None
    fileName: Optional[str] = None
    maxPages: Optional[int] = None


class YoutubeProcessRequest(BaseModel):
    url: Optional[str] = None
    language: Optional[str] = "en"


class YoutubeExtractRequest(BaseModel):
    videoId: Optional[str] = None
    url: Optional[str] = None


class MissionCreateRequest(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    contentType: Optional[str] = None
    contentText: Optional[str] = None
    subjectName: Optional[str] = None
    examFocus: Optional[str] = None
    difficulty: Optional[str] = None


class AnalyzeContentRequest(BaseModel):
    contentId: Optional[str] = None
    contentType: Optional[str] = None
    source: Optional[str] = None


class GenerateDailyQuizRequest(BaseModel):
    date: Optional[str] = None


class SubmitDailyQuizRequest(BaseModel):
    daily_quiz_id: Optional[str] = None
    answers: Any = None
    time_spent: Any = None


class ValidateDailyQuizRequest(BaseModel):
    quiz_date: Optional[str] = None
