from pydantic import BaseModel, Field
from typing import List, Optional


class TextTranslationRequest(BaseModel):
    text: str
    target_language: str = "en"
    source_language: Optional[str] = Field(None, description="Detected from the text when omitted")
    enable_preprocessing: bool = True
    cultural_adaptation: bool = False


class PreprocessingFlagsRead(BaseModel):
    had_shortforms: bool = False
    had_slang: bool = False
    had_sarcasm: bool = False


class TextTranslationResponse(BaseModel):
    original: str
    preprocessed: str
    translated: str
    target_language: str
    detected_language: str
    origin: str
    confidence: Optional[float] = None
    preprocessing: PreprocessingFlagsRead


class LanguageRead(BaseModel):
    code: str
    name: str
    native_name: str


class DetectRequest(BaseModel):
    text: str = ""


class DetectResponse(BaseModel):
    detected_language: str
    confidence: float


class AudioTranslationRequest(BaseModel):
    audio_path: str
    target_language: str


class AudioTranslationResponse(BaseModel):
    transcript: str
    translation: str
    source_language: str


class OCRRequest(BaseModel):
    image_path: str


class OCRResponse(BaseModel):
    text: str


class LanguageListResponse(BaseModel):
    languages: List[LanguageRead]
