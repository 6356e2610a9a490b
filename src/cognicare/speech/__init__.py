"""Transcript-based speech analysis."""

from cognicare.speech.analyzer import (
    FILLER_WORDS,
    SPEECH_PROMPTS,
    SpeechAnalysisResult,
    SpeechAnalyzer,
    SpeechAnalyzerConfig,
    count_filler_words,
    create_speech_analyzer,
    speech_analyzer,
    tokenize,
)

__all__ = [
    "FILLER_WORDS",
    "SPEECH_PROMPTS",
    "SpeechAnalysisResult",
    "SpeechAnalyzer",
    "SpeechAnalyzerConfig",
    "count_filler_words",
    "create_speech_analyzer",
    "speech_analyzer",
    "tokenize",
]
