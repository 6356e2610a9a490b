"""Speech analysis over speech-to-text transcripts.

Derives SpeechMetrics from a transcript, its duration and optional pause
lengths using word statistics:
- Fluency from speaking rate, penalized by filler words
- Coherence from average sentence length
- Vocabulary diversity from the type-token ratio
- Pause frequency from distance to one pause per ten seconds
- Articulation from the share of truncated tokens
"""

import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, Field

from cognicare.assessment.types import (
    AssessmentResult,
    AssessmentType,
    SpeechDetails,
    SpeechMetrics,
    SpeechTaskResult,
)
from cognicare.core.logging import get_logger
from cognicare.utils.numbers import round_half_up

logger = get_logger(__name__)

FILLER_WORDS: tuple[str, ...] = (
    "um",
    "uh",
    "er",
    "ah",
    "like",
    "you know",
    "so",
    "well",
    "actually",
    "basically",
    "literally",
    "right",
    "okay",
    "yeah",
    "hmm",
)

SPEECH_PROMPTS: tuple[str, ...] = (
    "Please describe what you see in this picture. Take your time and include as many "
    "details as possible.",
    "Tell me about a typical day in your life, from when you wake up until you go to bed.",
    "Describe your favorite memory from childhood. What made it special?",
    "Explain how to make your favorite recipe or dish step by step.",
    "Tell me about the weather today and how it makes you feel.",
    "Describe the route from your home to the nearest grocery store.",
    "Talk about your family members and what they mean to you.",
    "Explain what you would do if you found a wallet on the street.",
)

_NON_WORD = re.compile(r"[^\w\s]")
_SENTENCE_END = re.compile(r"[.!?]+")

FLUENCY_TASK_CATEGORY = "fluency"
DESCRIPTION_TASK_ID = "picture_naming"


@dataclass
class SpeechAnalysisResult:
    """Statistics and metrics for one transcript.

    Attributes:
        transcript: The analyzed text.
        duration_s: Recording length in seconds.
        word_count: Number of tokens.
        unique_words: Number of distinct tokens.
        pause_count: Number of detected pauses.
        average_pause_length: Mean pause length, 0 without pauses.
        speaking_rate: Words per minute.
        filler_words: Number of filler words and phrases.
        metrics: Derived SpeechMetrics.
    """

    transcript: str
    duration_s: float
    word_count: int
    unique_words: int
    pause_count: int
    average_pause_length: float
    speaking_rate: float
    filler_words: int
    metrics: SpeechMetrics = field(default_factory=SpeechMetrics)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "transcript": self.transcript,
            "duration_s": self.duration_s,
            "word_count": self.word_count,
            "unique_words": self.unique_words,
            "pause_count": self.pause_count,
            "average_pause_length": self.average_pause_length,
            "speaking_rate": self.speaking_rate,
            "filler_words": self.filler_words,
            "metrics": self.metrics.to_dict(),
        }


class SpeechAnalyzerConfig(BaseModel):
    """Configuration for speech analysis."""

    normal_speaking_rate: float = Field(
        default=150.0, gt=0, description="Words per minute scored as fully fluent"
    )
    optimal_sentence_length: float = Field(
        default=15.0, gt=0, description="Words per sentence scored as fully coherent"
    )
    min_coherence: float = Field(default=20.0, ge=0, le=100, description="Coherence floor")
    vocabulary_scale: float = Field(
        default=200.0, gt=0, description="Multiplier turning type-token ratio into 0-100"
    )
    seconds_per_expected_pause: float = Field(
        default=10.0, gt=0, description="One natural pause expected per this many seconds"
    )
    pause_penalty: float = Field(
        default=10.0, ge=0, description="Points lost per pause away from expected"
    )
    min_word_length: int = Field(
        default=2, ge=1, description="Tokens shorter than this count as truncated"
    )


def tokenize(text: str) -> list[str]:
    """Lowercase, drop punctuation and split on whitespace."""
    return _NON_WORD.sub(" ", text.lower()).split()


def count_filler_words(words: Sequence[str], fillers: Sequence[str] = FILLER_WORDS) -> int:
    """Count filler words, matching multi-word fillers as token sequences."""
    phrases = [tuple(f.split()) for f in fillers]
    count = 0
    for i in range(len(words)):
        for phrase in phrases:
            if tuple(words[i : i + len(phrase)]) == phrase:
                count += 1
    return count


class SpeechAnalyzer:
    """Analyzes transcripts into speech metrics.

    Example:
        analyzer = SpeechAnalyzer()
        result = analyzer.analyze_transcript(transcript, duration_s=42.0, pauses=[0.8, 1.2])
        print(result.metrics.fluency)
    """

    def __init__(self, config: SpeechAnalyzerConfig | None = None) -> None:
        """Initialize analyzer.

        Args:
            config: Speech analysis configuration.
        """
        self.config = config or SpeechAnalyzerConfig()

    def analyze_transcript(
        self,
        transcript: str,
        duration_s: float,
        pauses: Sequence[float] | None = None,
    ) -> SpeechAnalysisResult:
        """Compute transcript statistics and speech metrics.

        Args:
            transcript: Speech-to-text output.
            duration_s: Recording length in seconds.
            pauses: Optional pause lengths, one per detected pause.

        Returns:
            SpeechAnalysisResult with statistics and metrics.
        """
        words = tokenize(transcript)
        word_count = len(words)
        unique_words = len(set(words))
        pause_count = len(pauses) if pauses else 0
        average_pause_length = sum(pauses) / pause_count if pauses else 0.0
        speaking_rate = word_count / duration_s * 60 if duration_s > 0 else 0.0
        filler_words = count_filler_words(words)

        metrics = self._calculate_metrics(
            transcript=transcript,
            words=words,
            unique_words=unique_words,
            duration_s=duration_s,
            pause_count=pause_count,
            speaking_rate=speaking_rate,
            filler_words=filler_words,
        )

        logger.debug(
            "Transcript analyzed",
            word_count=word_count,
            speaking_rate=round(speaking_rate, 1),
            filler_words=filler_words,
            pause_count=pause_count,
        )

        return SpeechAnalysisResult(
            transcript=transcript,
            duration_s=duration_s,
            word_count=word_count,
            unique_words=unique_words,
            pause_count=pause_count,
            average_pause_length=average_pause_length,
            speaking_rate=speaking_rate,
            filler_words=filler_words,
            metrics=metrics,
        )

    def _calculate_metrics(
        self,
        transcript: str,
        words: list[str],
        unique_words: int,
        duration_s: float,
        pause_count: int,
        speaking_rate: float,
        filler_words: int,
    ) -> SpeechMetrics:
        cfg = self.config
        word_count = len(words)

        # Pauses are scored even for an empty transcript
        expected_pauses = duration_s / cfg.seconds_per_expected_pause
        pause_score = max(0.0, 100 - abs(pause_count - expected_pauses) * cfg.pause_penalty)
        pause_frequency = min(100.0, pause_score)

        if word_count == 0:
            return SpeechMetrics(
                coherence=round_half_up(cfg.min_coherence),
                pause_frequency=round_half_up(pause_frequency),
            )

        speaking_rate_score = min(100.0, speaking_rate / cfg.normal_speaking_rate * 100)
        filler_penalty = filler_words / word_count * 100
        fluency = max(0.0, speaking_rate_score - filler_penalty)

        sentences = [s for s in _SENTENCE_END.split(transcript) if s.strip()]
        avg_sentence_length = word_count / max(1, len(sentences))
        coherence_score = min(100.0, avg_sentence_length / cfg.optimal_sentence_length * 100)
        coherence = max(cfg.min_coherence, coherence_score)

        type_token_ratio = unique_words / word_count
        vocabulary_diversity = min(100.0, type_token_ratio * cfg.vocabulary_scale)

        truncated = sum(1 for w in words if len(w) < cfg.min_word_length)
        articulation = max(0.0, 100 - truncated / word_count * 100)

        return SpeechMetrics(
            fluency=round_half_up(fluency),
            coherence=round_half_up(coherence),
            vocabulary_diversity=round_half_up(vocabulary_diversity),
            pause_frequency=round_half_up(pause_frequency),
            articulation=round_half_up(articulation),
        )

    @staticmethod
    def speech_prompts() -> list[str]:
        """Prompts offered for recorded speech tasks."""
        return list(SPEECH_PROMPTS)

    def build_speech_assessment(
        self,
        user_id: str,
        tasks: Sequence[SpeechTaskResult],
        analysis: SpeechAnalysisResult | None = None,
    ) -> AssessmentResult:
        """Summarize recorded speech tasks into an assessment record.

        The score is the rounded mean task score out of 100. When a
        transcript analysis is supplied its metrics are embedded so that
        the risk calculator can use them.

        Args:
            user_id: User who completed the tasks.
            tasks: Recorded task results.
            analysis: Optional transcript analysis.

        Returns:
            Speech AssessmentResult.

        Raises:
            ValueError: If no tasks were recorded.
        """
        if not tasks:
            raise ValueError("A speech assessment needs at least one recorded task")

        fluency_tasks = [t for t in tasks if t.category == FLUENCY_TASK_CATEGORY]
        description = next((t for t in tasks if t.task_id == DESCRIPTION_TASK_ID), None)

        details = SpeechDetails(
            tasks=list(tasks),
            fluency_score=(
                sum(t.score for t in fluency_tasks) / len(fluency_tasks) if fluency_tasks else 0.0
            ),
            description_score=description.score if description else 0.0,
            total_words=sum(t.words_spoken for t in tasks),
            avg_pauses=sum(t.pause_count for t in tasks) / len(tasks),
            metrics=analysis.metrics if analysis else None,
        )

        return AssessmentResult(
            user_id=user_id,
            type=AssessmentType.SPEECH,
            score=round_half_up(sum(t.score for t in tasks) / len(tasks)),
            max_score=100,
            duration_ms=sum(t.duration_ms for t in tasks),
            details=details,
        )


speech_analyzer = SpeechAnalyzer()


def create_speech_analyzer(config: SpeechAnalyzerConfig | None = None) -> SpeechAnalyzer:
    """Create a speech analyzer.

    Args:
        config: Optional analyzer configuration.

    Returns:
        Configured SpeechAnalyzer.
    """
    return SpeechAnalyzer(config=config)
