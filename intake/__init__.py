"""Intake: transcript pre-fill and canonical sample data."""

from .samples import SAMPLE_A, SAMPLE_B, SAMPLES, SAMPLE_TRANSCRIPT
from .transcript_parser import parse_transcript

__all__ = [
    "SAMPLE_A",
    "SAMPLE_B",
    "SAMPLES",
    "SAMPLE_TRANSCRIPT",
    "parse_transcript",
]
