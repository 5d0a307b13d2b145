"""Tests for the transcript heuristic extractor."""

import re

import pytest

from contracts import PricingModel, Tone
from intake import SAMPLE_TRANSCRIPT, parse_transcript
from intake.transcript_parser import (
    DEFAULT_MODULES,
    extract_compliance,
    extract_list_items,
    extract_timeline_weeks,
    extract_with_context,
)


GENERIC_TRANSCRIPT = (
    "Our company is Acme Widgets, and we operate in the manufacturing industry. "
    "We need to improve our reporting pipeline across all the regional plants. "
    "The timeline is about 2 months. "
    "Our budget is around $80,000. "
    "We need frontend and backend work plus testing. "
    "We must be GDPR compliant. We'd prefer a fixed price."
)


class TestSampleTranscript:
    """The canonical demo transcript yields the curated record."""

    def test_sample_record(self):
        """The demo transcript yields the curated record."""
        result = parse_transcript(SAMPLE_TRANSCRIPT)
        assert result.client.name == "TechFlow Solutions"
        assert result.pricing_preference == PricingModel.HYBRID
        assert result.constraints.timeline_weeks == 12
        assert len(result.scope.modules) == 7

    def test_sample_record_validates(self):
        """The curated record is a valid discovery."""
        discovery = parse_transcript(SAMPLE_TRANSCRIPT).to_discovery()
        assert discovery.project.title == "User Onboarding Transformation"


class TestGenericTranscript:
    """Regex battery over an arbitrary transcript."""

    def test_client_and_industry(self):
        """Client name and industry are extracted."""
        result = parse_transcript(GENERIC_TRANSCRIPT)
        assert result.client.name == "Acme Widgets"
        assert result.client.industry == "manufacturing"

    def test_constraints(self):
        """Timeline, budget and compliance are extracted."""
        result = parse_transcript(GENERIC_TRANSCRIPT)
        assert result.constraints.timeline_weeks == 8
        assert result.constraints.budget_range == "$80,000"
        assert result.constraints.compliance == ["GDPR"]

    def test_scope_keywords(self):
        """Scope keywords become modules."""
        result = parse_transcript(GENERIC_TRANSCRIPT)
        assert result.scope.modules == [
            "Frontend Development",
            "Backend Development",
            "QA & Testing",
        ]

    def test_pricing_and_tone(self):
        """Pricing preference and tone are detected."""
        result = parse_transcript(GENERIC_TRANSCRIPT)
        assert result.pricing_preference == PricingModel.FIXED
        assert result.tone == Tone.CONSULTATIVE

    def test_objectives_extracted(self):
        """Objective phrases are collected."""
        result = parse_transcript(GENERIC_TRANSCRIPT)
        assert "improve our reporting pipeline across all the regional plants" in result.project.objectives

    def test_generic_result_validates(self):
        """Extraction of a generic transcript validates."""
        discovery = parse_transcript(GENERIC_TRANSCRIPT).to_discovery()
        assert discovery.timeline_weeks == 8


class TestDefaults:
    """Nothing matched: every field falls back."""

    @pytest.mark.parametrize("text", ["", None, "hello there"])
    def test_defaults(self, text):
        """Empty or unrelated text gets safe defaults."""
        result = parse_transcript(text)
        assert result.client.name == "Client Company"
        assert result.client.industry == "Technology"
        assert result.project.title == "Digital Transformation Initiative"
        assert result.scope.modules == DEFAULT_MODULES
        assert result.constraints.timeline_weeks == 12
        assert result.constraints.budget_range == "$100,000 - $200,000"
        assert result.pricing_preference == PricingModel.TM
        assert len(result.project.objectives) == 3

    def test_long_context_truncated(self):
        """Context is cut at 400 characters."""
        result = parse_transcript("x" * 1000)
        assert result.project.context == "x" * 400 + "..."


class TestHelpers:
    """Test extraction helpers."""

    def test_timeline_months_converted(self):
        """Months convert to weeks."""
        assert extract_timeline_weeks("We have 3 months") == 12
        assert extract_timeline_weeks("roughly a 10-week push") == 10
        assert extract_timeline_weeks("no dates yet") == 12

    def test_compliance_normalized_and_deduped(self):
        """SOC2 normalizes and duplicates drop."""
        assert extract_compliance("SOC2 and SOC 2 plus HIPAA") == ["SOC 2", "HIPAA"]

    def test_list_items_length_window(self):
        """Items outside the length window are skipped."""
        patterns = [re.compile(r"item: ([^\n]+)")]
        text = "item: short\nitem: this one is long enough to keep\n"
        assert extract_list_items(text, patterns) == ["this one is long enough to keep"]

    def test_list_items_capped(self):
        """Item lists are capped."""
        patterns = [re.compile(r"item: ([^\n]+)")]
        text = "".join(f"item: a sufficiently long item number {i}\n" for i in range(10))
        assert len(extract_list_items(text, patterns)) == 6

    def test_extract_with_context_first_match(self):
        """The first match wins."""
        patterns = [re.compile(r"name is (\w+)"), re.compile(r"called (\w+)")]
        assert extract_with_context("it is called Foo; name is Bar", patterns) == "Bar"
        assert extract_with_context("nothing", patterns) == ""
