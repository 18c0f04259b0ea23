"""Tests for the SEO summary builder."""

import dataclasses

import pytest
from seo_snapshot.config import AnalysisThresholds
from seo_snapshot.models import (
    ExtractedDocument,
    ImageAudit,
    JsonLdEntity,
    LinkStats,
)
from seo_snapshot.summary import build_seo_summary


@pytest.fixture
def link_stats():
    return LinkStats(internal_links=7, external_links=3, nofollow_count=1, broken_count=2)


class TestSEOSummary:
    """Test cases for build_seo_summary."""

    @pytest.mark.parametrize("length,too_long", [(59, False), (60, False), (61, True)])
    def test_title_boundary(self, link_stats, length, too_long):
        document = ExtractedDocument(title="t" * length)
        summary = build_seo_summary(document, link_stats)

        assert summary.title_length == length
        assert summary.title_too_long is too_long

    @pytest.mark.parametrize("length,too_long", [(160, False), (161, True)])
    def test_description_boundary(self, link_stats, length, too_long):
        document = ExtractedDocument(meta_description="d" * length)
        summary = build_seo_summary(document, link_stats)

        assert summary.meta_description_length == length
        assert summary.meta_description_too_long is too_long

    def test_missing_title_and_description(self, link_stats):
        summary = build_seo_summary(ExtractedDocument(), link_stats)

        assert summary.title_length == 0
        assert summary.title_too_long is False
        assert summary.meta_description_length == 0
        assert summary.meta_description_too_long is False
        assert summary.h1_count == 0
        assert summary.has_og_tags is False
        assert summary.has_json_ld is False
        assert summary.canonical_status == "missing"

    def test_signals_are_merged(self, link_stats):
        document = ExtractedDocument(
            heading_counts={"h1": 2, "h2": 5},
            og_tags={"og:title": "X"},
            json_ld=[JsonLdEntity(type="Thing")],
            images=ImageAudit(total=5, with_alt=3, missing_alt=2),
            robots_directives=["noindex", "nofollow"],
            canonical_status="different",
            word_count=321,
        )
        summary = build_seo_summary(document, link_stats)

        assert summary.h1_count == 2
        assert summary.has_og_tags is True
        assert summary.has_json_ld is True
        assert summary.images_with_alt == 3
        assert summary.images_missing_alt == 2
        assert summary.robots_directives == ("noindex", "nofollow")
        assert summary.canonical_status == "different"
        assert summary.word_count == 321
        assert summary.internal_links == 7
        assert summary.external_links == 3
        assert summary.nofollow_count == 1
        assert summary.broken_count == 2

    def test_custom_thresholds(self, link_stats):
        thresholds = AnalysisThresholds(title_max=10, meta_description_max=20)
        document = ExtractedDocument(title="t" * 11, meta_description="d" * 20)
        summary = build_seo_summary(document, link_stats, thresholds)

        assert summary.title_too_long is True
        assert summary.meta_description_too_long is False

    def test_summary_is_read_only(self, link_stats):
        summary = build_seo_summary(ExtractedDocument(), link_stats)
        with pytest.raises(dataclasses.FrozenInstanceError):
            summary.h1_count = 5

    def test_to_dict_keys(self, link_stats):
        data = build_seo_summary(ExtractedDocument(title="T"), link_stats).to_dict()

        assert data["titleLength"] == 1
        assert data["brokenCount"] == 2
        assert set(data) == {
            "titleLength", "titleTooLong", "metaDescriptionLength",
            "metaDescriptionTooLong", "h1Count", "imagesWithAlt",
            "imagesMissingAlt", "robotsDirectives", "canonicalStatus",
            "hasOgTags", "hasJsonLd", "wordCount", "internalLinks",
            "externalLinks", "nofollowCount", "brokenCount",
        }
