"""Unit Tests for MarkdownParser."""

import pytest

from src.services.doc_routing import MarkdownParser

DOC = """---
name: "Helm Chart Deployment"
description: Deploy FeatBit on Kubernetes with Helm
Method: helm-charts
---

# Helm
"""


@pytest.fixture
def parser():
    return MarkdownParser()


class TestFrontMatter:
    def test_extract_front_matter(self, parser):
        metadata = parser.extract_front_matter(DOC)

        assert metadata == {
            "name": "Helm Chart Deployment",
            "description": "Deploy FeatBit on Kubernetes with Helm",
            "method": "helm-charts",
        }

    def test_no_front_matter(self, parser):
        assert parser.extract_front_matter("# Title\n\nBody") == {}

    def test_remove_front_matter(self, parser):
        assert parser.remove_front_matter(DOC).strip() == "# Helm"

    def test_parse_document_defaults_name_to_stem(self, parser):
        parsed = parser.parse_document("HelmDeployment.md", "# Helm only")

        assert parsed.name == "HelmDeployment"
        assert parsed.description == "HelmDeployment.md"

    def test_parse_document_splits_metadata_and_body(self, parser):
        parsed = parser.parse_document("HelmDeployment.md", DOC)

        assert parsed.name == "Helm Chart Deployment"
        assert parsed.description == "Deploy FeatBit on Kubernetes with Helm"
        assert parsed.metadata["method"] == "helm-charts"
        assert parsed.body.strip() == "# Helm"


class TestDescription:
    """Description extraction with id fallback."""

    def test_description_found(self, parser):
        assert parser.extract_description("x.md", DOC) == "Deploy FeatBit on Kubernetes with Helm"

    def test_missing_content_falls_back_to_id(self, parser):
        assert parser.extract_description("x.md", None) == "x.md"
        assert parser.extract_description("x.md", "# No front matter") == "x.md"

    def test_empty_description_falls_back_to_id(self, parser):
        assert parser.extract_description("x.md", "---\ndescription:\n---\n") == "x.md"

    def test_only_head_is_scanned(self, parser):
        """Test that a description beyond the scanned lines is ignored."""
        content = "---\n" + "key: value\n" * 25 + "description: too late\n---\n"

        assert parser.extract_description("x.md", content) == "x.md"
