"""
Documentation Tree Models

Two-level hierarchy of the public documentation site, loaded once from
``Docs/docs-tree.json``.
"""

from typing import List, Optional
from urllib.parse import urljoin, urlparse

from pydantic import BaseModel, ConfigDict, Field


class _DocTreeModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class DocTreeFile(_DocTreeModel):
    path: str
    url: str = ""
    full_url: str = Field("", alias="fullUrl")
    summary: str = ""

    def absolute_url(self, base_url: str = "") -> str:
        """``fullUrl`` when present, else ``url`` joined onto ``base_url``."""
        if self.full_url:
            return self.full_url
        if not self.url or not base_url or urlparse(self.url).scheme:
            return self.url
        return urljoin(base_url.rstrip("/") + "/", self.url.lstrip("/"))


class DocTreeSubsection(_DocTreeModel):
    title: str
    path: str = ""
    summary: str = ""
    files: List[DocTreeFile] = Field(default_factory=list)


class DocTreeSection(_DocTreeModel):
    title: str
    path: str = ""
    summary: str = ""
    files: List[DocTreeFile] = Field(default_factory=list)
    subsections: Optional[List[DocTreeSubsection]] = None

    def all_files(self) -> List[DocTreeFile]:
        """Section files followed by files of its direct subsections."""
        files = list(self.files)
        for subsection in self.subsections or []:
            files.extend(subsection.files)
        return files


class DocTree(_DocTreeModel):
    version: str = ""
    generated_at: str = Field("", alias="generatedAt")
    description: str = ""
    base_url: str = Field("", alias="baseUrl")
    sections: List[DocTreeSection] = Field(default_factory=list)

    def find_section(self, title: str) -> Optional[DocTreeSection]:
        wanted = title.strip().lower()
        for section in self.sections:
            if section.title.lower() == wanted:
                return section
        return None
