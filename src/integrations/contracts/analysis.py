"""Shapes of the structured channel analysis returned by the completion API."""
from typing import List

from pydantic import BaseModel, Field


class ContactInformation(BaseModel):
    phone_number: str = ""
    social_media_handles: List[str] = Field(default_factory=list)


class CompanyMention(BaseModel):
    name: str = ""
    contact_information: ContactInformation = Field(default_factory=ContactInformation)
    special_offers: str = ""


class AnalysisResult(BaseModel):
    summary: str = ""
    trends: str = ""
    contacts: List[str] = Field(default_factory=list)
    companies: List[CompanyMention] = Field(default_factory=list)
    discounts: List[str] = Field(default_factory=list)


class AnalysisError(BaseModel):
    error: str
    details: str = ""
    raw: str = ""
