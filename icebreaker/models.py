from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

RawProfile = dict[str, Any]
Provider = Literal["openai", "gemini"]


class LeadRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    full_name: str
    first_name: str
    headline: str = ""
    about: str = ""
    posts: list[Any] = Field(default_factory=list)
    experience: list[Any] = Field(default_factory=list)
    education: list[Any] = Field(default_factory=list)
    source_url: str = ""
    # Which profile adapter supplied the name ("url" / "placeholder" for fallbacks).
    name_source: str = ""


class OutreachDraft(BaseModel):
    model_config = ConfigDict(extra="ignore")

    strategy: str | None = None
    signal_used: str | None = None
    icebreaker: str
    message: str


class LeadOptions(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    apify_key: str = Field(default="", alias="apifyKey")
    api_key: str = Field(default="", alias="apiKey")
    provider: Provider = "openai"
    custom_prompt: str = Field(default="", alias="customPrompt")
    my_offer: str = Field(default="", alias="myOffer")


class ProcessLeadRequest(LeadOptions):
    profile_url: str = Field(alias="profileUrl", min_length=1)


class BatchLeadRequest(LeadOptions):
    profile_urls: list[str] = Field(default_factory=list, alias="profileUrls")

    def lead_requests(self) -> list[ProcessLeadRequest]:
        options = self.model_dump(by_alias=True, exclude={"profile_urls"})
        return [
            ProcessLeadRequest(**options, profileUrl=url.strip())
            for url in self.profile_urls
            if url and url.strip()
        ]


class LeadResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    profile_url: str = Field(alias="profileUrl")
    strategy: str | None = None
    icebreaker: str
    message: str


class LeadFailure(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = "Error"
    profile_url: str = Field(alias="profileUrl")
    error: str


class BatchResult(BaseModel):
    results: list[LeadResult | LeadFailure] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    error: str
