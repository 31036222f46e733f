from pydantic import BaseModel, ConfigDict, Field


class GeneratePassphrasesRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    keywords: str | None = Field(default=None, description="Music artist name or keyword.")
    add_number: bool = Field(default=False, alias="addNumber")
    add_special_char: bool = Field(default=False, alias="addSpecialChar")
    include_spaces: bool = Field(default=False, alias="includeSpaces")


class GeneratePassphrasesResponse(BaseModel):
    passphrases: list[str]
    success: bool = True


class ErrorResponse(BaseModel):
    error: str
    kind: str | None = None
    success: bool = False
