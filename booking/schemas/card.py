from pydantic import BaseModel, ConfigDict, Field


class CardDetails(BaseModel):
    """Raw card fields as typed by the user. Never persisted."""

    model_config = ConfigDict(hide_input_in_errors=True)

    number: str = Field(default="", repr=False)
    holder_name: str = ""
    expiry: str = ""
    cvv: str = Field(default="", repr=False)


class CardValidationOut(BaseModel):
    valid: bool
    violations: list[str]
