from pydantic import BaseModel, ConfigDict, Field


class OcrProcessRequest(BaseModel):
    """JSON body accepted by the OCR function.

    Every field is optional at this layer so that a missing token or image is
    reported by the handler with its own status instead of a schema error.
    """

    model_config = ConfigDict(populate_by_name=True)

    image_base64: str | None = Field(default=None, alias="imageBase64")
    file_name: str | None = Field(default=None, alias="fileName")
    file_type: str | None = Field(default=None, alias="fileType")
    mode: str | None = None
    user_access_token: str | None = Field(default=None, alias="userAccessToken")
