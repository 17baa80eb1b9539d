from pydantic import BaseModel


class ExtractedDocument(BaseModel):
    filename: str
    text: str


class ExtractResponse(ExtractedDocument):
    pass


class ErrorResponse(BaseModel):
    error: str
