from pydantic import BaseModel


class ErrorBodySchema(BaseModel):
    error: str
    details: str | None = None
