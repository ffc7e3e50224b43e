"""
Pydantic models describing the outcome of a gopher download.
"""
from pydantic import BaseModel, Field


class SavedGopher(BaseModel):
    """A gopher image that was fetched and written to disk."""
    name: str
    url: str
    path: str = Field(..., examples=["standard.png"])
    size: int = Field(..., ge=0)

    @property
    def message(self) -> str:
        return f"Perfect! Just saved in {self.path}"
