"""
Reciter data model.
"""

from pydantic import BaseModel, ConfigDict, Field


class Reciter(BaseModel):
    """
    A reciter whose per-verse recordings can be played.

    Attributes:
        id: Edition identifier (e.g. "ar.alafasy")
        folder: Folder name on the EveryAyah audio host
        name: Display name (Arabic)
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    folder: str = Field(..., min_length=1)
    name: str = Field(default="")

    def __str__(self) -> str:
        return f"Reciter({self.id})"
