from pydantic import BaseModel, Field

class CardStats(BaseModel):
    todo: int
    in_progress: int = Field(..., serialization_alias="inProgress")
    done: int
    total: int
