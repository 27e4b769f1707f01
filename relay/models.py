from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

# ==================== ENUMS & CONSTANTS ====================

class TenseType(str, Enum):
    PRESENT_CONTINUOUS = "PC"
    GOING_TO = "GT"
    WILL = "WL"
    PRESENT_SIMPLE = "PS"

TENSE_DISPLAY_NAMES = {
    TenseType.PRESENT_CONTINUOUS.value: "Present Continuous",
    TenseType.GOING_TO.value: "Going To",
    TenseType.WILL.value: "Will",
    TenseType.PRESENT_SIMPLE.value: "Present Simple",
}

Number = Union[int, float]

# ==================== REQUEST MODELS ====================

class AnswerResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    question_text: str = Field(..., alias="questionText")
    selected: str
    correct: str
    is_correct: bool = Field(..., alias="isCorrect")
    # Category code; codes outside TenseType are kept as-is
    category: str = Field(..., alias="type")

class SubmissionRecord(BaseModel):
    """Quiz submission as posted by the front end.

    Every field is optional at the model level so that absent fields can be
    reported as "Missing required fields" instead of a schema error.
    """
    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    email: Optional[str] = None
    score: Optional[Number] = None
    total: Optional[Number] = None
    percentage: Optional[Number] = None
    timestamp: Optional[str] = None
    results: List[AnswerResult] = Field(default_factory=list)

    def missing_required_fields(self) -> bool:
        # score == 0 is a real result, only an absent score counts as missing
        return not self.name or not self.email or self.score is None or not self.total

# ==================== RESPONSE MODELS ====================

class RelayResponse(BaseModel):
    success: bool = True
    message: str = "Report sent to Telegram"

class ErrorResponse(BaseModel):
    error: str
