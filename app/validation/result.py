# app/validation/result.py

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field


class ValidationResult(BaseModel):
    status: Literal["success", "failure"]
    value: Optional[Any] = None
    field_errors: Dict[str, List[str]] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status == "success"
