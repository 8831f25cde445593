from dataclasses import dataclass
from typing import Any, Dict, Optional


ERROR_RESULT_TYPE = "error"


@dataclass(frozen=True)
class QueryError:
    message: str


@dataclass(frozen=True)
class QueryResult:
    type: str
    response: str
    data: Optional[Dict[str, Any]] = None
    error: Optional[QueryError] = None

    @property
    def is_error(self) -> bool:
        return self.type == ERROR_RESULT_TYPE

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"type": self.type, "response": self.response}
        if self.data is not None:
            result["data"] = self.data
        if self.error is not None:
            result["error"] = {"message": self.error.message}
        return result
