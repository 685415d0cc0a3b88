"""
EvaluationOutcome model representing the result of a field validation pass (ephemeral).
"""

from pydantic import BaseModel


class EvaluationOutcome(BaseModel):
    """
    Pass/fail flag plus optional message for one field validation pass.

    Hosts thread one outcome through every registered callback for a field,
    so each callback receives the running result of the ones before it.

    Attributes:
        is_valid: Whether the field passed so far
        message: Human-readable message, None when nothing was reported
    """

    is_valid: bool = True
    message: str | None = None

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "is_valid": False,
                "message": "Please enter at least 4 characters.",
            }
        }

    def fail(self, message: str, separator: str = "\n") -> "EvaluationOutcome":
        """
        Return a failed outcome carrying message.

        When this outcome had already failed with a message, the new message
        is appended to it.
        """
        if not self.is_valid and self.message:
            message = f"{self.message}{separator}{message}"
        return EvaluationOutcome(is_valid=False, message=message)
