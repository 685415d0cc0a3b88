"""
Host form models: the form, its fields, and the inputs of composite fields.
"""

from pydantic import BaseModel, Field


class FieldInput(BaseModel):
    """
    A sub-field of a composite field (e.g. "First" of a Name field).

    Attributes:
        id: Composite id as a string ("1.3")
        label: Human-readable label
    """

    id: str
    label: str = ""


class FormField(BaseModel):
    """
    A field descriptor as supplied by the host.

    Attributes:
        id: Major field id
        label: Field label
        is_required: Whether the host marks the field mandatory
        inputs: Sub-fields, for composite fields such as Name or Address
    """

    id: int = Field(..., ge=1)
    label: str = ""
    is_required: bool = False
    inputs: list[FieldInput] | None = None

    class Config:
        json_schema_extra = {
            "example": {
                "id": 1,
                "label": "Name",
                "is_required": False,
                "inputs": [
                    {"id": "1.3", "label": "First"},
                    {"id": "1.6", "label": "Last"},
                ],
            }
        }

    def input_label(self, input_id: str) -> str | None:
        """Label of the sub-field with the given id, if present."""
        for field_input in self.inputs or []:
            if field_input.id == input_id:
                return field_input.label or None
        return None


class Form(BaseModel):
    """
    A form schema as supplied by the host.

    Attributes:
        id: Form id
        title: Form title
        fields: Field descriptors in display order
    """

    id: int = Field(..., ge=1)
    title: str = ""
    fields: list[FormField] = Field(default_factory=list)

    def get_field(self, field_id: int) -> FormField | None:
        for field in self.fields:
            if field.id == field_id:
                return field
        return None
