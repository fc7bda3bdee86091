from pydantic import BaseModel, ConfigDict, ValidationError
from typing import Any, ClassVar, FrozenSet, Optional


class BaseGolfModel(BaseModel):
    """Shared configuration and methods."""
    model_config = ConfigDict(validate_assignment=True)

    # Fields owned by the store; never changed through user corrections.
    READ_ONLY_FIELDS: ClassVar[FrozenSet[str]] = frozenset()

    def update_field(self, field_name: str, value: Any) -> Optional[str]:
        """Update a field with user correction. Returns error message if validation fails."""
        if field_name in self.READ_ONLY_FIELDS:
            return f"{field_name} cannot be edited"
        if field_name not in type(self).model_fields:
            return f"Unknown field: {field_name}"
        try:
            setattr(self, field_name, value)
            return None
        except ValidationError as e:
            return e.errors()[0]['msg']
