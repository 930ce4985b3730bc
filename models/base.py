from pydantic import BaseModel, ConfigDict


class BaseGolfModel(BaseModel):
    """Shared configuration: assignments are validated like construction."""
    model_config = ConfigDict(validate_assignment=True)
