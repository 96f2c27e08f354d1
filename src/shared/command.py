from pydantic import BaseModel, ConfigDict


class Command(BaseModel):
    """Immutable intent handed from the API layer to a command handler.

    Field constraints on commands are the validation layer: a command that
    constructs is a command the handler may act on.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")
