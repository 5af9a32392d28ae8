from pydantic import BaseModel


class ActionResult(BaseModel):
    """Outcome of a side-effecting action forwarded to a provider."""
    success: bool = True
    duplicate: bool = False
    message: str = ""
