# ebe/schemas/token.py
from pydantic import BaseModel


class TokenPayload(BaseModel):
    sub: str  # "sub" is the standard claim for subject (user ID)
    exp: int  # Standard claim for expiration time

    model_config = {"from_attributes": True}

    @property
    def user_id(self) -> str:
        return self.sub
