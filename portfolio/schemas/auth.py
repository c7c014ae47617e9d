from pydantic import BaseModel


class AdminOut(BaseModel):
    email: str
