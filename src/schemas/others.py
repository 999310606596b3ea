from pydantic import BaseModel


class CountResponse(BaseModel):
    count: int


class SuccessResponse(BaseModel):
    success: bool = True
