from pydantic import BaseModel
from pydantic.alias_generators import to_camel

# Верхняя граница целых полей: колонки Integer (int4 в PostgreSQL)
MAX_INT = 2 ** 31 - 1


class CamelModel(BaseModel):
    """JSON-поля в camelCase на проводе, snake_case в Python."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class SuccessResponse(BaseModel):
    success: bool = True
