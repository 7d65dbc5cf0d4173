# streamhub/core/schemas.py
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Base de los schemas de salida/entrada: en Python snake_case,
    en el JSON camelCase (likesCount, parentId, createdAt...).
    Acepta ambos nombres al construir.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageOut(BaseModel):
    message: str


class SuccessOut(BaseModel):
    success: bool = True
