# streamhub/core/json.py
import json
from typing import Any, Mapping

from fastapi.encoders import jsonable_encoder
from starlette.responses import JSONResponse


class UTF8JSONResponse(JSONResponse):
    """
    Clase de respuesta por defecto de la app.
    Títulos, descripciones y nombres de canal con acentos o emojis viajan
    tal cual (sin \\uXXXX); datetimes y modelos pasan por jsonable_encoder.
    """
    media_type = "application/json; charset=utf-8"

    def render(self, content: Any) -> bytes:
        return json.dumps(
            jsonable_encoder(content),
            ensure_ascii=False,
            allow_nan=False,
            separators=(",", ":"),
        ).encode("utf-8")


def message_response(
    status_code: int,
    message: str,
    headers: Mapping[str, str] | None = None,
) -> UTF8JSONResponse:
    # sobre único de error: {"message": "..."}
    return UTF8JSONResponse(
        status_code=status_code,
        content={"message": message},
        headers=headers,
    )
