from typing import Any

from pydantic import BaseModel, Field, constr


class FlashMessageIn(BaseModel):
    key: constr(min_length=1, max_length=64) = "notice"
    message: Any


class FlashRedirectIn(BaseModel):
    url: str = "/messages"
    alert: str | None = None
    notice: str | None = None
    flash: dict[str, Any] | None = Field(
        None, description="Entradas extras gravadas no flash antes do redirect."
    )


class FlashKeyIn(BaseModel):
    key: str | None = Field(None, description="Sem chave: aplica a todo o flash.")


class FlashOut(BaseModel):
    flash: dict[str, Any]
    alert: Any = None
    notice: Any = None
