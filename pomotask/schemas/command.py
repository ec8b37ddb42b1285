"""Résultat typé renvoyé par chaque commande"""

from typing import Any, Optional, Literal

from pydantic import BaseModel

ErrorKind = Literal["validation", "not_found", "storage", "internal"]


class CommandResult(BaseModel):
    ok: bool
    value: Any = None
    error_kind: Optional[ErrorKind] = None
    message: Optional[str] = None

    @classmethod
    def success(cls, value: Any = None) -> "CommandResult":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, kind: str, message: str) -> "CommandResult":
        return cls(ok=False, error_kind=kind, message=message)
