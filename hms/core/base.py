import secrets
import string
from typing import ClassVar
from pydantic import BaseModel, ConfigDict
from sqlalchemy.orm import DeclarativeBase

_ID_ALPHABET = string.ascii_uppercase + string.digits

class Base(DeclarativeBase):
    pass

def gen_id(prefix: str, length: int = 6) -> str:
    return f"{prefix}-" + "".join(secrets.choice(_ID_ALPHABET) for _ in range(length))

class Entity(BaseModel):
    """Base for every stored document. ``id`` is assigned by the store when left empty."""
    model_config = ConfigDict(validate_assignment=True, extra="ignore")

    id_prefix: ClassVar[str] = "X"

    id: str = ""
