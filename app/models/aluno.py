from typing import Optional
from pydantic import AliasChoices, BaseModel, Field


# Campos gravados no documento; id e age ficam de fora
CAMPOS_PERSISTIDOS = ("name", "birth_date", "grade", "email", "national_id")


class Aluno(BaseModel):
    id: Optional[str] = None
    name: str
    # aceita também os nomes antigos (datanasc, serie, idade, cpf)
    birth_date: str = Field(..., validation_alias=AliasChoices("birth_date", "datanasc"))
    grade: str = Field(..., validation_alias=AliasChoices("grade", "serie"))
    email: str
    age: Optional[int] = Field(None, validation_alias=AliasChoices("age", "idade"))
    national_id: Optional[str] = Field(None, validation_alias=AliasChoices("national_id", "cpf"))
