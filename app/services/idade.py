# app/services/idade.py

from datetime import date, datetime
from typing import Optional, Union

from app.models.aluno import Aluno

FORMATO_DATA = "%d/%m/%Y"

DataLike = Union[date, datetime]


def _as_date(value: DataLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def _aniversario(nascimento: date, anos: int) -> date:
    try:
        return nascimento.replace(year=nascimento.year + anos)
    except ValueError:
        # 29/02 em ano não bissexto vira 01/03
        return date(nascimento.year + anos, 3, 1)


def age(birth_date: DataLike, reference_date: DataLike) -> int:
    """
    Idade em anos completos na data de referência.

    Horário e fuso são descartados: se os dois valores tiverem fuso, a
    referência é convertida para o fuso do nascimento antes de virar data.
    Nascimento no futuro devolve 0.
    """
    if (
        isinstance(birth_date, datetime)
        and isinstance(reference_date, datetime)
        and birth_date.tzinfo is not None
        and reference_date.tzinfo is not None
    ):
        reference_date = reference_date.astimezone(birth_date.tzinfo)

    nascimento = _as_date(birth_date)
    referencia = _as_date(reference_date)

    if referencia < nascimento:
        return 0

    anos = referencia.year - nascimento.year
    if _aniversario(nascimento, anos) > referencia:
        anos -= 1
    return anos


def parse_birth_date(texto: str) -> date:
    """Converte uma data no formato DD/MM/AAAA. Levanta ValueError se inválida."""
    return datetime.strptime(texto.strip(), FORMATO_DATA).date()


def with_age(aluno: Aluno, today: Optional[date] = None) -> Aluno:
    if today is None:
        today = date.today()
    try:
        nascimento = parse_birth_date(aluno.birth_date)
    except ValueError:
        return aluno.model_copy(update={"age": None})
    return aluno.model_copy(update={"age": age(nascimento, today)})
