# app/services/alunos_service.py

from datetime import date, datetime
from typing import Any, Dict, List

from bson import ObjectId
from bson.errors import InvalidId
from pydantic import ValidationError
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from app.core.errors import InvalidIdError, NotFoundError, StorageError
from app.models.aluno import CAMPOS_PERSISTIDOS, Aluno
from app.services.idade import FORMATO_DATA


# Nomes antigos removidos ao regravar o documento
CAMPOS_LEGADOS = {"datanasc": "", "serie": "", "cpf": "", "idade": ""}


def _object_id(aluno_id: str) -> ObjectId:
    try:
        return ObjectId(aluno_id)
    except (InvalidId, TypeError):
        raise InvalidIdError(f"ID inválido: {aluno_id}")


def _to_document(aluno: Aluno) -> Dict[str, Any]:
    return aluno.model_dump(include=set(CAMPOS_PERSISTIDOS))


def _texto_data(valor: Any) -> str:
    if valor is None:
        return ""
    if isinstance(valor, (date, datetime)):
        return valor.strftime(FORMATO_DATA)
    return str(valor)


def _from_document(doc: Dict[str, Any]) -> Aluno:
    dados = {k: v for k, v in doc.items() if k not in ("_id", "age", "idade")}
    # outros clientes podem gravar null ou BSON date no nascimento
    for campo in ("birth_date", "datanasc"):
        if campo in dados and not isinstance(dados[campo], str):
            dados[campo] = _texto_data(dados[campo])
    try:
        return Aluno.model_validate({**dados, "id": str(doc["_id"])})
    except ValidationError as e:
        raise StorageError(f"Documento inválido {doc['_id']}: {e}") from e


def list_alunos(collection: Collection) -> List[Aluno]:
    try:
        docs = list(collection.find({}))
    except PyMongoError as e:
        raise StorageError(str(e)) from e
    return [_from_document(doc) for doc in docs]


def get_aluno(collection: Collection, aluno_id: str) -> Aluno:
    oid = _object_id(aluno_id)
    try:
        doc = collection.find_one({"_id": oid})
    except PyMongoError as e:
        raise StorageError(str(e)) from e
    if doc is None:
        raise NotFoundError(f"Aluno {aluno_id} não encontrado")
    return _from_document(doc)


def create_aluno(collection: Collection, aluno: Aluno) -> Aluno:
    """
    Insere o aluno ignorando qualquer id enviado pelo cliente e devolve
    o documento relido do banco, já com o id gerado.
    """
    try:
        result = collection.insert_one(_to_document(aluno))
        doc = collection.find_one({"_id": result.inserted_id})
    except PyMongoError as e:
        raise StorageError(str(e)) from e
    if doc is None:
        raise StorageError(f"Aluno {result.inserted_id} não encontrado após inserção")
    return _from_document(doc)


def update_aluno(collection: Collection, aluno_id: str, aluno: Aluno) -> Aluno:
    oid = _object_id(aluno_id)
    try:
        anterior = collection.find_one_and_update(
            {"_id": oid},
            {"$set": _to_document(aluno), "$unset": CAMPOS_LEGADOS},
        )
    except PyMongoError as e:
        raise StorageError(str(e)) from e
    if anterior is None:
        raise NotFoundError(f"Aluno {aluno_id} não encontrado")

    return aluno.model_copy(update={"id": aluno_id, "age": None})


def delete_aluno(collection: Collection, aluno_id: str) -> int:
    oid = _object_id(aluno_id)
    try:
        result = collection.delete_one({"_id": oid})
    except PyMongoError as e:
        raise StorageError(str(e)) from e
    return result.deleted_count
