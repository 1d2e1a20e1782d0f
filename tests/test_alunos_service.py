from datetime import datetime
from unittest.mock import MagicMock

import pytest
from bson import ObjectId
from pymongo.errors import OperationFailure

from app.core.errors import InvalidIdError, NotFoundError, StorageError
from app.models.aluno import Aluno
from app.services.alunos_service import (
    create_aluno,
    delete_aluno,
    get_aluno,
    list_alunos,
    update_aluno,
)


def test_list_empty_collection(collection):
    assert list_alunos(collection) == []


def test_create_discards_client_id_and_age(collection, payload):
    cliente_id = str(ObjectId())
    aluno = Aluno(**payload, id=cliente_id, age=99)

    criado = create_aluno(collection, aluno)

    assert criado.id is not None
    assert criado.id != cliente_id
    assert criado.age is None
    doc = collection.find_one({"_id": ObjectId(criado.id)})
    assert "age" not in doc
    assert "id" not in doc
    assert doc["name"] == payload["name"]


def test_create_then_list(collection, payload):
    criado = create_aluno(collection, Aluno(**payload))
    alunos = list_alunos(collection)
    assert alunos == [criado]


def test_get_aluno(collection, payload):
    criado = create_aluno(collection, Aluno(**payload))
    assert get_aluno(collection, criado.id) == criado


def test_get_missing_aluno(collection):
    with pytest.raises(NotFoundError):
        get_aluno(collection, str(ObjectId()))


def test_list_reads_legacy_documents(collection):
    collection.insert_one({
        "name": "João",
        "datanasc": "01/01/1990",
        "serie": "2B",
        "email": "joao@example.com",
        "cpf": "111",
    })
    [aluno] = list_alunos(collection)
    assert aluno.birth_date == "01/01/1990"
    assert aluno.grade == "2B"
    assert aluno.national_id == "111"


def test_update_replaces_fields(collection, payload):
    criado = create_aluno(collection, Aluno(**payload))
    novo = Aluno(**{**payload, "name": "Maria S.", "grade": "4A"})

    atualizado = update_aluno(collection, criado.id, novo)

    assert atualizado.id == criado.id
    assert atualizado.name == "Maria S."
    assert get_aluno(collection, criado.id).grade == "4A"


def test_update_missing_does_not_insert(collection, payload):
    with pytest.raises(NotFoundError):
        update_aluno(collection, str(ObjectId()), Aluno(**payload))
    assert collection.count_documents({}) == 0


def test_delete_returns_count(collection, payload):
    criado = create_aluno(collection, Aluno(**payload))
    assert delete_aluno(collection, criado.id) == 1
    assert delete_aluno(collection, criado.id) == 0
    assert list_alunos(collection) == []


@pytest.mark.parametrize("operacao", [get_aluno, delete_aluno])
def test_invalid_id(collection, operacao):
    with pytest.raises(InvalidIdError):
        operacao(collection, "nao-e-um-id")


def test_update_invalid_id(collection, payload):
    with pytest.raises(InvalidIdError):
        update_aluno(collection, "123", Aluno(**payload))


def test_driver_errors_become_storage_error(payload):
    quebrada = MagicMock()
    quebrada.find.side_effect = OperationFailure("falhou")
    quebrada.insert_one.side_effect = OperationFailure("falhou")
    quebrada.find_one_and_update.side_effect = OperationFailure("falhou")
    quebrada.delete_one.side_effect = OperationFailure("falhou")
    aluno_id = str(ObjectId())

    with pytest.raises(StorageError):
        list_alunos(quebrada)
    with pytest.raises(StorageError):
        create_aluno(quebrada, Aluno(**payload))
    with pytest.raises(StorageError):
        update_aluno(quebrada, aluno_id, Aluno(**payload))
    with pytest.raises(StorageError):
        delete_aluno(quebrada, aluno_id)


def test_list_formats_bson_date_birth_date(collection):
    collection.insert_one({
        "name": "Ana",
        "birth_date": datetime(2000, 1, 1),
        "grade": "1A",
        "email": "ana@example.com",
    })
    [aluno] = list_alunos(collection)
    assert aluno.birth_date == "01/01/2000"


def test_update_drops_legacy_keys(collection, payload):
    result = collection.insert_one({
        "name": "João",
        "datanasc": "01/01/1990",
        "serie": "2B",
        "email": "joao@example.com",
        "cpf": "111",
    })

    update_aluno(collection, str(result.inserted_id), Aluno(**payload))

    doc = collection.find_one({"_id": result.inserted_id})
    assert not {"datanasc", "serie", "cpf", "idade"} & set(doc)
    assert doc["birth_date"] == payload["birth_date"]
    assert doc["national_id"] == payload["national_id"]
