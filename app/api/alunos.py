import logging
from datetime import date
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from pymongo.collection import Collection

from app.core.db import StorageGateway, get_gateway
from app.core.errors import InvalidIdError, NotFoundError, StorageError
from app.models.aluno import Aluno
from app.services.idade import with_age

from app.services.alunos_service import (
    list_alunos,
    get_aluno,
    create_aluno,
    update_aluno,
    delete_aluno,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/aluno", tags=["alunos"])


def get_alunos_collection(gateway: StorageGateway = Depends(get_gateway)) -> Collection:
    return gateway.alunos


def _erro_de_armazenamento(e: StorageError) -> HTTPException:
    logger.error("Erro no banco: %s", e)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.get("", response_model=List[Aluno], response_model_exclude_none=True)
def listar_alunos(collection: Collection = Depends(get_alunos_collection)):
    """
    Lista todos os alunos com a idade calculada.
    Datas de nascimento inválidas deixam só aquele aluno sem idade.
    """
    try:
        alunos = list_alunos(collection)
    except StorageError as e:
        raise _erro_de_armazenamento(e)

    hoje = date.today()
    return [with_age(aluno, hoje) for aluno in alunos]


@router.get("/{aluno_id}", response_model=Aluno, response_model_exclude_none=True)
def obter_aluno(aluno_id: str, collection: Collection = Depends(get_alunos_collection)):
    try:
        return get_aluno(collection, aluno_id)
    except InvalidIdError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except NotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Aluno não encontrado")
    except StorageError as e:
        raise _erro_de_armazenamento(e)


@router.post(
    "",
    response_model=Aluno,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
def criar_aluno(aluno: Aluno, collection: Collection = Depends(get_alunos_collection)):
    try:
        return create_aluno(collection, aluno)
    except StorageError as e:
        raise _erro_de_armazenamento(e)


@router.put("/{aluno_id}", response_model=Aluno, response_model_exclude_none=True)
def atualizar_aluno(
    aluno_id: str,
    aluno: Aluno,
    collection: Collection = Depends(get_alunos_collection),
):
    """
    Sobrescreve todos os campos do aluno, exceto o id.
    """
    try:
        return update_aluno(collection, aluno_id, aluno)
    except InvalidIdError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except NotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Aluno não encontrado")
    except StorageError as e:
        raise _erro_de_armazenamento(e)


@router.delete("/{aluno_id}", status_code=status.HTTP_200_OK)
def deletar_aluno(aluno_id: str, collection: Collection = Depends(get_alunos_collection)):
    try:
        removidos = delete_aluno(collection, aluno_id)
    except InvalidIdError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except StorageError as e:
        raise _erro_de_armazenamento(e)

    if removidos < 1:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Aluno não encontrado")
    return "Aluno deletado"
