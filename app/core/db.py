import logging

from fastapi import Request
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from .errors import DatabaseConnectionError

logger = logging.getLogger(__name__)

ALUNOS_COLLECTION = "alunos"


class StorageGateway:
    """
    Mantém o cliente do MongoDB e o banco usado pela aplicação.

    Uma instância por processo; o pool do MongoClient já é seguro para
    requisições concorrentes.
    """

    def __init__(self, client: MongoClient, database_name: str):
        self.client = client
        self.db = client[database_name]

    @property
    def alunos(self) -> Collection:
        return self.db[ALUNOS_COLLECTION]

    def close(self):
        self.client.close()
        logger.info("Conexão com o MongoDB encerrada")


def connect(uri: str, database_name: str, timeout: float = 30.0) -> StorageGateway:
    """
    Abre a conexão e força o handshake com o servidor.

    Levanta DatabaseConnectionError se o servidor não responder dentro
    de `timeout` segundos ou se a URI for inválida.
    """
    timeout_ms = int(timeout * 1000)
    try:
        client = MongoClient(
            uri,
            serverSelectionTimeoutMS=timeout_ms,
            connectTimeoutMS=timeout_ms,
        )
    except PyMongoError as e:
        raise DatabaseConnectionError(str(e)) from e

    try:
        client.admin.command("ping")
    except PyMongoError as e:
        client.close()
        raise DatabaseConnectionError(str(e)) from e

    logger.info("Conectado ao MongoDB (banco %s)", database_name)
    return StorageGateway(client, database_name)


def get_gateway(request: Request) -> StorageGateway:
    """Dependência que devolve o gateway criado na inicialização da app."""
    return request.app.state.gateway
