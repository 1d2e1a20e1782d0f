"""Exceções da camada de armazenamento de alunos."""


class AlunosError(Exception):
    """Base para os erros da aplicação."""


class DatabaseConnectionError(AlunosError, ConnectionError):
    """Falha ao conectar no MongoDB durante a inicialização."""


class StorageError(AlunosError):
    """Falha em uma operação de leitura ou escrita no banco."""


class NotFoundError(AlunosError):
    """Nenhum documento corresponde ao id informado."""


class InvalidIdError(AlunosError):
    """O id informado não é um ObjectId válido."""
