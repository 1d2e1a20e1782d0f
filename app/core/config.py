from functools import lru_cache
from dotenv import load_dotenv
import os

# .env sobrescreve os padrões abaixo (Mongo, servidor e log)
load_dotenv()

class Settings:
    def __init__(self):
        self.APP_NAME = os.getenv("APP_NAME", "Alunos API")
        self.ENVIRONMENT = os.getenv("ENVIRONMENT", "dev")
        self.MONGO_URI = os.getenv("MONGO_URI", "mongodb://localhost:27017")
        self.MONGO_DB_NAME = os.getenv("MONGO_DB_NAME", "Cluster0")
        self.MONGO_TIMEOUT_SECONDS = float(os.getenv("MONGO_TIMEOUT_SECONDS", "30"))
        self.HOST = os.getenv("HOST", "0.0.0.0")
        self.PORT = int(os.getenv("PORT", "3000"))
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


@lru_cache
def get_settings() -> Settings:
    """
    Configuração do processo: URI, banco e timeout do MongoDB, host e porta
    do servidor e nível de log. Lida uma vez e reaproveitada.
    """
    return Settings()
