import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.config import Settings, get_settings
from app.core.db import StorageGateway, connect
from app.core.errors import DatabaseConnectionError
from app.api import alunos as alunos_router

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    gateway: Optional[StorageGateway] = None,
) -> FastAPI:
    """
    Monta a aplicação. Sem `gateway`, a conexão com o MongoDB é aberta no
    startup e uma falha impede o servidor de subir.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if app.state.gateway is None:
            try:
                app.state.gateway = connect(
                    settings.MONGO_URI,
                    settings.MONGO_DB_NAME,
                    timeout=settings.MONGO_TIMEOUT_SECONDS,
                )
            except DatabaseConnectionError as e:
                logger.critical("Não foi possível conectar ao MongoDB: %s", e)
                raise
        yield
        app.state.gateway.close()

    app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)
    app.state.gateway = gateway

    @app.exception_handler(RequestValidationError)
    async def corpo_invalido(request: Request, exc: RequestValidationError):
        # corpo malformado é 400, não o 422 padrão do FastAPI
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": jsonable_encoder(exc.errors())},
        )

    @app.get("/health")
    def health_check():
        return {
            "status": "ok",
            "environment": settings.ENVIRONMENT,
            "app": settings.APP_NAME,
        }

    app.include_router(alunos_router.router)
    return app


settings = get_settings()

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
)

app = create_app(settings)


if __name__ == "__main__":
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
