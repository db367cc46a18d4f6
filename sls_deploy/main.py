from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette import status

from sls_deploy.routes.deploy import router as deploy_router
from sls_deploy.services.errors import ConfigurationError, RegionMismatchError, RemoteCallError


def _ensure_logging() -> None:
    formatter = logging.Formatter("%(levelname)s: %(message)s")
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    else:
        root.setLevel(logging.INFO)
        for handler in root.handlers:
            handler.setFormatter(formatter)


@asynccontextmanager
async def lifespan(app: FastAPI):
    _ensure_logging()
    yield


app = FastAPI(lifespan=lifespan)

app.include_router(deploy_router)


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": str(exc)},
    )


@app.exception_handler(RegionMismatchError)
async def region_mismatch_error_handler(request: Request, exc: RegionMismatchError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"detail": str(exc)},
    )


@app.exception_handler(RemoteCallError)
async def remote_call_error_handler(request: Request, exc: RemoteCallError) -> JSONResponse:
    """Map AWS call failures to a consistent HTTP response.

    The client error stays attached to the exception for logging; only the summary message is
    returned to API consumers.

    Returns:
        502 Bad Gateway with a JSON body: {"detail": "..."}
    """
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"detail": str(exc)},
    )


@app.get("/")
async def root():
    return {"message": "Hello World! sls-deploy is running."}
