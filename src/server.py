import os

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.routing import APIRouter
from human_id import generate_id
from loguru import logger as log

from common import global_config
from src.api.errors import register_error_handlers
from src.utils.context import request_id
from src.utils.logging_config import setup_logging

# Setup logging before anything else
setup_logging()

REQUEST_ID_HEADER = "X-Request-ID"

# Initialize FastAPI app
app = FastAPI(title=global_config.service_name)

# Add CORS middleware with specific allowed origins
app.add_middleware(  # type: ignore[call-overload]
    CORSMiddleware,  # type: ignore[arg-type]
    allow_origins=global_config.server.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=[REQUEST_ID_HEADER],
)


@app.middleware("http")
async def request_context(request: Request, call_next):
    """Tag every log line of a request with a human-readable request id."""
    rid = request.headers.get(REQUEST_ID_HEADER) or generate_id()
    token = request_id.set(rid)
    try:
        log.debug(f"{request.method} {request.url.path}")
        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid
        return response
    finally:
        request_id.reset(token)


register_error_handlers(app)


# Automatically discover and include all routers
def include_all_routers():
    from src.api.routes import all_routers, api_routers

    main_router = APIRouter()
    for router in all_routers:
        main_router.include_router(router)
    for router in api_routers:
        main_router.include_router(router, prefix=global_config.server.api_prefix)

    return main_router


app.include_router(include_all_routers())


if __name__ == "__main__":
    # Configure uvicorn to use our logging config
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=int(os.getenv("PORT", 8080)),
        log_config=None,  # Disable uvicorn's logging config
        access_log=True,  # Enable access logs
    )
