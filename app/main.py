"""FastAPI application exposing the brand strategy endpoint."""

import sys
from pathlib import Path
from typing import Dict

sys.path.append(str(Path(__file__).resolve().parents[1]))

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import PlainTextResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.routes.strategy import router as strategy_router

app = FastAPI(title="Restaurant Brand Strategy")

app.include_router(strategy_router, prefix="/api", tags=["Strategy"])


async def method_not_allowed_handler(request: Request, exc: StarletteHTTPException) -> Response:
    """Answer every 405 with a plain-text body, whatever the method."""
    if exc.status_code == 405:
        return PlainTextResponse("Method Not Allowed", status_code=405, headers=exc.headers)
    return await http_exception_handler(request, exc)


app.add_exception_handler(StarletteHTTPException, method_not_allowed_handler)


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="127.0.0.1", port=8000, reload=True)
