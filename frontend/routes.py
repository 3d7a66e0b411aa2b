"""
HTTP routes for the fortune frontend.
"""

from __future__ import annotations

import html
import random

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse, PlainTextResponse

from frontend.client import BackendClient, BackendError
from frontend.dependencies import get_backend_client
from frontend.schemas import Fortune, NewFortune

MAX_GENERATED_ID = 10000

router = APIRouter()


def render_fortunes(fortunes: list[Fortune]) -> str:
    return "".join(
        f"\n    <p>{html.escape(f.id)}: {html.escape(f.message)}</p>\n"
        for f in fortunes
    )


@router.get("/healthz", response_class=PlainTextResponse)
def healthz():
    return "healthy"


@router.get("/api/random", response_class=PlainTextResponse)
def random_fortune(backend: BackendClient = Depends(get_backend_client)):
    try:
        fortune = backend.random_fortune()
    except BackendError as e:
        return PlainTextResponse(str(e), status_code=500)
    return fortune.message


@router.get("/api/all", response_class=HTMLResponse)
def all_fortunes(backend: BackendClient = Depends(get_backend_client)):
    try:
        fortunes = backend.list_fortunes()
    except BackendError as e:
        return HTMLResponse(html.escape(str(e)), status_code=500)
    return render_fortunes(fortunes)


@router.post("/api/add", response_class=PlainTextResponse)
def add_fortune(
    payload: NewFortune, backend: BackendClient = Depends(get_backend_client)
):
    """
    Forward a new fortune to the backend under a randomly generated id.
    """
    fortune = Fortune(id=str(random.randrange(MAX_GENERATED_ID)), message=payload.message)
    try:
        backend.create_fortune(fortune)
    except BackendError as e:
        return PlainTextResponse(str(e), status_code=500)
    return "Cookie added!"
