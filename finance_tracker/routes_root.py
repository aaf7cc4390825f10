# routes_root.py
"""
Root / landing endpoint.
"""

from fastapi import APIRouter
from fastapi.responses import RedirectResponse

router = APIRouter()


@router.get("/")
async def read_root():
    """
    Landing endpoint: the Expenses screen is the home page.
    """
    return RedirectResponse(url="/expenses", status_code=302)
