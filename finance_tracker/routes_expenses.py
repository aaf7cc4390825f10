# routes_expenses.py
"""
Routes for the Expenses screen: transaction list, filters, add / edit / delete.

Every successful mutation redirects back to /expenses (Post/Redirect/Get)
with the active filters and a notice key. Rejected input and unknown ids
re-render the screen with a message instead; nothing is mutated in that case.
"""

from datetime import date
from typing import Dict, Optional

from fastapi import APIRouter, Depends, Form, Query, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from .config import Settings
from .deps import SessionState, get_session, get_settings, get_today, templates
from .errors import InvalidInput, NotFound
from .logging_setup import get_logger
from .models import Transaction
from .services.filters import ALL, filter_transactions
from .services.form_helpers import (
    NOTICES,
    build_expenses_url,
    empty_form,
    form_from_transaction,
    normalize_category_filter,
    normalize_type_filter,
)

logger = get_logger(__name__)

router = APIRouter()


def render_expenses_page(
    request: Request,
    state: SessionState,
    settings: Settings,
    today: date,
    *,
    category: str = ALL,
    type_: str = ALL,
    editing: Optional[Transaction] = None,
    form: Optional[Dict[str, str]] = None,
    form_errors: Optional[Dict[str, str]] = None,
    notice: Optional[str] = None,
    error: Optional[str] = None,
    status_code: int = 200,
):
    transactions = filter_transactions(state.expenses.all(), category, type_)

    if form is None:
        form = form_from_transaction(editing) if editing else empty_form(today)

    return templates.TemplateResponse(
        request,
        "expenses.html",
        {
            "settings": settings,
            "transactions": transactions,
            "filter_category": category,
            "filter_type": type_,
            "editing": editing,
            "form": form,
            "form_errors": form_errors or {},
            "form_open": editing is not None or bool(form_errors),
            "notice": notice,
            "error": error,
        },
        status_code=status_code,
    )


@router.get("/expenses", response_class=HTMLResponse)
async def expenses_page(
    request: Request,
    category: str = Query(ALL),
    type_: str = Query(ALL, alias="type"),
    edit: Optional[str] = Query(None),
    notice: Optional[str] = Query(None),
    state: SessionState = Depends(get_session),
    settings: Settings = Depends(get_settings),
    today: date = Depends(get_today),
):
    category = normalize_category_filter(category)
    type_ = normalize_type_filter(type_)

    editing = None
    error = None
    status_code = 200
    if edit:
        try:
            editing = state.expenses.get(edit)
        except NotFound:
            error = "That transaction no longer exists."
            status_code = 404

    return render_expenses_page(
        request,
        state,
        settings,
        today,
        category=category,
        type_=type_,
        editing=editing,
        notice=NOTICES.get(notice or ""),
        error=error,
        status_code=status_code,
    )


@router.post("/expenses", response_class=HTMLResponse)
async def create_transaction(
    request: Request,
    title: str = Form(""),
    amount: str = Form(""),
    category: str = Form(""),
    type_: str = Form("Expense", alias="type"),
    date_: str = Form("", alias="date"),
    filter_category: str = Form(ALL),
    filter_type: str = Form(ALL),
    state: SessionState = Depends(get_session),
    settings: Settings = Depends(get_settings),
    today: date = Depends(get_today),
):
    """
    Add a transaction from the form. The new record goes to the top of the list.
    """
    filter_category = normalize_category_filter(filter_category)
    filter_type = normalize_type_filter(filter_type)
    form = {"title": title, "amount": amount, "category": category, "type": type_, "date": date_}

    try:
        state.expenses.add(form)
    except InvalidInput as exc:
        logger.warning("Rejected new transaction: %s", exc)
        return render_expenses_page(
            request,
            state,
            settings,
            today,
            category=filter_category,
            type_=filter_type,
            form=form,
            form_errors=exc.errors,
            error="Please fix the highlighted fields.",
            status_code=400,
        )

    return RedirectResponse(
        url=build_expenses_url(filter_category, filter_type, notice="added"),
        status_code=303,
    )


@router.post("/expenses/{transaction_id}", response_class=HTMLResponse)
async def update_transaction(
    request: Request,
    transaction_id: str,
    title: str = Form(""),
    amount: str = Form(""),
    category: str = Form(""),
    type_: str = Form("Expense", alias="type"),
    date_: str = Form("", alias="date"),
    filter_category: str = Form(ALL),
    filter_type: str = Form(ALL),
    state: SessionState = Depends(get_session),
    settings: Settings = Depends(get_settings),
    today: date = Depends(get_today),
):
    """
    Replace the fields of an existing transaction; its id and position stay.
    """
    filter_category = normalize_category_filter(filter_category)
    filter_type = normalize_type_filter(filter_type)
    form = {"title": title, "amount": amount, "category": category, "type": type_, "date": date_}

    try:
        state.expenses.update(transaction_id, form)
    except NotFound:
        return render_expenses_page(
            request,
            state,
            settings,
            today,
            category=filter_category,
            type_=filter_type,
            error="That transaction no longer exists.",
            status_code=404,
        )
    except InvalidInput as exc:
        logger.warning("Rejected update of %s: %s", transaction_id, exc)
        return render_expenses_page(
            request,
            state,
            settings,
            today,
            category=filter_category,
            type_=filter_type,
            editing=state.expenses.get(transaction_id),
            form=form,
            form_errors=exc.errors,
            error="Please fix the highlighted fields.",
            status_code=400,
        )

    return RedirectResponse(
        url=build_expenses_url(filter_category, filter_type, notice="updated"),
        status_code=303,
    )


@router.post("/expenses/{transaction_id}/delete", response_class=HTMLResponse)
async def delete_transaction(
    request: Request,
    transaction_id: str,
    filter_category: str = Form(ALL),
    filter_type: str = Form(ALL),
    state: SessionState = Depends(get_session),
    settings: Settings = Depends(get_settings),
    today: date = Depends(get_today),
):
    filter_category = normalize_category_filter(filter_category)
    filter_type = normalize_type_filter(filter_type)

    try:
        state.expenses.remove(transaction_id)
    except NotFound:
        return render_expenses_page(
            request,
            state,
            settings,
            today,
            category=filter_category,
            type_=filter_type,
            error="That transaction no longer exists.",
            status_code=404,
        )

    return RedirectResponse(
        url=build_expenses_url(filter_category, filter_type, notice="deleted"),
        status_code=303,
    )
