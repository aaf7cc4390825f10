# csv_export.py
#
# CSV Export
# Serializes a transaction sequence into the downloadable report file.
# Every field is wrapped in double quotes; embedded quotes are doubled.

import csv
from typing import Dict, Iterable, List

import pandas as pd

from ..models import Period, Transaction
from .formatting import format_amount

CSV_COLUMNS = ["Date", "Title", "Category", "Type", "Amount"]


def transaction_to_row(tx: Transaction) -> Dict[str, str]:
    return {
        "Date": tx.date.isoformat(),
        "Title": tx.title,
        "Category": tx.category.value,
        "Type": tx.type.value,
        "Amount": format_amount(tx.amount),
    }


def export_csv(transactions: Iterable[Transaction]) -> str:
    """
    Build the CSV text: header row plus one row per transaction, rows
    joined by '\\n' with no trailing newline.
    """
    rows: List[Dict[str, str]] = [transaction_to_row(tx) for tx in transactions]

    df = pd.DataFrame(rows, columns=CSV_COLUMNS, dtype=str)
    text = df.to_csv(index=False, quoting=csv.QUOTE_ALL, lineterminator="\n")

    return text.removesuffix("\n")


def export_filename(period: Period) -> str:
    return f"expenses-report-{Period(period).value}.csv"
