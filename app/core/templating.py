"""
Jinja2 template setup shared by the calendar page and reminder e-mails
"""

from datetime import date
from pathlib import Path

from fastapi.templating import Jinja2Templates

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"


def format_dmy(value) -> str:
    """2026-10-20 -> 20-10-2026"""
    if not value:
        return ""
    if isinstance(value, str):
        value = date.fromisoformat(value)
    return value.strftime("%d-%m-%Y")


templates = Jinja2Templates(directory=str(TEMPLATE_DIR))
templates.env.filters["dmy"] = format_dmy
