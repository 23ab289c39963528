"""Banner notices carried on the redirect query string."""
from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlencode

SUCCESS = "success"
ERROR = "error"
WARNING = "warning"
KINDS = (SUCCESS, ERROR, WARNING)


@dataclass(frozen=True)
class Notice:
    message: str
    kind: str = SUCCESS


def notice_url(path: str, notice: Notice | None = None, **params) -> str:
    query = {k: v for k, v in params.items() if v not in (None, "")}
    if notice:
        query["notice"] = notice.message
        query["kind"] = notice.kind
    if not query:
        return path
    sep = "&" if "?" in path else "?"
    return f"{path}{sep}{urlencode(query)}"


def notice_from_query(message: str | None, kind: str | None) -> Notice | None:
    text = (message or "").strip()
    if not text:
        return None
    return Notice(text, kind if kind in KINDS else SUCCESS)
