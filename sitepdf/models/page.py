from typing import NamedTuple


class PageRecord(NamedTuple):
    """One successfully captured page, in fetch order."""

    url: str
    title: str
    html: str
