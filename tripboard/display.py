"""
HTML snippets for the settlement panel.

Member names, descriptions and error text come from whoever last edited
the shared document. Everything interpolated here is HTML-escaped, so the
page can render these boxes with ``unsafe_allow_html`` safely.
"""

from html import escape

from tripboard.models.settlement import Transfer


def yen(amount: float, symbol: str = "¥") -> str:
    return f"{symbol}{amount:,.0f}"


def big_number_html(amount: float, symbol: str = "¥") -> str:
    return f'<div class="big-number">{escape(yen(amount, symbol))}</div>'


def transfer_html(transfer: Transfer, symbol: str = "¥") -> str:
    """One who-pays-whom row."""
    return (
        '<div class="transfer-box">'
        f"<strong>{escape(transfer.from_member)}</strong> → "
        f"<strong>{escape(transfer.to_member)}</strong>: "
        f"{escape(yen(transfer.amount, symbol))}"
        "</div>"
    )


def notice_html(css_class: str, title: str, body: str = "") -> str:
    """A coloured notice box (``success-box``, ``warning-box``)."""
    paragraph = f"<p>{escape(body)}</p>" if body else ""
    return f'<div class="{escape(css_class)}"><h4>{escape(title)}</h4>{paragraph}</div>'
