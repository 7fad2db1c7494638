"""
Display Formatting

Money strings and the HTML snippets the Streamlit pages render with
unsafe_allow_html. Anything the user typed is escaped here.
"""

import html
from decimal import Decimal


def format_usd(amount: Decimal, signed: bool = False) -> str:
    sign = "-" if amount < 0 else ("+" if signed and amount > 0 else "")
    return f"{sign}${abs(amount):,.2f}"


def error_banner(message: str) -> str:
    """Red box shown above the transfer form."""
    return f'<div class="error-box">{html.escape(message)}</div>'


def transfer_success_banner(amount: Decimal, recipient: str) -> str:
    """Green box shown after a completed transfer."""
    return f"""
    <div class="success-box">
        <h3>✅ Success!</h3>
        <p>You've successfully sent <strong>{format_usd(abs(amount))}</strong>
        to <strong>{html.escape(recipient)}</strong>.</p>
    </div>
    """
