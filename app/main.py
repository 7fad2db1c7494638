"""
Streamlit Frontend for NovaBank

The dashboard the customer sees: balance and monthly figures, the
transaction history, the transfer form, and the "Ask Nova" advisor chat.

DESIGN PRINCIPLES:
1. Views only read snapshots and call the flows; they never touch storage
2. Every failed action leaves the user on the same step with a message
3. Nothing is shown before the account store is ready
"""

import asyncio

import pandas as pd
import streamlit as st

from novabank.agents import SUGGESTED_PROMPTS, AdvisorConversation
from novabank.formatting import error_banner, format_usd, transfer_success_banner
from novabank.models.account import Transaction
from novabank.models.chat import AdviceContext, ChatRole
from novabank.orchestrator import TransferFlow, create_app_components
from novabank.store import AccountStore, daily_spending, search_transactions


# Page configuration
st.set_page_config(
    page_title="NovaBank",
    page_icon="🏦",
    layout="wide",
    initial_sidebar_state="expanded",
)

# Custom CSS
st.markdown("""
<style>
    .stButton>button {
        width: 100%;
        margin-top: 10px;
    }
    .success-box {
        padding: 20px;
        background-color: #d1fae5;
        border-radius: 10px;
        border-left: 5px solid #10b981;
        margin: 10px 0;
    }
    .error-box {
        padding: 20px;
        background-color: #ffe4e6;
        border-radius: 10px;
        border-left: 5px solid #e11d48;
        margin: 10px 0;
    }
</style>
""", unsafe_allow_html=True)


CATEGORY_STYLES = {
    "food & drink": ("☕", "#d97706"),
    "transport": ("🚗", "#2563eb"),
    "shopping": ("🛍️", "#db2777"),
    "bills": ("⚡", "#ca8a04"),
    "income": ("📈", "#059669"),
    "transfer": ("↗️", "#4f46e5"),
}
DEFAULT_CATEGORY_STYLE = ("💳", "#64748b")


def category_style(category: str) -> tuple[str, str]:
    """Icon and color for a category tag."""
    return CATEGORY_STYLES.get(category.lower(), DEFAULT_CATEGORY_STYLE)


def run_async(coro):
    """Helper to run async functions in Streamlit."""
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


def get_components() -> tuple[AccountStore, TransferFlow, AdvisorConversation]:
    """Get or create this session's components."""
    if "components" not in st.session_state:
        st.session_state.components = create_app_components()
    return st.session_state.components


def main():
    """Main application entry point."""
    store, transfer_flow, conversation = get_components()

    if store.is_loading:
        st.info("Loading your account...")
        st.stop()

    st.sidebar.title("🏦 NovaBank")
    st.sidebar.markdown("---")

    page = st.sidebar.radio(
        "Navigate to:",
        ["📊 Dashboard", "📜 History", "💸 Transfer", "✨ Ask Nova AI", "⚙️ Settings"],
        index=0,
    )

    if page == "📊 Dashboard":
        render_dashboard_page(store)
    elif page == "📜 History":
        render_history_page(store)
    elif page == "💸 Transfer":
        render_transfer_page(store, transfer_flow)
    elif page == "✨ Ask Nova AI":
        render_advice_page(store, conversation)
    elif page == "⚙️ Settings":
        render_settings_page()


def render_transaction_row(tx: Transaction):
    icon, color = category_style(tx.category)
    col1, col2, col3 = st.columns([1, 6, 3])
    with col1:
        st.markdown(f"<span style='font-size:1.6em'>{icon}</span>", unsafe_allow_html=True)
    with col2:
        st.markdown(f"**{tx.description}**  \n{tx.date.astimezone():%b %d, %Y}")
    with col3:
        st.markdown(
            f"<span style='color:{color};font-weight:bold'>{format_usd(tx.amount, signed=True)}</span>",
            unsafe_allow_html=True,
        )


def render_dashboard_page(store: AccountStore):
    """Render the overview page."""
    snapshot = store.get_snapshot()
    stats = snapshot.stats

    st.title("📊 Dashboard")

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Total Balance", format_usd(stats.total_balance))
    col2.metric("Monthly Income", format_usd(stats.monthly_income))
    col3.metric("Monthly Expenses", format_usd(stats.monthly_expenses))
    col4.metric("Savings Goal", f"{stats.savings_rate}%")

    st.markdown("---")

    left, right = st.columns([3, 2])

    with left:
        st.subheader("Spending, last 7 days")
        spending = daily_spending(snapshot.transactions, snapshot.taken_at)
        chart = pd.DataFrame(
            {"spending": [float(v) for _, v in spending]},
            index=[label for label, _ in spending],
        )
        st.area_chart(chart)

    with right:
        st.subheader("Recent Transactions")
        recent = snapshot.recent_transactions(6)
        if recent:
            for tx in recent:
                render_transaction_row(tx)
        else:
            st.info("No transactions yet.")


def render_history_page(store: AccountStore):
    """Render the searchable transaction history."""
    st.title("📜 Transaction History")

    term = st.text_input(
        "Search",
        placeholder="Search by name, category...",
    )
    results = search_transactions(store.transactions, term)

    if results:
        table = pd.DataFrame([
            {
                "Date": tx.date.astimezone().strftime("%Y-%m-%d %H:%M"),
                "Description": tx.description,
                "Category": f"{category_style(tx.category)[0]} {tx.category}",
                "Amount": format_usd(tx.amount, signed=True),
                "ID": tx.id,
            }
            for tx in results
        ])
        st.dataframe(table, hide_index=True, use_container_width=True)
    else:
        st.info("No transactions match your search.")

    st.caption(f"Showing {len(results)} results")


def render_transfer_page(store: AccountStore, transfer_flow: TransferFlow):
    """Render the three-step transfer page."""
    st.title("💸 Transfer Funds")
    st.markdown("Send money instantly to anyone, anywhere.")

    if "transfer_step" not in st.session_state:
        st.session_state.transfer_step = "form"  # form, processing, done
    if "transfer_error" not in st.session_state:
        st.session_state.transfer_error = ""

    # Step 1: Form
    if st.session_state.transfer_step == "form":
        if st.session_state.transfer_error:
            st.markdown(error_banner(st.session_state.transfer_error), unsafe_allow_html=True)

        with st.form("transfer_form"):
            recipient = st.text_input(
                "Recipient Email or Account",
                placeholder="name@email.com or #12345678",
            )
            amount = st.text_input("Amount (USD)", placeholder="0.00")
            st.caption(f"Available balance: {format_usd(store.balance)}")
            note = st.text_area("Note (Optional)", placeholder="What is this for?")
            submitted = st.form_submit_button("Send Money Now", type="primary")

        if submitted:
            st.session_state.transfer_request = (recipient, amount, note)
            st.session_state.transfer_step = "processing"
            st.rerun()

    # Step 2: Processing
    elif st.session_state.transfer_step == "processing":
        recipient, amount, note = st.session_state.transfer_request
        with st.spinner("Processing Transfer... Verifying security protocols and recipient information."):
            outcome = run_async(transfer_flow.submit(recipient, amount, note))

        if outcome.succeeded:
            st.session_state.transfer_error = ""
            st.session_state.transfer_result = outcome
            st.session_state.transfer_step = "done"
        else:
            st.session_state.transfer_error = outcome.error_message
            st.session_state.transfer_step = "form"
        st.rerun()

    # Step 3: Success
    elif st.session_state.transfer_step == "done":
        recipient, _, _ = st.session_state.transfer_request
        tx = st.session_state.transfer_result.transaction
        st.markdown(transfer_success_banner(tx.amount, recipient), unsafe_allow_html=True)

        if st.button("Make Another Transfer"):
            st.session_state.transfer_step = "form"
            st.session_state.transfer_request = None
            st.rerun()


def render_advice_page(store: AccountStore, conversation: AdvisorConversation):
    """Render the advisor chat."""
    header, clear = st.columns([5, 1])
    with header:
        st.title("✨ Ask Nova AI")
    with clear:
        if st.button("🗑️ Clear", help="Clear Conversation"):
            conversation.clear()
            st.rerun()

    for message in conversation.messages:
        avatar = "🧑" if message.role == ChatRole.USER else "🤖"
        with st.chat_message(message.role.value, avatar=avatar):
            st.markdown(message.text)
            st.caption(message.timestamp.astimezone().strftime("%H:%M"))

    prompt_cols = st.columns(len(SUGGESTED_PROMPTS))
    picked = None
    for col, suggestion in zip(prompt_cols, SUGGESTED_PROMPTS):
        if col.button(suggestion):
            picked = suggestion

    typed = st.chat_input(
        "Ask me anything about your finances...",
        disabled=conversation.is_busy,
    )
    text = typed or picked

    if text:
        context = AdviceContext.from_snapshot(store.get_snapshot())
        with st.spinner("Nova is thinking..."):
            run_async(conversation.send(text, context))
        st.rerun()

    st.caption("Nova AI uses your actual transaction data to provide tailored insights.")


def render_settings_page():
    """Render the settings page."""
    st.title("⚙️ Settings")

    st.markdown("### Connection Status")

    from novabank.config import validate_all_settings

    status = validate_all_settings()

    services = [
        ("Gemini (AI Advisor)", "gemini"),
        ("Account Storage", "banking"),
    ]

    for name, key in services:
        if status.get(key, False):
            st.success(f"✅ {name} - Configured")
        else:
            error = status.get(f"{key}_error", "Not configured")
            st.error(f"❌ {name} - {error}")

    st.markdown("---")
    st.markdown("### Configuration")
    st.markdown(
        "To configure the application, create a `.env` file with your API key. "
        "See `.env.example` for the available variables."
    )


if __name__ == "__main__":
    main()
