"""
Streamlit Frontend for Trip Board

The page everyone on the trip keeps open: itinerary, checklist, costs,
expense ledger with who-owes-whom, comments and weather.

DESIGN PRINCIPLES:
1. One shared document, re-read on every refresh
2. Balances and transfers are always recomputed, never stored
3. Clear error messages when an expense is rejected
4. Every edit is a single field-level write (last write wins)
"""

import asyncio
from datetime import datetime

import streamlit as st

from tripboard.board import TripBoard, create_app_components
from tripboard.config import get_settings
from tripboard.display import big_number_html, notice_html, transfer_html
from tripboard.display import yen as format_yen
from tripboard.models.trip import ExpenseDraft, TripDocument
from tripboard.services.storage import StorageError
from tripboard.services.weather import LOCATIONS
from tripboard.settlement import SettlementInputError, SettlementInvariantError


# Page configuration
st.set_page_config(
    page_title="Trip Board",
    page_icon="🏂",
    layout="wide",
    initial_sidebar_state="expanded",
)

# Custom CSS for better UX
st.markdown("""
<style>
    .stButton>button {
        width: 100%;
        margin-top: 10px;
    }
    .success-box {
        padding: 20px;
        background-color: #d4edda;
        border-radius: 10px;
        border-left: 5px solid #28a745;
        margin: 10px 0;
    }
    .warning-box {
        padding: 20px;
        background-color: #fff3cd;
        border-radius: 10px;
        border-left: 5px solid #ffc107;
        margin: 10px 0;
    }
    .transfer-box {
        padding: 12px 20px;
        background-color: #cce5ff;
        border-radius: 10px;
        border-left: 5px solid #004085;
        margin: 6px 0;
    }
    .big-number {
        font-size: 2.5em;
        font-weight: bold;
        color: #2c3e50;
    }
</style>
""", unsafe_allow_html=True)


def run_async(coro):
    """Helper to run async functions in Streamlit."""
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


@st.cache_resource
def get_board() -> TripBoard:
    """One board (and one store) shared by every browser session."""
    return create_app_components()


@st.cache_data(ttl=1800)
def get_weather(_board: TripBoard) -> dict:
    """Forecasts change slowly; refetch at most every 30 minutes."""
    forecasts = run_async(_board.weather())
    return {key: [f.model_dump() for f in days] for key, days in forecasts.items()}


def yen(amount: float) -> str:
    return format_yen(amount, get_settings().app.currency_symbol)


def main():
    """Main application entry point."""
    board = get_board()

    document = run_async(board.load())
    if document is None:
        render_empty_page(board)
        return

    st.sidebar.title(f"🏂 {document.title}")
    st.sidebar.caption(document.dates)
    st.sidebar.markdown("---")

    page = st.sidebar.radio(
        "Navigate to:",
        ["🗺️ Itinerary", "💴 Expenses", "💬 Comments", "⚙️ Settings"],
        index=0,
    )

    st.sidebar.markdown("---")
    st.sidebar.caption(f"Last updated: {document.updated_at.strftime('%Y-%m-%d %H:%M:%S')} UTC")

    if page == "🗺️ Itinerary":
        render_itinerary_page(board, document)
    elif page == "💴 Expenses":
        render_expenses_page(board)
    elif page == "💬 Comments":
        render_comments_page(board, document)
    elif page == "⚙️ Settings":
        render_settings_page(board, document)


def render_empty_page(board: TripBoard):
    """Shown until the initial trip has been written."""
    st.title("🏂 Trip Board")
    st.info("There is no trip data yet.")
    if st.button("🌱 Load initial trip", type="primary"):
        run_async(board.seed_if_empty())
        st.rerun()


def render_editable_text(board: TripBoard, field: str, value: str, label: str):
    """A text field that saves straight to the shared document."""
    new_value = st.text_input(label, value=value, key=f"edit_{field}")
    if new_value != value and st.button(f"Save {label.lower()}", key=f"save_{field}"):
        try:
            run_async(board.update_field(field, new_value))
            st.rerun()
        except (ValueError, StorageError) as e:
            st.error(f"Failed to save: {e}")


def render_itinerary_page(board: TripBoard, document: TripDocument):
    """Flights, lodging, day-by-day schedule, checklist and costs."""
    st.title(document.title)
    st.markdown(f"**{document.dates}**  \n{document.subtitle}")

    with st.expander("✏️ Edit header"):
        render_editable_text(board, "title", document.title, "Title")
        render_editable_text(board, "dates", document.dates, "Dates")
        render_editable_text(board, "subtitle", document.subtitle, "Subtitle")

    if document.flight:
        st.subheader("✈️ Flights")
        col1, col2 = st.columns(2)
        for col, label, leg in [
            (col1, "Outbound", document.flight.outbound),
            (col2, "Return", document.flight.inbound),
        ]:
            with col:
                st.markdown(
                    f"**{label} · {leg.date}**  \n"
                    f"{leg.from_airport.code} {leg.from_airport.name} {leg.from_airport.time} → "
                    f"{leg.to_airport.code} {leg.to_airport.name} {leg.to_airport.time}  \n"
                    f"{leg.airline} · {leg.duration}"
                )

    if document.accommodation:
        acc = document.accommodation
        st.subheader("🏠 Stay")
        st.markdown(f"**{acc.name}**" + (f" ⭐ {acc.rating}" if acc.rating else ""))
        st.markdown(f"{acc.address}  \n{acc.details}  \n{acc.access}")
        st.markdown(f"Check-in {acc.checkin} · Check-out {acc.checkout}")
        if acc.url:
            st.markdown(f"[Listing]({acc.url})")

    forecasts = get_weather(board)

    st.subheader("📅 Schedule")
    for day in document.days:
        with st.expander(f"Day {day.day} · {day.date} · {day.title}", expanded=day.day == 1):
            if day.title_url:
                st.markdown(f"[Map]({day.title_url})")
            for item in day.timeline:
                prefix = "⭐ " if item.highlight else ""
                time_label = item.time or "—"
                tag = f" `{item.tag}`" if item.tag else ""
                st.markdown(f"**{time_label}** {prefix}{item.title}{tag}")
                if item.desc:
                    st.caption(item.desc)
                if item.url:
                    st.markdown(f"[Link]({item.url})")

    if forecasts:
        st.subheader("🌤️ Weather")
        cols = st.columns(len(forecasts))
        for col, (key, days) in zip(cols, forecasts.items()):
            with col:
                st.markdown(f"**{LOCATIONS[key]['name']}**")
                for f in days[:3]:
                    st.markdown(
                        f"{f['date'][5:]} {f['weather_icon']} "
                        f"{f['temp_max']:.0f}°/{f['temp_min']:.0f}°  \n"
                        f"{f['snowboard_condition']['label']}"
                    )

    st.subheader("✅ Checklist")
    for index, item in enumerate(document.checklist):
        checked = st.checkbox(item.text, value=item.done, key=f"check_{index}")
        if checked != item.done:
            try:
                run_async(board.toggle_checklist(index))
                st.rerun()
            except (IndexError, StorageError) as e:
                st.error(f"Failed to update checklist: {e}")
        if item.result:
            st.caption(f"→ {item.result}")
        elif item.options:
            st.caption(f"Options: {item.options}")

    if document.costs:
        costs = document.costs
        st.subheader("💰 Estimated costs")
        for line in costs.shared:
            amount = yen(line.amount) if isinstance(line.amount, int) else f"¥{line.amount}"
            note = f" ({line.note})" if line.note else ""
            st.markdown(f"- {line.label}: {amount}{note}")
        if costs.shared_total and costs.per_person:
            st.markdown(
                f"**Shared total:** {yen(costs.shared_total.min)}〜{yen(costs.shared_total.max)}  \n"
                f"**Per person ({costs.per_person.people}):** "
                f"{yen(costs.per_person.min)}〜{yen(costs.per_person.max)}"
            )
        for line in costs.individual:
            amount = yen(line.amount) if isinstance(line.amount, int) else f"¥{line.amount}"
            st.markdown(f"- {line.label}: {amount} (individual)")
        if costs.note:
            st.caption(costs.note)

    if document.playlist_url:
        st.subheader("🎵 Playlist")
        st.markdown(f"[Open playlist]({document.playlist_url})")


@st.fragment(run_every=get_settings().app.refresh_interval_seconds)
def render_settlement_panel(board: TripBoard):
    """Balances and transfers, re-read from the shared document every few seconds."""
    symbol = get_settings().app.currency_symbol
    if run_async(board.changed_elsewhere()):
        st.toast("The ledger was updated by someone else")
    document = run_async(board.load())
    if document is None:
        return

    try:
        view = board.settlement_view(document)
    except SettlementInputError as e:
        st.markdown(notice_html("warning-box", "⚠️ The ledger has a problem", str(e)), unsafe_allow_html=True)
        return
    except SettlementInvariantError as e:
        st.error(f"Settlement could not be computed: {e}")
        return

    col1, col2 = st.columns(2)
    with col1:
        st.markdown("Total spent")
        st.markdown(big_number_html(view.total_spent, symbol), unsafe_allow_html=True)
    with col2:
        st.markdown("Per person")
        st.markdown(big_number_html(view.per_person, symbol), unsafe_allow_html=True)

    st.markdown("### Balances")
    for member, balance in view.balances.items():
        sign = "+" if balance >= 0 else "−"
        st.markdown(f"- **{member}**: {sign}{yen(abs(balance))}")

    st.markdown("### Who pays whom")
    if view.is_settled:
        st.markdown(notice_html("success-box", "✅ Everyone is settled"), unsafe_allow_html=True)
    for transfer in view.transfers:
        st.markdown(transfer_html(transfer, symbol), unsafe_allow_html=True)

    st.markdown("### Ledger")
    if not document.expenses:
        st.info("No expenses yet.")
    for expense in reversed(document.expenses):
        col1, col2 = st.columns([5, 1])
        with col1:
            st.markdown(
                f"**{expense.description}** · {yen(expense.amount)} "
                f"paid by {expense.paid_by}  \n"
                f"Split: {', '.join(expense.split_among)} · "
                f"{expense.date.strftime('%m/%d %H:%M')}"
            )
        with col2:
            if st.button("🗑️", key=f"delete_{expense.id}", help="Delete this expense"):
                try:
                    run_async(board.remove_expense(expense.id))
                    st.rerun()
                except StorageError as e:
                    st.error(f"Failed to delete: {e}")


def render_expenses_page(board: TripBoard):
    """Members, the expense form and the settlement panel."""
    st.title("💴 Expenses")

    document = run_async(board.load())
    members = document.members

    with st.expander("👥 Members", expanded=not members):
        st.markdown(", ".join(members) if members else "No members yet.")
        new_member = st.text_input("Add member", key="new_member")
        if st.button("➕ Add member") and new_member:
            try:
                run_async(board.add_member(new_member))
                st.rerun()
            except (ValueError, StorageError) as e:
                st.error(str(e))

    if members:
        st.markdown("### Add expense")
        with st.form("expense_form", clear_on_submit=True):
            col1, col2 = st.columns(2)
            with col1:
                paid_by = st.selectbox("Paid by *", options=members)
                description = st.text_input("Description *", placeholder="e.g. レンタカー")
            with col2:
                amount = st.number_input("Amount (¥) *", min_value=0, step=100, value=0)
                split_among = st.multiselect("Split among *", options=members, default=members)
            submitted = st.form_submit_button("💾 Add expense", type="primary")

        if submitted:
            draft = ExpenseDraft(
                paid_by=paid_by,
                description=description,
                amount=amount,
                split_among=split_among,
            )
            result = board.validator.validate(draft, members)
            if not result.is_valid:
                st.error(board.validator.get_user_friendly_summary(result))
            else:
                if result.warnings:
                    st.warning(board.validator.get_user_friendly_summary(result))
                try:
                    run_async(board.add_expense(paid_by, description, amount, split_among))
                    st.success("Expense added.")
                except (SettlementInputError, StorageError) as e:
                    st.error(f"Failed to add expense: {e}")

    st.markdown("---")
    render_settlement_panel(board)


def render_comments_page(board: TripBoard, document: TripDocument):
    """Free-form notes from everyone on the trip."""
    st.title("💬 Comments")

    with st.form("comment_form", clear_on_submit=True):
        author = st.text_input("Name *")
        text = st.text_area("Comment *")
        submitted = st.form_submit_button("Post", type="primary")

    if submitted:
        if not author.strip() or not text.strip():
            st.error("Please enter your name and a comment")
        else:
            try:
                run_async(board.add_comment(author, text))
                st.rerun()
            except (ValueError, StorageError) as e:
                st.error(f"Failed to post: {e}")

    for comment in reversed(document.comments):
        col1, col2 = st.columns([5, 1])
        with col1:
            st.markdown(f"**{comment.author}** · {comment.date.strftime('%m/%d %H:%M')}")
            st.markdown(comment.text)
        with col2:
            if st.button("🗑️", key=f"delete_comment_{comment.id}"):
                try:
                    run_async(board.remove_comment(comment.id))
                    st.rerun()
                except StorageError as e:
                    st.error(f"Failed to delete: {e}")


def render_settings_page(board: TripBoard, document: TripDocument):
    """Playlist link and connection status."""
    st.title("⚙️ Settings")

    st.markdown("### 🎵 Playlist")
    url = st.text_input("Playlist link", value=document.playlist_url or "")
    if st.button("Save playlist link"):
        try:
            run_async(board.set_playlist_url(url))
            st.success("Saved.")
        except (ValueError, StorageError) as e:
            st.error(str(e))

    st.markdown("### Connection Status")

    from tripboard.config import validate_all_settings

    status = validate_all_settings()
    backend = get_settings().app.storage_backend
    st.markdown(f"**Storage backend:** `{backend}` ({type(board.store).__name__})")

    services = [
        ("Google Sheets (Storage)", "google_sheets"),
        ("Open-Meteo (Weather)", "weather"),
    ]

    for name, key in services:
        if status.get(key, False):
            st.success(f"✅ {name} - Configured")
        else:
            error = status.get(f"{key}_error", "Not configured")
            st.error(f"❌ {name} - {error}")

    st.caption(f"Page rendered at {datetime.now().strftime('%H:%M:%S')}")


if __name__ == "__main__":
    main()
