"""
Streamlit Frontend for Housemates

An interactive view over one household session.

DESIGN PRINCIPLES:
1. Every button maps onto exactly one command
2. The answer shown is the same text the CLI would print
3. Nothing outlives the browser session

Run with:
    streamlit run app/main.py
"""

from decimal import Decimal

import streamlit as st

from housemates.commands import CLEAR_TOKEN
from housemates.models.command import ClearDue, Dues, MoveIn, MoveOut, Spend
from housemates.orchestrator import HouseholdSession, create_app_components


# Page configuration
st.set_page_config(
    page_title="Housemates",
    page_icon="🏠",
    layout="wide",
    initial_sidebar_state="expanded",
)


def get_session() -> HouseholdSession:
    """Get or create the household session for this browser session."""
    if "household" not in st.session_state:
        st.session_state.household = create_app_components()
    return st.session_state.household


def show_answer(lines: list[str]) -> None:
    """Render command output the way the CLI prints it."""
    if not lines:
        st.info("Nothing to record yet: an expense needs at least two people.")
        return
    text = "\n".join(lines)
    if lines[0] in ("SUCCESS", CLEAR_TOKEN) or lines[0].isdigit():
        st.success(text)
    else:
        st.error(text)


def main():
    """Main application entry point."""
    session = get_session()

    # Sidebar navigation
    st.sidebar.title("🏠 Housemates")
    st.sidebar.markdown("---")

    page = st.sidebar.radio(
        "Navigate to:",
        ["🏠 Household", "💸 Spend", "📒 Dues", "⌨️ Commands", "⚙️ Settings"],
        index=0,
    )

    st.sidebar.markdown("---")
    members = session.ledger.members
    st.sidebar.markdown(
        f"**Residents ({len(members)}/{session.ledger.capacity}):** "
        + (", ".join(members) if members else "nobody yet")
    )

    # Route to appropriate page
    if page == "🏠 Household":
        render_household_page(session)
    elif page == "💸 Spend":
        render_spend_page(session)
    elif page == "📒 Dues":
        render_dues_page(session)
    elif page == "⌨️ Commands":
        render_commands_page(session)
    elif page == "⚙️ Settings":
        render_settings_page()


def render_household_page(session: HouseholdSession):
    """Render the move in / move out page."""
    st.title("🏠 Household")

    col1, col2 = st.columns(2)

    with col1:
        st.subheader("Move in")
        name = st.text_input("Name", key="move_in_name")
        if st.button("Move in", type="primary") and name:
            show_answer(session.execute(MoveIn(member=name)).output)

    with col2:
        st.subheader("Move out")
        members = session.ledger.members
        if not members:
            st.info("Nobody lives here yet.")
        else:
            leaving = st.selectbox("Resident", options=members, key="move_out_name")
            if st.button("Move out"):
                show_answer(session.execute(MoveOut(member=leaving)).output)
                st.caption("Residents with open dues in either direction cannot move out.")


def render_spend_page(session: HouseholdSession):
    """Render the shared expense page."""
    st.title("💸 Record an Expense")

    members = session.ledger.members
    if len(members) < 2:
        st.info("At least two residents are needed to share an expense.")
        return

    amount = st.number_input("Amount", min_value=0, step=100, value=0)
    paid_by = st.selectbox("Paid by", options=members)
    others = st.multiselect(
        "Shared with",
        options=[m for m in members if m != paid_by],
        help="The payer always carries a share too",
    )

    if st.button("Record expense", type="primary"):
        command = Spend(
            amount=Decimal(str(amount)),
            paid_by=paid_by,
            shared_by=[paid_by, *others],
        )
        show_answer(session.execute(command).output)


def render_dues_page(session: HouseholdSession):
    """Render the dues view and the clear-due form."""
    st.title("📒 Dues")

    members = session.ledger.members
    if not members:
        st.info("Nobody lives here yet.")
        return

    member = st.selectbox("Show what this resident owes", options=members)
    outcome = session.execute(Dues(member=member))
    if outcome.output == [CLEAR_TOKEN]:
        st.success("No dues.")
    else:
        st.table(
            [
                {"Owes": line.rsplit(" ", 1)[0], "Amount": int(line.rsplit(" ", 1)[1])}
                for line in outcome.output
            ]
        )

    st.markdown("---")
    st.subheader("Clear a due")

    col1, col2, col3 = st.columns(3)
    with col1:
        borrower = st.selectbox("Borrower", options=members, key="borrower")
    with col2:
        lender = st.selectbox(
            "Lender",
            options=[m for m in members if m != borrower] or members,
            key="lender",
        )
    with col3:
        amount = st.number_input("Amount", min_value=0, step=50, value=0, key="clear_amount")

    if st.button("Clear due", type="primary"):
        outcome = session.execute(
            ClearDue(borrower=borrower, lender=lender, amount=int(amount))
        )
        show_answer(outcome.output)


def render_commands_page(session: HouseholdSession):
    """Render a free-form command console."""
    st.title("⌨️ Commands")
    st.markdown("Type commands exactly as they would appear in an input file.")

    with st.expander("📝 Example"):
        st.code(
            "MOVE_IN ANDY\n"
            "MOVE_IN WOODY\n"
            "SPEND 1000 ANDY WOODY\n"
            "DUES WOODY\n"
            "CLEAR_DUE WOODY ANDY 500\n"
            "MOVE_OUT WOODY"
        )

    script = st.text_area("Commands", height=200)
    if st.button("Run", type="primary") and script.strip():
        output = list(session.process_lines(script.splitlines()))
        st.code("\n".join(output) if output else "(no output)")


def render_settings_page():
    """Render the settings page."""
    st.title("⚙️ Settings")

    st.markdown("### Configuration Status")

    from housemates.config import validate_all_settings

    status = validate_all_settings()

    sections = [
        ("House rules", "ledger"),
        ("Logging", "logging"),
        ("Application", "app"),
    ]

    for name, key in sections:
        if status.get(key, False):
            st.success(f"✅ {name} - OK")
        else:
            error = status.get(f"{key}_error", "Not configured")
            st.error(f"❌ {name} - {error}")

    st.markdown("---")
    st.markdown(
        "Settings are read from the environment or a `.env` file. "
        "See `.env.example` for the available variables. "
        "Changes apply to new browser sessions."
    )

    if st.button("Start a new household"):
        del st.session_state["household"]
        st.rerun()


if __name__ == "__main__":
    main()
