"""
Streamlit Frontend for the Finance Tracker

Two views:
1. Dashboard - income, expenses, balance, expense breakdown, transactions
2. Add Transaction - the add/edit form

The page holds no business logic. Every user action is forwarded to the
FormController or the TransactionStore, and the page re-renders from
their state.
"""

from decimal import Decimal

import streamlit as st

from finance_tracker.config import get_settings, validate_all_settings
from finance_tracker.controller import FormController
from finance_tracker.models.form import ActiveTab
from finance_tracker.models.transaction import Transaction, TransactionType
from finance_tracker.orchestrator import AppComponents, create_app_components
from finance_tracker.services.storage import StorageError


st.set_page_config(
    page_title="Personal Finance Tracker",
    page_icon="💰",
    layout="centered",
)

TAB_LABELS = {
    ActiveTab.DASHBOARD: "📊 Dashboard",
    ActiveTab.ADD: "➕ Add Transaction",
}

# Widget keys mirrored from the controller
KEY_TAB = "nav_tab"
KEY_TYPE = "form_type"
KEY_DESCRIPTION = "form_description"
KEY_AMOUNT = "form_amount"
KEY_CATEGORY = "form_category"


@st.cache_resource
def get_components() -> AppComponents:
    """Get or create application components (cached)."""
    return create_app_components()


def get_controller(components: AppComponents) -> FormController:
    """Give this browser session its own controller and seed widget state."""
    if "controller" not in st.session_state:
        st.session_state.controller = components.new_controller()
        sync_widgets(st.session_state.controller)
    return st.session_state.controller


def sync_widgets(controller: FormController) -> None:
    """Copy controller state into widget state before widgets render."""
    fields = controller.fields
    st.session_state[KEY_TAB] = controller.active_tab
    st.session_state[KEY_TYPE] = fields.type
    st.session_state[KEY_DESCRIPTION] = fields.description
    st.session_state[KEY_AMOUNT] = fields.amount
    st.session_state[KEY_CATEGORY] = fields.category


def money(amount: Decimal) -> str:
    symbol = get_settings().app.currency_symbol
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"


# =============================================================================
# CALLBACKS (run before the next render)
# =============================================================================

def on_tab_change(controller: FormController) -> None:
    controller.switch_tab(st.session_state[KEY_TAB])


def on_type_change(controller: FormController) -> None:
    controller.change_type(st.session_state[KEY_TYPE])
    st.session_state[KEY_CATEGORY] = controller.fields.category


def on_start_edit(controller: FormController, transaction_id: str) -> None:
    if controller.start_edit(transaction_id):
        sync_widgets(controller)


def on_delete(components: AppComponents, transaction_id: str) -> None:
    try:
        components.store.remove(transaction_id)
    except StorageError as e:
        st.session_state.flash_error = f"Could not delete: {e}"


def on_cancel(controller: FormController) -> None:
    controller.cancel_edit()
    sync_widgets(controller)


def on_submit(controller: FormController) -> None:
    controller.set_description(st.session_state[KEY_DESCRIPTION])
    controller.set_amount(st.session_state[KEY_AMOUNT])
    controller.set_category(st.session_state[KEY_CATEGORY])
    was_editing = controller.is_editing
    try:
        saved = controller.submit()
    except StorageError as e:
        st.session_state.flash_error = f"Failed to save: {e}"
        return
    if saved is not None:
        verb = "Updated" if was_editing else "Added"
        st.session_state.flash_success = f"{verb} {saved.description}"
    sync_widgets(controller)


def on_discard_backup(components: AppComponents) -> None:
    try:
        components.store.discard_corrupt_backup()
    except StorageError as e:
        st.session_state.flash_error = f"Could not discard backup: {e}"


# =============================================================================
# PAGES
# =============================================================================

def main():
    """Main application entry point."""
    components = get_components()
    controller = get_controller(components)
    render_sidebar(components)

    st.title("💰 Personal Finance Tracker")

    st.radio(
        "View",
        options=list(ActiveTab),
        format_func=lambda tab: TAB_LABELS[tab],
        key=KEY_TAB,
        horizontal=True,
        label_visibility="collapsed",
        on_change=on_tab_change,
        args=(controller,),
    )

    error = st.session_state.pop("flash_error", None)
    if error:
        st.error(error)
    success = st.session_state.pop("flash_success", None)
    if success:
        st.success(success)

    if controller.active_tab == ActiveTab.DASHBOARD:
        render_dashboard(components, controller)
    else:
        render_form(controller)


def render_sidebar(components: AppComponents):
    """Configuration status, data warnings and recent activity."""
    with st.sidebar:
        st.header("⚙️ Status")

        status = validate_all_settings()
        for name, key in [("Storage settings", "storage"), ("App settings", "app")]:
            if status.get(key, False):
                st.success(f"✅ {name}")
            else:
                st.error(f"❌ {name}: {status.get(f'{key}_error', 'invalid')}")

        try:
            has_backup = components.store.has_corrupt_backup()
        except StorageError as e:
            st.error(f"❌ Storage unreadable: {e}")
            has_backup = False

        if has_backup:
            st.warning(
                f"Saved transactions could not be read at startup. The original "
                f"data was kept under '{components.store.backup_key}'."
            )
            st.button(
                "Discard backup",
                on_click=on_discard_backup,
                args=(components,),
            )

        with st.expander("Recent activity"):
            events = components.audit_logger.recent_events(limit=10)
            if not events:
                st.caption("Nothing yet.")
            for event in events:
                st.caption(f"{event.timestamp:%H:%M:%S} · {event.description}")


def render_dashboard(components: AppComponents, controller: FormController):
    """Render summary cards, expense breakdown and the transaction list."""
    summary = components.summary()

    col1, col2, col3 = st.columns(3)
    col1.metric("Income", money(summary.total_income))
    col2.metric("Expenses", money(summary.total_expenses))
    col3.metric("Balance", money(summary.balance))

    st.subheader("Expense Breakdown")
    if summary.has_expenses:
        st.caption("Distribution of your expenses by category")
        st.bar_chart(
            {item.name: float(item.value) for item in summary.breakdown},
            horizontal=True,
        )
        for item in summary.breakdown:
            st.markdown(f"- **{item.name}**: {money(item.value)} ({item.percent}%)")
    else:
        st.info(
            "No expense data to display. "
            "Add some transactions to see your spending breakdown."
        )

    st.subheader("Recent Transactions")
    transactions = components.store.all()
    if not transactions:
        st.info("No transactions yet. Add your first transaction to get started.")
        return

    for transaction in transactions:
        render_transaction_row(components, controller, transaction)


def render_transaction_row(
    components: AppComponents,
    controller: FormController,
    transaction: Transaction,
):
    col1, col2, col3, col4 = st.columns([5, 2, 1, 1])
    with col1:
        st.markdown(f"**{transaction.description}**")
        st.caption(f"{transaction.category} · {transaction.date.isoformat()}")
    with col2:
        colour = "green" if transaction.is_income else "red"
        st.markdown(f":{colour}[{money(transaction.signed_amount)}]")
    with col3:
        st.button(
            "✏️",
            key=f"edit_{transaction.id}",
            help="Edit",
            on_click=on_start_edit,
            args=(controller, transaction.id),
        )
    with col4:
        st.button(
            "🗑️",
            key=f"delete_{transaction.id}",
            help="Delete",
            on_click=on_delete,
            args=(components, transaction.id),
        )


def render_form(controller: FormController):
    """Render the add/edit form."""
    if controller.is_editing:
        st.subheader("Edit Transaction")
        st.caption("Update your transaction details")
    else:
        st.subheader("Add New Transaction")
        st.caption("Record a new income or expense")

    # Outside the form so a type change re-renders the category list
    st.radio(
        "Transaction Type",
        options=[TransactionType.EXPENSE, TransactionType.INCOME],
        format_func=lambda t: t.value.title(),
        key=KEY_TYPE,
        horizontal=True,
        on_change=on_type_change,
        args=(controller,),
    )

    validation = controller.last_validation

    with st.form("transaction_form", clear_on_submit=False):
        st.text_input(
            "Description",
            key=KEY_DESCRIPTION,
            placeholder="What was this transaction for?",
        )
        st.text_input(
            f"Amount ({get_settings().app.currency_symbol})",
            key=KEY_AMOUNT,
            placeholder="0.00",
        )
        st.selectbox(
            "Category",
            options=list(controller.category_options),
            key=KEY_CATEGORY,
        )

        if validation is not None:
            for issue in validation.issues:
                st.warning(issue.message)

        col1, col2 = st.columns(2)
        with col1:
            st.form_submit_button(
                "💾 Update" if controller.is_editing else "➕ Add",
                type="primary",
                on_click=on_submit,
                args=(controller,),
            )
        with col2:
            if controller.is_editing:
                st.form_submit_button(
                    "✖ Cancel",
                    on_click=on_cancel,
                    args=(controller,),
                )


if __name__ == "__main__":
    main()
