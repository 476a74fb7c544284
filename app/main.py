"""
Streamlit Frontend for Expense Reports

One screen with two independent actions:
1. Record an expense (item name + amount → Firebase)
2. Export a report (report type → rendered PNG → view / download)

DESIGN PRINCIPLES:
1. Simple, clear interface
2. Field-level errors next to the field that caused them
3. One toast per action, success or failure
4. Inputs are cleared only after a confirmed save
"""

import asyncio
import atexit

import streamlit as st

from expense_reports.audit import create_correlation_id
from expense_reports.orchestrator import ExpenseRecorderFlow, ReportExportFlow, create_app_components
from expense_reports.validation import AMOUNT_FIELD, ITEM_NAME_FIELD


# Page configuration
st.set_page_config(
    page_title="Expense Reports",
    page_icon="🧾",
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
    .status-label {
        padding: 10px 20px;
        background-color: #cce5ff;
        border-radius: 10px;
        border-left: 5px solid #004085;
        margin: 10px 0;
    }
</style>
""", unsafe_allow_html=True)


ITEM_NAME_KEY = "item_name_input"
AMOUNT_KEY = "amount_input"


def run_async(coro):
    """Helper to run async functions in Streamlit."""
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


@st.cache_resource
def get_components():
    """Get or create application components (cached)."""
    components = create_app_components(use_storage=True)

    client = components[2]
    if client is not None:
        atexit.register(client.close)
    return components


def main():
    """Main application entry point."""
    try:
        expense_flow, export_flow, client = get_components()
    except Exception as e:
        st.error(f"Failed to initialize: {e}")
        st.stop()

    # Sidebar navigation
    st.sidebar.title("🧾 Expense Reports")
    st.sidebar.markdown("---")

    page = st.sidebar.radio(
        "Navigate to:",
        ["🧾 Expenses & Reports", "⚙️ Settings"],
        index=0,
    )

    st.sidebar.markdown("---")
    if client is None:
        st.sidebar.warning(
            "Firebase is not configured. Saving and exporting will fail until it is."
        )

    if page == "🧾 Expenses & Reports":
        render_main_page(expense_flow, export_flow)
    elif page == "⚙️ Settings":
        render_settings_page()


def render_main_page(expense_flow: ExpenseRecorderFlow, export_flow: ReportExportFlow):
    """Render the expense form and the export panel."""
    st.title("🧾 Expenses & Reports")

    # Initialize session state
    if "status_label" not in st.session_state:
        st.session_state.status_label = ""
    if "field_errors" not in st.session_state:
        st.session_state.field_errors = {}
    if "last_export" not in st.session_state:
        st.session_state.last_export = None

    # Inputs can only be reset before their widgets are created
    if st.session_state.pop("clear_fields", False):
        st.session_state[ITEM_NAME_KEY] = ""
        st.session_state[AMOUNT_KEY] = ""

    toast = st.session_state.pop("pending_toast", None)
    if toast:
        st.toast(toast)

    col1, col2 = st.columns(2)

    with col1:
        render_expense_form(expense_flow)

    with col2:
        render_export_panel(export_flow)

    if st.session_state.status_label:
        st.markdown(
            f'<div class="status-label">{st.session_state.status_label}</div>',
            unsafe_allow_html=True,
        )


def render_expense_form(expense_flow: ExpenseRecorderFlow):
    st.subheader("Record an Expense")
    errors = st.session_state.field_errors

    item_name = st.text_input("Item Name *", key=ITEM_NAME_KEY)
    if errors.get(ITEM_NAME_FIELD):
        st.error(errors[ITEM_NAME_FIELD])

    amount = st.text_input("Amount *", key=AMOUNT_KEY, placeholder="e.g. 12.50")
    if errors.get(AMOUNT_FIELD):
        st.error(errors[AMOUNT_FIELD])

    if st.button("💾 Submit", type="primary"):
        result = run_async(
            expense_flow.submit(
                item_name=item_name,
                amount_text=amount,
                correlation_id=create_correlation_id(),
            )
        )

        st.session_state.field_errors = result.validation.field_errors
        if result.status_message:
            st.session_state.status_label = result.status_message
        if result.notification:
            st.session_state.pending_toast = result.notification
        if result.clear_fields:
            st.session_state.clear_fields = True
        st.rerun()


def render_export_panel(export_flow: ReportExportFlow):
    st.subheader("Export a Report")

    report_types = export_flow.report_types
    default_type = export_flow.default_report_type
    report_type = st.selectbox(
        "Report Type",
        options=report_types,
        index=report_types.index(default_type),
        help="Which report to export",
    )

    if st.button("📤 Export Report"):
        with st.spinner("Exporting report..."):
            result = run_async(
                export_flow.export(
                    report_type=report_type,
                    correlation_id=create_correlation_id(),
                )
            )
        if result.message:
            st.toast(result.message)
        st.session_state.last_export = result if result.success else None

    result = st.session_state.last_export
    if result is not None and result.share is not None:
        share = result.share
        image_bytes = share.read_bytes()
        if image_bytes is None:
            # Removed since the last export
            st.session_state.last_export = None
            return
        st.image(image_bytes, caption=f"{result.report_type} report")
        if result.lines_clipped:
            st.warning(f"{result.lines_clipped} lines did not fit on the report and were clipped.")
        st.download_button(
            share.chooser_title,
            data=image_bytes,
            file_name=share.path.name,
            mime=share.mime_type,
        )


def render_settings_page():
    """Render the settings page."""
    st.title("⚙️ Settings")

    st.markdown("### Connection Status")

    from expense_reports.config import validate_all_settings

    status = validate_all_settings()

    sections = [
        ("Firebase (Storage)", "firebase"),
        ("Report Rendering", "reports"),
        ("Application", "app"),
    ]

    for name, key in sections:
        if status.get(key, False):
            st.success(f"✅ {name} - Configured")
        else:
            error = status.get(f"{key}_error", "Not configured")
            st.error(f"❌ {name} - {error}")

    st.markdown("---")
    st.markdown("### Configuration")
    st.markdown(
        "To configure the application, create a `.env` file with your Firebase "
        "credentials. See `.env.example` for the required variables."
    )


if __name__ == "__main__":
    main()
