"""
Streamlit Frontend for the Season Projector

One page: fill in the season, see the cash flow.

DESIGN PRINCIPLES:
1. Numbers update on every edit
2. Fields keep exactly what the user typed
3. Problems are explained, never silently corrected
4. One-time end-of-season costs only touch the final total
"""

from datetime import date
from typing import Optional

import streamlit as st

from src.audit import AuditLogger
from src.engine import parse_moment, state_names
from src.formatting import build_breakdown, format_currency, format_weeks
from src.models.projection import ProjectionResult
from src.orchestrator import (
    ProjectionSession,
    check_configuration,
    create_app_components,
)


# Page configuration
st.set_page_config(
    page_title="Work & Travel Calc",
    page_icon="✈️",
    layout="centered",
    initial_sidebar_state="collapsed",
)

# Custom CSS for better UX
st.markdown("""
<style>
    .profit-box {
        padding: 16px;
        background-color: #d4edda;
        border-radius: 10px;
        border-left: 5px solid #28a745;
        margin: 10px 0;
    }
    .loss-box {
        padding: 16px;
        background-color: #f8d7da;
        border-radius: 10px;
        border-left: 5px solid #dc3545;
        margin: 10px 0;
    }
    .big-number {
        font-size: 2.2em;
        font-weight: bold;
        font-family: monospace;
    }
</style>
""", unsafe_allow_html=True)


TEXT_FIELDS = (
    "upfront_cost",
    "housing_cost",
    "weekly_living_cost",
    "travel_cost",
    "purchase_cost",
    "state_tax_rate",
)
TOGGLE_FIELDS = ("is_fica_exempt", "include_overtime")
JOB_WIDGETS = {
    f"{job}_{field}": (job, field)
    for job in ("job1", "job2")
    for field in ("wage", "hours")
}


def get_session() -> ProjectionSession:
    """One ProjectionSession per browser session."""
    if "projection_session" not in st.session_state:
        session, _ = create_app_components()
        st.session_state.projection_session = session
        load_widgets(session)
    return st.session_state.projection_session


def _as_date(text: str) -> Optional[date]:
    moment = parse_moment(text)
    return moment.date() if moment else None


def load_widgets(session: ProjectionSession) -> None:
    """Copy the session form into widget state."""
    form = session.form
    st.session_state.start_date = _as_date(form.start_date)
    st.session_state.end_date = _as_date(form.end_date)
    for name in TEXT_FIELDS + TOGGLE_FIELDS:
        st.session_state[name] = getattr(form, name)
    for key, (job, field) in JOB_WIDGETS.items():
        st.session_state[key] = getattr(getattr(form, job), field)
    st.session_state.selected_state = form.selected_state or ""


# Widget callbacks run before the next render

def on_field_change(name: str) -> None:
    session = get_session()
    session.update_field(name, st.session_state[name])
    if name == "state_tax_rate":
        st.session_state.selected_state = ""


def on_job_change(key: str) -> None:
    job, field = JOB_WIDGETS[key]
    get_session().update_job(job, field, st.session_state[key])


def on_state_change() -> None:
    session = get_session()
    name = st.session_state.selected_state
    if name and session.select_state(name):
        st.session_state.state_tax_rate = session.form.state_tax_rate


def on_reset() -> None:
    session = get_session()
    session.reset()
    load_widgets(session)


def main():
    """Main application entry point."""
    problems = check_configuration(AuditLogger(enabled=True))
    if problems:
        st.error("⚠️ Configuration error. Check your environment variables.")
        for problem in problems:
            st.code(problem)
        st.stop()

    session = get_session()

    st.title("✈️ Work & Travel Calc")
    st.button("🔄 Reset", on_click=on_reset)

    render_logistics()
    render_jobs()
    render_taxes()
    render_living_expenses()
    render_season_plans()

    result = session.compute()
    validation = session.validate()

    if validation.issues:
        if validation.is_valid:
            st.warning(session.summarize(validation))
        else:
            st.error(session.summarize(validation))

    st.markdown("---")
    render_results(result)

    st.caption("Calculated with 2024 Federal Tax Brackets (Single/NRA). Keep hustling.")


def render_logistics():
    st.subheader("📅 The Logistics")
    col1, col2 = st.columns(2)
    with col1:
        st.date_input(
            "Start Date",
            key="start_date",
            on_change=on_field_change,
            args=("start_date",),
        )
    with col2:
        st.date_input(
            "End Date",
            key="end_date",
            on_change=on_field_change,
            args=("end_date",),
        )
    st.text_input(
        "Total Upfront Cost ($)",
        key="upfront_cost",
        placeholder="3000",
        help="Program + Flight + Visa",
        on_change=on_field_change,
        args=("upfront_cost",),
    )


def render_jobs():
    for job, title in (("job1", "💼 Job 1: The Grind"), ("job2", "💼 Job 2: The Hustle")):
        st.subheader(title)
        placeholder = "Optional" if job == "job2" else ""
        col1, col2 = st.columns(2)
        with col1:
            st.text_input(
                "Hourly Wage ($)",
                key=f"{job}_wage",
                placeholder=placeholder,
                on_change=on_job_change,
                args=(f"{job}_wage",),
            )
        with col2:
            st.text_input(
                "Hours / Week",
                key=f"{job}_hours",
                placeholder=placeholder,
                on_change=on_job_change,
                args=(f"{job}_hours",),
            )


def render_taxes():
    st.subheader("🧾 Taxes & Deductions")
    st.selectbox(
        "State",
        options=[""] + list(state_names()),
        key="selected_state",
        format_func=lambda x: "Select a state..." if x == "" else x,
        on_change=on_state_change,
    )
    st.text_input(
        "Est. State Tax Rate (%)",
        key="state_tax_rate",
        help="Usually 3% - 6%",
        on_change=on_field_change,
        args=("state_tax_rate",),
    )
    st.toggle(
        "J-1 FICA Exempt",
        key="is_fica_exempt",
        help="No Social Security/Medicare (7.65%)",
        on_change=on_field_change,
        args=("is_fica_exempt",),
    )
    st.toggle(
        "Calculate Overtime",
        key="include_overtime",
        help="1.5x Wage for hours > 40",
        on_change=on_field_change,
        args=("include_overtime",),
    )


def render_living_expenses():
    st.subheader("🏠 Living Expenses")
    st.text_input(
        "Weekly Rent ($)",
        key="housing_cost",
        on_change=on_field_change,
        args=("housing_cost",),
    )
    st.text_input(
        "Weekly Lifestyle ($)",
        key="weekly_living_cost",
        help="Food, Uber, Entertainment",
        on_change=on_field_change,
        args=("weekly_living_cost",),
    )
    st.caption("* Don't forget to include daily meal costs at work!")


def render_season_plans():
    st.subheader("🛍️ End of Season Plans")
    col1, col2 = st.columns(2)
    with col1:
        st.text_input(
            "Travel Budget ($)",
            key="travel_cost",
            placeholder="0",
            help="End of summer trip",
            on_change=on_field_change,
            args=("travel_cost",),
        )
    with col2:
        st.text_input(
            "Tech & Shopping ($)",
            key="purchase_cost",
            placeholder="0",
            help="iPhone, Gifts, etc.",
            on_change=on_field_change,
            args=("purchase_cost",),
        )
    st.caption("These costs are deducted from your final total, not weekly profit.")


def render_results(result: ProjectionResult):
    if not result.is_valid:
        st.info("📅 Enter dates to see projection")
        return

    st.markdown(
        f"**Duration:** {format_weeks(result.total_weeks)} · "
        f"**Depreciation:** -{format_currency(result.weekly_program_cost)}/wk"
    )
    st.markdown(
        f"Total Est. Taxes: -{format_currency(result.total_season_tax)} · "
        f"Weekly Gross: {format_currency(result.gross_weekly_income)}"
    )

    col1, col2 = st.columns(2)
    col1.metric(
        "Weekly Net Profit",
        format_currency(result.weekly_net_profit),
        help="Income - Expense",
    )
    col2.metric(
        "Monthly Net Profit",
        format_currency(result.monthly_net_profit),
        help="Weekly × 4",
    )

    box = "profit-box" if result.is_profitable else "loss-box"
    st.markdown(f"""
    <div class="{box}">
        <h4>Total Season Kasa (Net)</h4>
        <div class="big-number">{format_currency(result.total_season_profit)}</div>
    </div>
    """, unsafe_allow_html=True)

    box = "profit-box" if result.is_final_profitable else "loss-box"
    st.markdown(f"""
    <div class="{box}">
        <h4>After Travel & Purchases</h4>
        <div class="big-number">{format_currency(result.total_after_splurge)}</div>
    </div>
    """, unsafe_allow_html=True)

    with st.expander("🔍 Detailed breakdown"):
        for row in build_breakdown(result):
            label = f"**{row.label}**" if row.is_subtotal else row.label
            st.markdown(f"{label}: {format_currency(row.amount)}")


if __name__ == "__main__":
    main()
