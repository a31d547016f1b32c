"""Streamlit settlement page entry point."""

from decimal import Decimal

import altair as alt
import streamlit as st

from moneyflow.domain.exceptions import SettlementError
from moneyflow.domain.models import SettlementResult
from moneyflow.infrastructure.container import build_settlement_engine


def _fetch_settlement(ledger_id: str, member_id: str) -> SettlementResult:
    """Compute the settlement through the configured ledger store."""
    engine = build_settlement_engine()
    return engine.calculate(ledger_id, member_id)


@st.cache_data(show_spinner=False, ttl=60)
def _load_settlement(ledger_id: str, member_id: str) -> SettlementResult:
    """Cached wrapper around _fetch_settlement for Streamlit sessions."""
    return _fetch_settlement(ledger_id, member_id)


def _format_amount(value: Decimal) -> str:
    """Format amounts for display."""
    return f"{value:,.2f}"


def _format_balance(value: Decimal) -> str:
    """Format balances with an explicit sign."""
    sign = "+" if value > 0 else ""
    return f"{sign}{value:,.2f}"


def _members_table(result: SettlementResult) -> list[dict[str, str]]:
    return [
        {
            "Member": member.name,
            "Paid": _format_amount(member.paid_amount),
            "Share": _format_amount(member.should_pay_amount),
            "Balance": _format_balance(member.balance),
        }
        for member in result.members
    ]


def _transactions_table(result: SettlementResult) -> list[dict[str, str]]:
    return [
        {
            "From": transaction.from_name,
            "To": transaction.to_name,
            "Amount": _format_amount(transaction.amount),
        }
        for transaction in result.transactions
    ]


def _prepare_balance_chart_data(
    result: SettlementResult,
) -> list[dict[str, str | float]]:
    """Prepare Altair-ready rows, one per member.

    Args:
        result: Settlement to chart.

    Returns:
        Rows with the member name, balance and a receive/pay label.
    """
    return [
        {
            "member": member.name,
            "balance": float(member.balance),
            "direction": "receives" if member.balance >= 0 else "pays",
            "balance_label": _format_balance(member.balance),
        }
        for member in result.members
    ]


def _render_balance_chart(result: SettlementResult) -> None:
    """Render a horizontal bar chart of member balances."""
    data = _prepare_balance_chart_data(result)
    if not data:
        st.info("No members to chart.")
        return
    chart = alt.Chart(alt.Data(values=data)).mark_bar(
        cornerRadius=4,
    ).encode(
        x=alt.X("balance:Q", title="Balance"),
        y=alt.Y("member:N", title=None, sort=None),
        color=alt.Color(
            "direction:N",
            scale=alt.Scale(
                domain=["receives", "pays"],
                range=["#2e7d32", "#e76f51"],
            ),
            legend=alt.Legend(orient="bottom", title=None),
        ),
        tooltip=[
            alt.Tooltip("member:N"),
            alt.Tooltip("balance_label:N"),
        ],
    ).properties(
        height=max(120, 48 * len(data)),
    )
    st.subheader("Balances")
    st.altair_chart(chart, width="stretch")


def main() -> None:
    """Render the Streamlit app."""
    st.set_page_config(page_title="MoneyFlow Settlement", layout="wide")
    st.title("MoneyFlow Settlement")

    ledger_id = st.sidebar.text_input("Account book ID").strip()
    member_id = st.sidebar.text_input("Your member ID").strip()
    if not ledger_id or not member_id:
        st.info("Enter an account book and your member ID to settle up.")
        return

    try:
        result = _load_settlement(ledger_id, member_id)
    except SettlementError as exc:
        st.error(f"{exc.message} ({exc.code})")
        return

    st.caption(f"{result.ledger_name} · {len(result.members)} members")
    shared_col, personal_col, transfers_col = st.columns(3)
    shared_col.metric(
        "Shared expenses",
        _format_amount(result.total_shared_expense),
    )
    personal_col.metric(
        "Personal expenses",
        _format_amount(result.total_personal_expense),
    )
    transfers_col.metric("Transfers", str(len(result.transactions)))

    st.subheader("Members")
    st.dataframe(_members_table(result), width="stretch", hide_index=True)

    st.subheader("Transfers")
    if result.transactions:
        st.dataframe(
            _transactions_table(result),
            width="stretch",
            hide_index=True,
        )
    else:
        st.success("Everyone is settled up.")

    _render_balance_chart(result)


if __name__ == "__main__":  # pragma: no cover
    main()
