"""CLI adapter printing the settlement of a shared ledger.

The ledger and the requesting member are read from SETTLEMENT_LEDGER_ID and
SETTLEMENT_MEMBER_ID. Set SETTLEMENT_OUTPUT=json for machine-readable output.
"""

import json
import os

import dotenv

from moneyflow.domain.exceptions import SettlementError
from moneyflow.domain.models import SettlementResult
from moneyflow.infrastructure.container import build_settlement_engine
from moneyflow.infrastructure.logging.logger import get_app_logger


def _format_report(result: SettlementResult) -> str:
    """Render a settlement as a plain-text report."""
    lines = [
        f"Settlement for {result.ledger_name} ({result.ledger_id})",
        f"Shared expenses: {result.total_shared_expense:,.2f}",
        f"Personal expenses: {result.total_personal_expense:,.2f}",
        "",
        "Members:",
    ]
    for member in result.members:
        lines.append(
            f"  {member.name}: paid={member.paid_amount:,.2f} "
            f"share={member.should_pay_amount:,.2f} "
            f"balance={member.balance:+,.2f}"
        )
    lines.append("")
    if not result.transactions:
        lines.append("Nothing to settle.")
    else:
        lines.append("Transfers:")
        for transaction in result.transactions:
            lines.append(
                f"  {transaction.from_name} -> {transaction.to_name}: "
                f"{transaction.amount:,.2f}"
            )
    return "\n".join(lines)


def main() -> int:
    """Compute and print a settlement; return the process exit code."""
    dotenv.load_dotenv()
    logger = get_app_logger()
    ledger_id = os.getenv("SETTLEMENT_LEDGER_ID")
    member_id = os.getenv("SETTLEMENT_MEMBER_ID")
    if not ledger_id or not member_id:
        logger.warning(
            "SETTLEMENT_LEDGER_ID and SETTLEMENT_MEMBER_ID are required."
        )
        return 1

    engine = build_settlement_engine()
    try:
        result = engine.calculate(ledger_id, member_id)
    except SettlementError as exc:
        logger.error(f"Settlement failed [{exc.code}]: {exc.message}")
        print(f"Error {exc.code}: {exc.message}")
        return 1

    if os.getenv("SETTLEMENT_OUTPUT", "text").strip().lower() == "json":
        print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    else:
        print(_format_report(result))
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
