"""Domain services for splitting shared expenses and netting debts."""

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal
from logging import Logger

from moneyflow.domain.exceptions import InvalidSettlementStateError
from moneyflow.domain.models import (
    Expense,
    Member,
    MemberBalance,
    SettlementTransaction,
)
from moneyflow.utils.decimal_utils import CENT, quantize_money

ZERO = Decimal("0")


def compute_expense_shares(
    expense: Expense,
    members: Sequence[Member],
) -> list[tuple[str, Decimal]]:
    """Return the amount each member owes for one shared expense.

    Without participants every ledger member owes ``amount / n``. With
    participants each one owes ``amount * ratio / total_ratio``. Every share
    is rounded half-up to cents on its own, so shares may not add up to the
    expense amount exactly.

    Args:
        expense: Shared expense to split.
        members: Ledger members in membership order.

    Returns:
        list[tuple[str, Decimal]]: (member_id, share) pairs.

    Raises:
        InvalidSettlementStateError: If there are no members, the amount is
            not a finite number, a participant is not a member or the share
            ratios are not positive.
    """
    if not members:
        raise InvalidSettlementStateError(
            f"Cannot split expense {expense.expense_id} without members"
        )
    if not expense.amount.is_finite():
        raise InvalidSettlementStateError(
            f"Expense {expense.expense_id} has a non-finite amount: "
            f"{expense.amount}"
        )
    if not expense.participants:
        share = quantize_money(expense.amount / Decimal(len(members)))
        return [(member.member_id, share) for member in members]

    member_ids = {member.member_id for member in members}
    total_ratio = ZERO
    for participant in expense.participants:
        if participant.member_id not in member_ids:
            raise InvalidSettlementStateError(
                f"Participant {participant.member_id} of expense "
                f"{expense.expense_id} is not a ledger member"
            )
        if (
            not participant.share_ratio.is_finite()
            or participant.share_ratio <= 0
        ):
            raise InvalidSettlementStateError(
                f"Share ratio must be a positive number for participant "
                f"{participant.member_id} of expense {expense.expense_id}"
            )
        total_ratio += participant.share_ratio
    if total_ratio <= 0:
        raise InvalidSettlementStateError(
            f"Total share ratio must be positive for expense "
            f"{expense.expense_id}"
        )

    return [
        (
            participant.member_id,
            quantize_money(
                expense.amount * participant.share_ratio / total_ratio
            ),
        )
        for participant in expense.participants
    ]


def compute_member_balances(
    members: Sequence[Member],
    shared_expenses: Sequence[Expense],
) -> list[MemberBalance]:
    """Compute paid, owed and net amounts per member.

    Args:
        members: Ledger members in membership order.
        shared_expenses: Expenses paid from the shared pool.

    Returns:
        list[MemberBalance]: One balance per member, in membership order.

    Raises:
        InvalidSettlementStateError: If the snapshot is inconsistent.
    """
    if not members:
        raise InvalidSettlementStateError("Ledger has no members")

    paid = {member.member_id: ZERO for member in members}
    should_pay = {member.member_id: ZERO for member in members}

    for expense in shared_expenses:
        if not expense.amount.is_finite() or expense.amount <= 0:
            raise InvalidSettlementStateError(
                f"Shared expense {expense.expense_id} has an invalid "
                f"amount: {expense.amount}"
            )
        payer_id = expense.payer_id
        if payer_id not in paid:
            raise InvalidSettlementStateError(
                f"Payer {payer_id} of expense {expense.expense_id} "
                "is not a ledger member"
            )
        paid[payer_id] += expense.amount
        for member_id, share in compute_expense_shares(expense, members):
            should_pay[member_id] += share

    balances = []
    for member in members:
        paid_amount = quantize_money(paid[member.member_id])
        should_pay_amount = quantize_money(should_pay[member.member_id])
        balances.append(
            MemberBalance(
                member_id=member.member_id,
                name=member.name,
                paid_amount=paid_amount,
                should_pay_amount=should_pay_amount,
                balance=paid_amount - should_pay_amount,
            )
        )
    return balances


@dataclass
class _OpenPosition:
    member_id: str
    name: str
    remaining: Decimal


def compute_settlement_transactions(
    balances: Sequence[MemberBalance],
) -> list[SettlementTransaction]:
    """Return transfers that bring every balance back to zero.

    Greedy netting: creditors and debtors are each sorted by amount,
    largest first, with ties kept in membership order. The head debtor pays
    the head creditor the smaller of their open amounts until one side runs
    out. The result has at most ``len(balances) - 1`` transfers but is not
    guaranteed to be the minimum.

    Args:
        balances: Member balances in membership order.

    Returns:
        list[SettlementTransaction]: Transfers in the order they were paired.
    """
    receivers = sorted(
        (
            _OpenPosition(item.member_id, item.name, item.balance)
            for item in balances
            if item.balance > 0
        ),
        key=lambda position: position.remaining,
        reverse=True,
    )
    payers = sorted(
        (
            _OpenPosition(item.member_id, item.name, -item.balance)
            for item in balances
            if item.balance < 0
        ),
        key=lambda position: position.remaining,
        reverse=True,
    )

    transactions: list[SettlementTransaction] = []
    while receivers and payers:
        receiver = receivers[0]
        payer = payers[0]
        amount = min(receiver.remaining, payer.remaining)
        if amount > 0:
            transactions.append(
                SettlementTransaction(
                    from_member_id=payer.member_id,
                    from_name=payer.name,
                    to_member_id=receiver.member_id,
                    to_name=receiver.name,
                    amount=amount,
                )
            )
        receiver.remaining -= amount
        payer.remaining -= amount
        if receiver.remaining <= 0:
            receivers.pop(0)
        if payer.remaining <= 0:
            payers.pop(0)
    return transactions


def validate_zero_sum(
    balances: Sequence[MemberBalance],
    logger: Logger,
) -> bool:
    """Warn when balances drift beyond the accumulated rounding bound.

    Args:
        balances: Computed member balances.
        logger: Logger used for warnings.

    Returns:
        bool: True when the sum of balances is within ``0.01 * n``.
    """
    total = sum((item.balance for item in balances), start=ZERO)
    tolerance = CENT * len(balances)
    if abs(total) > tolerance:
        logger.warning(
            f"Settlement balances do not net to zero: sum={total}, "
            f"tolerance={tolerance}"
        )
        return False
    return True


__all__ = [
    "compute_expense_shares",
    "compute_member_balances",
    "compute_settlement_transactions",
    "validate_zero_sum",
]
