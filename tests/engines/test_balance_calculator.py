"""
Tests for the Balance Calculator.

Covers:
- Source scenarios (two-person hotel, three-person uneven splits)
- Payer outside the split
- Historical (non-member) participants and key ordering
- Full-precision shares and conservation
- Empty log, single member
- InvalidExpenseError on malformed entries
"""

import pytest
from decimal import Decimal

from settlement_engines.balances import BalanceCalculator, compute_balances
from settlement_engines.verification import check_conservation
from settlement_kernel.domain.ledger import ExpenseEntry
from settlement_kernel.exceptions import InvalidExpenseError


class TestScenarios:

    def test_hotel_two_people(self):
        balances = compute_balances(
            ["Rahul", "Priya"],
            [ExpenseEntry("Hotel", "5000", "Rahul", ("Rahul", "Priya"))],
        )
        assert balances == {"Rahul": Decimal("2500"), "Priya": Decimal("-2500")}

    def test_three_people_uneven(self):
        balances = compute_balances(
            ["A", "B", "C"],
            [
                ExpenseEntry("Dinner", "90", "A", ("A", "B", "C")),
                ExpenseEntry("Taxi", "30", "B", ("B", "C")),
            ],
        )
        assert balances == {
            "A": Decimal("60"),
            "B": Decimal("-15"),
            "C": Decimal("-45"),
        }
        assert sum(balances.values()) == Decimal("0")

    def test_payer_not_in_split(self):
        """The payer is reimbursed in full; only split members are debited."""
        balances = compute_balances(
            ["A", "B", "C"],
            [ExpenseEntry("Gift", "100", "A", ("B", "C"))],
        )
        assert balances == {
            "A": Decimal("100"),
            "B": Decimal("-50"),
            "C": Decimal("-50"),
        }


class TestBoundaries:

    def test_empty_log(self):
        balances = compute_balances(["A", "B"], [])
        assert balances == {"A": Decimal("0"), "B": Decimal("0")}

    def test_no_members_no_expenses(self):
        assert compute_balances([], []) == {}

    def test_single_member_self_expense(self):
        balances = compute_balances(["Solo"], [ExpenseEntry("Hostel", "800", "Solo", ("Solo",))])
        assert balances == {"Solo": Decimal("0")}

    def test_historical_participants_tracked(self):
        """Ids outside the member list keep balances, after members, by first appearance."""
        balances = compute_balances(
            ["A"],
            [
                ExpenseEntry("Fuel", "60", "Old", ("A", "Gone", "Old")),
                ExpenseEntry("Snacks", "20", "Gone", ("Later",)),
            ],
        )
        assert list(balances) == ["A", "Old", "Gone", "Later"]
        assert balances["Old"] == Decimal("40")
        assert balances["Gone"] == Decimal("0")
        assert balances["Later"] == Decimal("-20")

    def test_untouched_member_is_zero(self):
        balances = compute_balances(
            ["A", "B", "Idle"],
            [ExpenseEntry("Lunch", "40", "A", ("A", "B"))],
        )
        assert balances["Idle"] == Decimal("0")


class TestPrecision:

    def test_non_terminating_share_not_rounded(self):
        balances = compute_balances(
            ["A", "B", "C"],
            [ExpenseEntry("Cab", "10", "A", ("A", "B", "C"))],
        )
        share = Decimal("10") / Decimal("3")
        assert balances["B"] == -share
        assert balances["A"] == Decimal("10") - share
        assert check_conservation(balances).is_balanced

    def test_conservation_many_odd_splits(self):
        members = ["A", "B", "C", "D", "E", "F", "G"]
        expenses = [
            ExpenseEntry(f"item-{n}", str(Decimal(n) + Decimal("0.07")), members[n % 7], tuple(members[: (n % 6) + 2]))
            for n in range(1, 40)
        ]
        result = check_conservation(compute_balances(members, expenses))
        assert result.is_balanced
        assert abs(result.total) <= Decimal("1e-6")

    def test_idempotent(self):
        members = ["A", "B", "C"]
        expenses = [
            ExpenseEntry("Cab", "10", "A", ("A", "B", "C")),
            ExpenseEntry("Tea", "7.25", "C", ("B", "C")),
        ]
        calculator = BalanceCalculator()
        first = calculator.compute(members, expenses)
        second = calculator.compute(members, expenses)
        assert first == second
        assert list(first) == list(second)


class TestInvalidExpenses:

    @pytest.mark.parametrize("entry, reason", [
        (ExpenseEntry("Cab", "0", "A", ("A",)), "positive"),
        (ExpenseEntry("Cab", "-10", "A", ("A",)), "positive"),
        (ExpenseEntry("Cab", "10", "A", ()), "split_among"),
        (ExpenseEntry("Cab", "10", None, ("A",)), "paid_by"),
        (ExpenseEntry("Cab", "10", "", ("A",)), "paid_by"),
    ])
    def test_raises(self, entry, reason):
        with pytest.raises(InvalidExpenseError, match=reason):
            compute_balances(["A"], [entry])

    def test_not_skipped_silently(self):
        """A bad entry anywhere in the log fails the whole computation."""
        expenses = [
            ExpenseEntry("Cab", "10", "A", ("A", "B")),
            ExpenseEntry("Broken", "0", "B", ("A", "B")),
        ]
        with pytest.raises(InvalidExpenseError) as exc_info:
            compute_balances(["A", "B"], expenses)
        assert exc_info.value.description == "Broken"


class TestLogging:

    def test_emits_trace_and_summary(self, captured_logs):
        compute_balances(["A", "B"], [ExpenseEntry("Cab", "10", "A", ("A", "B"))])
        logs = captured_logs()

        summary = [r for r in logs if r["message"] == "balances_computed"]
        assert summary[-1]["participant_count"] == 2
        assert summary[-1]["expense_count"] == 1

        traces = [r for r in logs if r["message"] == "SETTLEMENT_ENGINE_TRACE"]
        assert traces[-1]["engine_name"] == "balances"
        assert len(traces[-1]["input_fingerprint"]) == 16
