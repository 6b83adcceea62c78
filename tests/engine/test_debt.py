from decimal import Decimal

from propcast.engine.debt import (
    LoanAmortizationState,
    effective_rate,
    is_io_year,
    loan_status,
    monthly_payment,
    monthly_rate,
    opening_state,
    step_loan,
)
from propcast.models.assumptions import (
    InterestRateOverride,
    LoanStatus,
    LoanTerms,
    RepaymentType,
)


class TestMonthlyPayment:
    def test_standard_mortgage(self):
        """$400K loan at 7% for 30 years."""
        pmt = monthly_payment(Decimal("400000"), monthly_rate(Decimal("7")), 360)
        assert pmt.quantize(Decimal("0.01")) == Decimal("2661.21")

    def test_zero_rate(self):
        assert monthly_payment(Decimal("360000"), Decimal("0"), 360) == Decimal("1000")

    def test_no_months_left(self):
        assert monthly_payment(Decimal("100000"), monthly_rate(Decimal("6")), 0) == Decimal("0")


class TestOpeningState:
    def test_interest_only_period_excluded(self):
        loan = LoanTerms(
            opening_balance=Decimal("500000"),
            annual_rate_percent=Decimal("6"),
            term_years=30,
            repayment_type=RepaymentType.INTEREST_ONLY,
            io_years=5,
        )
        state = opening_state(loan)
        assert state.balance == Decimal("500000")
        assert state.remaining_amortizing_months == 300

    def test_io_years_ignored_for_pi_loan(self):
        loan = LoanTerms(opening_balance=Decimal("1"), term_years=25, io_years=5)
        assert opening_state(loan).remaining_amortizing_months == 300


class TestStepLoan:
    def test_interest_only_year(self):
        state = LoanAmortizationState(Decimal("500000"), 300)
        year = step_loan(state, Decimal("6"), io_year=True)
        assert year.interest_paid == Decimal("30000")
        assert year.total_payment == Decimal("30000")
        assert year.ending_balance == Decimal("500000")
        assert year.state == state

    def test_amortizing_year_advances_counter(self):
        state = LoanAmortizationState(Decimal("500000"), 360)
        year = step_loan(state, Decimal("6"), io_year=False)
        assert year.ending_balance < Decimal("500000")
        assert year.principal_paid > 0
        assert year.state.remaining_amortizing_months == 348
        # Input state is not touched
        assert state.remaining_amortizing_months == 360

    def test_zero_rate_straight_line(self):
        state = LoanAmortizationState(Decimal("120000"), 240)
        year = step_loan(state, Decimal("0"), io_year=False)
        # 120,000 / 240 × 12
        assert year.interest_paid == Decimal("0")
        assert year.total_payment == Decimal("6000")
        assert year.ending_balance == Decimal("114000")
        assert year.state.remaining_amortizing_months == 228

    def test_paid_off_loan(self):
        state = LoanAmortizationState(Decimal("0"), 120)
        year = step_loan(state, Decimal("6"), io_year=False)
        assert year.total_payment == Decimal("0")
        assert year.ending_balance == Decimal("0")

    def test_counter_exhausted(self):
        state = LoanAmortizationState(Decimal("1000"), 0)
        year = step_loan(state, Decimal("6"), io_year=False)
        assert year.total_payment == Decimal("0")
        assert year.ending_balance == Decimal("1000")

    def test_io_then_pi_clears_by_term(self):
        loan = LoanTerms(
            opening_balance=Decimal("500000"),
            annual_rate_percent=Decimal("6"),
            term_years=30,
            repayment_type=RepaymentType.INTEREST_ONLY,
            io_years=5,
        )
        state = opening_state(loan)
        balances = []
        for year in range(1, 31):
            result = step_loan(state, loan.annual_rate_percent, is_io_year(loan, year))
            state = result.state
            balances.append(result.ending_balance)

        assert all(b == Decimal("500000") for b in balances[:5])
        for i in range(5, 30):
            assert balances[i] < balances[i - 1]
        assert balances[-1] <= Decimal("1.00")


class TestLoanStatus:
    def test_status_by_year(self):
        loan = LoanTerms(
            opening_balance=Decimal("100000"),
            repayment_type=RepaymentType.INTEREST_ONLY,
            io_years=2,
        )
        assert loan_status(loan, 1) is LoanStatus.IO
        assert loan_status(loan, 2) is LoanStatus.IO
        assert loan_status(loan, 3) is LoanStatus.PI

    def test_pi_loan_never_io(self):
        loan = LoanTerms(opening_balance=Decimal("100000"), io_years=5)
        assert not is_io_year(loan, 1)


class TestEffectiveRate:
    def test_no_override(self):
        loan = LoanTerms(annual_rate_percent=Decimal("6"))
        assert effective_rate(loan, 10) == Decimal("6")

    def test_override_from_year(self):
        loan = LoanTerms(annual_rate_percent=Decimal("6"))
        override = InterestRateOverride(rate_percent=Decimal("8"), effective_from_year=3)
        assert effective_rate(loan, 2, override) == Decimal("6")
        assert effective_rate(loan, 3, override) == Decimal("8")
