#!/usr/bin/env python3
"""Tests for the Exact, Combination and Gift Card match strategies."""

import pytest

from itemizer.core.money import Money
from itemizer.matching.models import GIFT_CARD_DESCRIPTION
from itemizer.matching.strategies import (
    MatchStrategy,
    find_combination_match,
    find_exact_match,
    find_gift_card_match,
    find_matches,
    window_candidates,
)
from tests.fixtures.synthetic_data import make_order, make_return, make_transaction


def _order(cents: int = -5000, used_gift_card: bool = False):
    return make_order(
        "111-0000001-0000001",
        "2024-03-01",
        [("UPS(1Z001)", [("Widget", cents)])],
        used_gift_card=used_gift_card,
    )


class TestWindowCandidates:
    """Test date-window and debit filtering."""

    @pytest.mark.matching
    def test_window_bounds_and_debits(self):
        """Test only debits from the order date through 14 days later qualify."""
        before = make_transaction("before", -5000, "2024-02-29")
        first_day = make_transaction("first-day", -5000, "2024-03-01")
        last_day = make_transaction("last-day", -5000, "2024-03-15")
        after = make_transaction("after", -5000, "2024-03-16")
        credit = make_transaction("credit", 5000, "2024-03-05")

        candidates = window_candidates(_order(), [before, first_day, last_day, after, credit])

        assert [tx.id for tx in candidates] == ["first-day", "last-day"]


class TestExactStrategy:
    """Test single-charge matching."""

    @pytest.mark.matching
    def test_matches_single_charge(self):
        """Test a charge equal to the total matches."""
        tx = make_transaction("tx-1", -5000, "2024-03-03")
        match = find_exact_match(Money.from_cents(-5000), _order(), [], [tx])

        assert match is not None
        assert match.transactions == [tx]
        assert match.extra_items == []
        assert match.absorbed_return is None

    @pytest.mark.matching
    def test_prefers_closest_date(self):
        """Test the charge nearest the order date wins."""
        far = make_transaction("far", -5000, "2024-03-10")
        near = make_transaction("near", -5000, "2024-03-02")

        match = find_exact_match(Money.from_cents(-5000), _order(), [], [far, near])

        assert match.transactions == [near]

    @pytest.mark.matching
    def test_no_match_for_different_amount(self):
        """Test a one-cent difference does not match."""
        tx = make_transaction("tx-1", -5001, "2024-03-03")
        assert find_exact_match(Money.from_cents(-5000), _order(), [], [tx]) is None

    @pytest.mark.matching
    def test_ignores_credit_with_same_magnitude(self):
        """Test credits never satisfy a charge."""
        tx = make_transaction("refund", 5000, "2024-03-03")
        assert find_exact_match(Money.from_cents(5000), _order(5000), [], [tx]) is None


class TestCombinationStrategy:
    """Test multi-charge matching."""

    @pytest.mark.matching
    def test_two_charges_sum_to_total(self):
        """Test a split charge is matched as a group."""
        tx_20 = make_transaction("tx-20", -2000, "2024-03-02")
        tx_30 = make_transaction("tx-30", -3000, "2024-03-04")

        match = find_combination_match(Money.from_cents(-5000), _order(), [], [tx_30, tx_20])

        # Sorted by distance from the order date
        assert match.transactions == [tx_20, tx_30]

    @pytest.mark.matching
    def test_single_charge_is_not_a_combination(self):
        """Test subsets of size one are skipped."""
        tx = make_transaction("tx-1", -5000, "2024-03-03")
        assert find_combination_match(Money.from_cents(-5000), _order(), [], [tx]) is None

    @pytest.mark.matching
    def test_first_subset_in_mask_order_wins(self):
        """Test the earliest matching subset of the distance-sorted candidates is returned."""
        a = make_transaction("a", -1000, "2024-03-01")
        b = make_transaction("b", -4000, "2024-03-02")
        c = make_transaction("c", -2000, "2024-03-03")
        d = make_transaction("d", -3000, "2024-03-04")

        match = find_combination_match(Money.from_cents(-5000), _order(), [], [d, c, b, a])

        # Masks: [a,b] (-50.00) precedes [c,d] (-50.00)
        assert [tx.id for tx in match.transactions] == ["a", "b"]

    @pytest.mark.matching
    def test_outside_window_not_combined(self):
        """Test charges outside the window are not considered."""
        tx_20 = make_transaction("tx-20", -2000, "2024-03-02")
        tx_30 = make_transaction("tx-30", -3000, "2024-03-20")
        assert find_combination_match(Money.from_cents(-5000), _order(), [], [tx_20, tx_30]) is None


class TestGiftCardStrategy:
    """Test partial gift card payment matching."""

    @pytest.mark.matching
    def test_requires_gift_card_flag(self):
        """Test orders not paid by gift card are skipped."""
        tx = make_transaction("tx-40", -4000, "2024-03-03")
        assert find_gift_card_match(Money.from_cents(-5500), _order(-5500), [], [tx]) is None

    @pytest.mark.matching
    def test_synthetic_gift_card_item(self):
        """Test the uncovered difference becomes a balancing gift card item."""
        tx = make_transaction("tx-40", -4000, "2024-03-03")
        order = _order(-5500, used_gift_card=True)

        match = find_gift_card_match(Money.from_cents(-5500), order, [], [tx])

        assert match.transactions == [tx]
        assert len(match.extra_items) == 1
        assert match.extra_items[0].description == GIFT_CARD_DESCRIPTION
        assert match.extra_items[0].amount == Money.from_cents(1500)
        assert match.absorbed_return is None

    @pytest.mark.matching
    def test_charge_larger_than_total_not_candidate(self):
        """Test only charges smaller than the total qualify."""
        larger = make_transaction("tx-60", -6000, "2024-03-03")
        equal = make_transaction("tx-55", -5500, "2024-03-03")
        order = _order(-5500, used_gift_card=True)

        assert find_gift_card_match(Money.from_cents(-5500), order, [], [larger, equal]) is None

    @pytest.mark.matching
    def test_closest_amount_wins(self):
        """Test the charge covering the most of the total is chosen."""
        small = make_transaction("tx-20", -2000, "2024-03-02")
        close = make_transaction("tx-40", -4000, "2024-03-10")
        order = _order(-5500, used_gift_card=True)

        match = find_gift_card_match(Money.from_cents(-5500), order, [], [small, close])

        assert match.transactions == [close]

    @pytest.mark.matching
    def test_absorbs_refund_credited_to_gift_card(self):
        """Test a pending refund equal to the difference contributes its items."""
        tx = make_transaction("tx-40", -4000, "2024-03-03")
        order = _order(-5500, used_gift_card=True)
        refund = make_return("111-0000009-0000009", "2024-03-05", 1500, [("Filter", -1500)])
        unrelated = make_return("111-0000008-0000008", "2024-03-05", 999, [("Other", -999)])

        match = find_gift_card_match(Money.from_cents(-5500), order, [unrelated, refund], [tx])

        assert match.absorbed_return is refund
        assert [(item.description, item.amount.to_cents()) for item in match.extra_items] == [("Filter", 1500)]


class TestFindMatches:
    """Test strategy dispatch."""

    @pytest.mark.matching
    def test_strategy_order(self):
        """Test strategies are declared in their run order."""
        assert list(MatchStrategy) == [MatchStrategy.EXACT, MatchStrategy.COMBINATION, MatchStrategy.GIFT_CARD]

    @pytest.mark.matching
    def test_dispatches_to_strategy(self):
        """Test the selected strategy is the one applied."""
        tx = make_transaction("tx-1", -5000, "2024-03-03")
        order = _order()

        assert find_matches(MatchStrategy.EXACT, Money.from_cents(-5000), order, [], [tx]).transactions == [tx]
        assert find_matches(MatchStrategy.COMBINATION, Money.from_cents(-5000), order, [], [tx]) is None
        assert find_matches(MatchStrategy.GIFT_CARD, Money.from_cents(-5000), order, [], [tx]) is None

    @pytest.mark.matching
    def test_strategies_do_not_mutate_pools(self):
        """Test proposals leave the pools untouched."""
        tx = make_transaction("tx-40", -4000, "2024-03-03")
        refund = make_return("111-0000009-0000009", "2024-03-05", 1500, [("Filter", -1500)])
        transactions, returns = [tx], [refund]

        find_matches(MatchStrategy.GIFT_CARD, Money.from_cents(-5500), _order(-5500, True), returns, transactions)

        assert transactions == [tx]
        assert returns == [refund]
