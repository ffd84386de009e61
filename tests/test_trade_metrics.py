import unittest

from journal_models import STATUS_BREAK_EVEN, STATUS_LOSS, STATUS_WIN, Trade
from trade_metrics import (
    OUTCOME_BREAKEVEN,
    OUTCOME_LOSS,
    OUTCOME_WIN,
    TradeForm,
    commit_trade,
    derive,
    form_from_trade,
    new_trade_form,
    update_outcome,
    update_pnl,
    update_position,
    update_prices,
)


def _long_win_form(**overrides):
    fields = dict(
        instrument="XAUUSD",
        date="2024-03-05",
        direction="Long",
        entry_price="100",
        take_profit="110",
        stop_loss="95",
        quantity="2",
        outcome=OUTCOME_WIN,
    )
    fields.update(overrides)
    return TradeForm(**fields)


class DeriveTests(unittest.TestCase):
    def test_long_win_example(self):
        out = derive(_long_win_form())
        self.assertEqual(out.risk_reward, "2.00")
        self.assertEqual(out.realized_pnl, "20.00")
        self.assertEqual(out.points, "10.00")
        self.assertEqual(out.outcome, OUTCOME_WIN)

    def test_short_loss_example(self):
        form = TradeForm(direction="Short", entry_price="2000", take_profit="1950",
                         stop_loss="2020", quantity="1", outcome=OUTCOME_LOSS)
        out = derive(form)
        self.assertEqual(out.risk_reward, "2.50")
        self.assertEqual(out.realized_pnl, "-20.00")
        self.assertEqual(out.points, "-20.00")
        self.assertEqual(out.outcome, OUTCOME_LOSS)

    def test_derive_is_idempotent(self):
        once = derive(_long_win_form())
        self.assertEqual(derive(once), once)

    def test_derive_does_not_mutate_input(self):
        form = _long_win_form()
        derive(form)
        self.assertEqual(form.realized_pnl, "")
        self.assertEqual(form.risk_reward, "")

    def test_risk_reward_needs_all_three_prices(self):
        out = derive(_long_win_form(stop_loss=""))
        self.assertEqual(out.risk_reward, "")
        out = derive(_long_win_form(stop_loss="100"))
        self.assertEqual(out.risk_reward, "")

    def test_non_numeric_entry_leaves_dependents_untouched(self):
        out = derive(_long_win_form(entry_price="abc", realized_pnl="", points=""))
        self.assertEqual(out.risk_reward, "")
        self.assertEqual(out.realized_pnl, "")
        self.assertEqual(out.points, "")

    def test_zero_or_blank_quantity_counts_as_one(self):
        self.assertEqual(derive(_long_win_form(quantity="0")).realized_pnl, "10.00")
        self.assertEqual(derive(_long_win_form(quantity="")).realized_pnl, "10.00")

    def test_blank_direction_uses_short_formula_and_skips_points(self):
        out = derive(_long_win_form(direction="", take_profit="90", stop_loss="105",
                                    outcome=OUTCOME_LOSS))
        self.assertEqual(out.realized_pnl, "-10.00")
        self.assertEqual(out.outcome, OUTCOME_LOSS)
        self.assertEqual(out.points, "")
        self.assertEqual(commit_trade(out).direction, "Long")

    def test_breakeven_exits_at_entry(self):
        out = derive(_long_win_form(outcome=OUTCOME_BREAKEVEN))
        self.assertEqual(out.realized_pnl, "0.00")
        self.assertEqual(out.outcome, OUTCOME_BREAKEVEN)

    def test_untouched_form_gets_no_outcome(self):
        out = derive(TradeForm())
        self.assertEqual(out.outcome, "")
        self.assertEqual(out.realized_pnl, "")

    def test_win_below_entry_settles_on_the_stop_exit(self):
        # Long "win" whose take profit sits below entry
        out = derive(_long_win_form(take_profit="90", stop_loss="95"))
        self.assertEqual(out.outcome, OUTCOME_LOSS)
        self.assertEqual(out.realized_pnl, "-10.00")
        self.assertEqual(out.points, "-5.00")
        self.assertEqual(derive(out), out)

    def test_prices_inverted_on_both_sides_settle_at_breakeven(self):
        out = derive(_long_win_form(take_profit="90", stop_loss="105"))
        self.assertEqual(out.outcome, OUTCOME_BREAKEVEN)
        self.assertEqual(out.realized_pnl, "0.00")
        self.assertEqual(derive(out), out)

    def test_oversized_prices_do_not_raise(self):
        form = TradeForm(direction="Long", entry_price="1", take_profit="1e30",
                         stop_loss="0.5", outcome=OUTCOME_WIN)
        out = derive(form)
        self.assertEqual(out.risk_reward, "")
        self.assertEqual(out.realized_pnl, "")
        self.assertEqual(out.points, "")
        self.assertEqual(commit_trade(out).status, STATUS_BREAK_EVEN)


class FieldGroupUpdateTests(unittest.TestCase):
    def test_updates_rederive(self):
        form = new_trade_form()
        form = update_position(form, direction="Long", quantity="2")
        form = update_prices(form, entry_price="100", take_profit="110", stop_loss="95")
        self.assertEqual(form.risk_reward, "2.00")
        self.assertEqual(form.realized_pnl, "")
        form = update_outcome(form, OUTCOME_WIN)
        self.assertEqual(form.realized_pnl, "20.00")
        self.assertEqual(form.points, "10.00")

    def test_manual_pnl_reclassifies_outcome(self):
        form = update_pnl(TradeForm(), "-15")
        self.assertEqual(form.outcome, OUTCOME_LOSS)
        form = update_pnl(form, "40")
        self.assertEqual(form.outcome, OUTCOME_WIN)
        form = update_pnl(form, "0")
        self.assertEqual(form.outcome, OUTCOME_BREAKEVEN)

    def test_manual_pnl_overwritten_when_exit_resolves(self):
        form = update_pnl(_long_win_form(), "999")
        self.assertEqual(form.realized_pnl, "20.00")


class CommitTests(unittest.TestCase):
    def test_commit_long_win(self):
        trade = commit_trade(_long_win_form(), checklist_score=80)
        self.assertEqual(trade.status, STATUS_WIN)
        self.assertEqual(trade.pnl, 20.0)
        self.assertEqual(trade.exit_price, 110.0)
        self.assertEqual(trade.risk_reward, 2.0)
        self.assertEqual(trade.points, 10.0)
        self.assertEqual(trade.quantity, 2.0)
        self.assertEqual(trade.symbol, "XAUUSD")
        self.assertTrue(trade.followed_plan)
        self.assertTrue(trade.trade_id)

    def test_commit_short_loss(self):
        form = TradeForm(direction="Short", entry_price="2000", take_profit="1950",
                         stop_loss="2020", outcome=OUTCOME_LOSS)
        trade = commit_trade(form)
        self.assertEqual(trade.status, STATUS_LOSS)
        self.assertEqual(trade.pnl, -20.0)
        self.assertEqual(trade.exit_price, 2020.0)
        self.assertEqual(trade.direction, "Short")
        self.assertFalse(trade.followed_plan)

    def test_status_always_agrees_with_pnl_sign(self):
        cases = [
            (TradeForm(realized_pnl="12.5"), STATUS_WIN),
            (TradeForm(realized_pnl="-3"), STATUS_LOSS),
            (TradeForm(outcome=OUTCOME_WIN), STATUS_BREAK_EVEN),
            (TradeForm(outcome=OUTCOME_LOSS, realized_pnl="0"), STATUS_BREAK_EVEN),
        ]
        for form, expected in cases:
            trade = commit_trade(form)
            self.assertEqual(trade.status, expected, form)

    def test_blank_instrument_is_unknown(self):
        self.assertEqual(commit_trade(TradeForm()).symbol, "UNKNOWN")

    def test_followed_plan_threshold(self):
        self.assertTrue(commit_trade(_long_win_form(), checklist_score=75).followed_plan)
        self.assertFalse(commit_trade(_long_win_form(), checklist_score=74).followed_plan)

    def test_checklist_score_is_clamped(self):
        self.assertEqual(commit_trade(_long_win_form(), checklist_score=140).checklist_score, 100)
        self.assertEqual(commit_trade(_long_win_form(), checklist_score=-5).checklist_score, 0)

    def test_edit_keeps_original_checklist_score(self):
        original = commit_trade(_long_win_form(), checklist_score=80)
        edited = commit_trade(form_from_trade(original), checklist_score=10, existing=original)
        self.assertEqual(edited.checklist_score, 80)
        self.assertTrue(edited.followed_plan)
        self.assertEqual(edited.trade_id, original.trade_id)

    def test_commit_saves_the_displayed_values(self):
        shown = update_outcome(update_prices(_long_win_form(outcome=""), take_profit="90"),
                               OUTCOME_WIN)
        trade = commit_trade(shown)
        self.assertEqual(trade.pnl, float(shown.realized_pnl))
        self.assertEqual(trade.points, float(shown.points))
        self.assertEqual(trade.status, STATUS_LOSS)

    def test_edit_round_trip_is_stable(self):
        original = commit_trade(_long_win_form(), checklist_score=50)
        again = commit_trade(form_from_trade(original), existing=original)
        self.assertEqual(again, original)

    def test_form_from_trade_maps_status(self):
        self.assertEqual(form_from_trade(Trade(trade_id="a", status=STATUS_WIN)).outcome, OUTCOME_WIN)
        self.assertEqual(form_from_trade(Trade(trade_id="b", status=STATUS_LOSS)).outcome, OUTCOME_LOSS)
        self.assertEqual(form_from_trade(Trade(trade_id="c", status="OPEN")).outcome, OUTCOME_BREAKEVEN)


if __name__ == "__main__":
    unittest.main()
