import unittest

from journal_models import (
    STATUS_BREAK_EVEN,
    FormOptions,
    Strategy,
    Trade,
    User,
    default_strategies,
)


class TradeRecordTests(unittest.TestCase):
    def test_from_dict_fills_defaults(self):
        trade = Trade.from_dict({"id": "t1", "pnl": "12.5", "checklistScore": 80})
        self.assertEqual(trade.symbol, "UNKNOWN")
        self.assertEqual(trade.quantity, 1.0)
        self.assertEqual(trade.pnl, 12.5)
        self.assertEqual(trade.status, STATUS_BREAK_EVEN)
        self.assertEqual(trade.platform, [])
        self.assertTrue(trade.followed_plan)

    def test_from_dict_rejects_bad_values(self):
        trade = Trade.from_dict({"entryPrice": "abc", "pnl": float("nan"), "direction": "up",
                                 "status": "pending", "platform": "FTMO"})
        self.assertTrue(trade.trade_id)
        self.assertEqual(trade.entry_price, 0.0)
        self.assertEqual(trade.pnl, 0.0)
        self.assertEqual(trade.direction, "Long")
        self.assertEqual(trade.status, STATUS_BREAK_EVEN)
        self.assertEqual(trade.platform, [])

    def test_to_dict_round_trip(self):
        trade = Trade(trade_id="t1", symbol="EURUSD", pnl=-4.0, platform=["P1"], confluences=["FVG"])
        data = trade.to_dict()
        self.assertEqual(data["entryPrice"], 0)
        self.assertEqual(Trade.from_dict(data), trade)


class CatalogAndOptionsTests(unittest.TestCase):
    def test_default_strategies_are_fresh_copies(self):
        first = default_strategies()
        first[0].rules.analysis.append("extra")
        second = default_strategies()
        self.assertEqual(len(second[0].rules.analysis), 2)
        self.assertEqual([s.is_active for s in second], [True, False])

    def test_strategy_round_trip(self):
        strategy = default_strategies()[1]
        self.assertEqual(Strategy.from_dict(strategy.to_dict()), strategy)

    def test_form_options_unknown_category(self):
        with self.assertRaises(KeyError):
            FormOptions().values("brokers")

    def test_form_options_from_dict_cleans_values(self):
        options = FormOptions.from_dict({"sessions": [" London", "London", "", "  ", "Tokyo"]})
        self.assertEqual(options.sessions, ["London", "Tokyo"])

    def test_user_requires_email(self):
        with self.assertRaises(ValueError):
            User.from_dict({"name": "x"})


if __name__ == "__main__":
    unittest.main()
