import performance_analytics as analytics
from journal_models import STATUS_BREAK_EVEN, STATUS_LOSS, STATUS_WIN, Trade, default_strategies


def _trade(trade_id, date, pnl, status=None, setup="", platform=None, rr=0.0, symbol="XAUUSD"):
    if status is None:
        status = STATUS_WIN if pnl > 0 else STATUS_LOSS if pnl < 0 else STATUS_BREAK_EVEN
    return Trade(trade_id=trade_id, symbol=symbol, date=date, pnl=pnl, status=status,
                 setup=setup, platform=list(platform or []), risk_reward=rr)


def test_daily_bucket_sums_same_day_trades():
    trades = [_trade("a", "2024-03-05", 50), _trade("b", "2024-03-05", -20)]
    buckets = analytics.daily_buckets(trades, 2024, 3)
    assert list(buckets) == [5]
    assert buckets[5].pnl == 30
    assert buckets[5].count == 2
    assert [t.trade_id for t in buckets[5].trades] == ["a", "b"]


def test_daily_buckets_only_include_the_month():
    trades = [
        _trade("a", "2024-03-01", 10),
        _trade("b", "2024-03-31", 5),
        _trade("c", "2024-04-01", 100),
        _trade("d", "2023-03-15", 100),
        _trade("e", "not a date", 100),
    ]
    buckets = analytics.daily_buckets(trades, 2024, 3)
    assert sorted(buckets) == [1, 31]
    assert sum(b.pnl for b in buckets.values()) == 15


def test_month_layout_is_sunday_first():
    # 2024-03-01 is a Friday, 2024-09-01 a Sunday
    assert analytics.month_layout(2024, 3) == {"days_in_month": 31, "start_offset": 5}
    assert analytics.month_layout(2024, 9) == {"days_in_month": 30, "start_offset": 0}
    assert analytics.month_layout(2024, 2)["days_in_month"] == 29


def test_weekly_rollup_counts_wins_by_positive_pnl():
    trades = [
        _trade("a", "2024-03-02", 10),
        _trade("b", "2024-03-05", 50),
        _trade("c", "2024-03-05", -20),
        # a WIN status with zero P&L is not a calendar win
        _trade("d", "2024-03-06", 0, status=STATUS_WIN),
    ]
    weeks = analytics.weekly_rollup(trades, 2024, 3)
    assert len(weeks) == 6
    assert weeks[0].week == 1
    assert (weeks[0].pnl, weeks[0].trades, weeks[0].win_rate) == (10, 1, 100)
    assert (weeks[1].pnl, weeks[1].trades, weeks[1].win_rate) == (30, 3, 33)
    assert weeks[2].trades == 0
    assert weeks[2].win_rate == 0


def test_equity_curve_is_anchored_and_date_sorted():
    trades = [
        _trade("a", "2024-03-10", 5),
        _trade("b", "2024-03-02", 10),
        _trade("c", "2024-03-10", -3),
    ]
    curve = analytics.equity_curve(trades)
    assert curve[0] == {"name": "Start", "value": 0.0, "daily_pnl": 0.0}
    assert [p["name"] for p in curve[1:]] == ["2024-03-02", "2024-03-10"]
    assert [p["value"] for p in curve] == [0.0, 10.0, 12.0]
    assert curve[-1]["daily_pnl"] == 2.0


def test_equity_curve_empty():
    assert analytics.equity_curve([]) == []


def test_platform_performance_counts_every_tag():
    trades = [
        _trade("a", "2024-03-01", 100, platform=["FTMO Account", "Topstep XFA"]),
        _trade("b", "2024-03-02", -50, platform=["Topstep XFA"]),
        _trade("c", "2024-03-03", 7),
    ]
    rows = analytics.platform_performance(trades)
    assert rows == [
        {"name": "FTMO Account", "pnl": 100.0},
        {"name": "Topstep XFA", "pnl": 50.0},
    ]


def test_dashboard_platform_filter_keeps_full_breakdown():
    trades = [
        _trade("a", "2024-03-01", 100, platform=["FTMO Account", "Topstep XFA"], rr=2.0),
        _trade("b", "2024-03-02", -50, platform=["Topstep XFA"], rr=1.0),
    ]
    stats = analytics.dashboard_stats(trades, "FTMO Account")
    assert stats.total_trades == 1
    assert stats.total_pnl == 100
    assert stats.win_rate == 100.0
    assert len(stats.platform_breakdown) == 2

    everything = analytics.dashboard_stats(trades)
    assert everything.platform == analytics.ALL_PLATFORMS
    assert everything.total_trades == 2
    assert everything.win_count == 1
    assert everything.loss_count == 1
    assert everything.avg_win == 100
    assert everything.avg_risk_reward == 1.5
    assert [o["name"] for o in everything.outcomes] == ["Wins", "Losses"]


def test_dashboard_stats_with_no_trades():
    stats = analytics.dashboard_stats([])
    assert stats.total_trades == 0
    assert stats.win_rate == 0.0
    assert stats.equity_curve == []
    assert stats.platform_breakdown == []


def test_strategy_performance_sorted_and_skips_unused():
    strategies = default_strategies()
    trades = [
        _trade("a", "2024-03-01", 100, setup="Break & Retest"),
        _trade("b", "2024-03-02", -10, setup="Market Structure Shift"),
        _trade("c", "2024-03-03", 30, setup="Market Structure Shift"),
        _trade("d", "2024-03-04", 999, setup="Deleted Strategy"),
    ]
    perf = analytics.strategy_performance(strategies, trades)
    assert [p.title for p in perf] == ["Break & Retest", "Market Structure Shift"]
    mss = perf[1]
    assert (mss.count, mss.wins, mss.total_pnl, mss.avg_pnl, mss.win_rate) == (2, 1, 20, 10, 50.0)

    assert analytics.strategy_performance(strategies, []) == []


def test_strategy_win_rate_rounds_to_percent_text():
    trades = [
        _trade("a", "2024-03-01", 10, setup="X"),
        _trade("b", "2024-03-02", 10, setup="X"),
        _trade("c", "2024-03-03", -10, setup="X"),
    ]
    assert analytics.strategy_win_rate("X", trades) == "67%"
    assert analytics.strategy_win_rate("Y", trades) == "0%"


def test_strategy_equity_curves_track_each_strategy():
    strategies = default_strategies()
    trades = [
        _trade("a", "2024-03-02", -10, setup="Market Structure Shift"),
        _trade("b", "2024-03-01", 100, setup="Break & Retest"),
    ]
    points = analytics.strategy_equity_curves(strategies, trades)
    assert points[0] == {"date": "Start", "Market Structure Shift": 0.0, "Break & Retest": 0.0}
    assert points[1] == {"date": "2024-03-01", "Market Structure Shift": 0.0, "Break & Retest": 100.0}
    assert points[2] == {"date": "2024-03-02", "Market Structure Shift": -10.0, "Break & Retest": 100.0}


def test_filter_journal_newest_first_and_combined_filters():
    trades = [
        _trade("a", "2024-03-01", 10, setup="X", platform=["P1"]),
        _trade("b", "2024-03-03", -5, setup="X", platform=["P2"], symbol="EURUSD"),
        _trade("c", "2024-03-02", 8, setup="Y", platform=["P1"]),
    ]
    assert [t.trade_id for t in analytics.filter_journal(trades)] == ["b", "c", "a"]
    assert [t.trade_id for t in analytics.filter_journal(trades, strategy="X")] == ["b", "a"]
    assert [t.trade_id for t in analytics.filter_journal(trades, platform="P1", status=STATUS_WIN)] == ["c", "a"]
    assert [t.trade_id for t in analytics.filter_journal(trades, instrument="EURUSD")] == ["b"]
    assert analytics.journal_instruments(trades) == ["XAUUSD", "EURUSD"]


def test_account_summary_and_exit_display():
    trades = [_trade("a", "2024-03-01", 10), _trade("b", "2024-03-02", -4)]
    assert analytics.account_summary(trades) == {"total_trades": 2, "total_pnl": 6, "win_rate": 50}
    assert analytics.account_summary([])["win_rate"] == 0

    t = Trade(trade_id="x", status=STATUS_LOSS, entry_price=100, take_profit=110, stop_loss=95)
    assert analytics.exit_display_price(t) == 95
