"""
Trade Journal Analytics - Dashboard, Calendar and Playbook Rollups
===================================================================

Read-only functions over the full trade collection. Nothing is cached:
every view is recomputed from the trades passed in.

Pure logic module. NO UI code. Bad dates or missing numbers never raise;
they are skipped or counted as zero.

Two win definitions are in use on purpose:
- dashboard / playbook / profile count ``status == WIN``
- the calendar week rollup counts ``pnl > 0``

Version: 1.0.0 (2026-10-19)
"""

import calendar
import math
from dataclasses import dataclass, field, asdict
from datetime import date as date_cls, datetime
from typing import Any, Dict, List, Optional

import pandas as pd

from journal_models import (
    STATUS_WIN, STATUS_LOSS, STATUS_BREAK_EVEN,
    Strategy, Trade,
)


# =============================================================================
# CONSTANTS
# =============================================================================

ALL_PLATFORMS = 'All Platforms'
START_LABEL = 'Start'

OUTCOME_COLORS = {
    'Wins': '#22c55e',
    'Losses': '#ef4444',
    'Breakeven': '#94a3b8',
}


# =============================================================================
# DATA CLASSES
# =============================================================================

@dataclass
class DailyStats:
    pnl: float = 0.0
    count: int = 0
    trades: List[Trade] = field(default_factory=list)


@dataclass
class WeekStats:
    week: int
    pnl: float
    trades: int
    win_rate: int

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass
class StrategyStats:
    strategy_id: str
    title: str
    count: int
    wins: int
    total_pnl: float
    avg_pnl: float
    win_rate: float

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass
class DashboardStats:
    platform: str
    total_pnl: float
    total_trades: int
    win_count: int
    loss_count: int
    break_even_count: int
    win_rate: float
    avg_win: float
    avg_risk_reward: float
    outcomes: List[Dict[str, Any]]
    equity_curve: List[Dict[str, Any]]
    platform_breakdown: List[Dict[str, Any]]

    def to_dict(self) -> Dict:
        return asdict(self)


# =============================================================================
# DATE HELPERS
# =============================================================================

def parse_trade_date(value: str) -> Optional[date_cls]:
    """Parse a trade date. ISO first, then whatever pandas recognizes."""
    text = str(value or '').strip()
    if not text:
        return None
    try:
        return datetime.strptime(text, '%Y-%m-%d').date()
    except ValueError:
        pass
    try:
        ts = pd.to_datetime(text, errors='coerce')
    except Exception:
        return None
    if ts is None or pd.isna(ts):
        return None
    return ts.date()


def _date_sort_key(value: str):
    parsed = parse_trade_date(value)
    if parsed is None:
        return (1, str(value))
    return (0, parsed)


def _num(value: Any) -> float:
    try:
        out = float(value)
    except (TypeError, ValueError):
        return 0.0
    return 0.0 if math.isnan(out) else out


def _trades_frame(trades: List[Trade]) -> pd.DataFrame:
    rows = [{
        'trade_id': t.trade_id,
        'date': t.date,
        'pnl': _num(t.pnl),
        'status': t.status,
        'setup': t.setup,
        'risk_reward': _num(t.risk_reward),
        'platform': list(t.platform or []),
    } for t in trades]
    return pd.DataFrame(rows, columns=['trade_id', 'date', 'pnl', 'status', 'setup',
                                       'risk_reward', 'platform'])


# =============================================================================
# CALENDAR
# =============================================================================

def month_layout(year: int, month: int) -> Dict[str, int]:
    """Days in month and the Sunday-start column of day 1."""
    first_weekday, days_in_month = calendar.monthrange(year, month)
    # calendar counts Monday as 0
    start_offset = (first_weekday + 1) % 7
    return {'days_in_month': days_in_month, 'start_offset': start_offset}


def trades_in_month(trades: List[Trade], year: int, month: int) -> List[Trade]:
    out = []
    for t in trades:
        d = parse_trade_date(t.date)
        if d is not None and d.year == year and d.month == month:
            out.append(t)
    return out


def daily_buckets(trades: List[Trade], year: int, month: int) -> Dict[int, DailyStats]:
    """P&L, count and trade list per calendar day. Days without trades are absent."""
    buckets: Dict[int, DailyStats] = {}
    for t in trades_in_month(trades, year, month):
        day = parse_trade_date(t.date).day
        bucket = buckets.setdefault(day, DailyStats())
        bucket.pnl += _num(t.pnl)
        bucket.count += 1
        bucket.trades.append(t)
    return buckets


def weekly_rollup(trades: List[Trade], year: int, month: int) -> List[WeekStats]:
    layout = month_layout(year, month)
    days_in_month = layout['days_in_month']
    offset = layout['start_offset']
    buckets = daily_buckets(trades, year, month)

    weeks = []
    weeks_count = math.ceil((days_in_month + offset) / 7)
    for i in range(weeks_count):
        start_day = i * 7 - offset + 1
        end_day = start_day + 6
        if start_day > days_in_month:
            continue

        week_pnl = 0.0
        week_count = 0
        week_wins = 0
        for day, bucket in buckets.items():
            if start_day <= day <= end_day:
                week_pnl += bucket.pnl
                week_count += bucket.count
                week_wins += sum(1 for t in bucket.trades if _num(t.pnl) > 0)

        weeks.append(WeekStats(
            week=i + 1,
            pnl=week_pnl,
            trades=week_count,
            win_rate=_round_half_up(week_wins / week_count * 100) if week_count > 0 else 0,
        ))
    return weeks


def daily_chart_data(trades: List[Trade], year: int, month: int) -> List[Dict[str, Any]]:
    buckets = daily_buckets(trades, year, month)
    return [{'name': str(day), 'pnl': buckets[day].pnl, 'count': buckets[day].count}
            for day in sorted(buckets)]


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


# =============================================================================
# DASHBOARD
# =============================================================================

def available_platforms(trades: List[Trade]) -> List[str]:
    platforms = set()
    for t in trades:
        platforms.update(p for p in (t.platform or []) if p)
    return sorted(platforms)


def filter_by_platform(trades: List[Trade], platform: Optional[str] = None) -> List[Trade]:
    if not platform or platform == ALL_PLATFORMS:
        return list(trades)
    return [t for t in trades if platform in (t.platform or [])]


def equity_curve(trades: List[Trade]) -> List[Dict[str, Any]]:
    """Cumulative P&L per trade date, anchored at a zero 'Start' point."""
    df = _trades_frame(trades)
    if df.empty:
        return []

    daily = df.groupby('date', sort=False)['pnl'].sum()
    daily = daily.loc[sorted(daily.index, key=_date_sort_key)]
    cumulative = daily.cumsum()

    curve = [{'name': START_LABEL, 'value': 0.0, 'daily_pnl': 0.0}]
    for trade_date, day_pnl in daily.items():
        curve.append({
            'name': trade_date,
            'value': round(float(cumulative[trade_date]), 2),
            'daily_pnl': float(day_pnl),
        })
    return curve


def platform_performance(trades: List[Trade]) -> List[Dict[str, Any]]:
    """P&L per platform tag. A trade on two platforms counts toward both."""
    df = _trades_frame(trades)
    if df.empty:
        return []
    exploded = df.explode('platform').dropna(subset=['platform'])
    exploded = exploded[exploded['platform'] != '']
    if exploded.empty:
        return []
    totals = exploded.groupby('platform', sort=False)['pnl'].sum()
    totals = totals.sort_values(ascending=False, kind='stable')
    return [{'name': name, 'pnl': float(pnl)} for name, pnl in totals.items()]


def outcome_breakdown(trades: List[Trade]) -> List[Dict[str, Any]]:
    counts = {
        'Wins': sum(1 for t in trades if t.status == STATUS_WIN),
        'Losses': sum(1 for t in trades if t.status == STATUS_LOSS),
        'Breakeven': sum(1 for t in trades if t.status == STATUS_BREAK_EVEN),
    }
    return [{'name': name, 'value': value, 'color': OUTCOME_COLORS[name]}
            for name, value in counts.items() if value > 0]


def dashboard_stats(trades: List[Trade], platform: Optional[str] = None) -> DashboardStats:
    """Headline numbers for the dashboard.

    Everything except ``platform_breakdown`` honors the platform filter;
    the breakdown always compares all platforms over the full set.
    """
    filtered = filter_by_platform(trades, platform)
    total_trades = len(filtered)
    pnls = [_num(t.pnl) for t in filtered]

    win_count = sum(1 for t in filtered if t.status == STATUS_WIN)
    loss_count = sum(1 for t in filtered if t.status == STATUS_LOSS)
    be_count = sum(1 for t in filtered if t.status == STATUS_BREAK_EVEN)

    winners = [p for p in pnls if p > 0]
    rrs = [_num(t.risk_reward) for t in filtered if _num(t.risk_reward) > 0]

    return DashboardStats(
        platform=platform or ALL_PLATFORMS,
        total_pnl=sum(pnls),
        total_trades=total_trades,
        win_count=win_count,
        loss_count=loss_count,
        break_even_count=be_count,
        win_rate=(win_count / total_trades * 100) if total_trades > 0 else 0.0,
        avg_win=(sum(winners) / len(winners)) if winners else 0.0,
        avg_risk_reward=(sum(rrs) / len(rrs)) if rrs else 0.0,
        outcomes=outcome_breakdown(filtered),
        equity_curve=equity_curve(filtered),
        platform_breakdown=platform_performance(trades),
    )


# =============================================================================
# PLAYBOOK
# =============================================================================

def trades_for_strategy(title: str, trades: List[Trade]) -> List[Trade]:
    """Trades linked to a strategy. Linkage is the exact ``setup`` text."""
    return [t for t in trades if t.setup == title]


def strategy_win_rate(title: str, trades: List[Trade]) -> str:
    linked = trades_for_strategy(title, trades)
    if not linked:
        return '0%'
    wins = sum(1 for t in linked if t.status == STATUS_WIN)
    return f"{_round_half_up(wins / len(linked) * 100)}%"


def strategy_performance(strategies: List[Strategy], trades: List[Trade]) -> List[StrategyStats]:
    stats = []
    for s in strategies:
        linked = trades_for_strategy(s.title, trades)
        count = len(linked)
        if count == 0:
            continue
        wins = sum(1 for t in linked if t.status == STATUS_WIN)
        total = sum(_num(t.pnl) for t in linked)
        stats.append(StrategyStats(
            strategy_id=s.strategy_id,
            title=s.title,
            count=count,
            wins=wins,
            total_pnl=total,
            avg_pnl=total / count,
            win_rate=wins / count * 100,
        ))
    stats.sort(key=lambda x: x.total_pnl, reverse=True)
    return stats


def strategy_equity_curves(strategies: List[Strategy], trades: List[Trade]) -> List[Dict[str, Any]]:
    """Running P&L per strategy, one point per linked trade in date order."""
    used_titles = {t.setup for t in trades}
    titles = []
    for s in strategies:
        if s.title in used_titles and s.title not in titles:
            titles.append(s.title)
    if not titles:
        return []

    relevant = sorted((t for t in trades if t.setup in titles),
                      key=lambda t: _date_sort_key(t.date))

    running = {title: 0.0 for title in titles}
    start = {'date': START_LABEL}
    start.update(running)
    points = [start]
    for t in relevant:
        running[t.setup] += _num(t.pnl)
        point = {'date': t.date}
        point.update(running)
        points.append(point)
    return points


# =============================================================================
# JOURNAL LIST / PROFILE
# =============================================================================

def filter_journal(trades: List[Trade], instrument: str = '', status: str = '',
                   strategy: str = '', platform: str = '') -> List[Trade]:
    """Newest first, narrowed by every non-empty criterion."""
    ordered = sorted(trades, key=lambda t: _date_sort_key(t.date), reverse=True)
    return [
        t for t in ordered
        if (not instrument or t.symbol == instrument)
        and (not status or t.status == status)
        and (not strategy or t.setup == strategy)
        and (not platform or platform in (t.platform or []))
    ]


def journal_instruments(trades: List[Trade]) -> List[str]:
    seen = []
    for t in trades:
        if t.symbol not in seen:
            seen.append(t.symbol)
    return seen


def account_summary(trades: List[Trade]) -> Dict[str, Any]:
    total = len(trades)
    wins = sum(1 for t in trades if t.status == STATUS_WIN)
    return {
        'total_trades': total,
        'total_pnl': sum(_num(t.pnl) for t in trades),
        'win_rate': _round_half_up(wins / total * 100) if total > 0 else 0,
    }


def exit_display_price(trade: Trade) -> float:
    if trade.status == STATUS_WIN:
        return trade.take_profit
    if trade.status == STATUS_LOSS:
        return trade.stop_loss
    return trade.entry_price
