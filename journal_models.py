"""
Trade Journal Models - Trades, Strategies, Checklist, Options, User
====================================================================

Plain dataclasses for everything the journal keeps in session memory.
NO UI code. NO persistence. Records serialize to flat dicts with the
camelCase keys used by stored blobs and exports; loading tolerates missing
fields and substitutes the documented defaults.

Version: 1.0.0 (2026-10-19)
"""

import uuid
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional


# =============================================================================
# CONSTANTS
# =============================================================================

STATUS_WIN = 'WIN'
STATUS_LOSS = 'LOSS'
STATUS_BREAK_EVEN = 'BREAK_EVEN'
STATUS_OPEN = 'OPEN'
TRADE_STATUSES = [STATUS_WIN, STATUS_LOSS, STATUS_BREAK_EVEN, STATUS_OPEN]

DIRECTION_LONG = 'Long'
DIRECTION_SHORT = 'Short'
DIRECTIONS = [DIRECTION_LONG, DIRECTION_SHORT]

CATEGORY_ANALYSIS = 'Analysis'
CATEGORY_SETUP = 'Setup'
CATEGORY_ENTRY = 'Entry'
CATEGORY_RISK = 'Risk'
CHECKLIST_CATEGORIES = [CATEGORY_ANALYSIS, CATEGORY_SETUP, CATEGORY_ENTRY, CATEGORY_RISK]

STRATEGY_TYPES = ['Trend Following', 'Reversal', 'Range Bound', 'Scalping']

OPTION_CATEGORIES = ['platforms', 'sessions', 'timeframes', 'instruments']

DEFAULT_WELCOME_MESSAGE = "Here is your trading performance overview."
SIGNUP_WELCOME_MESSAGE = "Welcome to your new trading journal!"

DEFAULT_FORM_OPTIONS = {
    'platforms': ['FTMO Account', 'FTMO Challenge', 'FTMO Verification',
                  'Topstep Combine', 'Topstep XFA', 'Topstep Live'],
    'sessions': ['Tokyo', 'London', 'New York'],
    'timeframes': ['M1', 'M5', 'M15', 'M30', 'H1', 'H4', 'D', 'W'],
    'instruments': ['XAUUSD', 'NASDAQ 100', 'S&P 500', 'EURUSD', 'GBPJPY'],
}


# =============================================================================
# COERCION HELPERS
# =============================================================================

def new_id() -> str:
    """Opaque unique id for trades and strategies."""
    return uuid.uuid4().hex[:12]


def _as_float(v: Any, default: float = 0.0) -> float:
    try:
        out = float(v)
    except Exception:
        return default
    if out != out or out in (float('inf'), float('-inf')):
        return default
    return out


def _as_int(v: Any, default: int = 0) -> int:
    try:
        return int(round(float(v)))
    except Exception:
        return default


def _as_str(v: Any, default: str = '') -> str:
    if v is None:
        return default
    return str(v)


def _as_str_list(v: Any) -> List[str]:
    if not isinstance(v, (list, tuple)):
        return []
    return [str(x) for x in v if x is not None]


def _as_option_list(v: Any) -> List[str]:
    """Trimmed, non-empty, first-seen-unique option values."""
    out: List[str] = []
    for item in _as_str_list(v):
        item = item.strip()
        if item and item not in out:
            out.append(item)
    return out


# =============================================================================
# DATA CLASSES
# =============================================================================

@dataclass
class Trade:
    trade_id: str
    symbol: str = 'UNKNOWN'
    date: str = ''
    direction: str = DIRECTION_LONG
    entry_price: float = 0
    exit_price: float = 0
    quantity: float = 1
    pnl: float = 0
    status: str = STATUS_BREAK_EVEN
    setup: str = ''
    timeframe: str = ''
    session: str = ''
    mindset: str = ''
    notes: str = ''
    checklist_score: int = 0
    platform: List[str] = field(default_factory=list)
    take_profit: float = 0
    stop_loss: float = 0
    points: float = 0
    risk_reward: float = 0
    confluences: List[str] = field(default_factory=list)
    followed_plan: bool = False
    screenshot: str = ''

    def to_dict(self) -> Dict:
        return {
            'id': self.trade_id,
            'symbol': self.symbol,
            'date': self.date,
            'direction': self.direction,
            'entryPrice': self.entry_price,
            'exitPrice': self.exit_price,
            'quantity': self.quantity,
            'pnl': self.pnl,
            'status': self.status,
            'setup': self.setup,
            'timeframe': self.timeframe,
            'session': self.session,
            'mindset': self.mindset,
            'notes': self.notes,
            'checklistScore': self.checklist_score,
            'platform': list(self.platform),
            'takeProfit': self.take_profit,
            'stopLoss': self.stop_loss,
            'points': self.points,
            'riskReward': self.risk_reward,
            'confluences': list(self.confluences),
            'followedPlan': self.followed_plan,
            'screenshot': self.screenshot,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> 'Trade':
        status = _as_str(data.get('status'), STATUS_BREAK_EVEN).upper()
        if status not in TRADE_STATUSES:
            status = STATUS_BREAK_EVEN
        direction = _as_str(data.get('direction'), DIRECTION_LONG)
        if direction not in DIRECTIONS:
            direction = DIRECTION_LONG
        score = max(0, min(100, _as_int(data.get('checklistScore'), 0)))
        followed = data.get('followedPlan')
        return cls(
            trade_id=_as_str(data.get('id')) or new_id(),
            symbol=_as_str(data.get('symbol')) or 'UNKNOWN',
            date=_as_str(data.get('date')),
            direction=direction,
            entry_price=_as_float(data.get('entryPrice')),
            exit_price=_as_float(data.get('exitPrice')),
            quantity=_as_float(data.get('quantity'), 1.0) or 1.0,
            pnl=_as_float(data.get('pnl')),
            status=status,
            setup=_as_str(data.get('setup')),
            timeframe=_as_str(data.get('timeframe')),
            session=_as_str(data.get('session')),
            mindset=_as_str(data.get('mindset')),
            notes=_as_str(data.get('notes')),
            checklist_score=score,
            platform=_as_str_list(data.get('platform')),
            take_profit=_as_float(data.get('takeProfit')),
            stop_loss=_as_float(data.get('stopLoss')),
            points=_as_float(data.get('points')),
            risk_reward=_as_float(data.get('riskReward')),
            confluences=_as_str_list(data.get('confluences')),
            followed_plan=bool(followed) if followed is not None else score >= 75,
            screenshot=_as_str(data.get('screenshot')),
        )


@dataclass
class StrategyRules:
    analysis: List[str] = field(default_factory=list)
    setup: List[str] = field(default_factory=list)
    entry: List[str] = field(default_factory=list)
    risk: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Optional[Dict]) -> 'StrategyRules':
        data = data if isinstance(data, dict) else {}
        return cls(
            analysis=_as_str_list(data.get('analysis')),
            setup=_as_str_list(data.get('setup')),
            entry=_as_str_list(data.get('entry')),
            risk=_as_str_list(data.get('risk')),
        )


@dataclass
class Strategy:
    """A named trading edge. Trades link to it by ``title``, not by id."""
    strategy_id: str
    title: str = ''
    strategy_type: str = ''
    rules: StrategyRules = field(default_factory=StrategyRules)
    is_active: bool = False
    win_rate: str = '0%'

    def to_dict(self) -> Dict:
        return {
            'id': self.strategy_id,
            'title': self.title,
            'type': self.strategy_type,
            'rules': self.rules.to_dict(),
            'isActive': self.is_active,
            'winRate': self.win_rate,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> 'Strategy':
        return cls(
            strategy_id=_as_str(data.get('id')) or new_id(),
            title=_as_str(data.get('title')),
            strategy_type=_as_str(data.get('type')),
            rules=StrategyRules.from_dict(data.get('rules')),
            is_active=bool(data.get('isActive', False)),
            win_rate=_as_str(data.get('winRate'), '0%') or '0%',
        )


@dataclass
class ChecklistItem:
    item_id: str
    label: str
    category: str
    group: str
    is_checked: bool = False

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass
class FormOptions:
    """User-editable choice lists for the trade form dropdowns."""
    platforms: List[str] = field(default_factory=lambda: list(DEFAULT_FORM_OPTIONS['platforms']))
    sessions: List[str] = field(default_factory=lambda: list(DEFAULT_FORM_OPTIONS['sessions']))
    timeframes: List[str] = field(default_factory=lambda: list(DEFAULT_FORM_OPTIONS['timeframes']))
    instruments: List[str] = field(default_factory=lambda: list(DEFAULT_FORM_OPTIONS['instruments']))

    def values(self, category: str) -> List[str]:
        if category not in OPTION_CATEGORIES:
            raise KeyError(f"Unknown option category: {category}")
        return getattr(self, category)

    def add(self, category: str, value: str) -> bool:
        """Append a trimmed, non-empty, not-yet-present value. Returns True if added."""
        items = self.values(category)
        value = str(value or '').strip()
        if not value or value in items:
            return False
        items.append(value)
        return True

    def remove(self, category: str, value: str) -> bool:
        items = self.values(category)
        if value not in items:
            return False
        setattr(self, category, [v for v in items if v != value])
        return True

    def to_dict(self) -> Dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict) -> 'FormOptions':
        if not isinstance(data, dict):
            raise TypeError(f"FormOptions expects a dict, got {type(data).__name__}")
        defaults = cls()
        kwargs = {}
        for category in OPTION_CATEGORIES:
            if category in data and isinstance(data[category], list):
                kwargs[category] = _as_option_list(data[category])
            else:
                kwargs[category] = defaults.values(category)
        return cls(**kwargs)


@dataclass
class User:
    email: str
    name: str = ''
    welcome_message: str = ''

    def to_dict(self) -> Dict:
        return {
            'email': self.email,
            'name': self.name,
            'welcomeMessage': self.welcome_message,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> 'User':
        if not isinstance(data, dict) or not data.get('email'):
            raise ValueError("User record requires an email")
        return cls(
            email=_as_str(data.get('email')),
            name=_as_str(data.get('name')),
            welcome_message=_as_str(data.get('welcomeMessage')),
        )


# =============================================================================
# DEFAULT CATALOG
# =============================================================================

def default_strategies() -> List[Strategy]:
    """Fresh copy of the built-in playbook."""
    return [
        Strategy(
            strategy_id='1',
            title="Market Structure Shift",
            strategy_type="Trend Following",
            is_active=True,
            rules=StrategyRules(
                analysis=[
                    "Identify market structure (e.g., higher highs/lows or lower highs/lows)",
                    "Identify trend direction",
                ],
                setup=[
                    "Wait for a break of the current market structure (e.g., a significant low "
                    "in an uptrend or high in a downtrend)",
                    "Identify a potential Point of Interest (POI) after the structure break",
                ],
                entry=[
                    "Entry on pullback to the POI",
                    "Look for confirmation signals like candlestick patterns or volume",
                ],
                risk=[
                    "Place stop loss beyond the POI or structure break point",
                    "Target a minimum Risk/Reward ratio of 1:2",
                ],
            ),
        ),
        Strategy(
            strategy_id='2',
            title="Break & Retest",
            strategy_type="Trend Following",
            is_active=False,
            rules=StrategyRules(
                analysis=["Identify key support/resistance levels on 4H/1H",
                          "Determine overall trend direction"],
                setup=["Price breaks key level with momentum",
                       "Wait for pullback to the broken level"],
                entry=["Bullish/Bearish engulfing on retest", "Volume confirmation"],
                risk=["Stop loss below/above the retest candle", "R:R minimum 1:2"],
            ),
        ),
    ]
