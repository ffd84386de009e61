"""
Trade Journal Metrics - Derived Fields for the Trade Form
==========================================================

Resolves risk/reward, exit price, P&L, outcome and points from the raw
price inputs of a trade form, then commits the form to a Trade.

Pure logic module. NO UI code. Stages run in a fixed order:

    1. risk/reward   |(TP - entry) / (entry - SL)|
    2. exit price    Win -> TP, Loss -> SL, Breakeven -> entry
    3. P&L           (exit - entry) * qty, sign flipped for Short
    4. outcome       from the sign of P&L
    5. points        distance from entry to TP/SL, direction aware

When stage 4 reclassifies the outcome, stages 2-4 run again with the new
outcome until it settles (at most one round per outcome). An outcome that
never settles (prices on the wrong side of entry for both exits) ends as
Breakeven. ``derive`` is therefore idempotent: a derived form re-derives
to itself.

Nothing here raises on bad input: a field that does not parse leaves the
fields that depend on it as they were.

Version: 1.0.0 (2026-10-19)
"""

from dataclasses import dataclass, field, replace
from datetime import date as date_cls
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import List, Optional, Union

from journal_models import (
    DIRECTION_LONG, DIRECTION_SHORT,
    STATUS_WIN, STATUS_LOSS, STATUS_BREAK_EVEN,
    Strategy, Trade, new_id,
)


# =============================================================================
# CONSTANTS
# =============================================================================

OUTCOME_WIN = 'Win'
OUTCOME_LOSS = 'Loss'
OUTCOME_BREAKEVEN = 'Breakeven'
OUTCOMES = [OUTCOME_WIN, OUTCOME_LOSS, OUTCOME_BREAKEVEN]

FOLLOWED_PLAN_THRESHOLD = 75    # checklist score (%) that counts as following the plan

_OUTCOME_TO_STATUS = {
    OUTCOME_WIN: STATUS_WIN,
    OUTCOME_LOSS: STATUS_LOSS,
    OUTCOME_BREAKEVEN: STATUS_BREAK_EVEN,
}


# =============================================================================
# DECIMAL HELPERS
# =============================================================================

def parse_number(value: Union[str, float, int, None]) -> Optional[Decimal]:
    """Parse a form field. Returns None for blanks and non-numeric text."""
    if value is None or isinstance(value, bool):
        return None
    text = str(value).strip()
    if not text:
        return None
    try:
        out = Decimal(text)
    except (InvalidOperation, ValueError):
        return None
    if not out.is_finite():
        return None
    return out


def round_2(value: Optional[Decimal]) -> Optional[Decimal]:
    """Two decimal places, half up. None when the result cannot be represented."""
    if value is None:
        return None
    try:
        return value.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)
    except ArithmeticError:
        return None


def format_2(value: Decimal) -> str:
    """Fixed two-decimal text, e.g. Decimal('2.5') -> '2.50'."""
    out = round_2(value)
    if out == 0:
        out = abs(out)
    return f"{out:.2f}"


def number_text(value: float) -> str:
    """Render a stored number back into form text ('100.0' -> '100')."""
    text = repr(float(value))
    return text[:-2] if text.endswith('.0') else text


def normalize_direction(direction: str) -> str:
    """Stored direction. Anything but Short is saved as Long."""
    return DIRECTION_SHORT if _direction_key(direction) == 'short' else DIRECTION_LONG


def _direction_key(direction: str) -> str:
    return str(direction or '').strip().lower()


# =============================================================================
# FORM RECORD
# =============================================================================

@dataclass
class TradeForm:
    """Trade entry form as typed by the user; price fields hold raw text."""
    trade_id: str = ''
    date: str = ''
    platforms: List[str] = field(default_factory=list)
    session: str = ''
    timeframe: str = ''
    instrument: str = ''
    direction: str = ''
    entry_price: str = ''
    take_profit: str = ''
    stop_loss: str = ''
    points: str = ''
    outcome: str = ''
    quantity: str = '1'
    risk_reward: str = ''
    realized_pnl: str = ''
    setup: str = ''
    confluences: List[str] = field(default_factory=list)
    mindset: str = ''
    notes: str = ''
    screenshot: str = ''


def new_trade_form(active_strategy: Optional[Strategy] = None,
                   today: Optional[date_cls] = None) -> TradeForm:
    """Blank form for a new trade, pre-selecting the active strategy."""
    today = today or date_cls.today()
    return TradeForm(
        date=today.isoformat(),
        setup=active_strategy.title if active_strategy else '',
    )


def form_from_trade(trade: Trade) -> TradeForm:
    """Load a committed trade back into a form for editing."""
    if trade.status == STATUS_WIN:
        outcome = OUTCOME_WIN
    elif trade.status == STATUS_LOSS:
        outcome = OUTCOME_LOSS
    else:
        outcome = OUTCOME_BREAKEVEN
    return TradeForm(
        trade_id=trade.trade_id,
        date=trade.date,
        platforms=list(trade.platform),
        session=trade.session,
        timeframe=trade.timeframe,
        instrument=trade.symbol,
        direction=trade.direction,
        entry_price=number_text(trade.entry_price),
        take_profit=number_text(trade.take_profit),
        stop_loss=number_text(trade.stop_loss),
        points=number_text(trade.points),
        outcome=outcome,
        quantity=number_text(trade.quantity or 1),
        risk_reward=number_text(trade.risk_reward),
        realized_pnl=number_text(trade.pnl),
        setup=trade.setup,
        confluences=list(trade.confluences),
        mindset=trade.mindset,
        notes=trade.notes,
        screenshot=trade.screenshot,
    )


# =============================================================================
# DERIVATION STAGES
# =============================================================================

def calc_risk_reward(entry: Optional[Decimal], take_profit: Optional[Decimal],
                     stop_loss: Optional[Decimal]) -> Optional[Decimal]:
    # zero prices count as missing
    if not entry or not take_profit or not stop_loss or entry == stop_loss:
        return None
    try:
        return round_2(abs((take_profit - entry) / (entry - stop_loss)))
    except ArithmeticError:
        return None


def resolve_exit_price(outcome: str, entry: Optional[Decimal], take_profit: Optional[Decimal],
                       stop_loss: Optional[Decimal]) -> Optional[Decimal]:
    if outcome == OUTCOME_WIN:
        return take_profit
    if outcome == OUTCOME_LOSS:
        return stop_loss
    if outcome == OUTCOME_BREAKEVEN:
        return entry
    return None


def calc_pnl(entry: Optional[Decimal], exit_price: Optional[Decimal],
             quantity: Optional[Decimal], direction: str) -> Optional[Decimal]:
    if entry is None or exit_price is None:
        return None
    qty = quantity or Decimal(1)
    # only an explicit Long takes the long formula; blank falls through
    try:
        if _direction_key(direction) == 'long':
            return round_2((exit_price - entry) * qty)
        return round_2((entry - exit_price) * qty)
    except ArithmeticError:
        return None


def outcome_from_pnl(pnl: Optional[Decimal], current: str) -> str:
    """Outcome implied by the sign of P&L; the current outcome when unchanged or unknown."""
    if pnl is None:
        return current
    if pnl > 0:
        return OUTCOME_WIN
    if pnl < 0:
        return OUTCOME_LOSS
    # a zero P&L never picks an outcome for an untouched form
    if current:
        return OUTCOME_BREAKEVEN
    return current


def calc_points(outcome: str, direction: str, entry: Optional[Decimal],
                take_profit: Optional[Decimal], stop_loss: Optional[Decimal]) -> Optional[Decimal]:
    side = _direction_key(direction)
    if entry is None or side not in ('long', 'short'):
        return None
    is_long = side == 'long'
    try:
        if outcome == OUTCOME_WIN and take_profit is not None:
            return round_2(take_profit - entry if is_long else entry - take_profit)
        if outcome == OUTCOME_LOSS and stop_loss is not None:
            return round_2(stop_loss - entry if is_long else entry - stop_loss)
    except ArithmeticError:
        return None
    return None


def derive(form: TradeForm) -> TradeForm:
    """Run the five stages and return the updated copy of ``form``."""
    out = replace(form, platforms=list(form.platforms), confluences=list(form.confluences))

    entry = parse_number(out.entry_price)
    take_profit = parse_number(out.take_profit)
    stop_loss = parse_number(out.stop_loss)
    quantity = parse_number(out.quantity)

    rr = calc_risk_reward(entry, take_profit, stop_loss)
    if rr is not None:
        out.risk_reward = format_2(rr)

    tried = []
    while True:
        tried.append(out.outcome)
        exit_price = resolve_exit_price(out.outcome, entry, take_profit, stop_loss)
        pnl = calc_pnl(entry, exit_price, quantity, out.direction)
        if pnl is not None:
            out.realized_pnl = format_2(pnl)

        settled = outcome_from_pnl(parse_number(out.realized_pnl), out.outcome)
        if settled == out.outcome:
            break
        if settled in tried:
            settled = OUTCOME_BREAKEVEN
            if settled in tried:
                out.outcome = settled
                break
        out.outcome = settled

    points = calc_points(out.outcome, out.direction, entry, take_profit, stop_loss)
    if points is not None:
        out.points = format_2(points)

    return out


# =============================================================================
# FIELD-GROUP UPDATES
# =============================================================================

def update_prices(form: TradeForm, entry_price: Optional[str] = None,
                  take_profit: Optional[str] = None, stop_loss: Optional[str] = None) -> TradeForm:
    changes = {}
    if entry_price is not None:
        changes['entry_price'] = str(entry_price)
    if take_profit is not None:
        changes['take_profit'] = str(take_profit)
    if stop_loss is not None:
        changes['stop_loss'] = str(stop_loss)
    return derive(replace(form, **changes))


def update_position(form: TradeForm, direction: Optional[str] = None,
                    quantity: Optional[str] = None) -> TradeForm:
    changes = {}
    if direction is not None:
        changes['direction'] = str(direction)
    if quantity is not None:
        changes['quantity'] = str(quantity)
    return derive(replace(form, **changes))


def update_outcome(form: TradeForm, outcome: str) -> TradeForm:
    return derive(replace(form, outcome=str(outcome or '')))


def update_pnl(form: TradeForm, realized_pnl: str) -> TradeForm:
    """Manually typed P&L. Still overwritten when an exit price resolves."""
    return derive(replace(form, realized_pnl=str(realized_pnl or '')))


def update_details(form: TradeForm, **fields) -> TradeForm:
    """Descriptive fields (symbol, session, notes, ...). Unknown names raise TypeError."""
    return derive(replace(form, **fields))


# =============================================================================
# COMMIT
# =============================================================================

def _to_float(value: str, default: float = 0.0) -> float:
    parsed = parse_number(value)
    if parsed is None:
        return default
    return float(parsed) or default


def status_for_outcome(outcome: str) -> str:
    return _OUTCOME_TO_STATUS.get(outcome, STATUS_BREAK_EVEN)


def followed_plan_for(checklist_score: int) -> bool:
    return int(checklist_score) >= FOLLOWED_PLAN_THRESHOLD


def commit_trade(form: TradeForm, checklist_score: float = 0,
                 existing: Optional[Trade] = None) -> Trade:
    """Derive once more and freeze the form into a Trade.

    A form that was already derived (what the editor shows) comes out of
    ``derive`` unchanged, so the saved values are the displayed ones.
    On edit (``existing`` given) the checklist score captured at the
    original save is kept; ``followed_plan`` always follows the score.
    """
    final = derive(form)

    if existing is not None:
        score = existing.checklist_score
    else:
        try:
            score = int(round(float(checklist_score or 0)))
        except (TypeError, ValueError):
            score = 0
    score = max(0, min(100, score))

    # a blank P&L commits as 0, so the status is reconciled against 0 too
    pnl = parse_number(final.realized_pnl) or Decimal(0)
    status = status_for_outcome(outcome_from_pnl(pnl, final.outcome))
    entry = _to_float(final.entry_price)
    take_profit = _to_float(final.take_profit)
    stop_loss = _to_float(final.stop_loss)
    if status == STATUS_WIN:
        exit_price = take_profit
    elif status == STATUS_LOSS:
        exit_price = stop_loss
    else:
        exit_price = entry

    return Trade(
        trade_id=final.trade_id or (existing.trade_id if existing else '') or new_id(),
        symbol=final.instrument.strip() or 'UNKNOWN',
        date=final.date,
        direction=normalize_direction(final.direction),
        entry_price=entry,
        exit_price=exit_price,
        quantity=_to_float(final.quantity, 1.0),
        pnl=float(pnl),
        status=status,
        setup=final.setup,
        timeframe=final.timeframe,
        session=final.session,
        mindset=final.mindset,
        notes=final.notes,
        checklist_score=score,
        platform=list(final.platforms),
        take_profit=take_profit,
        stop_loss=stop_loss,
        points=_to_float(final.points),
        risk_reward=_to_float(final.risk_reward),
        confluences=list(final.confluences),
        followed_plan=followed_plan_for(score),
        screenshot=final.screenshot,
    )
