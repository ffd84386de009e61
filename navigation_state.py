"""Navigation/session-state helpers for tab routing and the calendar view.

This module centralizes the session-state contract used by tab switching,
trade editing and month navigation so state keys are explicit and testable.
"""

from __future__ import annotations

from typing import Any, MutableMapping, Optional, Tuple

# Session-state keys
KEY_ACTIVE_TAB = "active_tab"
KEY_CALENDAR_YEAR = "calendar_year"
KEY_CALENDAR_MONTH = "calendar_month"
KEY_CALENDAR_SELECTED_DAY = "calendar_selected_day"
KEY_EDITING_TRADE_ID = "editing_trade_id"
KEY_VIEWING_TRADE_ID = "viewing_trade_id"
KEY_TRADE_FORM = "trade_form"

NEW_TRADE = "__new__"

# Supported tabs, in header order -> display label
TABS = {
    "dashboard": "Dashboard",
    "journal": "Journal",
    "calendar": "Calendar",
    "checklist": "Checklist",
    "playbook": "Playbook",
    "user": "Profile",
}


def normalize_tab(tab: Any, fallback: str = "dashboard") -> str:
    """Normalize to a known tab id; unknown values route to the dashboard."""
    _raw = str(tab or "").strip().lower()
    if _raw in TABS:
        return _raw
    _fallback = str(fallback or "").strip().lower()
    return _fallback if _fallback in TABS else "dashboard"


def tab_label(tab: Any) -> str:
    return TABS[normalize_tab(tab)]


def set_active_tab(state: MutableMapping[str, Any], tab: Any) -> str:
    _tab = normalize_tab(tab)
    state[KEY_ACTIVE_TAB] = _tab
    return _tab


def shift_month(year: int, month: int, delta: int) -> Tuple[int, int]:
    """Move (year, month) by ``delta`` months."""
    _index = int(year) * 12 + (int(month) - 1) + int(delta)
    return _index // 12, _index % 12 + 1


def set_calendar_month(state: MutableMapping[str, Any], year: int, month: int) -> None:
    """Jump to a month; any selected day belongs to the old month and is cleared."""
    _year, _month = shift_month(year, month, 0)
    state[KEY_CALENDAR_YEAR] = _year
    state[KEY_CALENDAR_MONTH] = _month
    state[KEY_CALENDAR_SELECTED_DAY] = None


def step_calendar_month(state: MutableMapping[str, Any], delta: int) -> Tuple[int, int]:
    _year, _month = shift_month(state[KEY_CALENDAR_YEAR], state[KEY_CALENDAR_MONTH], delta)
    set_calendar_month(state, _year, _month)
    return _year, _month


def select_calendar_day(state: MutableMapping[str, Any], day: Optional[int],
                        days_with_trades) -> bool:
    """Select a day only when it has trades."""
    if day is None or int(day) not in days_with_trades:
        return False
    state[KEY_CALENDAR_SELECTED_DAY] = int(day)
    return True


def open_trade_editor(state: MutableMapping[str, Any], trade_id: Optional[str]) -> None:
    """Start editing an existing trade (or a new one when ``trade_id`` is None)."""
    state[KEY_EDITING_TRADE_ID] = trade_id or NEW_TRADE
    state[KEY_VIEWING_TRADE_ID] = None
    state[KEY_TRADE_FORM] = None


def open_trade_viewer(state: MutableMapping[str, Any], trade_id: str) -> None:
    state[KEY_VIEWING_TRADE_ID] = trade_id
    state[KEY_EDITING_TRADE_ID] = None


def close_trade_modals(state: MutableMapping[str, Any]) -> None:
    state[KEY_EDITING_TRADE_ID] = None
    state[KEY_VIEWING_TRADE_ID] = None
    state[KEY_TRADE_FORM] = None
