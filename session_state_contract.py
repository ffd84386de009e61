"""Centralized session-state defaults.

Keeps key contracts explicit and reduces repeated ad-hoc initialization logic
in the Streamlit UI layer.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Callable, Dict, MutableMapping

from performance_analytics import ALL_PLATFORMS

Factory = Callable[[], Any]


def _const(value: Any) -> Factory:
    return lambda: value


def _empty_journal_filters() -> Dict[str, str]:
    return {"instrument": "", "status": "", "strategy": "", "platform": ""}


CORE_DEFAULT_FACTORIES: Dict[str, Factory] = {
    "active_tab": _const("dashboard"),
    "auth_mode": _const("login"),
    "auth_error": _const(None),
}


DASHBOARD_DEFAULT_FACTORIES: Dict[str, Factory] = {
    "dashboard_platform": _const(ALL_PLATFORMS),
}


CALENDAR_DEFAULT_FACTORIES: Dict[str, Factory] = {
    "calendar_year": lambda: date.today().year,
    "calendar_month": lambda: date.today().month,
    "calendar_selected_day": _const(None),
}


JOURNAL_DEFAULT_FACTORIES: Dict[str, Factory] = {
    "journal_filters": _empty_journal_filters,
    "trade_form": _const(None),
    "editing_trade_id": _const(None),
    "viewing_trade_id": _const(None),
    "pending_delete_trade_id": _const(None),
}


PLAYBOOK_DEFAULT_FACTORIES: Dict[str, Factory] = {
    "editing_strategy_id": _const(None),
    "strategy_modal_open": _const(False),
    "pending_delete_strategy_id": _const(None),
}


def ensure_state_defaults(
    state: MutableMapping[str, Any],
    factories: Dict[str, Factory],
) -> None:
    """Populate missing keys in session state from factory defaults."""
    for key, factory in factories.items():
        if key not in state:
            state[key] = factory()


def ensure_core_defaults(state: MutableMapping[str, Any]) -> None:
    ensure_state_defaults(state, CORE_DEFAULT_FACTORIES)


def ensure_dashboard_defaults(state: MutableMapping[str, Any]) -> None:
    ensure_state_defaults(state, DASHBOARD_DEFAULT_FACTORIES)


def ensure_calendar_defaults(state: MutableMapping[str, Any]) -> None:
    ensure_state_defaults(state, CALENDAR_DEFAULT_FACTORIES)


def ensure_journal_defaults(state: MutableMapping[str, Any]) -> None:
    ensure_state_defaults(state, JOURNAL_DEFAULT_FACTORIES)


def ensure_playbook_defaults(state: MutableMapping[str, Any]) -> None:
    ensure_state_defaults(state, PLAYBOOK_DEFAULT_FACTORIES)


def ensure_all_defaults(state: MutableMapping[str, Any]) -> None:
    for factories in (
        CORE_DEFAULT_FACTORIES,
        DASHBOARD_DEFAULT_FACTORIES,
        CALENDAR_DEFAULT_FACTORIES,
        JOURNAL_DEFAULT_FACTORIES,
        PLAYBOOK_DEFAULT_FACTORIES,
    ):
        ensure_state_defaults(state, factories)


def reset_view_state(state: MutableMapping[str, Any]) -> None:
    """Drop per-view keys (logout / account deletion) and re-seed defaults."""
    for factories in (
        DASHBOARD_DEFAULT_FACTORIES,
        CALENDAR_DEFAULT_FACTORIES,
        JOURNAL_DEFAULT_FACTORIES,
        PLAYBOOK_DEFAULT_FACTORIES,
    ):
        for key in factories:
            state.pop(key, None)
    state["active_tab"] = "dashboard"
    ensure_all_defaults(state)
