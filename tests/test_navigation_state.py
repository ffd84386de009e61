from navigation_state import (
    KEY_ACTIVE_TAB,
    KEY_CALENDAR_MONTH,
    KEY_CALENDAR_SELECTED_DAY,
    KEY_CALENDAR_YEAR,
    KEY_EDITING_TRADE_ID,
    KEY_TRADE_FORM,
    KEY_VIEWING_TRADE_ID,
    NEW_TRADE,
    close_trade_modals,
    normalize_tab,
    open_trade_editor,
    open_trade_viewer,
    select_calendar_day,
    set_active_tab,
    set_calendar_month,
    shift_month,
    step_calendar_month,
    tab_label,
)


def test_normalize_tab_and_labels():
    assert normalize_tab("Journal") == "journal"
    assert normalize_tab(" playbook ") == "playbook"
    assert normalize_tab("bad-value") == "dashboard"
    assert normalize_tab(None, fallback="calendar") == "calendar"
    assert tab_label("user") == "Profile"

    state = {}
    assert set_active_tab(state, "CHECKLIST") == "checklist"
    assert state[KEY_ACTIVE_TAB] == "checklist"


def test_shift_month_wraps_years():
    assert shift_month(2024, 12, 1) == (2025, 1)
    assert shift_month(2024, 1, -1) == (2023, 12)
    assert shift_month(2024, 6, 0) == (2024, 6)
    assert shift_month(2024, 3, -15) == (2022, 12)


def test_month_change_clears_selected_day():
    state = {KEY_CALENDAR_YEAR: 2024, KEY_CALENDAR_MONTH: 12, KEY_CALENDAR_SELECTED_DAY: 5}
    assert step_calendar_month(state, 1) == (2025, 1)
    assert state[KEY_CALENDAR_SELECTED_DAY] is None

    set_calendar_month(state, 2023, 7)
    assert (state[KEY_CALENDAR_YEAR], state[KEY_CALENDAR_MONTH]) == (2023, 7)


def test_select_day_requires_trades():
    state = {KEY_CALENDAR_SELECTED_DAY: None}
    assert select_calendar_day(state, 4, {5: object()}) is False
    assert state[KEY_CALENDAR_SELECTED_DAY] is None
    assert select_calendar_day(state, 5, {5: object()}) is True
    assert state[KEY_CALENDAR_SELECTED_DAY] == 5
    assert select_calendar_day(state, None, {5: object()}) is False


def test_trade_editor_and_viewer_are_exclusive():
    state = {}
    open_trade_viewer(state, "t1")
    assert state[KEY_VIEWING_TRADE_ID] == "t1"

    open_trade_editor(state, None)
    assert state[KEY_EDITING_TRADE_ID] == NEW_TRADE
    assert state[KEY_VIEWING_TRADE_ID] is None
    assert state[KEY_TRADE_FORM] is None

    open_trade_editor(state, "t2")
    assert state[KEY_EDITING_TRADE_ID] == "t2"

    close_trade_modals(state)
    assert state[KEY_EDITING_TRADE_ID] is None
    assert state[KEY_VIEWING_TRADE_ID] is None
