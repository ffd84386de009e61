"""
Trade Journal — Main Streamlit UI
==================================

Tabs: Dashboard, Journal, Calendar, Checklist, Playbook, Profile.

This is a THIN LAYER. All logic lives in the backend modules:
- trade_metrics: derived fields for the trade form (R:R, P&L, points, outcome)
- performance_analytics: dashboard / calendar / playbook rollups
- checklist: pre-trade checklist from the active strategy
- journal_session: owned session state and commit operations
- journal_storage: remembered user + form options (key-value store)
- user_auth: prototype login/signup checks

Version: 1.0.0 (2026-10-19)
"""

import base64
import calendar

import pandas as pd
import streamlit as st

import navigation_state as nav
import performance_analytics as analytics
from checklist import category_percentage, group_percentages, setup_quality
from journal_models import (
    CHECKLIST_CATEGORIES, DIRECTIONS, OPTION_CATEGORIES, STRATEGY_TYPES,
    TRADE_STATUSES, Strategy, StrategyRules,
)
from journal_session import JournalSession
from journal_storage import JsonFileStore
from session_state_contract import ensure_all_defaults, reset_view_state
from trade_metrics import (
    OUTCOMES, form_from_trade, new_trade_form,
    update_details, update_outcome, update_pnl, update_position, update_prices,
)
from user_auth import authenticate

# =============================================================================
# CONFIG
# =============================================================================

st.set_page_config(
    page_title="Trade Journal",
    page_icon="📒",
    layout="wide",
    initial_sidebar_state="expanded",
)

if 'journal' not in st.session_state:
    _session = JournalSession(store=JsonFileStore())
    _session.restore()
    st.session_state['journal'] = _session

ensure_all_defaults(st.session_state)


def get_journal() -> JournalSession:
    return st.session_state['journal']


def _money(value: float) -> str:
    return f"+${value:,.2f}" if value >= 0 else f"-${abs(value):,.2f}"


# =============================================================================
# AUTH
# =============================================================================

def render_auth():
    js = get_journal()
    is_login = st.session_state['auth_mode'] == 'login'

    st.title("📒 Trade Journal")
    st.caption("Sign in to your account" if is_login else "Create your account")

    with st.form("auth_form"):
        name = "" if is_login else st.text_input("Full Name")
        email = st.text_input("Email")
        password = st.text_input("Password", type="password")
        remember_me = st.checkbox("Remember me")
        submitted = st.form_submit_button("Sign In" if is_login else "Create Account",
                                          type="primary", use_container_width=True)

    if submitted:
        user, error = authenticate(email, password, name=name, is_login=is_login)
        if error:
            st.session_state['auth_error'] = error
        else:
            st.session_state['auth_error'] = None
            js.login(user, remember_me=remember_me)
            nav.set_active_tab(st.session_state, "dashboard")
            st.rerun()

    if st.session_state.get('auth_error'):
        st.error(st.session_state['auth_error'])

    switch_label = "Don't have an account? Sign up" if is_login else "Already have an account? Sign in"
    if st.button(switch_label):
        st.session_state['auth_mode'] = 'signup' if is_login else 'login'
        st.session_state['auth_error'] = None
        st.rerun()


# =============================================================================
# SIDEBAR
# =============================================================================

def render_sidebar():
    js = get_journal()

    st.sidebar.title("📒 Trade Journal")
    st.sidebar.caption(f"{js.user.name} · {js.user.email}")

    tabs = list(nav.TABS)
    current = nav.normalize_tab(st.session_state['active_tab'])
    choice = st.sidebar.radio("Navigate", tabs, index=tabs.index(current),
                              format_func=nav.tab_label, label_visibility="collapsed")
    if choice != current:
        nav.set_active_tab(st.session_state, choice)
        nav.close_trade_modals(st.session_state)
        st.rerun()

    active = js.active_strategy()
    st.sidebar.divider()
    st.sidebar.caption(f"Active strategy: **{active.title}**" if active else "No active strategy")
    st.sidebar.caption(f"{len(js.trades)} trades this session")

    if st.sidebar.button("Log out", use_container_width=True):
        js.logout()
        reset_view_state(st.session_state)
        st.rerun()


# =============================================================================
# TRADE FORM
# =============================================================================

def _pick(label, options, current, key):
    options = list(options)
    if current and current not in options:
        options.append(current)
    options = [""] + options
    return st.selectbox(label, options, index=options.index(current or ""), key=key)


def render_trade_editor(checklist_score=None, context="journal"):
    """Trade entry/edit form. Derived fields refresh on every rerun."""
    js = get_journal()
    editing_id = st.session_state.get(nav.KEY_EDITING_TRADE_ID)
    if not editing_id:
        return

    form = st.session_state.get(nav.KEY_TRADE_FORM)
    if form is None:
        existing = js.get_trade(editing_id) if editing_id != nav.NEW_TRADE else None
        form = form_from_trade(existing) if existing else new_trade_form(js.active_strategy())
        st.session_state[nav.KEY_TRADE_FORM] = form

    opts = js.form_options
    key = f"{context}_{editing_id}"

    st.subheader("Edit Trade" if editing_id != nav.NEW_TRADE else "New Trade")

    c1, c2, c3, c4 = st.columns(4)
    with c1:
        trade_date = st.text_input("Date (YYYY-MM-DD)", form.date, key=f"{key}_date")
        instrument = _pick("Instrument", opts.instruments, form.instrument, f"{key}_instrument")
    with c2:
        session_name = _pick("Session", opts.sessions, form.session, f"{key}_session")
        timeframe = _pick("Timeframe", opts.timeframes, form.timeframe, f"{key}_timeframe")
    with c3:
        direction = _pick("Direction", DIRECTIONS, form.direction, f"{key}_direction")
        quantity = st.text_input("Quantity", form.quantity, key=f"{key}_qty")
    with c4:
        titles = [s.title for s in js.strategies]
        setup = _pick("Strategy", titles, form.setup, f"{key}_setup")
        platforms = st.multiselect("Platforms", sorted(set(opts.platforms) | set(form.platforms)),
                                   default=form.platforms, key=f"{key}_platforms")

    p1, p2, p3, p4 = st.columns(4)
    entry = p1.text_input("Entry Price", form.entry_price, key=f"{key}_entry")
    take_profit = p2.text_input("Take Profit", form.take_profit, key=f"{key}_tp")
    stop_loss = p3.text_input("Stop Loss", form.stop_loss, key=f"{key}_sl")
    with p4:
        outcome = _pick("Outcome", OUTCOMES, form.outcome, f"{key}_outcome")

    form = update_details(form, date=trade_date, instrument=instrument, session=session_name,
                          timeframe=timeframe, setup=setup, platforms=list(platforms))
    form = update_position(form, direction=direction, quantity=quantity)
    form = update_prices(form, entry_price=entry, take_profit=take_profit, stop_loss=stop_loss)
    if outcome != form.outcome:
        form = update_outcome(form, outcome)

    manual_pnl = st.text_input("Realized P&L (override)", "", key=f"{key}_pnl",
                               help="Used when no exit price can be resolved from the outcome")
    if manual_pnl.strip():
        form = update_pnl(form, manual_pnl)

    d1, d2, d3, d4 = st.columns(4)
    d1.metric("Risk/Reward", form.risk_reward or "—")
    d2.metric("Points", form.points or "—")
    d3.metric("P&L", form.realized_pnl or "—")
    d4.metric("Outcome", form.outcome or "—")

    confluences = st.text_input("Confluences (comma separated)", ", ".join(form.confluences),
                                key=f"{key}_confluences")
    mindset = st.text_input("Mindset", form.mindset, key=f"{key}_mindset")
    notes = st.text_area("Notes", form.notes, key=f"{key}_notes")
    screenshot = st.file_uploader("Screenshot", type=["png", "jpg", "jpeg"], key=f"{key}_shot")
    form = update_details(
        form,
        confluences=[c.strip() for c in confluences.split(",") if c.strip()],
        mindset=mindset,
        notes=notes,
    )
    if screenshot is not None:
        encoded = base64.b64encode(screenshot.getvalue()).decode("ascii")
        form = update_details(form, screenshot=f"data:{screenshot.type};base64,{encoded}")

    st.session_state[nav.KEY_TRADE_FORM] = form

    existing = js.get_trade(editing_id) if editing_id != nav.NEW_TRADE else None
    score = existing.checklist_score if existing else (checklist_score or 0)
    st.checkbox("Followed plan (checklist ≥ 75%)", value=score >= 75, disabled=True)

    confirm_key = f"{key}_confirm"
    b1, b2 = st.columns(2)
    if not st.session_state.get(confirm_key):
        if b1.button("💾 Save Trade", type="primary", use_container_width=True, key=f"{key}_save"):
            st.session_state[confirm_key] = True
            st.rerun()
        if b2.button("Cancel", use_container_width=True, key=f"{key}_cancel"):
            _close_editor(key)
            st.rerun()
    else:
        st.warning("Save this trade to your journal?")
        if b1.button("Confirm", type="primary", use_container_width=True, key=f"{key}_yes"):
            if checklist_score is not None and existing is None:
                trade = js.save_trade_from_checklist(form)
            else:
                trade = js.save_trade(form)
            _close_editor(key)
            st.toast(f"Saved {trade.symbol} ({trade.status}) {_money(trade.pnl)}")
            st.rerun()
        if b2.button("Back", use_container_width=True, key=f"{key}_no"):
            st.session_state[confirm_key] = False
            st.rerun()


def _close_editor(prefix):
    """Close the editor and drop its widget values so the next form starts clean."""
    for k in [k for k in st.session_state.keys() if str(k).startswith(f"{prefix}_")]:
        del st.session_state[k]
    nav.close_trade_modals(st.session_state)


def render_trade_detail(trade_id):
    trade = get_journal().get_trade(trade_id)
    if trade is None:
        return
    st.subheader(f"{trade.symbol} · {trade.direction.upper()} · {trade.status}")
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Entry", f"{trade.entry_price:g}")
    c2.metric("Exit", f"{analytics.exit_display_price(trade):g}")
    c3.metric("P&L", _money(trade.pnl))
    c4.metric("R:R", f"{trade.risk_reward:.2f}")
    c5, c6, c7, c8 = st.columns(4)
    c5.metric("Take Profit", f"{trade.take_profit:g}")
    c6.metric("Stop Loss", f"{trade.stop_loss:g}")
    c7.metric("Points", f"{trade.points:g}")
    c8.metric("Checklist", f"{trade.checklist_score}%")
    st.caption(f"{trade.date} · {trade.session} · {trade.timeframe} · {', '.join(trade.platform) or '—'}")
    st.caption(f"Strategy: {trade.setup or '—'} · Mindset: {trade.mindset or '—'} · "
               f"Followed plan: {'Yes' if trade.followed_plan else 'No'}")
    if trade.confluences:
        st.caption("Confluences: " + ", ".join(trade.confluences))
    if trade.notes:
        st.info(trade.notes)
    if trade.screenshot.startswith("data:image"):
        st.image(trade.screenshot)
    if st.button("Close", key=f"close_{trade_id}"):
        nav.close_trade_modals(st.session_state)
        st.rerun()


def render_trade_rows(trades, context):
    """Trade table with view / edit / delete actions."""
    js = get_journal()
    pending = st.session_state.get('pending_delete_trade_id')

    for t in trades:
        cols = st.columns([1.2, 1.2, 0.8, 0.9, 1, 1.6, 0.5, 0.5, 0.5])
        cols[0].write(t.date)
        cols[1].write(f"**{t.symbol}**")
        cols[2].write(t.direction)
        cols[3].write(t.status)
        cols[4].write(_money(t.pnl))
        cols[5].write(t.setup or "—")
        if cols[6].button("👁", key=f"{context}_view_{t.trade_id}"):
            nav.open_trade_viewer(st.session_state, t.trade_id)
            st.rerun()
        if cols[7].button("✏️", key=f"{context}_edit_{t.trade_id}"):
            nav.open_trade_editor(st.session_state, t.trade_id)
            st.rerun()
        if cols[8].button("🗑", key=f"{context}_del_{t.trade_id}"):
            st.session_state['pending_delete_trade_id'] = t.trade_id
            st.rerun()

        if pending == t.trade_id:
            st.warning(f"Delete {t.symbol} on {t.date}? This cannot be undone.")
            y, n = st.columns(2)
            if y.button("Delete", type="primary", key=f"{context}_del_yes_{t.trade_id}"):
                js.delete_trade(t.trade_id, confirmed=True)
                st.session_state['pending_delete_trade_id'] = None
                st.rerun()
            if n.button("Keep", key=f"{context}_del_no_{t.trade_id}"):
                st.session_state['pending_delete_trade_id'] = None
                st.rerun()


# =============================================================================
# DASHBOARD
# =============================================================================

def render_dashboard():
    js = get_journal()
    trades = js.trades

    head, filt = st.columns([3, 1])
    with head:
        st.header("Dashboard")
        st.caption(f"\"{js.user.welcome_message or 'Here is your trading performance overview.'}\"")
    with filt:
        options = [analytics.ALL_PLATFORMS] + analytics.available_platforms(trades)
        current = st.session_state['dashboard_platform']
        if current not in options:
            current = analytics.ALL_PLATFORMS
        st.session_state['dashboard_platform'] = st.selectbox(
            "Platform", options, index=options.index(current))

    stats = analytics.dashboard_stats(trades, st.session_state['dashboard_platform'])

    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Total P&L", _money(stats.total_pnl), f"{stats.total_trades} trades")
    c2.metric("Win Rate", f"{stats.win_rate:.1f}%",
              f"{stats.win_count}W / {stats.loss_count}L / {stats.break_even_count}BE")
    c3.metric("Avg Win", _money(stats.avg_win))
    c4.metric("Avg R:R", f"1:{stats.avg_risk_reward:.2f}")

    if not stats.equity_curve:
        st.info("No trades yet. Log a trade from the Journal or Checklist tab.")
        return

    left, right = st.columns([2, 1])
    with left:
        st.subheader("Equity Curve")
        curve = pd.DataFrame(stats.equity_curve).set_index('name')
        st.line_chart(curve['value'])
    with right:
        st.subheader("Outcomes")
        if stats.outcomes:
            st.dataframe(pd.DataFrame(stats.outcomes)[['name', 'value']],
                         hide_index=True, use_container_width=True)

    if stats.platform_breakdown:
        st.subheader("Platform Performance (all platforms)")
        breakdown = pd.DataFrame(stats.platform_breakdown).set_index('name')
        st.bar_chart(breakdown['pnl'])


# =============================================================================
# JOURNAL
# =============================================================================

def render_journal():
    js = get_journal()
    trades = js.trades

    head, action = st.columns([3, 1])
    head.header("Trade Journal")
    if action.button("➕ Add Trade", type="primary", use_container_width=True):
        nav.open_trade_editor(st.session_state, None)
        st.rerun()

    filters = st.session_state['journal_filters']
    f1, f2, f3, f4, f5 = st.columns([2, 2, 2, 2, 1])
    with f1:
        filters["instrument"] = _pick("Instrument", analytics.journal_instruments(trades),
                                      filters["instrument"], "jf_instrument")
    with f2:
        filters['status'] = _pick("Status", TRADE_STATUSES, filters['status'], "jf_status")
    with f3:
        filters['strategy'] = _pick("Strategy", [s.title for s in js.strategies],
                                    filters['strategy'], "jf_strategy")
    with f4:
        filters['platform'] = _pick("Platform", analytics.available_platforms(trades),
                                    filters['platform'], "jf_platform")
    if f5.button("Clear"):
        st.session_state['journal_filters'] = {k: "" for k in filters}
        for k in ("jf_instrument", "jf_status", "jf_strategy", "jf_platform"):
            st.session_state.pop(k, None)
        st.rerun()

    if st.session_state.get(nav.KEY_EDITING_TRADE_ID):
        render_trade_editor(context="journal")
        st.divider()
    elif st.session_state.get(nav.KEY_VIEWING_TRADE_ID):
        render_trade_detail(st.session_state[nav.KEY_VIEWING_TRADE_ID])
        st.divider()

    shown = analytics.filter_journal(trades, **filters)
    if not shown:
        st.info("No trades found matching filters.")
        return
    render_trade_rows(shown, context="journal")


# =============================================================================
# CALENDAR
# =============================================================================

def render_calendar():
    js = get_journal()
    year = st.session_state['calendar_year']
    month = st.session_state['calendar_month']

    n1, n2, n3 = st.columns([1, 3, 1])
    if n1.button("◀ Prev", use_container_width=True):
        nav.step_calendar_month(st.session_state, -1)
        st.rerun()
    n2.markdown(f"### {calendar.month_name[month]} {year}")
    if n3.button("Next ▶", use_container_width=True):
        nav.step_calendar_month(st.session_state, 1)
        st.rerun()

    buckets = analytics.daily_buckets(js.trades, year, month)
    layout = analytics.month_layout(year, month)

    header = st.columns(7)
    for col, name in zip(header, ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]):
        col.caption(name)

    cells = [None] * layout['start_offset'] + list(range(1, layout['days_in_month'] + 1))
    for row_start in range(0, len(cells), 7):
        cols = st.columns(7)
        for col, day in zip(cols, cells[row_start:row_start + 7]):
            if day is None:
                continue
            bucket = buckets.get(day)
            if bucket is None:
                col.write(f"{day}")
                continue
            label = f"{day} · {_money(bucket.pnl)} ({bucket.count})"
            if col.button(label, key=f"cal_day_{year}_{month}_{day}", use_container_width=True):
                nav.select_calendar_day(st.session_state, day, buckets)
                st.rerun()

    st.subheader("Weekly Summary")
    weeks = analytics.weekly_rollup(js.trades, year, month)
    st.dataframe(pd.DataFrame([w.to_dict() for w in weeks]), hide_index=True, use_container_width=True)

    chart = analytics.daily_chart_data(js.trades, year, month)
    if chart:
        st.subheader("Daily P&L")
        st.bar_chart(pd.DataFrame(chart).set_index('name')['pnl'])

    selected = st.session_state.get('calendar_selected_day')
    if selected and selected in buckets:
        st.divider()
        st.subheader(f"{calendar.month_name[month]} {selected}: {_money(buckets[selected].pnl)}")
        if st.session_state.get(nav.KEY_EDITING_TRADE_ID):
            render_trade_editor(context="calendar")
        elif st.session_state.get(nav.KEY_VIEWING_TRADE_ID):
            render_trade_detail(st.session_state[nav.KEY_VIEWING_TRADE_ID])
        render_trade_rows(buckets[selected].trades, context="calendar")


# =============================================================================
# CHECKLIST
# =============================================================================

def render_checklist():
    js = get_journal()
    active = js.active_strategy()

    head, reset = st.columns([3, 1])
    head.header("Trading Checklist")
    head.caption(f"Active: {active.title}" if active else "Complete your analysis before entering a trade")
    if reset.button("↺ Reset", use_container_width=True):
        js.reset_checklist()
        st.rerun()

    if not active:
        st.warning("No active strategy selected. Go to the Playbook and select an active "
                   "strategy to populate the checklist.")

    groups = group_percentages(js.checklist)
    for group, pct in groups.items():
        with st.expander(f"{group} · {pct}%", expanded=True):
            for item in [i for i in js.checklist if i.group == group]:
                checked = st.checkbox(item.label, value=item.is_checked,
                                      key=f"chk_{item.item_id}_{item.is_checked}")
                if checked != item.is_checked:
                    js.toggle_checklist_item(item.item_id)
                    st.rerun()

    score = js.checklist_score()
    cols = st.columns(len(CHECKLIST_CATEGORIES) + 1)
    for col, cat in zip(cols, CHECKLIST_CATEGORIES):
        col.metric(cat, f"{category_percentage(js.checklist, cat)}%")
    cols[-1].metric("Total", f"{score}%", setup_quality(score))

    if not st.session_state.get(nav.KEY_EDITING_TRADE_ID):
        if st.button("💾 Save Trade", type="primary", use_container_width=True):
            nav.open_trade_editor(st.session_state, None)
            st.rerun()
    else:
        render_trade_editor(checklist_score=score, context="checklist")


# =============================================================================
# PLAYBOOK
# =============================================================================

def _rules_text(rules):
    return "\n".join(rules)


def _rules_list(text):
    return [line.strip() for line in str(text or "").splitlines() if line.strip()]


def render_strategy_editor():
    js = get_journal()
    editing_id = st.session_state.get('editing_strategy_id')
    current = js.get_strategy(editing_id) if editing_id else None
    base = current or Strategy(strategy_id='')

    st.subheader("Edit Strategy" if current else "New Strategy")
    with st.form("strategy_form"):
        title = st.text_input("Strategy Name", base.title)
        types = [""] + STRATEGY_TYPES
        stype = st.selectbox("Type", types,
                             index=types.index(base.strategy_type) if base.strategy_type in types else 0)
        st.caption("One rule per line.")
        analysis = st.text_area("Analysis", _rules_text(base.rules.analysis))
        setup = st.text_area("Setup", _rules_text(base.rules.setup))
        entry = st.text_area("Entry", _rules_text(base.rules.entry))
        risk = st.text_area("Risk Management", _rules_text(base.rules.risk))
        s1, s2 = st.columns(2)
        saved = s1.form_submit_button("Save Strategy", type="primary", use_container_width=True)
        cancelled = s2.form_submit_button("Cancel", use_container_width=True)

    if saved:
        js.save_strategy(Strategy(
            strategy_id=base.strategy_id,
            title=title.strip(),
            strategy_type=stype,
            rules=StrategyRules(analysis=_rules_list(analysis), setup=_rules_list(setup),
                                entry=_rules_list(entry), risk=_rules_list(risk)),
        ))
    if saved or cancelled:
        st.session_state['strategy_modal_open'] = False
        st.session_state['editing_strategy_id'] = None
        st.rerun()


def render_playbook():
    js = get_journal()

    head, action = st.columns([3, 1])
    head.header("Playbook")
    if action.button("➕ New Strategy", type="primary", use_container_width=True):
        st.session_state['strategy_modal_open'] = True
        st.session_state['editing_strategy_id'] = None
        st.rerun()

    if st.session_state.get('strategy_modal_open'):
        render_strategy_editor()
        st.divider()

    pending = st.session_state.get('pending_delete_strategy_id')
    for s in js.strategies_for_display():
        with st.container(border=True):
            t1, t2, t3, t4, t5 = st.columns([3, 1, 1, 0.6, 0.6])
            t1.markdown(f"**{s.title or '(untitled)'}**" + ("  ✅ Active" if s.is_active else ""))
            t1.caption(s.strategy_type or "—")
            t2.metric("Win Rate", s.win_rate)
            if not s.is_active and t3.button("Set Active", key=f"act_{s.strategy_id}"):
                js.set_active_strategy(s.strategy_id)
                st.rerun()
            if t4.button("✏️", key=f"edit_{s.strategy_id}"):
                st.session_state['strategy_modal_open'] = True
                st.session_state['editing_strategy_id'] = s.strategy_id
                st.rerun()
            if t5.button("🗑", key=f"sdel_{s.strategy_id}"):
                st.session_state['pending_delete_strategy_id'] = s.strategy_id
                st.rerun()

            for label, rules in (("Analysis", s.rules.analysis), ("Setup", s.rules.setup),
                                 ("Entry", s.rules.entry), ("Risk Management", s.rules.risk)):
                if rules:
                    st.caption(f"{label}: " + " · ".join(rules))

            if pending == s.strategy_id:
                st.warning(f"Delete \"{s.title}\"? Trades tagged with it are kept.")
                y, n = st.columns(2)
                if y.button("Delete", type="primary", key=f"sdel_yes_{s.strategy_id}"):
                    js.delete_strategy(s.strategy_id, confirmed=True)
                    st.session_state['pending_delete_strategy_id'] = None
                    st.rerun()
                if n.button("Keep", key=f"sdel_no_{s.strategy_id}"):
                    st.session_state['pending_delete_strategy_id'] = None
                    st.rerun()

    perf = analytics.strategy_performance(js.strategies, js.trades)
    if perf:
        st.subheader("Strategy Performance")
        rows = [{
            'Strategy': p.title,
            'Trades': p.count,
            'Wins': p.wins,
            'Win Rate': f"{p.win_rate:.0f}%",
            'Total P&L': _money(p.total_pnl),
            'Avg P&L': _money(p.avg_pnl),
        } for p in perf]
        st.dataframe(pd.DataFrame(rows), hide_index=True, use_container_width=True)

        curves = analytics.strategy_equity_curves(js.strategies, js.trades)
        if curves:
            df = pd.DataFrame(curves)
            df.index = [f"{i}: {d}" for i, d in enumerate(df.pop('date'))]
            st.line_chart(df)


# =============================================================================
# PROFILE
# =============================================================================

def render_profile():
    js = get_journal()
    user = js.user
    summary = analytics.account_summary(js.trades)

    st.header("Profile")
    c1, c2, c3 = st.columns(3)
    c1.metric("Total Trades", summary['total_trades'])
    c2.metric("Total P&L", _money(summary['total_pnl']))
    c3.metric("Win Rate", f"{summary['win_rate']}%")

    with st.form("profile_form"):
        name = st.text_input("Name", user.name)
        st.text_input("Email", user.email, disabled=True)
        welcome = st.text_input("Dashboard welcome message", user.welcome_message)
        if st.form_submit_button("Save Profile"):
            js.update_user(name=name, welcome_message=welcome)
            st.rerun()

    st.subheader("Form Options")
    cols = st.columns(len(OPTION_CATEGORIES))
    for col, category in zip(cols, OPTION_CATEGORIES):
        with col:
            st.markdown(f"**{category.title()}**")
            for value in js.form_options.values(category):
                v1, v2 = st.columns([4, 1])
                v1.write(value)
                if v2.button("✕", key=f"opt_del_{category}_{value}"):
                    js.remove_option(category, value, confirmed=True)
                    st.rerun()
            new_value = st.text_input(f"Add {category[:-1]}", key=f"opt_new_{category}",
                                      label_visibility="collapsed", placeholder="Add new...")
            if st.button("Add", key=f"opt_add_{category}") and js.add_option(category, new_value):
                st.rerun()

    st.divider()
    st.subheader("Danger Zone")
    sure = st.checkbox("I understand this permanently wipes all my data")
    if st.button("Delete Account", type="primary", disabled=not sure):
        js.delete_account(confirmed=sure)
        reset_view_state(st.session_state)
        st.rerun()


# =============================================================================
# APP MAIN
# =============================================================================

def main():
    js = get_journal()
    if js.user is None:
        render_auth()
        return

    render_sidebar()

    views = {
        "dashboard": render_dashboard,
        "journal": render_journal,
        "calendar": render_calendar,
        "checklist": render_checklist,
        "playbook": render_playbook,
        "user": render_profile,
    }
    views[nav.normalize_tab(st.session_state['active_tab'])]()


if __name__ == "__main__":
    main()
