"""
Trade Journal Session - Owned State and Commit Operations
==========================================================

Holds everything a logged-in session works with: the trade collection,
the strategy catalog, the form options, the user and the current
checklist. All mutation goes through this class; the metrics and
analytics modules stay pure functions of the state they are handed.

Trades and strategies are session-scoped and are never persisted. The
user (only when "remember me" was asked for) and the form options go to
the key-value store.

NO UI code. Destructive calls take ``confirmed``; declining is a no-op.

Version: 1.0.0 (2026-10-19)
"""

from dataclasses import replace
from typing import List, Optional, Union

import checklist as checklist_mod
import journal_storage as storage
import performance_analytics as analytics
from journal_models import (
    DEFAULT_WELCOME_MESSAGE,
    ChecklistItem, FormOptions, Strategy, StrategyRules, Trade, User,
    default_strategies, new_id,
)
from trade_metrics import TradeForm, commit_trade, form_from_trade


class JournalSession:
    """Single-writer session state for one user."""

    def __init__(self, store: Optional[storage.KeyValueStore] = None,
                 strategies: Optional[List[Strategy]] = None):
        self.store = store if store is not None else storage.MemoryStore()
        self.user: Optional[User] = None
        self.trades: List[Trade] = []
        self.strategies: List[Strategy] = strategies if strategies is not None else default_strategies()
        self.form_options: FormOptions = FormOptions()
        self.checklist: List[ChecklistItem] = checklist_mod.build_checklist(self.active_strategy())

    # --- Startup -------------------------------------------------------------

    def restore(self) -> Optional[User]:
        """Load the remembered user and saved options from the store."""
        self.user = storage.load_user(self.store)
        self.form_options = storage.load_form_options(self.store)
        if self.user:
            print(f"[session] Restored remembered user {self.user.email}")
        return self.user

    # --- Trades --------------------------------------------------------------

    def get_trade(self, trade_id: str) -> Optional[Trade]:
        for t in self.trades:
            if t.trade_id == trade_id:
                return t
        return None

    def save_trade(self, candidate: Union[Trade, TradeForm], checklist_score: float = 0) -> Trade:
        """Derive, then append a new trade or replace the one with the same id.

        A Trade candidate goes through the same derivation as a form, so an
        edit never stores stale derived fields.
        """
        form = form_from_trade(candidate) if isinstance(candidate, Trade) else candidate
        existing = self.get_trade(form.trade_id) if form.trade_id else None
        trade = commit_trade(form, checklist_score=checklist_score, existing=existing)

        for i, t in enumerate(self.trades):
            if t.trade_id == trade.trade_id:
                self.trades[i] = trade
                break
        else:
            self.trades.append(trade)

        self.refresh_win_rates()
        return trade

    def save_trade_from_checklist(self, candidate: Union[Trade, TradeForm]) -> Trade:
        """Save with the current checklist score, then start a fresh checklist run."""
        trade = self.save_trade(candidate, checklist_score=self.checklist_score())
        self.checklist = checklist_mod.reset_checklist(self.checklist)
        return trade

    def delete_trade(self, trade_id: str, confirmed: bool = True) -> bool:
        if not confirmed:
            return False
        before = len(self.trades)
        self.trades = [t for t in self.trades if t.trade_id != trade_id]
        if len(self.trades) == before:
            return False
        self.refresh_win_rates()
        return True

    # --- Strategies ----------------------------------------------------------

    def active_strategy(self) -> Optional[Strategy]:
        return next((s for s in self.strategies if s.is_active), None)

    def get_strategy(self, strategy_id: str) -> Optional[Strategy]:
        return next((s for s in self.strategies if s.strategy_id == strategy_id), None)

    def set_active_strategy(self, strategy_id: str) -> None:
        """Activate one strategy and deactivate every other one."""
        self.strategies = [replace(s, is_active=(s.strategy_id == strategy_id))
                           for s in self.strategies]
        self.checklist = checklist_mod.build_checklist(self.active_strategy())

    def save_strategy(self, strategy: Strategy) -> Strategy:
        """Add a new strategy or replace by id, keeping the stored active flag.

        Renaming does not touch trades: trades tagged with the old title
        stop counting toward this strategy.
        """
        if not strategy.strategy_id:
            strategy = replace(strategy, strategy_id=new_id())
        rules = StrategyRules(
            analysis=list(strategy.rules.analysis),
            setup=list(strategy.rules.setup),
            entry=list(strategy.rules.entry),
            risk=list(strategy.rules.risk),
        )
        strategy = replace(strategy, rules=rules,
                           win_rate=analytics.strategy_win_rate(strategy.title, self.trades))

        current = self.get_strategy(strategy.strategy_id)
        if current is not None:
            strategy = replace(strategy, is_active=current.is_active)
            self.strategies = [strategy if s.strategy_id == strategy.strategy_id else s
                               for s in self.strategies]
            if strategy.is_active:
                self.checklist = checklist_mod.build_checklist(strategy)
        else:
            strategy = replace(strategy, is_active=False)
            self.strategies.append(strategy)
        return strategy

    def delete_strategy(self, strategy_id: str, confirmed: bool = True) -> bool:
        """Remove a strategy. Trades referencing its title are left alone."""
        if not confirmed:
            return False
        before = len(self.strategies)
        was_active = any(s.is_active for s in self.strategies if s.strategy_id == strategy_id)
        self.strategies = [s for s in self.strategies if s.strategy_id != strategy_id]
        if len(self.strategies) == before:
            return False
        if was_active:
            self.checklist = checklist_mod.build_checklist(None)
        return True

    def strategies_for_display(self) -> List[Strategy]:
        """Active strategy first, otherwise catalog order."""
        return sorted(self.strategies, key=lambda s: 0 if s.is_active else 1)

    def refresh_win_rates(self) -> None:
        self.strategies = [replace(s, win_rate=analytics.strategy_win_rate(s.title, self.trades))
                           for s in self.strategies]

    def trades_for_strategy(self, title: str) -> List[Trade]:
        return analytics.trades_for_strategy(title, self.trades)

    # --- Checklist -----------------------------------------------------------

    def toggle_checklist_item(self, item_id: str) -> None:
        self.checklist = checklist_mod.toggle_item(self.checklist, item_id)

    def reset_checklist(self) -> None:
        self.checklist = checklist_mod.reset_checklist(self.checklist)

    def checklist_score(self) -> int:
        return checklist_mod.checklist_score(self.checklist)

    # --- Form options --------------------------------------------------------

    def add_option(self, category: str, value: str) -> bool:
        if not self.form_options.add(category, value):
            return False
        self._persist_options()
        return True

    def remove_option(self, category: str, value: str, confirmed: bool = True) -> bool:
        if not confirmed:
            return False
        if not self.form_options.remove(category, value):
            return False
        self._persist_options()
        return True

    def _persist_options(self) -> None:
        try:
            storage.save_form_options(self.store, self.form_options)
        except Exception as e:
            print(f"[session] ERROR: Could not persist form options: {e}")

    # --- User ----------------------------------------------------------------

    def login(self, user: User, remember_me: bool = False) -> User:
        if not user.welcome_message:
            user = replace(user, welcome_message=DEFAULT_WELCOME_MESSAGE)
        self.user = user
        if remember_me:
            try:
                storage.save_user(self.store, user)
            except Exception as e:
                print(f"[session] ERROR: Could not remember user: {e}")
        return user

    def logout(self) -> None:
        self.user = None
        self.trades = []
        self.refresh_win_rates()
        storage.clear_user(self.store)

    def update_user(self, name: Optional[str] = None,
                    welcome_message: Optional[str] = None) -> Optional[User]:
        """Edit the profile; re-persisted only if the user is remembered."""
        if self.user is None:
            return None
        changes = {}
        if name is not None:
            changes['name'] = name
        if welcome_message is not None:
            changes['welcome_message'] = welcome_message
        self.user = replace(self.user, **changes)
        if storage.has_saved_user(self.store):
            try:
                storage.save_user(self.store, self.user)
            except Exception as e:
                print(f"[session] ERROR: Could not update remembered user: {e}")
        return self.user

    def delete_account(self, confirmed: bool = True) -> bool:
        """Wipe the user, trades and custom options, locally and in the store."""
        if not confirmed:
            return False
        self.user = None
        self.trades = []
        self.form_options = FormOptions()
        self.refresh_win_rates()
        storage.clear_user(self.store)
        storage.clear_form_options(self.store)
        print("[session] Account deleted")
        return True
