"""Pre-trade checklist built from the active strategy's rules."""

from dataclasses import replace
from typing import Dict, List, Optional

from journal_models import (
    CATEGORY_ANALYSIS, CATEGORY_SETUP, CATEGORY_ENTRY, CATEGORY_RISK,
    ChecklistItem, Strategy,
)

RISK_GROUP = 'Risk Management'

# Used until a strategy is made active.
DEFAULT_CHECKLIST = [
    (CATEGORY_ANALYSIS, '4H timeframe analysis'),
    (CATEGORY_ANALYSIS, '1H timeframe analysis'),
    (CATEGORY_ANALYSIS, '15M timeframe analysis'),
    (CATEGORY_SETUP, 'Confirm market structure (trend continuation or reversal shift)'),
    (CATEGORY_SETUP, 'Identify recent swing high/low and mark POI'),
    (CATEGORY_SETUP, 'Confirm MACD and EMA with the direction'),
    (CATEGORY_SETUP, 'Price returns to POI'),
    (CATEGORY_ENTRY, 'Market Structure Shift in the desired direction'),
    (CATEGORY_ENTRY, 'Price returns to micro POI'),
    (CATEGORY_ENTRY, 'Ensure MACD and EMA align'),
    (CATEGORY_RISK, 'Risk/Reward 1/2 or more'),
    (CATEGORY_RISK, 'TP and SL placed accurately'),
]


def group_for_category(category: str) -> str:
    return RISK_GROUP if category == CATEGORY_RISK else category


def build_checklist(strategy: Optional[Strategy]) -> List[ChecklistItem]:
    """One unchecked item per rule: analysis, setup, entry, then risk."""
    if strategy is None:
        return [
            ChecklistItem(item_id=str(i), label=label, category=category,
                          group=group_for_category(category))
            for i, (category, label) in enumerate(DEFAULT_CHECKLIST, start=1)
        ]

    sections = [
        (CATEGORY_ANALYSIS, strategy.rules.analysis),
        (CATEGORY_SETUP, strategy.rules.setup),
        (CATEGORY_ENTRY, strategy.rules.entry),
        (CATEGORY_RISK, strategy.rules.risk),
    ]
    items = []
    for category, rules in sections:
        for rule in rules:
            items.append(ChecklistItem(
                item_id=f"auto-{len(items) + 1}",
                label=rule,
                category=category,
                group=group_for_category(category),
            ))
    return items


def toggle_item(items: List[ChecklistItem], item_id: str) -> List[ChecklistItem]:
    return [replace(i, is_checked=not i.is_checked) if i.item_id == item_id else i
            for i in items]


def reset_checklist(items: List[ChecklistItem]) -> List[ChecklistItem]:
    return [replace(i, is_checked=False) for i in items]


def _percent(checked: int, total: int) -> int:
    if total <= 0:
        return 0
    # rounds half up
    return int(checked * 100 / total + 0.5)


def checklist_score(items: List[ChecklistItem]) -> int:
    """Percentage of checked items, 0 for an empty checklist."""
    return _percent(sum(1 for i in items if i.is_checked), len(items))


def setup_quality(score: int) -> str:
    if score >= 80:
        return 'Strong Setup'
    if score >= 50:
        return 'Moderate Setup'
    return 'Weak Setup'


def category_percentage(items: List[ChecklistItem], category: str) -> int:
    in_category = [i for i in items if i.category == category]
    return _percent(sum(1 for i in in_category if i.is_checked), len(in_category))


def group_percentages(items: List[ChecklistItem]) -> Dict[str, int]:
    """Completion per display group, in first-appearance order."""
    groups: Dict[str, List[ChecklistItem]] = {}
    for item in items:
        groups.setdefault(item.group, []).append(item)
    return {
        group: _percent(sum(1 for i in members if i.is_checked), len(members))
        for group, members in groups.items()
    }
