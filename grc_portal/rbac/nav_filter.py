"""Prune the navigation tree down to what a user may see."""

from __future__ import annotations

from dataclasses import replace
from typing import Sequence

from grc_portal.rbac.checker import is_granted
from grc_portal.rbac.navigation import NavItem
from grc_portal.rbac.types import Action, EffectivePermissions


def _leaf_visible(item: NavItem, effective: EffectivePermissions) -> bool:
    if item.always_visible or item.resource is None:
        return True
    # any scope: a menu entry is not a record
    return is_granted(effective, item.resource, Action.VIEW)


def filter_navigation(tree: Sequence[NavItem], effective: EffectivePermissions) -> list[NavItem]:
    """
    Depth-first prune of `tree`.

    A group survives only if one of its children survives or it is marked
    always-visible; an empty group would otherwise reveal module names to
    users who can open none of its pages.
    """

    kept: list[NavItem] = []
    for item in tree:
        if item.children:
            children = filter_navigation(item.children, effective)
            if children or item.always_visible:
                kept.append(replace(item, children=tuple(children)))
            continue

        if item.href is None:
            # childless group
            if item.always_visible:
                kept.append(item)
            continue

        if _leaf_visible(item, effective):
            kept.append(item)
    return kept
