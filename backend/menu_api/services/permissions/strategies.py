"""
Permission Strategy implementations.

One strategy per kind of principal:
- MemberStrategy: signed-in users, scoped by family membership or ownership
- GuestShareStrategy: callers holding a menu share token, scoped to that menu

Strategies answer yes/no; PermissionContext turns a "no" into the right error.
"""

from abc import ABC, abstractmethod
from enum import Enum, auto
from typing import Callable, Protocol, runtime_checkable

from menu_api.models import Menu

from .principal import Principal


class Action(Enum):
    """Available actions for permission checks."""
    READ = auto()
    WRITE = auto()


# =============================================================================
# Resource Protocols
# =============================================================================


@runtime_checkable
class Scoped(Protocol):
    """A resource owned by a family group, or personally by its creator."""
    family_group_id: str | None
    created_by: str


# =============================================================================
# Strategies
# =============================================================================


class PermissionStrategy(ABC):
    """Base permission strategy."""

    @abstractmethod
    def can(self, principal: Principal, action: Action, resource: Scoped) -> bool:
        ...


class MemberStrategy(PermissionStrategy):
    """
    Signed-in users. Reads and writes follow the same rule:
    - group scope: the caller must be a member of the group
    - personal scope: the caller must be the creator
    """

    def __init__(self, is_member: Callable[[str], bool]):
        self._is_member = is_member

    def can(self, principal: Principal, action: Action, resource: Scoped) -> bool:
        if resource.family_group_id:
            return self._is_member(resource.family_group_id)
        return resource.created_by == principal.user_id


class GuestShareStrategy(PermissionStrategy):
    """
    Share token holders. Membership is never consulted: the share grants
    access to exactly one menu, read-only unless the share allows editing.
    """

    def can(self, principal: Principal, action: Action, resource: Scoped) -> bool:
        # Recipes and other menus are out of reach
        if not isinstance(resource, Menu) or resource.id != principal.share_menu_id:
            return False
        if action == Action.WRITE:
            return principal.allow_edit
        return True


def get_strategy(principal: Principal, is_member: Callable[[str], bool]) -> PermissionStrategy:
    """Pick the strategy for the principal."""
    if principal.is_guest:
        return GuestShareStrategy()
    return MemberStrategy(is_member)
