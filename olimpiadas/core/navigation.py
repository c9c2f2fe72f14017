# olimpiadas/core/navigation.py
"""
Role-based navigation.

Maps the role codes a user holds in an event to the menu entries they may
see and to the page they land on after signing in. Pure lookups over a
static table; nothing here touches the database.
"""

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class NavigationItem:
    label: str
    path: str
    roles: frozenset[str]


@dataclass(frozen=True)
class NavigationResult:
    items: list[NavigationItem]
    redirect: str | None


_ALL_MEMBERS = frozenset({"ATL", "ORE", "RDD", "ADM"})

NAVIGATION_ITEMS: tuple[NavigationItem, ...] = (
    NavigationItem("Perfil", "/athlete-profile", _ALL_MEMBERS),
    NavigationItem("Cronograma", "/cronograma", _ALL_MEMBERS),
    NavigationItem("Minhas Inscrições", "/athlete-registrations", _ALL_MEMBERS),
    NavigationItem("Minhas Pontuações", "/scores", frozenset({"ATL"})),
    NavigationItem("Organizador(a)", "/organizer-dashboard", frozenset({"ORE"})),
    NavigationItem("Delegação", "/delegation-dashboard", frozenset({"RDD"})),
    NavigationItem("Administração", "/administration", frozenset({"ADM"})),
    NavigationItem("Juiz", "/judge-dashboard", frozenset({"JUZ"})),
)

# Checked in order; first rule whose codes intersect the user's wins.
REDIRECT_RULES: tuple[tuple[frozenset[str], str], ...] = (
    (frozenset({"ATL", "PGR"}), "/athlete-profile"),
    (frozenset({"ORE"}), "/organizer-dashboard"),
    (frozenset({"RDD"}), "/delegation-dashboard"),
    (frozenset({"ADM"}), "/administration"),
    (frozenset({"JUZ"}), "/judge-dashboard"),
)


def navigation_items(role_codes: Iterable[str]) -> list[NavigationItem]:
    codes = set(role_codes)
    return [item for item in NAVIGATION_ITEMS if item.roles & codes]


def initial_route(role_codes: Iterable[str]) -> str | None:
    codes = set(role_codes)
    for rule_codes, path in REDIRECT_RULES:
        if rule_codes & codes:
            return path
    return None


def resolve_navigation(role_codes: Iterable[str]) -> NavigationResult:
    codes = list(role_codes)
    return NavigationResult(
        items=navigation_items(codes),
        redirect=initial_route(codes),
    )
