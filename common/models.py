"""
Menu plan model
Canonical weekly menu structure filled by both the API fetcher and the HTML scraper
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Tuple

from common.errors import DecodeError


def normalize_title(title: str) -> str:
    """
    Collapse a dish title onto a single trimmed line

    Args:
        title: Raw title text, may contain LF, CRLF or CR line breaks

    Returns:
        Title with newlines replaced by spaces and outer whitespace removed
    """
    if not title:
        return ''
    return title.replace('\r\n', ' ').replace('\r', ' ').replace('\n', ' ').strip()


def _get(data: Dict, key: str, expected: type, default: Any, where: str) -> Any:
    """Read a field, using the zero value when missing and failing on the wrong JSON type"""
    value = data.get(key)
    if value is None:
        return default
    # bool is an int subclass, but true/false is never a valid year
    if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
        raise DecodeError(
            f"Field '{key}' of {where} should be {expected.__name__}, got {type(value).__name__}"
        )
    return value


@dataclass(frozen=True)
class Dish:
    title: str = ''
    price: str = ''

    @classmethod
    def from_dict(cls, data: Dict) -> 'Dish':
        if not isinstance(data, dict):
            raise DecodeError(f"Dish should be an object, got {type(data).__name__}")
        return cls(
            title=_get(data, 'title_de', str, '', 'dish'),
            price=_get(data, 'price', str, '', 'dish'),
        )

    def to_dict(self) -> Dict:
        return {'title_de': self.title, 'price': self.price}


@dataclass(frozen=True)
class MenuCategory:
    """
    One named meal slot (e.g. "Menü 1") across the week

    The menus mapping is keyed by day key ("1".."7"). A missing key means
    no dishes were offered that day. The mapping is read-only and each
    day's dishes are stored as a tuple.
    """
    name: str = ''
    menus: Mapping[str, Tuple[Dish, ...]] = field(default_factory=dict)

    def __post_init__(self):
        menus = {key: tuple(dishes) for key, dishes in self.menus.items()}
        object.__setattr__(self, 'menus', MappingProxyType(menus))

    def __hash__(self):
        return hash((self.name, frozenset(self.menus.items())))

    @classmethod
    def from_dict(cls, data: Dict) -> 'MenuCategory':
        if not isinstance(data, dict):
            raise DecodeError(f"Menu category should be an object, got {type(data).__name__}")

        name = _get(data, 'name', str, '', 'menu category')
        menus = {}
        for key, dishes in _get(data, 'menus', dict, {}, f"menu category '{name}'").items():
            if dishes is None:
                menus[key] = []
                continue
            if not isinstance(dishes, list):
                raise DecodeError(f"Dishes for day '{key}' in '{name}' should be a list")
            menus[key] = [Dish.from_dict(dish) for dish in dishes]

        return cls(name=name, menus=menus)

    def to_dict(self) -> Dict:
        return {
            'name': self.name,
            'menus': {
                key: [dish.to_dict() for dish in dishes]
                for key, dishes in self.menus.items()
            }
        }


@dataclass(frozen=True)
class MenuPlan:
    """
    One cafeteria's menu for one week

    Attributes:
        week: Calendar week as text, e.g. "42" ("" if unknown)
        year: Four digit year (0 if unknown)
        menus: Menu categories in source order (stored as a tuple)
    """
    week: str = ''
    year: int = 0
    menus: Tuple[MenuCategory, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, 'menus', tuple(self.menus))

    @classmethod
    def from_dict(cls, data: Dict) -> 'MenuPlan':
        """
        Build a plan from the decoded menu JSON

        Unknown fields are ignored and missing fields get their zero value.

        Raises:
            DecodeError: If a field has the wrong JSON type
        """
        if not isinstance(data, dict):
            raise DecodeError(f"Menu plan should be an object, got {type(data).__name__}")

        categories = _get(data, 'menus', list, [], 'menu plan')
        return cls(
            week=_get(data, 'week', str, '', 'menu plan'),
            year=_get(data, 'year', int, 0, 'menu plan'),
            menus=[MenuCategory.from_dict(category) for category in categories],
        )

    def to_dict(self) -> Dict:
        return {
            'week': self.week,
            'year': self.year,
            'menus': [category.to_dict() for category in self.menus]
        }

