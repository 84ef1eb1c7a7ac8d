"""
KHG menu scraper
Scrapes the weekly menu table from the KHG Mensa web page
"""

import re
import warnings
from typing import List, NamedTuple, Optional, Sequence, Tuple

from bs4 import BeautifulSoup

from common.days import day_key
from common.errors import DroppedDishRowsWarning, ParseError
from common.http_client import get
from common.models import Dish, MenuCategory, MenuPlan, normalize_title

KHG_MENU_URL = "https://www.dioezese-linz.at/khg/mensa/menueplan"

# Dishes are assigned to these by their position below each day header
DEFAULT_CATEGORY_NAMES = ("Menü 1", "Menü 2")

HEADER_SELECTOR = '.swslang h4'
ROW_SELECTOR = 'table.sweTable1 tbody tr'
DAY_ROW_CLASS = 'sweTableRow1'

WEEK_PATTERN = re.compile(r'KW (\d+)')
YEAR_PATTERN = re.compile(r'(\d{4})')

ROW_DAY = 'day'
ROW_DISH = 'dish'
ROW_OTHER = 'other'


class RowDescriptor(NamedTuple):
    """What one table row contributes to the menu"""
    kind: str
    day_name: str = ''
    title: str = ''
    price: str = ''


class ScanResult(NamedTuple):
    """
    Outcome of walking the menu table

    Attributes:
        menus: One day key -> dishes mapping per category, in category order
        dropped: Dish rows that had no category left for their day
    """
    menus: List[dict]
    dropped: List[RowDescriptor]


def parse_header(text: str) -> Tuple[str, int]:
    """
    Extract calendar week and year from the menu header

    Args:
        text: Header text like "Menüplan KW 42 vom 14.10.2024"

    Returns:
        Tuple of (week, year); ("", 0) parts where nothing matched
    """
    week = ''
    year = 0

    match = WEEK_PATTERN.search(text or '')
    if match:
        week = match.group(1)

    match = YEAR_PATTERN.search(text or '')
    if match:
        year = int(match.group(1))

    return week, year


def describe_row(row) -> RowDescriptor:
    """
    Classify a table row

    Day header rows carry the class "sweTableRow1" and the day name in a
    <strong>. Dish rows have exactly three cells: title, price and an
    allergen marker that is not used.

    Args:
        row: BeautifulSoup <tr> tag

    Returns:
        RowDescriptor for the row
    """
    if DAY_ROW_CLASS in (row.get('class') or []):
        day_name = ''.join(strong.get_text() for strong in row.find_all('strong'))
        return RowDescriptor(ROW_DAY, day_name=day_name)

    cells = row.find_all('td', recursive=False)
    if len(cells) == 3:
        return RowDescriptor(
            ROW_DISH,
            title=cells[0].get_text(),
            price=cells[1].get_text()
        )

    return RowDescriptor(ROW_OTHER)


def fold_rows(rows: Sequence[RowDescriptor],
              category_names: Sequence[str] = DEFAULT_CATEGORY_NAMES) -> ScanResult:
    """
    Assign dish rows to days and categories in a single pass

    The Nth dish row after a day header goes to the Nth category. Dish rows
    before the first recognized day header are ignored, rows beyond the
    number of categories are dropped.

    Args:
        rows: Row descriptors in document order
        category_names: Category names, only their count matters here

    Returns:
        ScanResult with per-category day mappings and the dropped rows
    """
    menus = [{} for _ in category_names]
    dropped = []
    current_day = ''
    cursor = 0

    for row in rows:
        if row.kind == ROW_DAY:
            current_day = day_key(row.day_name)
            cursor = 0
            continue

        if row.kind != ROW_DISH or not current_day:
            continue

        if cursor >= len(menus):
            dropped.append(row)
            continue

        dish = Dish(title=normalize_title(row.title), price=row.price.strip())
        menus[cursor].setdefault(current_day, []).append(dish)
        cursor += 1

    return ScanResult(menus=menus, dropped=dropped)


def parse_menu_html(html, category_names: Sequence[str] = DEFAULT_CATEGORY_NAMES) -> MenuPlan:
    """
    Build a menu plan from the menu page HTML

    Args:
        html: Page content (str or bytes)
        category_names: Names of the menu categories in row order

    Returns:
        MenuPlan with one category per name

    Raises:
        ParseError: If the document cannot be parsed as HTML
    """
    try:
        soup = BeautifulSoup(html, 'html5lib')
    except Exception as e:
        raise ParseError(f"Failed to parse HTML: {e}") from e

    header = soup.select_one(HEADER_SELECTOR)
    week, year = parse_header(header.get_text() if header else '')

    rows = [describe_row(row) for row in soup.select(ROW_SELECTOR)]
    result = fold_rows(rows, category_names)

    if result.dropped:
        titles = ', '.join(normalize_title(row.title) for row in result.dropped)
        warnings.warn(
            DroppedDishRowsWarning(
                f"Dropped {len(result.dropped)} dish row(s) without a matching category: {titles}"
            ),
            stacklevel=2
        )

    return MenuPlan(
        week=week,
        year=year,
        menus=[
            MenuCategory(name=name, menus=menus)
            for name, menus in zip(category_names, result.menus)
        ]
    )


def fetch_scraped_menu(url: str = KHG_MENU_URL, timeout: Optional[float] = None,
                       category_names: Sequence[str] = DEFAULT_CATEGORY_NAMES) -> MenuPlan:
    """
    Fetch and scrape the KHG Mensa weekly menu

    Args:
        url: Menu page URL
        timeout: Request timeout in seconds (None waits indefinitely)
        category_names: Names of the menu categories in row order

    Returns:
        MenuPlan for the current week

    Raises:
        FetchError: On network failure or a non-200 status
        ParseError: If the page is not parseable HTML
    """
    print(f"Fetching KHG menu from {url}...")
    response = get(url, timeout=timeout)

    plan = parse_menu_html(response.content, category_names)
    dish_count = sum(len(dishes) for category in plan.menus for dishes in category.menus.values())
    print(f"  Found {dish_count} dishes for week {plan.week or '?'}/{plan.year or '?'}")
    return plan
