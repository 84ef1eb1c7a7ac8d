"""
Week tabs renderer
Combines both cafeterias' plans by day and renders the HTML page
"""

from pathlib import Path
from typing import Dict, List

from jinja2 import Environment, FileSystemLoader, select_autoescape

from common.days import DAY_NAMES
from common.models import MenuPlan, normalize_title

TEMPLATE_DIR = Path(__file__).parent / 'templates'
TEMPLATE_NAME = 'menu_for_week_tabs.html'

# Monday to Friday
WORK_DAYS = 5


def build_menu_view(plan: MenuPlan, key: str) -> Dict:
    """
    Build the view of one cafeteria for one day

    Categories without dishes on that day are left out.

    Args:
        plan: Cafeteria menu plan
        key: Day key ("1".."7")

    Returns:
        Dict with a 'categories' list of {'name', 'dishes'}
    """
    categories = []
    for category in plan.menus:
        dishes = category.menus.get(key)
        if not dishes:
            continue
        categories.append({
            'name': category.name,
            'dishes': [
                {'title': normalize_title(dish.title), 'price': dish.price}
                for dish in dishes
            ]
        })
    return {'categories': categories}


def build_week_view(jku_plan: MenuPlan, khg_plan: MenuPlan, days: int = WORK_DAYS) -> Dict[str, List[Dict]]:
    """
    Pair both plans day by day

    Args:
        jku_plan: JKU Mensa plan
        khg_plan: KHG Mensa plan
        days: Number of days starting from Monday

    Returns:
        Dict with a 'days' list, one entry per day with 'name', 'key', 'jku' and 'khg'
    """
    week = []
    for i, day_name in enumerate(DAY_NAMES[:days]):
        key = str(i + 1)
        week.append({
            'name': day_name,
            'key': key,
            'jku': build_menu_view(jku_plan, key),
            'khg': build_menu_view(khg_plan, key),
        })
    return {'days': week}


def render_week_tabs(jku_plan: MenuPlan, khg_plan: MenuPlan,
                     template_dir: Path = TEMPLATE_DIR) -> str:
    """
    Render the week tabs page

    Args:
        jku_plan: JKU Mensa plan
        khg_plan: KHG Mensa plan
        template_dir: Directory containing the page template

    Returns:
        Rendered HTML
    """
    env = Environment(
        loader=FileSystemLoader(template_dir),
        autoescape=select_autoescape(['html'])
    )
    template = env.get_template(TEMPLATE_NAME)

    view = build_week_view(jku_plan, khg_plan)
    return template.render(
        days=view['days'],
        jku_week=jku_plan.week,
        khg_week=khg_plan.week,
        year=khg_plan.year or jku_plan.year,
    )
