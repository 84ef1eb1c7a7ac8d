"""
Tests for common.models module
"""

import pytest
from common.errors import DecodeError
from common.models import Dish, MenuCategory, MenuPlan, normalize_title


class TestNormalizeTitle:
    """Tests for dish title normalization"""

    def test_newline_replaced_and_trimmed(self):
        """Test that a two-line title becomes one trimmed line"""
        assert normalize_title("Schnitzel\nmit Pommes  ") == "Schnitzel mit Pommes"

    def test_crlf_and_cr_replaced(self):
        """Test that Windows and old Mac line breaks are flattened too"""
        assert normalize_title("Schnitzel\r\nmit Pommes\r\n") == "Schnitzel mit Pommes"
        assert normalize_title("Schnitzel\rmit Pommes") == "Schnitzel mit Pommes"

    def test_plain_title_unchanged(self):
        """Test that a clean title is left alone"""
        assert normalize_title("Gemüselasagne") == "Gemüselasagne"

    def test_empty_title(self):
        """Test empty and None titles"""
        assert normalize_title("") == ""
        assert normalize_title(None) == ""


class TestMenuPlanDecoding:
    """Tests for building plans from menu JSON"""

    def test_full_plan(self):
        """Test decoding a complete plan"""
        data = {
            'week': '42',
            'year': 2024,
            'menus': [
                {'name': 'Menü Classic', 'menus': {
                    '1': [{'title_de': 'Wiener Schnitzel', 'price': '€ 6,90'}],
                    '2': [{'title_de': 'Gulasch', 'price': '€ 5,90'}],
                }},
                {'name': 'Vegetarisch', 'menus': {
                    '1': [{'title_de': 'Kaspressknödel', 'price': '€ 5,50'}],
                }},
            ]
        }

        plan = MenuPlan.from_dict(data)

        assert plan.week == '42'
        assert plan.year == 2024
        assert [category.name for category in plan.menus] == ['Menü Classic', 'Vegetarisch']
        assert plan.menus[0].menus['1'] == (Dish(title='Wiener Schnitzel', price='€ 6,90'),)
        assert '2' not in plan.menus[1].menus

    def test_missing_fields_take_zero_values(self):
        """Test that absent fields fall back to empty values"""
        plan = MenuPlan.from_dict({'menus': [{'menus': {'3': [{}]}}]})

        assert plan.week == ''
        assert plan.year == 0
        assert plan.menus[0].name == ''
        assert plan.menus[0].menus['3'] == (Dish(title='', price=''),)

    def test_unknown_fields_ignored(self):
        """Test that extra fields from the API do not matter"""
        plan = MenuPlan.from_dict({
            'week': '7',
            'year': 2025,
            'location': 'JKU',
            'menus': [{'name': 'Menü 1', 'icon': 'x', 'menus': {
                '1': [{'title_de': 'Suppe', 'title_en': 'Soup', 'price': '€ 2,00', 'allergens': 'A'}]
            }}]
        })

        assert plan.menus[0].menus['1'] == (Dish(title='Suppe', price='€ 2,00'),)

    def test_null_dish_list_is_empty(self):
        """Test that a null day entry decodes to an empty list"""
        plan = MenuPlan.from_dict({'menus': [{'name': 'Menü 1', 'menus': {'5': None}}]})
        assert plan.menus[0].menus == {'5': ()}

    @pytest.mark.parametrize('data', [
        [],
        {'week': 42},
        {'year': '2024'},
        {'year': True},
        {'menus': {'name': 'Menü 1'}},
        {'menus': ['Menü 1']},
        {'menus': [{'menus': {'1': 'Suppe'}}]},
        {'menus': [{'menus': {'1': [{'price': 5.9}]}}]},
    ])
    def test_wrong_types_rejected(self, data):
        """Test that fields of the wrong JSON type raise DecodeError"""
        with pytest.raises(DecodeError):
            MenuPlan.from_dict(data)


class TestMenuPlanEncoding:
    """Tests for converting plans back to menu JSON"""

    def test_round_trip(self):
        """Test that encoding and decoding yields an equal plan"""
        plan = MenuPlan(
            week='42',
            year=2024,
            menus=[
                MenuCategory(name='Menü 1', menus={
                    '1': [Dish('Schnitzel', '€ 5,90'), Dish('Salat', '€ 1,50')],
                    '4': [],
                }),
                MenuCategory(name='Menü 2', menus={}),
            ]
        )

        assert MenuPlan.from_dict(plan.to_dict()) == plan

    def test_dish_uses_wire_field_names(self):
        """Test that titles are written as title_de"""
        assert Dish('Suppe', '€ 2,00').to_dict() == {'title_de': 'Suppe', 'price': '€ 2,00'}

    def test_plans_are_immutable(self):
        """Test that plan fields cannot be reassigned"""
        plan = MenuPlan(week='1', year=2025)
        with pytest.raises(AttributeError):
            plan.week = '2'

    def test_nested_values_are_read_only(self):
        """Test that dishes and day mappings of a built plan cannot be changed"""
        plan = MenuPlan(week='42', year=2024, menus=[
            MenuCategory('Menü 1', {'1': [Dish('Gulasch', '€ 5,90')]}),
        ])

        with pytest.raises(AttributeError):
            plan.menus[0].menus['1'].append(Dish('Strudel', '€ 2,50'))
        with pytest.raises(TypeError):
            plan.menus[0].menus['2'] = (Dish('Strudel', '€ 2,50'),)
        with pytest.raises(AttributeError):
            plan.menus.append(MenuCategory('Menü 2'))

    def test_source_lists_are_copied(self):
        """Test that changing the input list afterwards does not affect the plan"""
        dishes = [Dish('Gulasch', '€ 5,90')]
        category = MenuCategory('Menü 1', {'1': dishes})

        dishes.append(Dish('Strudel', '€ 2,50'))

        assert category.menus['1'] == (Dish('Gulasch', '€ 5,90'),)

    def test_plans_are_hashable(self):
        """Test that equal plans hash equally"""
        first = MenuPlan(week='42', year=2024, menus=[
            MenuCategory('Menü 1', {'1': [Dish('Gulasch', '€ 5,90')], '2': []}),
        ])
        second = MenuPlan.from_dict(first.to_dict())

        assert hash(first) == hash(second)
        assert len({first, second}) == 1
