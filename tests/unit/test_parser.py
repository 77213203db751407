#!/usr/bin/env python3
"""Parser tests: value coercion, inline and block grammars, screen headers"""

import os
import sys
import unittest
import warnings
from pathlib import Path

PROJECT_ROOT = os.path.join(os.path.dirname(__file__), '..', '..')
sys.path.insert(0, os.path.join(PROJECT_ROOT, 'src'))
import screenmaker as sm
from screenmaker.parser import (
    BLANK,
    BLOCK_ELEMENT,
    CHILDREN_MARKER,
    COMMENT,
    INLINE_ELEMENT,
    PROPERTY,
    SCREEN_BLOCK,
    classify_line,
    coerce_value,
    parse_element_text,
    parse_properties,
    split_property_pairs,
)

NAV_EXAMPLE = (
    "Screen: S\n"
    "- BottomNavigationBar: Nav\n"
    "  - BottomNavigationItem: Home {icon: H, active: true}\n"
    "  - BottomNavigationItem: Search {icon: S2}"
)


def _parse_quiet(text, defaults=None):
    with warnings.catch_warnings():
        warnings.simplefilter('ignore')
        return sm.parse_slml(text, defaults)


class TestCoercion(unittest.TestCase):
    def test_booleans(self):
        self.assertIs(coerce_value('true'), True)
        self.assertIs(coerce_value('false'), False)
        self.assertIs(coerce_value('  true '), True)

    def test_numbers(self):
        self.assertEqual(coerce_value('42'), 42)
        self.assertIsInstance(coerce_value('42'), int)
        self.assertEqual(coerce_value('-3.5'), -3.5)
        self.assertEqual(coerce_value('.5'), 0.5)

    def test_overflowing_number_stays_text(self):
        self.assertEqual(coerce_value('1e400'), '1e400')
        self.assertEqual(coerce_value('1e10'), 1e10)

    def test_quoted_strings(self):
        self.assertEqual(coerce_value('"Hello, world"'), 'Hello, world')
        # quoted numbers stay strings
        self.assertEqual(coerce_value('"42"'), '42')

    def test_bare_strings(self):
        self.assertEqual(coerce_value('mdiHome'), 'mdiHome')
        self.assertEqual(coerce_value('#ff0000'), '#ff0000')
        self.assertEqual(coerce_value('True'), 'True')
        self.assertEqual(coerce_value('12px'), '12px')


class TestPropertyPairs(unittest.TestCase):
    def test_commas_inside_quotes_and_parens(self):
        pairs = split_property_pairs('label: "a, b", color: rgb(1, 2, 3), size: 4')
        self.assertEqual(
            pairs, [('label', '"a, b"'), ('color', 'rgb(1, 2, 3)'), ('size', '4')]
        )

    def test_value_keeps_colons(self):
        props = parse_properties('url: https://example.com/a.png, width: 100')
        self.assertEqual(props['url'], 'https://example.com/a.png')
        self.assertEqual(props['width'], 100)

    def test_pairs_without_value_dropped(self):
        self.assertEqual(parse_properties('align:, ok: true, junk'), {'ok': True})


class TestLineClassification(unittest.TestCase):
    def test_kinds(self):
        self.assertEqual(classify_line('   '), BLANK)
        self.assertEqual(classify_line('# Title'), COMMENT)
        self.assertEqual(classify_line('screen:'), SCREEN_BLOCK)
        self.assertEqual(classify_line('  children:'), CHILDREN_MARKER)
        self.assertEqual(classify_line('- Button: Go'), INLINE_ELEMENT)
        self.assertEqual(classify_line('appBar: Title'), BLOCK_ELEMENT)
        self.assertEqual(classify_line('  color: red'), PROPERTY)


class TestInlineGrammar(unittest.TestCase):
    def test_element_text(self):
        el = parse_element_text('Button: Sign in {backgroundColor: #333, width: 120}')
        self.assertEqual(el.type, 'Button')
        self.assertEqual(el.kind, 'button')
        self.assertEqual(el.label, 'Sign in')
        self.assertEqual(el.properties, {'backgroundColor': '#333', 'width': 120})

    def test_element_without_braces(self):
        el = parse_element_text('Text: Hello: world')
        self.assertEqual(el.label, 'Hello: world')
        self.assertEqual(el.properties, {})

    def test_default_align_is_center(self):
        screen = sm.parse_slml('Screen: A\n- Text: one\n- Button: two {align: left}')
        self.assertEqual(screen.elements[0].properties['align'], 'center')
        self.assertEqual(screen.elements[1].properties['align'], 'left')

    def test_default_align_from_defaults(self):
        screen = sm.parse_slml('- Text: one', sm.ScreenDefaults(align='right'))
        self.assertEqual(screen.elements[0].properties['align'], 'right')

    def test_bottom_navigation_nesting(self):
        screen = sm.parse_slml(NAV_EXAMPLE)
        self.assertEqual(len(screen.elements), 1)
        nav = screen.elements[0]
        self.assertEqual(nav.kind, 'bottomnavigationbar')
        self.assertEqual(len(nav.children), 2)
        self.assertIs(nav.children[0].properties['active'], True)
        self.assertEqual(nav.children[1].properties['icon'], 'S2')

    def test_dedent_returns_to_root(self):
        screen = sm.parse_slml(NAV_EXAMPLE + "\n- FloatingActionButton: +")
        self.assertEqual([e.kind for e in screen.elements], ['bottomnavigationbar', 'floatingactionbutton'])

    def test_nesting_under_non_container_warns(self):
        text = "- Text: hello\n    - Button: nested"
        with self.assertWarns(UserWarning) as cm:
            screen = sm.parse_slml(text)
        self.assertIn('bottomnavigationbar', str(cm.warning))
        self.assertEqual([e.type for e in screen.elements], ['Text', 'Button'])
        self.assertIsNone(screen.elements[0].children)

    def test_indented_property_lines_extend_element(self):
        screen = sm.parse_slml("- Text: Hi\n    color: red\n    fontSize: 20")
        el = screen.elements[0]
        self.assertEqual(el.properties['color'], 'red')
        self.assertEqual(el.properties['fontSize'], 20)

    def test_malformed_lines_skipped_with_warning(self):
        with self.assertWarns(UserWarning):
            screen = sm.parse_slml("- Text no separator\n- Button: ok")
        self.assertEqual(len(screen.elements), 1)
        with self.assertWarns(UserWarning):
            screen = sm.parse_slml("- @bad: type\n- Button: ok")
        self.assertEqual(len(screen.elements), 1)

    def test_dash_without_space(self):
        with warnings.catch_warnings():
            warnings.simplefilter('error')
            screen = sm.parse_slml('Screen: S\n-Button: Go {width: 100}')
        self.assertEqual(len(screen.elements), 1)
        el = screen.elements[0]
        self.assertEqual((el.type, el.label), ('Button', 'Go'))
        self.assertEqual(el.properties, {'width': 100, 'align': 'center'})


class TestBlockGrammar(unittest.TestCase):
    def setUp(self):
        self.fixtures_path = Path(__file__).parent.parent / "fixtures"

    def test_block_form_fixture(self):
        text = (self.fixtures_path / 'block_form.md').read_text(encoding='utf-8')
        body = sm.extract_blocks(text)[0]
        screen = sm.parse_slml(body)
        self.assertEqual(screen.title, 'Settings')
        self.assertEqual((screen.width, screen.height), (400, 700))
        self.assertEqual(screen.background_color, '#fafafa')
        appbar, nav = screen.elements
        self.assertEqual(appbar.kind, 'appbar')
        self.assertEqual(appbar.properties['title'], 'Settings')
        self.assertIs(appbar.properties['centerTitle'], True)
        self.assertNotIn('align', appbar.properties)
        self.assertEqual(len(nav.children), 2)
        home, profile = nav.children
        self.assertEqual(home.label, 'Home')
        self.assertNotIn('label', home.properties)
        self.assertIs(home.properties['active'], True)
        self.assertEqual(profile.properties['icon'], 'mdiAccount')

    def test_block_element_ends_at_column_zero(self):
        screen = sm.parse_slml("text: one\n  color: red\nbutton: two")
        self.assertEqual([e.label for e in screen.elements], ['one', 'two'])
        self.assertEqual(screen.elements[1].properties, {})


class TestScreenHeader(unittest.TestCase):
    def test_inline_header(self):
        screen = sm.parse_slml('Screen: Login (width: 320, height: 568, backgroundColor: #eee)')
        self.assertEqual(screen.title, 'Login')
        self.assertEqual((screen.width, screen.height), (320, 568))
        self.assertEqual(screen.background_color, '#eee')

    def test_header_defaults(self):
        screen = sm.parse_slml('Screen: Plain')
        self.assertEqual((screen.width, screen.height), (360, 640))
        self.assertEqual(screen.background_color, '#ffffff')

    def test_comment_title_fallback(self):
        screen = sm.parse_slml('# Home\n- Text: hi')
        self.assertEqual(screen.title, 'Home')
        self.assertEqual(len(screen.elements), 1)

    def test_invalid_dimension_warns_and_falls_back(self):
        with self.assertWarns(UserWarning):
            screen = sm.parse_slml('Screen: X (width: -5, height: abc)')
        self.assertEqual((screen.width, screen.height), (360, 640))


class TestSerialize(unittest.TestCase):
    def test_parse_serialize_is_idempotent(self):
        text = NAV_EXAMPLE + '\n- Text: Hello {content: "a, b", fontSize: 12.5}\n- Checkbox: ok {checked: false}'
        first = sm.parse_slml(text)
        canonical = sm.serialize_screen(first)
        second = sm.parse_slml(canonical)
        self.assertEqual(first.to_ir(), second.to_ir())
        self.assertEqual(canonical, sm.serialize_screen(second))

    def test_fixture_round_trip(self):
        fixtures_path = Path(__file__).parent.parent / "fixtures"
        text = (fixtures_path / 'basic.md').read_text(encoding='utf-8')
        for block in sm.extract_blocks(text):
            screen = _parse_quiet(block)
            again = _parse_quiet(sm.serialize_screen(screen))
            self.assertEqual(screen.to_ir(), again.to_ir())

    def test_block_form_round_trip(self):
        fixtures_path = Path(__file__).parent.parent / "fixtures"
        text = (fixtures_path / 'block_form.md').read_text(encoding='utf-8')
        first = sm.parse_slml(sm.extract_blocks(text)[0])
        canonical = sm.serialize_screen(first)
        second = sm.parse_slml(canonical)
        self.assertEqual(first.to_ir(), second.to_ir())
        self.assertNotIn('align', second.elements[0].properties)
        self.assertEqual(canonical, sm.serialize_screen(second))

    def test_label_with_braces_round_trip(self):
        first = sm.parse_slml('Screen: S\n- Text: a{b}c\n- BottomNavigationBar: Nav\n  - BottomNavigationItem: x{y}')
        second = sm.parse_slml(sm.serialize_screen(first))
        self.assertEqual(second.elements[0].label, 'a{b}c')
        self.assertEqual(second.elements[1].children[0].label, 'x{y}')
        self.assertEqual(first.to_ir(), second.to_ir())

    def test_empty_and_padded_values_round_trip(self):
        first = sm.parse_slml('Screen: S\n- Text: hi {color: "", note: " spaced ", flag: "true"}')
        second = sm.parse_slml(sm.serialize_screen(first))
        self.assertEqual(second.elements[0].properties['color'], '')
        self.assertEqual(second.elements[0].properties['note'], ' spaced ')
        self.assertEqual(second.elements[0].properties['flag'], 'true')
        self.assertEqual(first.to_ir(), second.to_ir())

    def test_floating_action_button_keeps_no_align(self):
        first = sm.parse_slml('- FloatingActionButton: +')
        second = sm.parse_slml(sm.serialize_screen(first))
        self.assertEqual(second.elements[0].properties, {})


if __name__ == '__main__':
    unittest.main()
