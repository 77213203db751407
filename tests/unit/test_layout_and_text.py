#!/usr/bin/env python3
import os
import sys
import unittest

PROJECT_ROOT = os.path.join(os.path.dirname(__file__), '..', '..')
sys.path.insert(0, os.path.join(PROJECT_ROOT, 'src'))
from screenmaker.generation.elements import render_text_element
from screenmaker.generation.layout import (
    DEFAULT_RENDER,
    ElementContext,
    content_start_y,
    label_digits,
    prop_bool,
    prop_number,
    split_docked,
    wrap_text,
)
from screenmaker.parser import Element
from screenmaker.utils.alignment import normalize_alignment, place_horizontally

LONG_TEXT = (
    "This paragraph is deliberately long so that it cannot possibly fit on a "
    "single line of the default mobile screen width"
)


class TestWrapText(unittest.TestCase):
    def test_short_text_one_line(self):
        self.assertEqual(wrap_text("hello world", 300, 14), ["hello world"])

    def test_wraps_by_estimated_width(self):
        # 10 chars * 10 * 0.6 = 60 px per 10-char chunk
        lines = wrap_text("aaaa bbbb cccc dddd", 60, 10)
        self.assertEqual(lines, ["aaaa bbbb", "cccc dddd"])

    def test_long_word_kept_whole(self):
        self.assertEqual(wrap_text("supercalifragilistic ok", 30, 10), ["supercalifragilistic", "ok"])

    def test_empty(self):
        self.assertEqual(wrap_text("", 100, 14), [])


class TestTextElementGeometry(unittest.TestCase):
    def _ctx(self, props, y=16):
        el = Element('Text', '', dict(props))
        return ElementContext(el, y, 360, 640, DEFAULT_RENDER)

    def test_multiline_height(self):
        ctx = self._ctx({'content': LONG_TEXT, 'width': 200, 'fontSize': 14})
        rendered = render_text_element(ctx)
        lines = wrap_text(LONG_TEXT, 200, 14)
        self.assertGreater(len(lines), 1)
        self.assertEqual(rendered.svg.count('<text'), len(lines))
        self.assertAlmostEqual(rendered.placement.height, len(lines) * 14 * 1.2)
        self.assertAlmostEqual(
            rendered.placement.next_y - ctx.y, len(lines) * 14 * 1.2 + DEFAULT_RENDER.element_spacing
        )

    def test_padding_shifts_and_adds(self):
        ctx = self._ctx({'content': 'short', 'padding': 8})
        rendered = render_text_element(ctx)
        self.assertEqual(rendered.placement.y, 24)
        self.assertAlmostEqual(rendered.placement.next_y, 16 + 8 + 14 * 1.2 + 10)

    def test_invalid_font_size_falls_back(self):
        ctx = self._ctx({'content': 'x', 'fontSize': 'huge'})
        rendered = render_text_element(ctx)
        self.assertAlmostEqual(rendered.placement.height, 14 * 1.2)

    def test_non_finite_padding_falls_back(self):
        for padding in ('1e400', float('inf'), float('nan')):
            rendered = render_text_element(self._ctx({'content': 'hi', 'padding': padding}))
            self.assertEqual(rendered.placement.y, 16)
            self.assertNotIn('="inf"', rendered.svg)
            self.assertNotIn('="nan"', rendered.svg)

    def test_label_used_when_no_content(self):
        el = Element('Text', 'from label', {})
        rendered = render_text_element(ElementContext(el, 0, 360, 640, DEFAULT_RENDER))
        self.assertIn('>from label</text>', rendered.svg)

    def test_text_is_escaped(self):
        ctx = self._ctx({'content': 'a < b & c'})
        self.assertIn('a &lt; b &amp; c', render_text_element(ctx).svg)


class TestPropertyHelpers(unittest.TestCase):
    def test_prop_number(self):
        el = Element('X', '', {'a': 5, 'b': '12px', 'c': 'wide', 'd': True})
        self.assertEqual(prop_number(el, 'a', 0), 5)
        self.assertEqual(prop_number(el, 'b', 0), 12)
        self.assertEqual(prop_number(el, 'c', 7), 7)
        self.assertEqual(prop_number(el, 'd', 7), 7)
        self.assertIsNone(prop_number(el, 'missing', None))

    def test_prop_number_rejects_non_finite(self):
        el = Element('X', '', {'a': float('inf'), 'b': '1e400', 'c': float('-inf')})
        self.assertEqual(prop_number(el, 'a', 3), 3)
        self.assertEqual(prop_number(el, 'b', 3), 3)
        self.assertEqual(prop_number(el, 'c', 3), 3)

    def test_prop_bool(self):
        el = Element('X', '', {'a': True, 'b': 'false', 'c': 'maybe'})
        self.assertTrue(prop_bool(el, 'a'))
        self.assertFalse(prop_bool(el, 'b', True))
        self.assertTrue(prop_bool(el, 'c', True))

    def test_label_digits(self):
        self.assertEqual(label_digits('24px'), 24)
        self.assertIsNone(label_digits('none'))


class TestAlignment(unittest.TestCase):
    def test_normalize(self):
        self.assertEqual(normalize_alignment('LEFT'), 'left')
        self.assertEqual(normalize_alignment('bogus'), 'center')
        self.assertEqual(normalize_alignment(None, 'right'), 'right')

    def test_place_horizontally(self):
        self.assertEqual(place_horizontally('left', 100, 360, 16).x, 16)
        self.assertEqual(place_horizontally('right', 100, 360, 16).x, 244)
        self.assertEqual(place_horizontally('center', 100, 360, 16).x, 130)
        self.assertEqual(place_horizontally('center', 100, 360, 16).text_anchor, 'middle')


class TestDockedSplit(unittest.TestCase):
    def test_first_of_each_kind_kept(self):
        els = [
            Element('AppBar', 'one'),
            Element('Text', 't'),
            Element('appbar', 'two'),
            Element('FloatingActionButton', '+'),
        ]
        appbar, nav, fab, regular = split_docked(els)
        self.assertEqual(appbar.label, 'one')
        self.assertIsNone(nav)
        self.assertEqual(fab.label, '+')
        self.assertEqual([e.label for e in regular], ['t'])

    def test_content_start(self):
        self.assertEqual(content_start_y(DEFAULT_RENDER, False, False), 16)
        self.assertEqual(content_start_y(DEFAULT_RENDER, True, False), 72)
        self.assertEqual(content_start_y(DEFAULT_RENDER, True, True), 122)


if __name__ == '__main__':
    unittest.main()
