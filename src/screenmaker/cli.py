#!/usr/bin/env python3
"""Unified CLI for screenmaker

Subcommands:
  build     markdown -> markdown with SLML blocks replaced by SVG
  svg       markdown -> one .svg file per SLML block
  ir        parse SLML blocks and emit screens as JSON
  validate  parse and validate screens
  watch     rebuild on changes (polling)

"""

import argparse
import dataclasses
import hashlib
import json
import logging
import pathlib
import sys
import time

from .generation.core import render_screen
from .generation.enrichment import enrich_svg
from .generation.layout import DEFAULT_RENDER
from .generator import replace_slml_with_svg
from .icons import IconCatalog, fetch_mdi_catalog
from .markdown import DEFAULT_LANGUAGE_TAG, process_markdown
from .utils.file_ops import ensure_export_dir, resolve_output_path, screen_svg_filename, write_text
from .validation import validate_screens

DEFAULT_EXPORT_DIR = 'export'


def _read_markdown(path_str: str) -> str:
    path = pathlib.Path(path_str)
    if not path.exists():
        print(f"ERROR: markdown file not found: {path}", file=sys.stderr)
        sys.exit(1)
    return path.read_text(encoding='utf-8')


def _render_config(args):
    return dataclasses.replace(DEFAULT_RENDER, show_title=getattr(args, 'show_title', False))


def _icon_catalog(args):
    if getattr(args, 'icons', None):
        try:
            return IconCatalog.load(args.icons)
        except (OSError, ValueError) as e:
            print(f"⚠️  Could not load icon catalog {args.icons}: {e}", file=sys.stderr)
            return None
    if getattr(args, 'fetch_icons', False):
        return fetch_mdi_catalog()
    return None


def _default_output_name(doc: str) -> str:
    return f"{pathlib.Path(doc).stem}.rendered.md"


def cmd_build(args):
    markdown = _read_markdown(args.markdown)
    export_dir = ensure_export_dir(args.export_dir)
    out_path = resolve_output_path(args.output or _default_output_name(args.markdown), export_dir)
    result = replace_slml_with_svg(
        markdown,
        scale=args.scale,
        config=_render_config(args),
        icons=_icon_catalog(args),
        tag=args.tag,
        enrich=args.enrich_images,
    )
    write_text(out_path, result)
    screens = process_markdown(markdown, args.tag)
    print(f"Built Markdown: {out_path} screens={len(screens)}")


def cmd_svg(args):
    markdown = _read_markdown(args.markdown)
    export_dir = ensure_export_dir(args.export_dir)
    config = _render_config(args)
    icons = _icon_catalog(args)
    screens = process_markdown(markdown, args.tag)
    for idx, screen in enumerate(screens, start=1):
        rendered = render_screen(screen, args.scale, config, icons)
        svg = rendered.svg
        if args.enrich_images and rendered.images:
            svg = enrich_svg(svg, rendered.images)
        out_path = export_dir / screen_svg_filename(idx, screen.title)
        write_text(out_path, svg)
        print(f"Wrote SVG: {out_path}")
    print(f"Rendered screens={len(screens)}")


def cmd_ir(args):
    screens = process_markdown(_read_markdown(args.markdown), args.tag)
    print(json.dumps({'screens': [s.to_ir() for s in screens]}, indent=2, ensure_ascii=False))


def cmd_validate(args):
    screens = process_markdown(_read_markdown(args.markdown), args.tag)
    result = validate_screens(screens)
    for issue in result.issues:
        print(f"{issue.severity.upper()}: {issue.path}: {issue.message}")
    if result.ok():
        print(f"Screens valid: no errors (screens={len(screens)})")
    if not result.ok():
        sys.exit(1)


def cmd_watch(args):
    md_path = pathlib.Path(args.markdown)
    if not md_path.exists():
        print(f"ERROR: markdown file not found: {md_path}", file=sys.stderr)
        sys.exit(1)
    export_dir = ensure_export_dir(args.export_dir)
    out_path = resolve_output_path(args.output or _default_output_name(args.markdown), export_dir)
    config = _render_config(args)
    icons = _icon_catalog(args)
    last_hash = None
    print(f"Watching {md_path} interval={args.interval}s (once={args.once})")

    def compute_hash(p: pathlib.Path):
        try:
            return hashlib.sha256(p.read_bytes()).hexdigest()
        except OSError:
            return None

    def build_once():
        markdown = md_path.read_text(encoding='utf-8')
        write_text(
            out_path,
            replace_slml_with_svg(markdown, scale=args.scale, config=config, icons=icons, tag=args.tag),
        )
        print(f"[watch] Rebuilt Markdown screens={len(process_markdown(markdown, args.tag))}")

    while True:
        h = compute_hash(md_path)
        if h and h != last_hash:
            last_hash = h
            try:
                build_once()
            except Exception as e:
                print(f"[watch] ERROR during build: {e}", file=sys.stderr)
                if args.once:
                    sys.exit(1)
        if args.once:
            if last_hash is None:
                print("[watch] ERROR: could not read markdown file", file=sys.stderr)
                sys.exit(1)
            break
        time.sleep(args.interval)


def _add_render_options(p):
    p.add_argument('--export-dir', default=DEFAULT_EXPORT_DIR)
    p.add_argument('--scale', type=float, default=1.0, help='outer size multiplier')
    p.add_argument('--show-title', action='store_true', help='draw a title band above the screen')
    p.add_argument('--icons', help='icon catalog file (.json map or mdi.js)')
    p.add_argument(
        '--fetch-icons', action='store_true', help='download Material Design Icons (cached 24h)'
    )
    p.add_argument('--tag', default=DEFAULT_LANGUAGE_TAG, help='fenced block language tag')


def build_parser():
    p = argparse.ArgumentParser(prog='screenmaker')
    sub = p.add_subparsers(dest='command', required=True)

    b = sub.add_parser('build', help='markdown -> markdown with SVG')
    b.add_argument('markdown')
    b.add_argument('-o', '--output')
    _add_render_options(b)
    b.add_argument(
        '--enrich-images', action='store_true', help='embed remote images as PNG data URLs'
    )
    b.set_defaults(func=cmd_build)

    s = sub.add_parser('svg', help='write one SVG file per SLML block')
    s.add_argument('markdown')
    _add_render_options(s)
    s.add_argument(
        '--enrich-images', action='store_true', help='embed remote images as PNG data URLs'
    )
    s.set_defaults(func=cmd_svg)

    irp = sub.add_parser('ir', help='emit screens as JSON')
    irp.add_argument('markdown')
    irp.add_argument('--tag', default=DEFAULT_LANGUAGE_TAG)
    irp.set_defaults(func=cmd_ir)

    val = sub.add_parser('validate', help='validate screens')
    val.add_argument('markdown')
    val.add_argument('--tag', default=DEFAULT_LANGUAGE_TAG)
    val.set_defaults(func=cmd_validate)

    watch = sub.add_parser('watch', help='watch markdown file and rebuild on change')
    watch.add_argument('markdown')
    watch.add_argument('-o', '--output')
    _add_render_options(watch)
    watch.add_argument('--interval', type=float, default=1.0)
    watch.add_argument('--once', action='store_true', help='build once and exit')
    watch.set_defaults(func=cmd_watch)

    return p


def main(argv=None):
    logging.basicConfig(level=logging.WARNING, format='%(levelname)s: %(name)s: %(message)s')
    parser = build_parser()
    args = parser.parse_args(argv)
    args.func(args)


if __name__ == '__main__':
    main()
