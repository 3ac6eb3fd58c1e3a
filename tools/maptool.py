#!/usr/bin/env python3
import argparse
from pathlib import Path

from roborex.config import RESOURCE_DIR
from roborex.engine.level import build_level
from roborex.render.preview import save_walk_grid

def _level(args):
    level = build_level(args.level, resource_dir=args.resources)
    if level is None:
        raise SystemExit(f"no level with index {args.level}")
    return level

def cmd_dump(args):
    level = _level(args)
    print(level.game_map.describe())

def cmd_preview(args):
    level = _level(args)
    save_walk_grid(args.out, level.game_map, level.collectibles, start=level.start_position, cell_size=args.cell)
    print(f"Wrote {args.out}")

def main():
    p = argparse.ArgumentParser()
    p.add_argument('--resources', type=Path, default=RESOURCE_DIR)
    sub = p.add_subparsers(dest='cmd', required=True)
    p1 = sub.add_parser('dump', help='print the merged walkability grid')
    p1.add_argument('--level', type=int, default=0)
    p1.set_defaults(func=cmd_dump)
    p2 = sub.add_parser('preview', help='render walkability + letters to PNG')
    p2.add_argument('--level', type=int, default=0)
    p2.add_argument('--out', type=str, required=True)
    p2.add_argument('--cell', type=int, default=16)
    p2.set_defaults(func=cmd_preview)
    args = p.parse_args()
    args.func(args)

if __name__ == '__main__':
    main()
