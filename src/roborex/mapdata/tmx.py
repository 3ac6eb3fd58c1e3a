# src/roborex/mapdata/tmx.py
# Tiled .tmx reader reduced to what the game consumes: tile size, one tileset
# image, and the raw gid arrays of every tile layer (bottom to top).

from __future__ import annotations

import base64
import gzip
import logging
import struct
import xml.etree.ElementTree as ET
import zlib
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

logger = logging.getLogger(__name__)

# Tiled stores horizontal/vertical/diagonal flips in the top three gid bits.
GID_FLAG_MASK = 0x1FFFFFFF

PathLike = Union[str, Path]


class MapParseError(ValueError):
    """The tile source is unreadable or malformed."""


@dataclass(frozen=True)
class TilesetImage:
    source: str
    width: int
    height: int
    firstgid: int = 1
    columns: int = 0


@dataclass
class TileLayerData:
    name: str
    tiles: List[List[int]] = field(default_factory=list)

    @property
    def height(self) -> int:
        return len(self.tiles)

    @property
    def width(self) -> int:
        return max((len(row) for row in self.tiles), default=0)


@dataclass
class TileMapSource:
    tile_width: int
    tile_height: int
    tileset: TilesetImage
    layers: List[TileLayerData] = field(default_factory=list)


def load_tile_map(path: PathLike) -> TileMapSource:
    path = Path(path)
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise MapParseError(f"cannot read tile map {path}: {e}") from e
    source = parse_tile_map(raw, base_dir=path.parent)
    logger.debug("loaded %s: %d layers", path.name, len(source.layers))
    return source


def parse_tile_map(raw: Union[bytes, str], base_dir: Optional[Path] = None) -> TileMapSource:
    root = _parse_xml(raw, "map")
    tile_width = _int_attr(root, "tilewidth")
    tile_height = _int_attr(root, "tileheight")

    ts_els = root.findall("tileset")
    if not ts_els:
        raise MapParseError("map has no <tileset>")
    if len(ts_els) > 1:
        raise MapParseError(f"map uses {len(ts_els)} tilesets; exactly one is supported")
    tileset = _read_tileset(ts_els[0], base_dir)

    # Layers inside <group> elements count too, in drawing (document) order.
    if root.find("group") is not None:
        logger.debug("flattening layer groups")
    layers = [_read_layer(el) for el in root.iter("layer")]
    if not layers:
        raise MapParseError("map has no tile layers")
    return TileMapSource(tile_width=tile_width, tile_height=tile_height, tileset=tileset, layers=layers)


# ---------- Helpers ----------

def _parse_xml(raw: Union[bytes, str], expected_tag: str) -> ET.Element:
    try:
        root = ET.fromstring(raw)
    except ET.ParseError as e:
        raise MapParseError(f"malformed XML: {e}") from e
    if root.tag != expected_tag:
        raise MapParseError(f"expected <{expected_tag}> root, got <{root.tag}>")
    return root


def _int_attr(el: ET.Element, name: str, default: Optional[int] = None) -> int:
    value = el.get(name)
    if value is None:
        if default is not None:
            return default
        raise MapParseError(f"<{el.tag}> is missing attribute {name!r}")
    try:
        return int(value)
    except ValueError as e:
        raise MapParseError(f"<{el.tag}> attribute {name!r} is not an integer: {value!r}") from e


def _read_tileset(ts_el: ET.Element, base_dir: Optional[Path]) -> TilesetImage:
    firstgid = _int_attr(ts_el, "firstgid", default=1)
    body = ts_el
    external = ts_el.get("source")
    if external is not None:
        if base_dir is None:
            raise MapParseError(f"external tileset {external!r} needs a base directory")
        tsx = base_dir / external
        try:
            body = _parse_xml(tsx.read_bytes(), "tileset")
        except OSError as e:
            raise MapParseError(f"cannot read tileset {tsx}: {e}") from e

    image = body.find("image")
    if image is None or image.get("source") is None:
        raise MapParseError("tileset has no <image source=...>")
    width = _int_attr(image, "width")
    height = _int_attr(image, "height")
    tile_w = _int_attr(body, "tilewidth", default=1)
    columns = _int_attr(body, "columns", default=max(1, width // max(1, tile_w)))
    return TilesetImage(source=image.get("source"), width=width, height=height, firstgid=firstgid, columns=columns)


def _read_layer(el: ET.Element) -> TileLayerData:
    name = el.get("name", "")
    width = _int_attr(el, "width")
    height = _int_attr(el, "height")
    data = el.find("data")
    if data is None:
        raise MapParseError(f"layer {name!r} has no <data>")

    encoding = data.get("encoding")
    compression = data.get("compression")
    if encoding is None:
        gids = [_int_attr(t, "gid", default=0) for t in data.findall("tile")]
    elif encoding == "csv":
        gids = _decode_csv(data.text or "", name)
    elif encoding == "base64":
        gids = _decode_base64(data.text or "", compression, name)
    else:
        raise MapParseError(f"layer {name!r}: unsupported encoding {encoding!r}")

    if len(gids) != width * height:
        raise MapParseError(f"layer {name!r}: expected {width * height} tiles, got {len(gids)}")
    gids = [g & GID_FLAG_MASK for g in gids]
    rows = [gids[y * width:(y + 1) * width] for y in range(height)]
    return TileLayerData(name=name, tiles=rows)


def _decode_csv(text: str, name: str) -> List[int]:
    cells = [c.strip() for c in text.replace("\n", ",").split(",")]
    try:
        return [int(c) for c in cells if c]
    except ValueError as e:
        raise MapParseError(f"layer {name!r}: bad csv data: {e}") from e


def _decode_base64(text: str, compression: Optional[str], name: str) -> List[int]:
    if compression not in (None, "zlib", "gzip"):
        raise MapParseError(f"layer {name!r}: unsupported compression {compression!r}")
    try:
        blob = base64.b64decode(text.strip(), validate=False)
        if compression == "zlib":
            blob = zlib.decompress(blob)
        elif compression == "gzip":
            blob = gzip.decompress(blob)
    except (ValueError, zlib.error, OSError) as e:
        raise MapParseError(f"layer {name!r}: bad base64 data: {e}") from e
    if len(blob) % 4:
        raise MapParseError(f"layer {name!r}: base64 payload is not a whole number of gids")
    return list(struct.unpack(f"<{len(blob) // 4}I", blob))
