#!/usr/bin/env python3
"""
Test the XML and JSON placement metadata.
"""

import json
import xml.etree.ElementTree as ET

import pytest

from tilepack.metadata import build_json, build_metadata, build_xml, write_metadata
from tilepack.packing import pack_tiles


@pytest.fixture
def result():
    return pack_tiles([(100, 100), (50, 50)], max_width=150, keys=["hero.png", "coin.png"])


def test_xml_lists_every_tile(result):
    text = build_xml(result, "out.png")
    root = ET.fromstring(text)

    assert root.tag == "tileset"
    assert root.get("image") == "out.png"
    tiles = [dict(t.attrib) for t in root.findall("tile")]
    assert tiles == [
        {"id": "hero.png", "x": "0", "y": "0", "w": "100", "h": "100"},
        {"id": "coin.png", "x": "100", "y": "0", "w": "50", "h": "50"},
    ]


def test_xml_is_indented(result):
    lines = build_xml(result, "out.png").splitlines()
    assert lines[0] == '<tileset image="out.png">'
    assert lines[1].startswith('   <tile id="hero.png"')
    assert lines[-1] == "</tileset>"


def test_xml_escapes_names():
    escaped = pack_tiles([(1, 1)], max_width=1, keys=['a "quoted" & <odd>.png'])
    root = ET.fromstring(build_xml(escaped, "x.png"))
    assert root.find("tile").get("id") == 'a "quoted" & <odd>.png'


def test_json_document(result):
    doc = json.loads(build_json(result, "sheet.png"))
    assert doc["image"] == "sheet.png"
    assert (doc["width"], doc["height"]) == (150, 100)
    assert doc["tiles"][1] == {"id": "coin.png", "x": 100, "y": 0, "w": 50, "h": 50}


def test_unknown_format(result):
    with pytest.raises(ValueError):
        build_metadata(result, "out.png", "yaml")


def test_write_to_file_and_stdout(result, tmp_path, capsys):
    text = build_metadata(result, "out.png", "json")

    target = tmp_path / "meta" / "tiles.json"
    write_metadata(text, target)
    assert target.read_text(encoding="utf-8") == text

    write_metadata(text)
    assert capsys.readouterr().out == text
