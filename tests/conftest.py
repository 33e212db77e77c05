"""
Pytest configuration and shared fixtures for tmx_reader tests.
"""

import io

import pytest


CSV_TEXT = "\n1,2,\n3,4\n"

SAMPLE_TMX = f"""<?xml version="1.0" encoding="UTF-8"?>
<map version="1.0" tiledversion="1.2.3" orientation="orthogonal" renderorder="right-down"
     width="2" height="2" tilewidth="32" tileheight="32" backgroundcolor="#112233"
     nextobjectid="5">
 <tileset firstgid="1" name="ground" tilewidth="32" tileheight="32" spacing="1"
          margin="2" tilecount="4" columns="2">
  <image source="ground.png" width="64" height="64"/>
  <terraintypes>
   <terrain name="Grass" tile="0"/>
   <terrain name="Dirt" tile="1"/>
   <terrain name="Water" tile="2"/>
   <terrain name="Sand" tile="3"/>
  </terraintypes>
  <tile id="0" terrain="0,1,2,3"/>
 </tileset>
 <tileset firstgid="5" source="trees.tsx"/>
 <objectgroup name="Spawns">
  <object id="1" x="10" y="20"/>
 </objectgroup>
 <layer name="Ground" width="2" height="2">
  <data encoding="csv">{CSV_TEXT}</data>
 </layer>
</map>
"""


@pytest.fixture
def sample_bytes():
    """The sample document as UTF-8 bytes."""
    return SAMPLE_TMX.encode('utf-8')


@pytest.fixture
def sample_stream(sample_bytes):
    """The sample document as a readable binary stream."""
    return io.BytesIO(sample_bytes)


@pytest.fixture
def sample_file(tmp_path, sample_bytes):
    """The sample document written to a .tmx file."""
    path = tmp_path / "sample.tmx"
    path.write_bytes(sample_bytes)
    return path


@pytest.fixture
def make_stream():
    """Factory turning a document string into a binary stream."""
    def _make(text):
        return io.BytesIO(text.encode('utf-8'))
    return _make
