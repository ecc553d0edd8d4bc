# -*- coding: utf-8 -*-
"""Location: ./tests/unit/modtranscoder/conftest.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Shared fixtures for transcoder tests.
"""

# Third-Party
import pytest

# First-Party
from modtranscoder.config import get_settings
from modtranscoder.persistence import InMemoryDocumentStore


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch):
    """Isolate tests from MODTRANSCODER_* variables and the settings cache."""
    for key in ("DEFAULT_NOTATION", "DEFAULT_PROPERTY_VIEW", "JSON_INDENT", "LOG_LEVEL", "ALLOW_SIGNATURE_EDIT"):
        monkeypatch.delenv(f"MODTRANSCODER_{key}", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def menu_data():
    """Canonical menu document in its external JSON shape."""
    return {
        "Signature": "CM3D2_MENU",
        "BodySize": 120,
        "Version": 1000,
        "SrcFileName": "body001.txt",
        "ItemName": "Body",
        "Category": "body",
        "InfoText": "Default body",
        "Commands": [
            {"ArgCount": 3, "Args": ["SetTex", "diffuse", "body01"]},
            {"ArgCount": 1, "Args": ["SetColor"]},
        ],
    }


@pytest.fixture
def mate_data():
    """Canonical material document in its external JSON shape."""
    return {
        "Signature": "CM3D2_MATERIAL",
        "Version": 1000,
        "Name": "skin",
        "Material": {
            "Name": "skin_mat",
            "ShaderName": "CM3D2/Toony_Lighted",
            "ShaderFilename": "crc_toony",
            "Properties": [
                {"TypeName": "tex", "PropName": "_MainTex", "SubTag": "tex2d", "Tex2D": {"Name": "body", "Path": "assets/body.png", "Offset": [0, 0], "Scale": [1, 1]}},
                {"TypeName": "col", "PropName": "_Color", "Color": [1, 1, 1, 1]},
                {"TypeName": "f", "PropName": "_Shininess", "Number": 0.2},
                {"TypeName": "keyword", "PropName": "keywords", "Count": 1, "Keywords": [{"Key": "_ALPHATEST_ON", "Value": True}]},
            ],
        },
    }


@pytest.fixture
def store(menu_data, mate_data):
    """In-memory store preloaded with one menu and one material."""
    return InMemoryDocumentStore({"body.menu": menu_data, "skin.mate": mate_data})
