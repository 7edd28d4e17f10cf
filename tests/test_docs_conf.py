# tests/test_docs_conf.py
import runpy
from pathlib import Path

import quantiform

CONF = Path(__file__).resolve().parents[1] / "docs" / "conf.py"


def test_docs_version_follows_package():
    conf = runpy.run_path(str(CONF))
    assert conf["release"] == quantiform.__version__
    assert conf["release"].startswith(conf["version"])
    assert conf["html_title"] == f"Quantiform {quantiform.__version__}"

def test_docs_read_numpy_style_sections():
    conf = runpy.run_path(str(CONF))
    assert "sphinx.ext.napoleon" in conf["extensions"]
    assert conf["napoleon_numpy_docstring"] is True
