# Configuration file for the Sphinx documentation builder.
#
# For the full list of built-in configuration values, see the documentation:
# https://www.sphinx-doc.org/en/master/usage/configuration.html

import sys
from pathlib import Path

# autodoc imports the package from the source tree
sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

import quantiform  # noqa: E402

# -- Project information -----------------------------------------------------

project = 'quantiform'
copyright = '2025, Parneet Sidhu'
author = quantiform.__author__
release = quantiform.__version__
version = '.'.join(release.split('.')[:2])
html_title = f'Quantiform {release}'

# -- General configuration ---------------------------------------------------

extensions = [
    'sphinx.ext.autodoc',
    'sphinx.ext.napoleon',
    'sphinx.ext.viewcode',
    'sphinx_copybutton',
    "myst_parser"
]

exclude_patterns = ['_build', 'Thumbs.db', '.DS_Store']

# docstrings use numpy-style "Raises" / "Attributes" sections
napoleon_google_docstring = False
napoleon_numpy_docstring = True

autodoc_member_order = "bysource"
autodoc_typehints = "description"

# anchors for the "## Unit expressions" style headings in index.md
myst_heading_anchors = 2

# docstring examples are written as doctests
copybutton_prompt_text = ">>> "

# -- Options for HTML output -------------------------------------------------

html_theme = "furo"

html_theme_options = {
    "sidebar_hide_name": False,
    "navigation_with_keys": True,
    "light_css_variables": {
        "color-brand-primary": "#2e7d6b",
        "color-brand-content": "#1d5246",
    },
}

source_suffix = {
    ".rst": "restructuredtext",
    ".md": "markdown",
}
