from __future__ import annotations

import importlib.metadata

# -- Project information -----------------------------------------------------

metadata = importlib.metadata.metadata("chronos")

project = metadata["Name"]
version = release = metadata["Version"]

# -- General configuration ------------------------------------------------

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.napoleon",
    "sphinx_copybutton",
    "enum_tools.autoenum",
    "myst_parser",
]
source_suffix = {
    ".md": "markdown",
    ".rst": "restructuredtext",
}
master_doc = "index"
exclude_patterns = ["_build"]

# -- Autodoc ----------------------------------------------------------------

autodoc_member_order = "bysource"
# Signatures show "DateTime", not "chronos._pychronos.DateTime"
autodoc_typehints_format = "short"
napoleon_numpy_docstring = True

# -- Options for HTML output ----------------------------------------------

html_theme = "furo"
html_title = "chronos"
highlight_language = "python3"
copybutton_prompt_text = ">>> "
