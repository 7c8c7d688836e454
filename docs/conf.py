from importlib import metadata

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.doctest",
    "sphinx.ext.intersphinx",
    "sphinx.ext.viewcode",
]

source_suffix = ".rst"

# The master toctree document.
master_doc = "index"

# General information about the project.

project = "yard-sorbet-types"
author = "yard-sorbet-types contributors"

release = metadata.version(project)
# The short X.Y version.
version = ".".join(release.split(".")[:2])


language = "en"

pygments_style = "sphinx"
html_theme = "alabaster"
html_theme_options = {
    "description": "YARD type annotations to Sorbet signatures",
    "page_width": "1080px",
    "sidebar_width": "300px",
    "fixed_sidebar": "false",
}
html_sidebars = {"**": ["about.html", "localtoc.html", "relations.html", "searchbox.html"]}

autodoc_member_order = "bysource"

nitpicky = False
nitpick_ignore = ["py:class"]

# Example configuration for intersphinx: refer to the Python standard library.
intersphinx_mapping = {
    "python": ("https://docs.python.org/3", None),
    "pytest": ("https://docs.pytest.org/en/latest", None),
}
