# Sphinx configuration file

import os
import sys
sys.path.insert(0, os.path.abspath('../src'))

from simple_github import __version__

project = 'simple-github'
copyright = '2024, Trickl'
author = 'Trickl'
release = __version__

extensions = [
    'sphinx.ext.autodoc',
    'sphinx.ext.napoleon',
    'sphinx.ext.viewcode',
    'sphinx.ext.intersphinx',
    'sphinx_autodoc_typehints',
]

templates_path = ['_templates']
exclude_patterns = ['_build', 'Thumbs.db', '.DS_Store']

html_theme = 'sphinx_rtd_theme'

# Autodoc settings
autodoc_default_options = {
    'members': True,
    'member-order': 'bysource',
    'special-members': '__init__,__enter__,__exit__',
    'exclude-members': '__weakref__,model_config',
}

# Napoleon settings (handlers use Google-style "Raises:" sections)
napoleon_google_docstring = True
napoleon_numpy_docstring = False

# Intersphinx mapping
intersphinx_mapping = {
    'python': ('https://docs.python.org/3', None),
    'requests': ('https://requests.readthedocs.io/en/latest', None),
    'github': ('https://pygithub.readthedocs.io/en/stable', None),
    'pydantic': ('https://docs.pydantic.dev/latest', None),
}
