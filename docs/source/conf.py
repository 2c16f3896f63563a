import os
import re

project = "metasat"
author = "metasat developers"

pyproject_path = os.path.join(os.path.dirname(__file__), '..', '..', 'pyproject.toml')
with open(pyproject_path, 'r') as f:
    version_match = re.search(r'^version = ["\']([^"\']+)["\']', f.read(), re.MULTILINE)
release = version_match.group(1) if version_match else "0.1.0"

extensions = [
    'sphinx.ext.autodoc',
    'sphinx.ext.napoleon',
]

html_theme = 'sphinx_rtd_theme'
